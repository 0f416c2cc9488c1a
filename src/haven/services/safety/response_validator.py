"""
Response Safety Validator

Screens AI-generated replies before delivery to a user who may be
in crisis. Applied only to outgoing text, never to user messages.

CLINICAL_REVIEW_REQUIRED: Pattern families require review by
crisis counselors. Changes require security and clinical review.
"""

import re
from dataclasses import dataclass, field

from haven.config.logging_config import get_logger
from haven.domain.enums.crisis_enums import ReplyConcern, ReplyRemediation

logger = get_logger(__name__)


@dataclass(frozen=True)
class PatternFamily:
    """A concern, its remediation and the patterns that raise it."""

    concern: ReplyConcern
    remediation: ReplyRemediation
    patterns: tuple[re.Pattern, ...]

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


@dataclass
class ResponseSafetyResult:
    """
    Result of reply validation.

    Attributes:
        is_safe: True iff no concern was raised
        concerns: Raised concerns, in family order
        recommendations: Remediations paired 1:1 with concerns
    """

    is_safe: bool
    concerns: list[ReplyConcern] = field(default_factory=list)
    recommendations: list[ReplyRemediation] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "is_safe": self.is_safe,
            "concerns": [c.value for c in self.concerns],
            "recommendations": [r.value for r in self.recommendations],
        }


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.I) for p in patterns)


# CLINICAL_REVIEW_REQUIRED
PATTERN_FAMILIES: tuple[PatternFamily, ...] = (
    PatternFamily(
        concern=ReplyConcern.INAPPROPRIATE_THERAPEUTIC_ADVICE,
        remediation=ReplyRemediation.REVIEW_THERAPEUTIC_BOUNDARIES,
        patterns=_compile(
            r"you should (leave|divorce|quit)",
            r"the best thing to do is",
            r"you must (do|stop|start)",
            r"i recommend you (take|stop) medication",
            r"you should see a (specific doctor|specific therapist)",
        ),
    ),
    PatternFamily(
        concern=ReplyConcern.CRISIS_MINIMIZATION,
        remediation=ReplyRemediation.ENHANCE_CRISIS_ACKNOWLEDGMENT,
        patterns=_compile(
            r"it's not that bad",
            r"you're overreacting",
            r"just think positive",
            r"others have it worse",
            r"snap out of it",
            r"just get over it",
        ),
    ),
    PatternFamily(
        concern=ReplyConcern.POTENTIALLY_HARMFUL_SUGGESTIONS,
        remediation=ReplyRemediation.REMOVE_HARMFUL_CONTENT,
        patterns=_compile(
            r"isolation is good",
            r"alcohol might help",
            r"medication isn't necessary",
            r"therapy doesn't work",
            r"you don't need professional help",
        ),
    ),
)


class ResponseSafetyValidator:
    """
    Outbound reply validator.

    Every family is checked; a reply can raise several concerns.

    Usage:
        validator = ResponseSafetyValidator()
        result = validator.validate(ai_reply)
        if not result.is_safe:
            ...
    """

    def __init__(
        self,
        families: tuple[PatternFamily, ...] = PATTERN_FAMILIES,
    ) -> None:
        self.families = families

    def validate(self, text: str) -> ResponseSafetyResult:
        """
        Validate an outgoing reply.

        Args:
            text: AI-generated reply text

        Returns:
            ResponseSafetyResult with concerns and remediations
        """
        concerns: list[ReplyConcern] = []
        recommendations: list[ReplyRemediation] = []

        for family in self.families:
            if family.matches(text):
                concerns.append(family.concern)
                recommendations.append(family.remediation)

        result = ResponseSafetyResult(
            is_safe=not concerns,
            concerns=concerns,
            recommendations=recommendations,
        )

        if not result.is_safe:
            logger.warning(
                "Reply failed safety validation",
                concerns=[c.value for c in concerns],
            )

        return result
