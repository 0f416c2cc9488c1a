"""
Message Normalizer

Maps informal spellings onto the lexicon's canonical forms so
"im gonna" and "i am going to" match the same phrases.

Total over all strings; never raises.
"""

import re
from dataclasses import dataclass


# Ordered whole-token substitutions applied after lowercasing
_SUBSTITUTIONS: tuple[tuple[re.Pattern, str], ...] = tuple(
    (re.compile(rf"\b{token}\b"), replacement)
    for token, replacement in (
        ("2", "to"),
        ("u", "you"),
        ("ur", "your"),
        ("im", "i am"),
        ("gonna", "going to"),
        ("wanna", "want to"),
        ("dont", "don't"),
        ("cant", "can't"),
        ("lyfe", "life"),
        ("suicied", "suicide"),
    )
)


def normalize(text: str) -> str:
    """
    Lowercase text and apply informal-spelling substitutions.

    Args:
        text: Raw message text

    Returns:
        Normalized text
    """
    normalized = text.lower()
    for pattern, replacement in _SUBSTITUTIONS:
        normalized = pattern.sub(replacement, normalized)
    return normalized


@dataclass(frozen=True)
class MatchText:
    """
    Raw-lowercased and normalized forms of one message.

    A phrase is present if it occurs in either form.
    """

    raw: str
    normalized: str

    @classmethod
    def from_message(cls, message: str) -> "MatchText":
        return cls(raw=message.lower(), normalized=normalize(message))

    def contains(self, phrase: str) -> bool:
        return phrase in self.normalized or phrase in self.raw

    def contains_any(self, phrases) -> bool:
        return any(self.contains(p) for p in phrases)

    def matches(self, phrases) -> list[str]:
        """Get the phrases present in either form, in input order."""
        return [p for p in phrases if self.contains(p)]
