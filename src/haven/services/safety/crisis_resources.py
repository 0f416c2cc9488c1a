"""
Crisis Resources

Catalog of external help resources and urgency-based selection.

LEGAL_REVIEW_REQUIRED: Resource information must be verified for
accuracy before production. Built-ins are US resources; other
deployments supply a JSON config file.
"""

import json
import os
from typing import Optional

from haven.config.logging_config import get_logger
from haven.domain.enums.crisis_enums import ResourceType, UrgencyLevel
from haven.domain.models.crisis_response import CrisisResource

logger = get_logger(__name__)


class CrisisResourceCatalog:
    """
    External crisis resource catalog.

    Resources are selected by urgency tier, never by message
    content. An optional JSON file replaces the built-in list;
    a failed load keeps the built-ins. A config must carry at least
    one immediate resource so risk 8+ never goes without one.

    Config file format:
        {"resources": [{"type": "hotline", "name": "...",
                        "contact": "...", "urgency_level": "immediate"}]}

    Usage:
        catalog = CrisisResourceCatalog()
        resources = catalog.select(risk_level=9)
    """

    # LEGAL_REVIEW_REQUIRED: Verify all numbers before production
    BUILT_IN_RESOURCES: tuple[CrisisResource, ...] = (
        CrisisResource(
            type=ResourceType.HOTLINE,
            name="National Suicide Prevention Lifeline",
            contact="988",
            description="24/7 crisis support and suicide prevention",
            availability="24/7",
            urgency_level=UrgencyLevel.IMMEDIATE,
        ),
        CrisisResource(
            type=ResourceType.TEXT_LINE,
            name="Crisis Text Line",
            contact="Text HOME to 741741",
            description="Free 24/7 crisis support via text",
            availability="24/7",
            urgency_level=UrgencyLevel.IMMEDIATE,
        ),
        CrisisResource(
            type=ResourceType.EMERGENCY,
            name="Emergency Services",
            contact="911",
            description="Immediate emergency response",
            availability="24/7",
            urgency_level=UrgencyLevel.IMMEDIATE,
        ),
        CrisisResource(
            type=ResourceType.ONLINE,
            name="National Suicide Prevention Website",
            contact="https://suicidepreventionlifeline.org",
            description="Online resources and chat support",
            availability="24/7",
            urgency_level=UrgencyLevel.SUPPORTIVE,
        ),
        CrisisResource(
            type=ResourceType.PROFESSIONAL,
            name="Psychology Today Therapist Finder",
            contact="https://psychologytoday.com/therapists",
            description="Find mental health professionals in your area",
            availability="Business hours",
            urgency_level=UrgencyLevel.SUPPORTIVE,
        ),
    )

    def __init__(
        self,
        config_path: Optional[str] = None,
    ) -> None:
        """
        Initialize catalog.

        Args:
            config_path: Optional path to JSON config file
        """
        self._resources: tuple[CrisisResource, ...] = self.BUILT_IN_RESOURCES

        if config_path and os.path.exists(config_path):
            self._load_config(config_path)
        elif config_path:
            logger.warning("Crisis resources config not found", path=config_path)

    def _load_config(self, config_path: str) -> None:
        """Load resources from JSON config file."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

            records = data.get("resources", []) if isinstance(data, dict) else data
            resources = tuple(CrisisResource.from_dict(r) for r in records)
            if not resources:
                raise ValueError("config contains no resources")
            if not any(r.urgency_level == UrgencyLevel.IMMEDIATE for r in resources):
                raise ValueError("config contains no immediate resources")

            self._resources = resources

            logger.info(
                "Loaded crisis resources config",
                path=config_path,
                resource_count=len(resources),
            )
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(
                "Failed to load crisis resources config",
                path=config_path,
                error=str(e),
            )

    @property
    def resources(self) -> tuple[CrisisResource, ...]:
        return self._resources

    def by_urgency(self, urgency: UrgencyLevel) -> list[CrisisResource]:
        """Get resources of one urgency tier in catalog order."""
        return [r for r in self._resources if r.urgency_level == urgency]

    def select(self, risk_level: int) -> list[CrisisResource]:
        """
        Select resources for a risk level.

        SAFETY_NOTE: At risk 8+ only immediate resources are
        shown so the user is not asked to choose.

        Args:
            risk_level: Integer risk level 0-10

        Returns:
            Ordered list of resources
        """
        if risk_level >= 8:
            return self.by_urgency(UrgencyLevel.IMMEDIATE)
        if risk_level >= 6:
            return [
                r for r in self._resources
                if r.urgency_level in (UrgencyLevel.IMMEDIATE, UrgencyLevel.URGENT)
            ]
        return self.by_urgency(UrgencyLevel.SUPPORTIVE)
