"""Tier recommendation from a security assessment.

Independent of the pricing arithmetic: high threat or armed/diplomatic
requirements call for Shadow Protocol; medium-risk corporate or event work
and surveillance/K9 requirements call for Executive; everything else is
Essential.
"""

from __future__ import annotations

import logging

from armora.pricing.models import LocationType, RiskLevel, SecurityAssessment
from armora.reference import ServiceTier, TierId, get_service_tier

logger = logging.getLogger("armora.pricing.recommendation")

_EXECUTIVE_LOCATIONS = (LocationType.CORPORATE, LocationType.EVENT)


def get_recommended_tier(assessment: SecurityAssessment) -> ServiceTier:
    requirements = assessment.special_requirements

    if assessment.threat_level == RiskLevel.HIGH or requirements.armed or requirements.diplomatic:
        tier_id = TierId.SHADOW
    elif assessment.location_type in _EXECUTIVE_LOCATIONS and assessment.threat_level == RiskLevel.MEDIUM:
        tier_id = TierId.EXECUTIVE
    elif requirements.surveillance or requirements.k9_unit:
        tier_id = TierId.EXECUTIVE
    else:
        tier_id = TierId.ESSENTIAL

    logger.debug(
        "Recommended tier=%s for threat=%s location=%s",
        tier_id.value,
        assessment.threat_level.value,
        assessment.location_type.value,
    )
    return get_service_tier(tier_id)
