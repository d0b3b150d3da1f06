"""
Matching Application Layer
==========================

Contains:
- Services: MatchingService facade
- Provider interfaces: IMatchingRulesProvider
"""

from triagedesk.matching.application.services import (
    IMatchingRulesProvider,
    StaticRulesProvider,
    MatchingService,
)

__all__ = [
    "IMatchingRulesProvider",
    "StaticRulesProvider",
    "MatchingService",
]
