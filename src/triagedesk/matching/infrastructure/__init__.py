"""
Matching Infrastructure Layer
=============================

- External: YAML rules loading and watchdog hot-reload
"""

from triagedesk.matching.infrastructure.external import (
    MatchingRulesManager,
    RulesFileHandler,
)

__all__ = [
    "MatchingRulesManager",
    "RulesFileHandler",
]
