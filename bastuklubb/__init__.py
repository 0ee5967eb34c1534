"""Bastuklubb member classification.

Classifies sauna association members into MEDLEM, KÖANDE, MEDBADARE and
INAKTIV from fee, visit and relation facts, and answers list-view questions
(activity, tenure, queue position, achievement badges) about them.
"""

from .data_builders import MemberDataError, build_member_facts
from .engines import BadgeEngine, ClassificationEngine, TenureEngine
from .managers import RosterManager
from .type_defs import AchievementBadge, MemberFacts

__all__ = [
    "AchievementBadge",
    "BadgeEngine",
    "ClassificationEngine",
    "MemberDataError",
    "MemberFacts",
    "RosterManager",
    "TenureEngine",
    "build_member_facts",
]
