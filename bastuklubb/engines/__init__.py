"""Engine modules for Bastuklubb.

Contains pure computation engines:
- classification_engine: Member category and activity status
- badge_engine: Achievement badge table lookups and display ordering
- tenure_engine: Membership years, days in queue and age
"""

# Use relative imports within package to avoid mypy module resolution issues
from .badge_engine import BADGES, BadgeEngine
from .classification_engine import ClassificationEngine
from .tenure_engine import TenureEngine

__all__ = [
    "BADGES",
    "BadgeEngine",
    "ClassificationEngine",
    "TenureEngine",
]
