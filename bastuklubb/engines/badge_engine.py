"""Badge Engine - Pure lookups over the static achievement badge table.

This engine provides stateless queries for:
- Badge metadata lookup with a fallback for unknown codes
- Dynamic vs permanent classification
- Ranking badges (champion rank 1, top-N) detection
- Category filtering and display ordering

Badge codes are written by the visit statistics job and may be deployed ahead
of this table. Every query is total: an unknown code never raises, it gets a
fallback record (lookup_badge) or a neutral answer (False / 0 / None).

The earning and revocation rules for badges live with the visit statistics
job and are not part of this engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from .. import const
from ..type_defs import AchievementBadge


def _build_badge(code: str, definition: Mapping[str, Any]) -> AchievementBadge:
    """Build an AchievementBadge from a const.BADGE_DEFINITIONS entry."""
    return AchievementBadge(
        code=code,
        emoji=definition[const.BADGE_KEY_EMOJI],
        display_name=definition[const.BADGE_KEY_NAME],
        description=definition[const.BADGE_KEY_DESCRIPTION],
        category=definition[const.BADGE_KEY_CATEGORY],
        is_dynamic=definition[const.BADGE_KEY_IS_DYNAMIC],
        period_days=definition.get(const.BADGE_KEY_PERIOD_DAYS),
        rank=definition.get(const.BADGE_KEY_RANK),
        max_rank=definition.get(const.BADGE_KEY_MAX_RANK),
        sort_weight=const.BADGE_SORT_WEIGHTS.get(code, 0),
    )


# Immutable after import; safe to share between threads
BADGES: Mapping[str, AchievementBadge] = MappingProxyType(
    {
        code: _build_badge(code, definition)
        for code, definition in const.BADGE_DEFINITIONS.items()
    }
)

_CATEGORY_ORDER: dict[str, int] = {
    category: index
    for index, category in enumerate(const.BADGE_CATEGORY_DISPLAY_ORDER)
}


class BadgeEngine:
    """Pure query engine over the achievement badge table.

    All methods are static - no instance state.
    """

    # =========================================================================
    # LOOKUP
    # =========================================================================

    @staticmethod
    def get_badge(code: str) -> AchievementBadge | None:
        """Return the badge for code, or None if the code is not in the table."""
        return BADGES.get(code)

    @staticmethod
    def fallback_badge(code: str) -> AchievementBadge:
        """Build the generic record shown for badge codes missing from the table.

        Example:
            fallback_badge("totally_unknown_code").display_name
            → "totally unknown code"
        """
        text = code if isinstance(code, str) else str(code)
        return AchievementBadge(
            code=text,
            emoji=const.BADGE_FALLBACK_EMOJI,
            display_name=text.replace("_", " "),
            description=const.BADGE_FALLBACK_DESCRIPTION,
            category=const.BADGE_CATEGORY_OTHER,
            is_dynamic=False,
        )

    @classmethod
    def lookup_badge(cls, code: str) -> AchievementBadge:
        """Return the badge for code, or a fallback record for unknown codes."""
        badge = BADGES.get(code)
        if badge is None:
            const.LOGGER.debug("BadgeEngine: Unknown badge code %r", code)
            return cls.fallback_badge(code)
        return badge

    @staticmethod
    def sort_weight(code: str) -> int:
        """Return the display sort weight for code (0 if unknown)."""
        return const.BADGE_SORT_WEIGHTS.get(code, 0)

    # =========================================================================
    # PREDICATES
    # =========================================================================

    @staticmethod
    def is_dynamic(code: str) -> bool:
        """Return True if the badge can be revoked when statistics change."""
        badge = BADGES.get(code)
        return badge.is_dynamic if badge else False

    @staticmethod
    def is_champion_badge(code: str) -> bool:
        """Return True for single top performer badges (rank 1)."""
        badge = BADGES.get(code)
        return badge is not None and badge.rank == 1

    @staticmethod
    def is_ranking_badge(code: str) -> bool:
        """Return True for champion and top-N badges."""
        badge = BADGES.get(code)
        if badge is None:
            return False
        return badge.rank is not None or badge.max_rank is not None

    # =========================================================================
    # COLLECTIONS
    # =========================================================================

    @staticmethod
    def badges_by_category(category: str) -> list[AchievementBadge]:
        """Return all badges in a category, in table order."""
        return [badge for badge in BADGES.values() if badge.category == category]

    @staticmethod
    def all_badges(dynamic_only: bool | None = None) -> list[AchievementBadge]:
        """Return all badges, optionally filtered on dynamic status.

        Args:
            dynamic_only: None for every badge, True for dynamic badges only,
                False for permanent badges only.
        """
        if dynamic_only is None:
            return list(BADGES.values())
        return [
            badge for badge in BADGES.values() if badge.is_dynamic == dynamic_only
        ]

    @classmethod
    def sort_for_display(cls, codes: Iterable[str]) -> list[AchievementBadge]:
        """Order badge codes the way the member list renders them.

        Category display order first (unknown categories last), then sort
        weight descending, then code for a stable result. Duplicate codes are
        kept once.
        """
        unique_codes = list(dict.fromkeys(codes))
        badges = [cls.lookup_badge(code) for code in unique_codes]
        return sorted(
            badges,
            key=lambda badge: (
                _CATEGORY_ORDER.get(badge.category, len(_CATEGORY_ORDER)),
                -badge.sort_weight,
                badge.code,
            ),
        )

    # =========================================================================
    # DISPLAY TEXT
    # =========================================================================

    @staticmethod
    def category_display_name(category: str) -> str:
        """Return the Swedish label for a badge category."""
        return const.BADGE_CATEGORY_DISPLAY_NAMES.get(category, category)

    @staticmethod
    def period_display_text(days: int | None) -> str:
        """Return the Swedish label for a badge period.

        Examples:
            None → "Permanent"
            7 → "Vecka"
            45 → "45 dagar"
        """
        if not days:
            return const.BADGE_PERIOD_PERMANENT
        return const.BADGE_PERIOD_DISPLAY_TEXTS.get(
            days, const.BADGE_PERIOD_DAYS_FORMAT.format(days=days)
        )
