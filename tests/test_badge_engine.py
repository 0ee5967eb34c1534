"""Unit tests for BadgeEngine - lookups over the static badge table.

Test Categories:
- Table completeness (definitions vs sort weights)
- Lookup and fallback for unknown codes
- Dynamic / champion / ranking predicates
- Collections and display ordering
- Display text
"""

from __future__ import annotations

import pytest

from bastuklubb import const
from bastuklubb.engines.badge_engine import BADGES, BadgeEngine

# =============================================================================
# Test: Table
# =============================================================================


class TestBadgeTable:
    """Tests for the badge table itself."""

    def test_table_has_all_badges(self) -> None:
        """Every definition is built into the table."""
        assert len(BADGES) == 23
        assert set(BADGES) == set(const.BADGE_DEFINITIONS)

    def test_every_sort_weight_resolves_to_a_badge(self) -> None:
        """No orphaned sort weight entries."""
        for code in const.BADGE_SORT_WEIGHTS:
            assert BadgeEngine.get_badge(code) is not None
            badge = BadgeEngine.lookup_badge(code)
            assert badge is BADGES[code]
            assert badge.description != const.BADGE_FALLBACK_DESCRIPTION

    def test_every_badge_has_a_known_category(self) -> None:
        """Table categories all have a display position."""
        for badge in BADGES.values():
            assert badge.category in const.BADGE_CATEGORY_DISPLAY_ORDER

    def test_table_is_read_only(self) -> None:
        """The shared table cannot be mutated."""
        with pytest.raises(TypeError):
            BADGES["new_code"] = BADGES["veteran"]  # type: ignore[index]

    def test_badge_fields(self) -> None:
        """Spot check a dynamic and a permanent badge."""
        streak = BadgeEngine.get_badge("streak_7d")
        assert streak is not None
        assert streak.emoji == "⭐"
        assert streak.display_name == "Vecko-Mästare"
        assert streak.category == const.BADGE_CATEGORY_STREAK
        assert streak.is_dynamic is True
        assert streak.period_days == 7
        assert streak.sort_weight == 20

        milestone = BadgeEngine.get_badge("visits_1000")
        assert milestone is not None
        assert milestone.is_dynamic is False
        assert milestone.period_days is None
        assert milestone.sort_weight == 1000


# =============================================================================
# Test: Lookup and fallback
# =============================================================================


class TestLookup:
    """Tests for lookup_badge and fallback records."""

    def test_unknown_code_gets_fallback(self) -> None:
        """Unknown codes never raise."""
        badge = BadgeEngine.lookup_badge("totally_unknown_code")

        assert badge.code == "totally_unknown_code"
        assert badge.display_name == "totally unknown code"
        assert badge.emoji == "🏅"
        assert badge.description == "Specialmedalj"
        assert badge.category == const.BADGE_CATEGORY_OTHER
        assert badge.is_dynamic is False

    def test_get_badge_returns_none_for_unknown(self) -> None:
        """get_badge does not invent records."""
        assert BadgeEngine.get_badge("totally_unknown_code") is None

    def test_known_code_is_not_fallback(self) -> None:
        """Known codes return the table record."""
        assert BadgeEngine.lookup_badge("night_owl") is BADGES["night_owl"]

    def test_sort_weight_unknown_is_zero(self) -> None:
        """Unknown codes sort with weight 0."""
        assert BadgeEngine.sort_weight("totally_unknown_code") == 0
        assert BadgeEngine.sort_weight("top10_30d") == 50


# =============================================================================
# Test: Predicates
# =============================================================================


class TestPredicates:
    """Tests for dynamic, champion and ranking predicates."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("streak_3d", True),
            ("monthly_champion", True),
            ("morning_bird", True),
            ("visits_100", False),
            ("anniversary_5y", False),
            ("weekly_warrior", False),
            ("totally_unknown_code", False),
        ],
    )
    def test_is_dynamic(self, code: str, expected: bool) -> None:
        """Dynamic badges can be revoked."""
        assert BadgeEngine.is_dynamic(code) is expected

    def test_champion_badges(self) -> None:
        """Rank 1 badges are champions."""
        champions = {code for code in BADGES if BadgeEngine.is_champion_badge(code)}

        assert champions == {
            "monthly_champion",
            "quarterly_champion",
            "morning_bird",
            "evening_bastare",
            "night_owl",
        }

    def test_ranking_badges_include_top_n(self) -> None:
        """Top-N badges are ranking badges but not champions."""
        assert BadgeEngine.is_ranking_badge("top10_30d") is True
        assert BadgeEngine.is_champion_badge("top10_30d") is False
        assert BadgeEngine.is_ranking_badge("veteran") is True
        assert BadgeEngine.is_ranking_badge("streak_30d") is False
        assert BadgeEngine.is_ranking_badge("totally_unknown_code") is False


# =============================================================================
# Test: Collections and ordering
# =============================================================================


class TestCollections:
    """Tests for category filtering and display sort."""

    def test_badges_by_category(self) -> None:
        """Streak category holds the four streak badges."""
        codes = [b.code for b in BadgeEngine.badges_by_category("streak")]

        assert codes == ["streak_3d", "streak_7d", "streak_14d", "streak_30d"]

    def test_badges_by_unknown_category_is_empty(self) -> None:
        """Unknown categories return an empty list."""
        assert BadgeEngine.badges_by_category("unknown") == []

    def test_all_badges_dynamic_filter(self) -> None:
        """None returns everything; True/False split the table."""
        dynamic = BadgeEngine.all_badges(dynamic_only=True)
        permanent = BadgeEngine.all_badges(dynamic_only=False)

        assert len(BadgeEngine.all_badges()) == 23
        assert len(dynamic) + len(permanent) == 23
        assert all(badge.is_dynamic for badge in dynamic)
        assert not any(badge.is_dynamic for badge in permanent)

    def test_sort_for_display_orders_by_category_then_weight(self) -> None:
        """Frequency before streak; heavier weight first within a category."""
        ordered = BadgeEngine.sort_for_display(
            ["visits_100", "streak_14d", "streak_3d", "monthly_champion", "night_owl"]
        )

        assert [badge.code for badge in ordered] == [
            "monthly_champion",
            "streak_3d",
            "streak_14d",
            "night_owl",
            "visits_100",
        ]

    def test_sort_for_display_puts_unknown_last_and_dedupes(self) -> None:
        """Fallback badges sort after every known category."""
        ordered = BadgeEngine.sort_for_display(
            ["mystery_badge", "weekly_warrior", "veteran", "weekly_warrior"]
        )

        assert [badge.code for badge in ordered] == [
            "veteran",
            "weekly_warrior",
            "mystery_badge",
        ]
        assert ordered[-1].emoji == "🏅"


# =============================================================================
# Test: Display text
# =============================================================================


class TestDisplayText:
    """Tests for Swedish labels."""

    @pytest.mark.parametrize(
        ("days", "text"),
        [
            (None, "Permanent"),
            (0, "Permanent"),
            (3, "3 dagar"),
            (7, "Vecka"),
            (14, "2 veckor"),
            (28, "4 veckor"),
            (30, "Månad"),
            (90, "Kvartal (3 månader)"),
            (45, "45 dagar"),
        ],
    )
    def test_period_display_text(self, days: int | None, text: str) -> None:
        """Known periods have names; others show the day count."""
        assert BadgeEngine.period_display_text(days) == text

    def test_category_display_name(self) -> None:
        """Category labels, unknown passes through."""
        assert BadgeEngine.category_display_name("frequency") == "Frekvens"
        assert BadgeEngine.category_display_name("time-of-day") == "Tid"
        assert BadgeEngine.category_display_name("other") == "other"
