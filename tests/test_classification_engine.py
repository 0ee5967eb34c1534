"""Unit tests for ClassificationEngine - pure Python logic tests.

These tests verify member categorisation without any database or clock. Every
call passes an explicit `as_of`.

Test Categories:
- Rule precedence (authoritative queued status first)
- Fee recency window boundaries (inclusive, local calendar dates)
- Co-bather rules (household dependent, access without membership fee)
- Totality over absent facts
- explain() flags
- Activity status
- Presentation metadata
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from itertools import product
import logging
from typing import Any

import pytest

from bastuklubb import const
from bastuklubb.engines.classification_engine import ClassificationEngine
from bastuklubb.type_defs import MemberFacts

# 2024-06-01 12:00 Stockholm; 13 month fee cutoff is 2023-05-01
AS_OF = datetime(2024, 6, 1, 10, 0, tzinfo=UTC)

# =============================================================================
# TEST FIXTURES - Minimal fact builders
# =============================================================================


def make_facts(**kwargs: Any) -> MemberFacts:
    """Build MemberFacts with a default id; every other field defaults absent."""
    kwargs.setdefault("member_id", "member-1")
    return MemberFacts(**kwargs)


# =============================================================================
# Test: Rule precedence
# =============================================================================


class TestRulePrecedence:
    """Tests for the fixed rule order."""

    def test_queued_status_beats_fresh_membership_payment(self) -> None:
        """Queued per accounting stays queued even with yesterday's payment."""
        facts = make_facts(
            authoritative_status="KÖANDE",
            last_annual_fee_date=date(2024, 5, 31),
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "KÖANDE"

    def test_queued_status_beats_old_membership_payment(self) -> None:
        """Old membership history does not hide a queued status."""
        facts = make_facts(
            authoritative_status="KÖANDE",
            last_annual_fee_date=date(2019, 3, 1),
            last_entrance_fee_date=date(2019, 3, 1),
            has_access_credential=True,
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "KÖANDE"

    def test_queued_status_is_case_and_whitespace_insensitive(self) -> None:
        """Status values typed by hand still match."""
        facts = make_facts(authoritative_status="  köande ")

        assert ClassificationEngine.is_queued_by_status(facts) is True
        assert ClassificationEngine.classify(facts, AS_OF) == "KÖANDE"

    def test_other_status_values_are_ignored(self) -> None:
        """Only the queued status is authoritative."""
        facts = make_facts(authoritative_status="MEDLEM")

        assert ClassificationEngine.is_queued_by_status(facts) is False
        assert ClassificationEngine.classify(facts, AS_OF) == "INAKTIV"

    def test_membership_fee_beats_queue_fee(self) -> None:
        """A member who still pays the queue fee is a member."""
        facts = make_facts(
            last_annual_fee_date=date(2024, 1, 15),
            last_queue_fee_date=date(2024, 1, 15),
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDLEM"

    def test_queue_fee_beats_household_dependent(self) -> None:
        """A dependent paying their own queue fee is queued."""
        facts = make_facts(
            last_queue_fee_date=date(2024, 2, 1),
            is_household_dependent=True,
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "KÖANDE"

    def test_membership_fee_beats_household_dependent(self) -> None:
        """A dependent with their own recent membership fee is a member."""
        facts = make_facts(
            last_entrance_fee_date=date(2024, 3, 10),
            is_household_dependent=True,
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDLEM"


# =============================================================================
# Test: Fee recency window
# =============================================================================


class TestFeeRecencyWindow:
    """Tests for the inclusive 13 calendar month fee window."""

    def test_cutoff_is_thirteen_calendar_months_back(self) -> None:
        """Default cutoff for 2024-06-01 is 2023-05-01."""
        assert ClassificationEngine.fee_cutoff_date(AS_OF) == date(2023, 5, 1)

    def test_annual_fee_on_cutoff_is_recent(self) -> None:
        """Exactly 13 months back is inside the window."""
        facts = make_facts(last_annual_fee_date=date(2023, 5, 1))

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDLEM"

    def test_annual_fee_one_day_inside_is_recent(self) -> None:
        """One day after the cutoff is inside the window."""
        facts = make_facts(last_annual_fee_date=date(2023, 5, 2))

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDLEM"

    def test_annual_fee_one_day_outside_is_not_recent(self) -> None:
        """One day before the cutoff is outside the window."""
        facts = make_facts(last_annual_fee_date=date(2023, 4, 30))

        assert ClassificationEngine.classify(facts, AS_OF) == "INAKTIV"

    def test_entrance_fee_counts_as_membership_fee(self) -> None:
        """Entrance fee alone makes a member."""
        facts = make_facts(last_entrance_fee_date=date(2023, 12, 24))

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDLEM"

    def test_queue_fee_boundary(self) -> None:
        """Queue fee uses the same inclusive window."""
        inside = make_facts(last_queue_fee_date=date(2023, 5, 1))
        outside = make_facts(last_queue_fee_date=date(2023, 4, 30))

        assert ClassificationEngine.classify(inside, AS_OF) == "KÖANDE"
        assert ClassificationEngine.classify(outside, AS_OF) == "INAKTIV"

    def test_month_end_cutoff_is_clamped(self) -> None:
        """31 March minus one month lands on the last day of February."""
        cutoff = ClassificationEngine.fee_cutoff_date(
            date(2024, 3, 31), fee_window_months=1
        )

        assert cutoff == date(2024, 2, 29)

    def test_as_of_is_compared_as_local_date(self) -> None:
        """A late UTC evening is already the next day in Stockholm."""
        # 2024-05-31 22:30 UTC is 2024-06-01 00:30 local
        as_of = datetime(2024, 5, 31, 22, 30, tzinfo=UTC)

        assert ClassificationEngine.fee_cutoff_date(as_of) == date(2023, 5, 1)

    def test_plain_date_as_of(self) -> None:
        """A date is accepted as as_of."""
        facts = make_facts(last_annual_fee_date=date(2024, 1, 1))

        assert ClassificationEngine.classify(facts, date(2024, 6, 1)) == "MEDLEM"

    def test_custom_window(self) -> None:
        """A 15 month window keeps an older payment recent."""
        facts = make_facts(last_annual_fee_date=date(2023, 4, 1))

        assert ClassificationEngine.classify(facts, AS_OF) == "INAKTIV"
        assert (
            ClassificationEngine.classify(facts, AS_OF, fee_window_months=15)
            == "MEDLEM"
        )

    @pytest.mark.parametrize("window", [0, -3, None, "13", True])
    def test_invalid_window_falls_back_to_default(
        self, window: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Invalid windows log a warning and use 13 months."""
        with caplog.at_level(logging.WARNING):
            cutoff = ClassificationEngine.fee_cutoff_date(AS_OF, window)

        assert cutoff == date(2023, 5, 1)
        assert "Invalid window" in caplog.text

    def test_is_within_handles_none(self) -> None:
        """Absent dates are never within a window."""
        assert ClassificationEngine.is_within(None, date(2023, 5, 1)) is False


# =============================================================================
# Test: Co-bather rules
# =============================================================================


class TestCoBather:
    """Tests for MEDBADARE rules."""

    def test_household_dependent_without_payment(self) -> None:
        """Dependent with a credential and no fees is a co-bather."""
        facts = make_facts(
            is_household_dependent=True,
            has_access_credential=True,
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDBADARE"

    def test_household_dependent_without_credential(self) -> None:
        """The relation alone is enough."""
        facts = make_facts(is_household_dependent=True)

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDBADARE"

    def test_household_dependent_with_lapsed_membership(self) -> None:
        """A dependent whose own membership lapsed still bathes as co-bather."""
        facts = make_facts(
            is_household_dependent=True,
            last_annual_fee_date=date(2020, 1, 1),
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDBADARE"

    def test_access_credential_without_any_membership_fee(self) -> None:
        """Someone let in on another member's account is a co-bather."""
        facts = make_facts(has_access_credential=True)

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDBADARE"

    def test_access_credential_with_old_queue_fee_only(self) -> None:
        """Queue fees are not membership fees."""
        facts = make_facts(
            has_access_credential=True,
            last_queue_fee_date=date(2021, 1, 1),
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "MEDBADARE"

    def test_access_credential_with_lapsed_membership_is_inactive(self) -> None:
        """A former member who kept their tag is inactive, not a co-bather."""
        facts = make_facts(
            has_access_credential=True,
            last_annual_fee_date=date(2022, 1, 1),
        )

        assert ClassificationEngine.classify(facts, AS_OF) == "INAKTIV"


# =============================================================================
# Test: Totality
# =============================================================================


class TestTotality:
    """Tests that classify always returns one of the four categories."""

    def test_all_absent_is_inactive(self) -> None:
        """No access, no payment, no relation."""
        assert ClassificationEngine.classify(make_facts(), AS_OF) == "INAKTIV"

    def test_every_combination_returns_a_category(self) -> None:
        """Sweep representative values for every rule input."""
        statuses = [None, "", "KÖANDE", "MEDLEM"]
        fee_dates = [None, date(2024, 5, 1), date(2020, 5, 1)]
        flags = [False, True]

        for status, annual, entrance, queue, credential, dependent in product(
            statuses, fee_dates, fee_dates, fee_dates, flags, flags
        ):
            facts = make_facts(
                authoritative_status=status,
                last_annual_fee_date=annual,
                last_entrance_fee_date=entrance,
                last_queue_fee_date=queue,
                has_access_credential=credential,
                is_household_dependent=dependent,
            )
            category = ClassificationEngine.classify(facts, AS_OF)
            assert category in const.MEMBER_CATEGORIES

    def test_same_inputs_same_result(self) -> None:
        """Classification is deterministic."""
        facts = make_facts(last_queue_fee_date=date(2024, 5, 1))

        results = {ClassificationEngine.classify(facts, AS_OF) for _ in range(5)}

        assert results == {"KÖANDE"}


# =============================================================================
# Test: explain
# =============================================================================


class TestExplain:
    """Tests for explain() flags and rule names."""

    def test_explain_reports_flags(self) -> None:
        """Flags reflect each rule input."""
        facts = make_facts(
            authoritative_status="KÖANDE",
            last_annual_fee_date=date(2024, 1, 1),
            last_queue_fee_date=date(2022, 1, 1),
        )

        result = ClassificationEngine.explain(facts, AS_OF)

        assert result["category"] == "KÖANDE"
        assert result["rule"] == const.CLASSIFICATION_RULE_QUEUED_STATUS
        assert result["cutoff_date"] == date(2023, 5, 1)
        assert result["is_queued_by_status"] is True
        assert result["has_paid_membership_fee"] is True
        assert result["has_recent_queue_fee"] is False
        assert result["has_ever_paid_membership_fee"] is True

    @pytest.mark.parametrize(
        ("facts", "rule"),
        [
            (
                make_facts(last_annual_fee_date=date(2024, 1, 1)),
                const.CLASSIFICATION_RULE_PAID_MEMBERSHIP_FEE,
            ),
            (
                make_facts(last_queue_fee_date=date(2024, 1, 1)),
                const.CLASSIFICATION_RULE_RECENT_QUEUE_FEE,
            ),
            (
                make_facts(is_household_dependent=True),
                const.CLASSIFICATION_RULE_HOUSEHOLD_DEPENDENT,
            ),
            (
                make_facts(has_access_credential=True),
                const.CLASSIFICATION_RULE_ACCESS_WITHOUT_MEMBERSHIP_FEE,
            ),
            (make_facts(), const.CLASSIFICATION_RULE_NO_MATCH),
        ],
    )
    def test_explain_rule_names(self, facts: MemberFacts, rule: str) -> None:
        """Each category path reports the rule that matched."""
        assert ClassificationEngine.explain(facts, AS_OF)["rule"] == rule


# =============================================================================
# Test: Activity status
# =============================================================================


class TestActivityStatus:
    """Tests for the three month visit window."""

    def test_recent_visit_is_active(self) -> None:
        """A visit last week is active."""
        facts = make_facts(last_visit_at=AS_OF - timedelta(days=7))

        assert ClassificationEngine.is_active(facts, AS_OF) is True
        assert ClassificationEngine.activity_status(facts, AS_OF) == "active"

    def test_no_visit_is_inactive(self) -> None:
        """Never visited."""
        facts = make_facts()

        assert ClassificationEngine.activity_status(facts, AS_OF) == "inactive"

    def test_visit_on_cutoff_is_active(self) -> None:
        """Exactly three months back (local date) is inside."""
        # 2024-02-29 23:30 UTC is 2024-03-01 00:30 in Stockholm
        facts = make_facts(last_visit_at=datetime(2024, 2, 29, 23, 30, tzinfo=UTC))

        assert ClassificationEngine.is_active(facts, AS_OF) is True

    def test_visit_day_before_cutoff_is_inactive(self) -> None:
        """2024-02-29 local is outside the window for 2024-06-01."""
        facts = make_facts(last_visit_at=datetime(2024, 2, 29, 12, 0, tzinfo=UTC))

        assert ClassificationEngine.is_active(facts, AS_OF) is False

    def test_custom_activity_window(self) -> None:
        """A six month window includes older visits."""
        facts = make_facts(last_visit_at=datetime(2024, 1, 10, 18, 0, tzinfo=UTC))

        assert ClassificationEngine.is_active(facts, AS_OF) is False
        assert ClassificationEngine.is_active(facts, AS_OF, window_months=6) is True

    def test_activity_is_independent_of_category(self) -> None:
        """An inactive-category person can still be an active visitor."""
        facts = make_facts(last_visit_at=AS_OF - timedelta(days=1))

        assert ClassificationEngine.classify(facts, AS_OF) == "INAKTIV"
        assert ClassificationEngine.activity_status(facts, AS_OF) == "active"


# =============================================================================
# Test: Presentation metadata
# =============================================================================


class TestPresentationMetadata:
    """Tests for category display helpers."""

    def test_badge_variants(self) -> None:
        """Members get the filled badge, everyone else outline."""
        assert ClassificationEngine.category_badge_variant("MEDLEM") == "default"
        for category in ("KÖANDE", "MEDBADARE", "INAKTIV", "SPONSOR"):
            assert ClassificationEngine.category_badge_variant(category) == "outline"

    def test_display_names(self) -> None:
        """Swedish singular and plural labels."""
        assert ClassificationEngine.category_display_name("MEDLEM") == "Medlem"
        assert ClassificationEngine.category_plural_label("MEDLEM") == "Medlemmar"
        assert ClassificationEngine.category_plural_label("INAKTIV") == "Inaktiva"

    def test_unknown_category_label_passes_through(self) -> None:
        """Unknown categories are shown as-is."""
        assert ClassificationEngine.category_display_name("OKÄND") == "OKÄND"

    def test_activity_status_display_name(self) -> None:
        """Activity labels."""
        assert ClassificationEngine.activity_status_display_name("active") == "Aktiv"
        assert ClassificationEngine.activity_status_display_name("inactive") == "Inaktiv"
