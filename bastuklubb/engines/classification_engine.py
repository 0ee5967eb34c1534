"""Classification Engine - Pure logic for member category and activity status.

This engine derives a member's category from a MemberFacts snapshot:
- MEDLEM: annual or entrance fee paid within the fee recency window
- KÖANDE: queued per the accounting system, or queue fee within the window
- MEDBADARE: household dependent, or access credential without ever having
  paid a membership fee
- INAKTIV: everything else

ARCHITECTURE: This is a pure logic engine. All methods are static and operate
on passed-in data. "Now" is always an explicit `as_of` argument; the engine
never reads the clock, so the same facts and `as_of` always classify the same.

Rule order is fixed. The authoritative queued status is checked BEFORE any
payment-derived rule: a member the accounting system marks as queued stays
queued even with an old (or recent) membership payment on record.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_subtract_months, dt_to_local_date

if TYPE_CHECKING:
    from ..type_defs import ClassificationResult, MemberFacts


class ClassificationEngine:
    """Pure logic engine for member classification.

    All methods are static - no instance state.

    Boundaries:
        Recency windows are inclusive and evaluated on local calendar dates.
        With the default 13 month window and as_of 2024-06-01, a fee paid on
        2023-05-01 is recent and one paid on 2023-04-30 is not.
    """

    @staticmethod
    def fee_cutoff_date(
        as_of: date | datetime,
        fee_window_months: int = const.DEFAULT_FEE_RECENCY_MONTHS,
    ) -> date:
        """Return the earliest fee date that still counts as recent."""
        months = _window(fee_window_months, const.DEFAULT_FEE_RECENCY_MONTHS)
        return dt_subtract_months(dt_to_local_date(as_of), months)

    @staticmethod
    def is_within(value: date | datetime | None, cutoff: date) -> bool:
        """Return True if value is on or after cutoff (None is never within)."""
        value_date = dt_to_local_date(value)
        if value_date is None:
            return False
        return value_date >= cutoff

    @staticmethod
    def is_queued_by_status(facts: MemberFacts) -> bool:
        """Return True if the accounting system marks the member as queued."""
        status = facts.authoritative_status
        if not status or not isinstance(status, str):
            return False
        return status.strip().upper() == const.AUTHORITATIVE_STATUS_QUEUED

    @staticmethod
    def has_ever_paid_membership_fee(facts: MemberFacts) -> bool:
        """Return True if an annual or entrance fee was ever recorded."""
        return (
            facts.last_annual_fee_date is not None
            or facts.last_entrance_fee_date is not None
        )

    # =========================================================================
    # CLASSIFICATION
    # =========================================================================

    @classmethod
    def explain(
        cls,
        facts: MemberFacts,
        as_of: date | datetime,
        *,
        fee_window_months: int = const.DEFAULT_FEE_RECENCY_MONTHS,
    ) -> ClassificationResult:
        """Classify a member and report the flags behind the decision.

        Args:
            facts: Member fact snapshot
            as_of: Reference instant for all recency checks
            fee_window_months: Fee recency window in calendar months

        Returns:
            ClassificationResult with category, matching rule and flags
        """
        cutoff = cls.fee_cutoff_date(as_of, fee_window_months)

        queued_by_status = cls.is_queued_by_status(facts)
        has_paid_membership_fee = cls.is_within(
            facts.last_annual_fee_date, cutoff
        ) or cls.is_within(facts.last_entrance_fee_date, cutoff)
        has_recent_queue_fee = cls.is_within(facts.last_queue_fee_date, cutoff)
        ever_paid = cls.has_ever_paid_membership_fee(facts)

        if queued_by_status:
            category = const.MEMBER_CATEGORY_QUEUED
            rule = const.CLASSIFICATION_RULE_QUEUED_STATUS
        elif has_paid_membership_fee:
            category = const.MEMBER_CATEGORY_MEMBER
            rule = const.CLASSIFICATION_RULE_PAID_MEMBERSHIP_FEE
        elif has_recent_queue_fee:
            category = const.MEMBER_CATEGORY_QUEUED
            rule = const.CLASSIFICATION_RULE_RECENT_QUEUE_FEE
        elif facts.is_household_dependent:
            category = const.MEMBER_CATEGORY_CO_BATHER
            rule = const.CLASSIFICATION_RULE_HOUSEHOLD_DEPENDENT
        elif facts.has_access_credential and not ever_paid:
            category = const.MEMBER_CATEGORY_CO_BATHER
            rule = const.CLASSIFICATION_RULE_ACCESS_WITHOUT_MEMBERSHIP_FEE
        else:
            category = const.MEMBER_CATEGORY_INACTIVE
            rule = const.CLASSIFICATION_RULE_NO_MATCH

        return {
            "category": category,
            "rule": rule,
            "cutoff_date": cutoff,
            "is_queued_by_status": queued_by_status,
            "has_paid_membership_fee": has_paid_membership_fee,
            "has_recent_queue_fee": has_recent_queue_fee,
            "has_ever_paid_membership_fee": ever_paid,
        }

    @classmethod
    def classify(
        cls,
        facts: MemberFacts,
        as_of: date | datetime,
        *,
        fee_window_months: int = const.DEFAULT_FEE_RECENCY_MONTHS,
    ) -> str:
        """Return the member category for facts as of the given instant.

        Total over MemberFacts: absent dates count as "never paid" and the
        result is always one of const.MEMBER_CATEGORIES.
        """
        return cls.explain(facts, as_of, fee_window_months=fee_window_months)[
            "category"
        ]

    # =========================================================================
    # ACTIVITY STATUS
    # =========================================================================

    @staticmethod
    def is_active(
        facts: MemberFacts,
        as_of: date | datetime,
        *,
        window_months: int = const.DEFAULT_ACTIVITY_WINDOW_MONTHS,
    ) -> bool:
        """Return True if the member visited within the activity window."""
        last_visit = dt_to_local_date(facts.last_visit_at)
        if last_visit is None:
            return False
        months = _window(window_months, const.DEFAULT_ACTIVITY_WINDOW_MONTHS)
        cutoff = dt_subtract_months(dt_to_local_date(as_of), months)
        return last_visit >= cutoff

    @classmethod
    def activity_status(
        cls,
        facts: MemberFacts,
        as_of: date | datetime,
        *,
        window_months: int = const.DEFAULT_ACTIVITY_WINDOW_MONTHS,
    ) -> str:
        """Return const.ACTIVITY_STATUS_ACTIVE or ACTIVITY_STATUS_INACTIVE."""
        if cls.is_active(facts, as_of, window_months=window_months):
            return const.ACTIVITY_STATUS_ACTIVE
        return const.ACTIVITY_STATUS_INACTIVE

    # =========================================================================
    # PRESENTATION METADATA
    # =========================================================================

    @staticmethod
    def category_badge_variant(category: str) -> str:
        """Return the UI badge variant for a category (outline if unknown)."""
        return const.CATEGORY_BADGE_VARIANTS.get(
            category, const.BADGE_VARIANT_OUTLINE
        )

    @staticmethod
    def category_display_name(category: str) -> str:
        """Return the Swedish singular label for a category."""
        return const.CATEGORY_DISPLAY_NAMES.get(category, category)

    @staticmethod
    def category_plural_label(category: str) -> str:
        """Return the Swedish plural label used in list titles."""
        return const.CATEGORY_PLURAL_LABELS.get(category, category)

    @staticmethod
    def activity_status_display_name(status: str) -> str:
        """Return the Swedish label for an activity status."""
        return const.ACTIVITY_STATUS_DISPLAY_NAMES.get(status, status)


def _window(months: int, default: int) -> int:
    """Return a usable window length, falling back to default if invalid."""
    if isinstance(months, int) and not isinstance(months, bool) and months > 0:
        return months
    const.LOGGER.warning(
        "ClassificationEngine: Invalid window %r months, using default %s",
        months,
        default,
    )
    return default
