"""Roster Manager - Classify and organise a batch of member rows.

The manager is the caller-facing layer over the pure engines:
- Builds MemberFacts for each row (data_builders)
- Classifies every member against ONE `as_of` instant for the whole batch
- Counts, filters, collapses duplicate people and orders the queue

Engines never read the clock. The manager reads it once per batch, and only
when the caller did not pass `as_of`.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import date, datetime
import re
from typing import TYPE_CHECKING, Any

from .. import const
from ..data_builders import (
    MemberDataError,
    active_badge_codes,
    build_household_dependent_ids,
    build_member_facts,
)
from ..engines.classification_engine import ClassificationEngine
from ..engines.tenure_engine import TenureEngine
from ..utils.dt_utils import dt_now_utc

if TYPE_CHECKING:
    from ..type_defs import RosterEntry

# Customer numbers may carry a suffix ("123 A"); only the leading digits count
_CUSTOMER_NUMBER_PATTERN = re.compile(r"\s*(\d+)")


class RosterManager:
    """Classify member rows and answer list-view questions about them.

    Example:
        manager = RosterManager()
        entries = manager.build_entries(rows, relations=relations)
        counts = manager.category_counts(entries)
        queue = manager.queue_order(entries)
    """

    def __init__(
        self,
        *,
        fee_window_months: int = const.DEFAULT_FEE_RECENCY_MONTHS,
        activity_window_months: int = const.DEFAULT_ACTIVITY_WINDOW_MONTHS,
    ) -> None:
        """Initialize manager.

        Args:
            fee_window_months: Fee recency window passed to the engine
            activity_window_months: Visit recency window for activity status
        """
        self.fee_window_months = fee_window_months
        self.activity_window_months = activity_window_months

    # =========================================================================
    # CLASSIFICATION
    # =========================================================================

    def classify_row(
        self,
        row: Mapping[str, Any],
        as_of: date | datetime,
        *,
        household_dependent_ids: Iterable[str] | None = None,
    ) -> RosterEntry:
        """Classify a single members row.

        Raises:
            MemberDataError: If the row cannot identify a member.
        """
        facts = build_member_facts(row, household_dependent_ids=household_dependent_ids)
        return {
            "member_id": facts.member_id,
            "facts": facts,
            "category": ClassificationEngine.classify(
                facts, as_of, fee_window_months=self.fee_window_months
            ),
            "activity_status": ClassificationEngine.activity_status(
                facts, as_of, window_months=self.activity_window_months
            ),
            "badge_codes": active_badge_codes(row),
        }

    def build_entries(
        self,
        rows: Iterable[Mapping[str, Any]],
        *,
        relations: Iterable[Mapping[str, Any]] | None = None,
        as_of: date | datetime | None = None,
    ) -> list[RosterEntry]:
        """Classify every row; rows that cannot identify a member are skipped.

        Args:
            rows: Rows from the members table
            relations: Rows from the member_relations table
            as_of: Reference instant; defaults to now (read once for the batch)

        Returns:
            One RosterEntry per usable row, in input order
        """
        reference = as_of if as_of is not None else dt_now_utc()
        dependents = build_household_dependent_ids(relations)

        entries: list[RosterEntry] = []
        skipped = 0
        for row in rows:
            try:
                entries.append(
                    self.classify_row(
                        row, reference, household_dependent_ids=dependents
                    )
                )
            except MemberDataError as err:
                skipped += 1
                const.LOGGER.warning("RosterManager: Skipping member row: %s", err)

        const.LOGGER.debug(
            "RosterManager: Classified %d members as of %s (%d skipped)",
            len(entries),
            reference,
            skipped,
        )
        return entries

    # =========================================================================
    # COUNTS
    # =========================================================================

    @staticmethod
    def category_counts(entries: Iterable[RosterEntry]) -> dict[str, int]:
        """Return member counts per category, every category present."""
        counts = Counter(entry["category"] for entry in entries)
        return {category: counts[category] for category in const.MEMBER_CATEGORIES}

    @staticmethod
    def activity_counts(entries: Iterable[RosterEntry]) -> dict[str, int]:
        """Return member counts per activity status, every status present."""
        counts = Counter(entry["activity_status"] for entry in entries)
        return {status: counts[status] for status in const.ACTIVITY_STATUSES}

    @staticmethod
    def badge_counts(entries: Iterable[RosterEntry]) -> dict[str, int]:
        """Return how many members hold each badge, most common first."""
        counts = Counter(code for entry in entries for code in entry["badge_codes"])
        return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))

    # =========================================================================
    # FILTERING
    # =========================================================================

    @staticmethod
    def filter_entries(
        entries: Iterable[RosterEntry],
        *,
        categories: Iterable[str] | None = None,
        activity_statuses: Iterable[str] | None = None,
        badge_codes: Iterable[str] | None = None,
    ) -> list[RosterEntry]:
        """Filter entries the way the member list does.

        An empty or None selector matches everything. Categories and activity
        statuses match any selected value; badges require ALL selected codes.
        """
        category_set = set(categories or ())
        activity_set = set(activity_statuses or ())
        badge_set = set(badge_codes or ())

        result = []
        for entry in entries:
            if category_set and entry["category"] not in category_set:
                continue
            if activity_set and entry["activity_status"] not in activity_set:
                continue
            if badge_set and not badge_set.issubset(entry["badge_codes"]):
                continue
            result.append(entry)
        return result

    @staticmethod
    def collapse_duplicates(entries: Iterable[RosterEntry]) -> list[RosterEntry]:
        """Keep one entry per person and category.

        The same person may hold several customer numbers. Entries sharing a
        personal identity number AND a category collapse to the one with the
        highest customer number, placed where the first of them appeared.
        Family members sharing an email or access credential are different
        people and are never merged.
        """
        # Entries without an identity number form their own single groups
        groups: dict[tuple[Any, ...], list[RosterEntry]] = {}
        for index, entry in enumerate(entries):
            pin = entry["facts"].personal_identity_number
            key = (pin.strip(), entry["category"]) if pin else (index,)
            groups.setdefault(key, []).append(entry)

        result = []
        for group in groups.values():
            numbered = [e for e in group if e["facts"].customer_number]
            if not numbered:
                result.append(group[0])
                continue
            result.append(
                max(
                    numbered,
                    key=lambda e: _customer_number(e["facts"].customer_number),
                )
            )
        return result

    # =========================================================================
    # QUEUE
    # =========================================================================

    @staticmethod
    def queue_order(entries: Iterable[RosterEntry]) -> list[tuple[int, RosterEntry]]:
        """Return queued entries with their queue position, starting at 1.

        Oldest queue start first; members with an unknown queue start are
        placed last in input order.
        """
        queued = [
            entry
            for entry in entries
            if entry["category"] == const.MEMBER_CATEGORY_QUEUED
        ]
        queued.sort(
            key=lambda entry: _queue_sort_key(
                TenureEngine.queue_start_date(entry["facts"])
            )
        )
        return list(enumerate(queued, start=1))


def _customer_number(value: str | None) -> int:
    """Return the leading digits of a customer number, 0 if there are none."""
    match = _CUSTOMER_NUMBER_PATTERN.match(value or "")
    return int(match.group(1)) if match else 0


def _queue_sort_key(start: date | None) -> tuple[int, date]:
    """Sort key placing unknown queue starts last."""
    if start is None:
        return (1, date.max)
    return (0, start)
