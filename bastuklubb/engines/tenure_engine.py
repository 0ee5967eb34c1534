"""Tenure Engine - Pure date math for membership length, queue time and age.

Used by list views to show "years as member", "days in queue" and member age.
Like the other engines it takes an explicit `as_of` and never reads the clock.
"""

from __future__ import annotations

from datetime import date, datetime
import re
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_days_between, dt_to_local_date, dt_whole_years_between

if TYPE_CHECKING:
    from ..type_defs import MemberFacts

# YYYYMMDD-XXXX or YYMMDD-XXXX, dash optional
_PIN_PATTERN = re.compile(r"^(\d{6}|\d{8})-?\d{4}$")


class TenureEngine:
    """Pure logic engine for tenure calculations.

    All methods are static - no instance state.
    """

    @staticmethod
    def membership_start_date(facts: MemberFacts) -> date | None:
        """Return the best known membership start.

        Priority: customer since (accounting system) > entrance fee date >
        annual fee date.
        """
        return (
            facts.customer_since
            or facts.last_entrance_fee_date
            or facts.last_annual_fee_date
        )

    @classmethod
    def membership_years(
        cls, facts: MemberFacts, as_of: date | datetime
    ) -> int | None:
        """Return completed years as member, or None if no start is known."""
        start = cls.membership_start_date(facts)
        if start is None:
            return None
        return dt_whole_years_between(start, dt_to_local_date(as_of))

    @staticmethod
    def queue_start_date(facts: MemberFacts) -> date | None:
        """Return when the member joined the queue.

        The first queue fee is only an approximation (some members queued
        before paying), so customer since wins when present.
        """
        return facts.customer_since or facts.first_queue_fee_date

    @classmethod
    def queue_days(cls, facts: MemberFacts, as_of: date | datetime) -> int | None:
        """Return whole days in queue, or None if the queue start is unknown."""
        start = cls.queue_start_date(facts)
        if start is None:
            return None
        return dt_days_between(start, dt_to_local_date(as_of))

    @staticmethod
    def birth_date_from_personal_identity_number(pin: str | None) -> date | None:
        """Parse the birth date out of a Swedish personal identity number.

        Two-digit years at or above const.PIN_CENTURY_CUTOFF are 1900s.
        Returns None for malformed numbers or impossible dates.
        """
        if not pin or not isinstance(pin, str):
            return None
        match = _PIN_PATTERN.match(pin.strip())
        if not match:
            return None

        digits = match.group(1)
        if len(digits) == 8:
            year = int(digits[0:4])
            month_day = digits[4:8]
        else:
            short_year = int(digits[0:2])
            if short_year >= const.PIN_CENTURY_CUTOFF:
                year = 1900 + short_year
            else:
                year = 2000 + short_year
            month_day = digits[2:6]

        try:
            return date(year, int(month_day[0:2]), int(month_day[2:4]))
        except ValueError:
            # Coordination numbers add 60 to the day; not birth dates
            return None

    @classmethod
    def age_from_personal_identity_number(
        cls, pin: str | None, as_of: date | datetime
    ) -> int | None:
        """Return age in completed years, or None if the number is unusable."""
        birth_date = cls.birth_date_from_personal_identity_number(pin)
        if birth_date is None:
            return None
        return dt_whole_years_between(birth_date, dt_to_local_date(as_of))

    @staticmethod
    def payment_labels(facts: MemberFacts) -> list[str]:
        """Return labels for each fee type the member has ever paid."""
        labels = []
        if facts.last_queue_fee_date:
            labels.append(const.PAYMENT_LABEL_QUEUE_FEE)
        if facts.last_annual_fee_date:
            labels.append(const.PAYMENT_LABEL_ANNUAL_FEE)
        if facts.last_entrance_fee_date:
            labels.append(const.PAYMENT_LABEL_ENTRANCE_FEE)
        return labels
