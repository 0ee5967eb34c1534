"""Type definitions for Bastuklubb data structures.

Two kinds of types live here:

1. **Frozen dataclasses** for the values the engines consume and return:
   - MemberFacts: read-only fact snapshot per member and evaluation
   - AchievementBadge: one row of the static badge table

2. **TypedDict** for dict-shaped data crossing the library boundary:
   - MemberRow / RelationRow / EarnedBadgeRow: raw database rows as fetched
     by the caller (all keys optional, the database is often incomplete)
   - ClassificationResult / RosterEntry: structured results for callers

IMPORTANT: This file must NOT import from engines, managers or data_builders.
Only typing machinery and the standard library.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Missing keys in raw rows are handled
at runtime by data_builders with .get() defaults.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

MemberId = str  # UUID string from the members table
BadgeCode = str  # achievement_type value, e.g. "streak_7d"
MemberCategory = str  # One of const.MEMBER_CATEGORIES
ActivityStatus = str  # One of const.ACTIVITY_STATUSES
ISODate = str  # ISO 8601 date string "2024-06-01"


# =============================================================================
# Engine Value Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class MemberFacts:
    """Fact snapshot for one member, built fresh per evaluation.

    Absent dates mean "never happened". The classification engine only reads
    the first seven fields; the rest feed tenure and roster helpers.
    """

    member_id: MemberId
    authoritative_status: str | None = None
    last_annual_fee_date: date | None = None
    last_entrance_fee_date: date | None = None
    last_queue_fee_date: date | None = None
    last_visit_at: datetime | None = None
    has_access_credential: bool = False
    is_household_dependent: bool = False
    first_queue_fee_date: date | None = None
    customer_since: date | None = None
    customer_number: str | None = None
    personal_identity_number: str | None = None


@dataclass(frozen=True, slots=True)
class AchievementBadge:
    """Static definition of an achievement badge."""

    code: BadgeCode
    emoji: str
    display_name: str
    description: str
    category: str
    is_dynamic: bool
    period_days: int | None = None
    rank: int | None = None
    max_rank: int | None = None
    sort_weight: int = 0


# =============================================================================
# Raw Rows (as fetched by the caller)
# =============================================================================


class EarnedBadgeRow(TypedDict, total=False):
    """Earned badge row joined onto a member."""

    user_id: str
    achievement_type: BadgeCode
    earned_at: str
    is_dynamic: bool
    is_active: bool


class MemberRow(TypedDict, total=False):
    """Row of the members table (only the columns this library reads)."""

    id: MemberId
    status: str | None
    fortnox_customer_number: str | None
    fortnox_customer_since: ISODate | None
    personal_identity_number: str | None
    last_annual_fee_date: ISODate | None
    last_entrance_fee_date: ISODate | None
    last_queue_fee_date: ISODate | None
    first_queue_fee_date: ISODate | None
    last_visit_at: str | None
    aptus_user_id: str | None
    parakey_user_id: str | None
    badges: list[EarnedBadgeRow]


class RelationRow(TypedDict, total=False):
    """Row of the member_relations table."""

    primary_member_id: MemberId
    medbadare_member_id: MemberId
    relation_type: str
    confidence: Any


# =============================================================================
# Results
# =============================================================================


class ClassificationResult(TypedDict):
    """Category plus the intermediate flags that produced it."""

    category: MemberCategory
    rule: str
    cutoff_date: date
    is_queued_by_status: bool
    has_paid_membership_fee: bool
    has_recent_queue_fee: bool
    has_ever_paid_membership_fee: bool


class RosterEntry(TypedDict):
    """Classified member as produced by RosterManager."""

    member_id: MemberId
    facts: MemberFacts
    category: MemberCategory
    activity_status: ActivityStatus
    badge_codes: list[BadgeCode]
