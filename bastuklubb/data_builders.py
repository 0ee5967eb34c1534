"""Member fact building helpers.

This module is the SINGLE SOURCE OF TRUTH for turning raw database rows into
the MemberFacts snapshots the engines consume.

### Build Functions
- `build_member_facts()` validates and normalizes one members row
- `build_household_dependent_ids()` collects co-bather ids from relation rows
- `active_badge_codes()` lists the badges a member currently holds

### Leniency
Rows come from a database fed by two access-control systems and an
accounting sync, so optional columns are frequently missing or malformed.
Optional values that cannot be parsed are treated as absent ("never") and
logged at debug level. Only a row that cannot identify a member raises
MemberDataError.

See Also:
- type_defs.py: MemberRow / RelationRow shapes
- engines/classification_engine.py: the consumer of MemberFacts
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

import voluptuous as vol

from . import const
from .type_defs import MemberFacts
from .utils.dt_utils import dt_parse, dt_parse_date

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class MemberDataError(Exception):
    """Raised when a raw row cannot be turned into MemberFacts.

    Attributes:
        field: The DATA_MEMBER_* key that failed, or None for the whole row
        message: Human readable reason
    """

    def __init__(self, field: str | None, message: str) -> None:
        """Initialize MemberDataError.

        Args:
            field: The DATA_MEMBER_* key that failed validation
            message: Human readable reason
        """
        self.field = field
        self.message = message
        super().__init__(f"{field or 'row'}: {message}")


# ==============================================================================
# FIELD VALIDATORS
# ==============================================================================


def _lenient_date(value: Any) -> date | None:
    """Coerce a date column; unparseable values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = dt_parse_date(value) if isinstance(value, str) else None
    if parsed is None:
        const.LOGGER.debug("Ignoring unparseable date value %r", value)
    return parsed


def _lenient_datetime(value: Any) -> datetime | None:
    """Coerce a timestamp column to an aware datetime; bad values become None."""
    if value is None or value == "":
        return None
    parsed = dt_parse(value) if isinstance(value, (str, date)) else None
    if parsed is None:
        const.LOGGER.debug("Ignoring unparseable timestamp value %r", value)
    return parsed


def _optional_text(value: Any) -> str | None:
    """Coerce an optional text column; blank strings become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _reject_bool(value: Any) -> Any:
    """Reject booleans, which would otherwise pass as integers."""
    if isinstance(value, bool):
        raise vol.Invalid("expected a text or integer id")
    return value


def _badge_list(value: Any) -> list[Any]:
    """Normalize the joined badges column to a list of mappings."""
    if not value:
        return []
    if not isinstance(value, list):
        const.LOGGER.debug(
            "Ignoring badges value of type %s", type(value).__name__
        )
        return []
    return [badge for badge in value if isinstance(badge, Mapping)]


MEMBER_ROW_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_MEMBER_ID): vol.All(
            _reject_bool,
            vol.Any(int, str),
            vol.Coerce(str),
            vol.Strip,
            vol.Length(min=1),
        ),
        vol.Optional(const.DATA_MEMBER_STATUS, default=None): _optional_text,
        vol.Optional(const.DATA_MEMBER_CUSTOMER_NUMBER, default=None): _optional_text,
        vol.Optional(const.DATA_MEMBER_CUSTOMER_SINCE, default=None): _lenient_date,
        vol.Optional(
            const.DATA_MEMBER_PERSONAL_IDENTITY_NUMBER, default=None
        ): _optional_text,
        vol.Optional(
            const.DATA_MEMBER_LAST_ANNUAL_FEE_DATE, default=None
        ): _lenient_date,
        vol.Optional(
            const.DATA_MEMBER_LAST_ENTRANCE_FEE_DATE, default=None
        ): _lenient_date,
        vol.Optional(
            const.DATA_MEMBER_LAST_QUEUE_FEE_DATE, default=None
        ): _lenient_date,
        vol.Optional(
            const.DATA_MEMBER_FIRST_QUEUE_FEE_DATE, default=None
        ): _lenient_date,
        vol.Optional(const.DATA_MEMBER_LAST_VISIT_AT, default=None): _lenient_datetime,
        vol.Optional(const.DATA_MEMBER_APTUS_USER_ID, default=None): _optional_text,
        vol.Optional(const.DATA_MEMBER_PARAKEY_USER_ID, default=None): _optional_text,
        vol.Optional(const.DATA_MEMBER_BADGES, default=None): _badge_list,
    },
    extra=vol.ALLOW_EXTRA,
)


# ==============================================================================
# BUILD FUNCTIONS
# ==============================================================================


def normalize_member_row(row: Any) -> dict[str, Any]:
    """Validate a raw members row and coerce its columns.

    Raises:
        MemberDataError: If the row is not a mapping or has no usable id.
    """
    if not isinstance(row, Mapping):
        raise MemberDataError(None, f"expected a mapping, got {type(row).__name__}")
    try:
        return MEMBER_ROW_SCHEMA(dict(row))
    except vol.MultipleInvalid as err:
        field = str(err.path[0]) if err.path else None
        raise MemberDataError(field, err.msg) from err


def build_household_dependent_ids(
    relations: Iterable[Mapping[str, Any]] | None,
) -> frozenset[str]:
    """Return ids of members listed as the co-bather side of a relation."""
    if not relations:
        return frozenset()
    ids = set()
    for relation in relations:
        member_id = _optional_text(
            relation.get(const.DATA_RELATION_CO_BATHER_MEMBER_ID)
        )
        if member_id:
            ids.add(member_id)
    return frozenset(ids)


def build_member_facts(
    row: Mapping[str, Any],
    *,
    household_dependent_ids: Iterable[str] | None = None,
) -> MemberFacts:
    """Build a MemberFacts snapshot from a raw members row.

    Args:
        row: Row from the members table (see type_defs.MemberRow)
        household_dependent_ids: Member ids that are co-bathers of another
            member, typically from build_household_dependent_ids()

    Returns:
        MemberFacts ready for the engines

    Raises:
        MemberDataError: If the row cannot identify a member.
    """
    data = normalize_member_row(row)
    member_id = data[const.DATA_MEMBER_ID]
    dependents = (
        household_dependent_ids
        if isinstance(household_dependent_ids, (set, frozenset))
        else frozenset(household_dependent_ids or ())
    )

    return MemberFacts(
        member_id=member_id,
        authoritative_status=data[const.DATA_MEMBER_STATUS],
        last_annual_fee_date=data[const.DATA_MEMBER_LAST_ANNUAL_FEE_DATE],
        last_entrance_fee_date=data[const.DATA_MEMBER_LAST_ENTRANCE_FEE_DATE],
        last_queue_fee_date=data[const.DATA_MEMBER_LAST_QUEUE_FEE_DATE],
        last_visit_at=data[const.DATA_MEMBER_LAST_VISIT_AT],
        has_access_credential=bool(
            data[const.DATA_MEMBER_APTUS_USER_ID]
            or data[const.DATA_MEMBER_PARAKEY_USER_ID]
        ),
        is_household_dependent=member_id in dependents,
        first_queue_fee_date=data[const.DATA_MEMBER_FIRST_QUEUE_FEE_DATE],
        customer_since=data[const.DATA_MEMBER_CUSTOMER_SINCE],
        customer_number=data[const.DATA_MEMBER_CUSTOMER_NUMBER],
        personal_identity_number=data[const.DATA_MEMBER_PERSONAL_IDENTITY_NUMBER],
    )


def active_badge_codes(row: Mapping[str, Any]) -> list[str]:
    """Return achievement codes the member currently holds, in row order.

    Only rows flagged is_active count; rows without the flag, or with a null
    flag, are not held.
    """
    badges = row.get(const.DATA_MEMBER_BADGES) or []
    if not isinstance(badges, list):
        return []
    codes = []
    for badge in badges:
        if not isinstance(badge, Mapping):
            continue
        code = badge.get(const.DATA_ACHIEVEMENT_TYPE)
        if not code or not badge.get(const.DATA_ACHIEVEMENT_IS_ACTIVE):
            continue
        if code not in codes:
            codes.append(code)
    return codes
