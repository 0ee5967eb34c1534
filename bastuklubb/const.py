# File: const.py
"""Constants for the Bastuklubb member administration library.

This file centralizes configuration defaults, member category and status
values, raw database column names, the badge definition table and all
Swedish labels shown next to members in the admin UI.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Configuration Defaults
# ------------------------------------------------------------------------------------------------

# Trailing window (calendar months) in which an annual, entrance or queue fee
# counts as recent. Older call sites used 13 or 15; 13 is the canonical value.
DEFAULT_FEE_RECENCY_MONTHS = 13

# Trailing window (calendar months) in which a visit makes a member "active"
DEFAULT_ACTIVITY_WINDOW_MONTHS = 3

# Timezone the association operates in; used to derive local dates
DEFAULT_TIME_ZONE_NAME = "Europe/Stockholm"

# ------------------------------------------------------------------------------------------------
# Authoritative Status (accounting system)
# ------------------------------------------------------------------------------------------------
AUTHORITATIVE_STATUS_QUEUED = "KÖANDE"

# ------------------------------------------------------------------------------------------------
# Member Categories
# ------------------------------------------------------------------------------------------------
MEMBER_CATEGORY_MEMBER = "MEDLEM"
MEMBER_CATEGORY_QUEUED = "KÖANDE"
MEMBER_CATEGORY_CO_BATHER = "MEDBADARE"
MEMBER_CATEGORY_INACTIVE = "INAKTIV"

# Display order in filters and counts
MEMBER_CATEGORIES = (
    MEMBER_CATEGORY_MEMBER,
    MEMBER_CATEGORY_CO_BATHER,
    MEMBER_CATEGORY_QUEUED,
    MEMBER_CATEGORY_INACTIVE,
)

# Categories preselected in the member list
DEFAULT_SELECTED_CATEGORIES = frozenset(
    {MEMBER_CATEGORY_MEMBER, MEMBER_CATEGORY_CO_BATHER}
)

# UI badge variants
BADGE_VARIANT_DEFAULT = "default"
BADGE_VARIANT_SECONDARY = "secondary"
BADGE_VARIANT_OUTLINE = "outline"

CATEGORY_BADGE_VARIANTS = {
    MEMBER_CATEGORY_MEMBER: BADGE_VARIANT_DEFAULT,
    MEMBER_CATEGORY_QUEUED: BADGE_VARIANT_OUTLINE,
    MEMBER_CATEGORY_CO_BATHER: BADGE_VARIANT_OUTLINE,
    MEMBER_CATEGORY_INACTIVE: BADGE_VARIANT_OUTLINE,
}

CATEGORY_DISPLAY_NAMES = {
    MEMBER_CATEGORY_MEMBER: "Medlem",
    MEMBER_CATEGORY_QUEUED: "Köande",
    MEMBER_CATEGORY_CO_BATHER: "Medbadare",
    MEMBER_CATEGORY_INACTIVE: "Inaktiv",
}

CATEGORY_PLURAL_LABELS = {
    MEMBER_CATEGORY_MEMBER: "Medlemmar",
    MEMBER_CATEGORY_QUEUED: "Köande",
    MEMBER_CATEGORY_CO_BATHER: "Medbadare",
    MEMBER_CATEGORY_INACTIVE: "Inaktiva",
}

# ------------------------------------------------------------------------------------------------
# Classification Rules (reported by ClassificationEngine.explain)
# ------------------------------------------------------------------------------------------------
CLASSIFICATION_RULE_QUEUED_STATUS = "queued_status"
CLASSIFICATION_RULE_PAID_MEMBERSHIP_FEE = "paid_membership_fee"
CLASSIFICATION_RULE_RECENT_QUEUE_FEE = "recent_queue_fee"
CLASSIFICATION_RULE_HOUSEHOLD_DEPENDENT = "household_dependent"
CLASSIFICATION_RULE_ACCESS_WITHOUT_MEMBERSHIP_FEE = "access_without_membership_fee"
CLASSIFICATION_RULE_NO_MATCH = "no_match"

# ------------------------------------------------------------------------------------------------
# Activity Status
# ------------------------------------------------------------------------------------------------
ACTIVITY_STATUS_ACTIVE = "active"
ACTIVITY_STATUS_INACTIVE = "inactive"

ACTIVITY_STATUSES = (ACTIVITY_STATUS_ACTIVE, ACTIVITY_STATUS_INACTIVE)

ACTIVITY_STATUS_DISPLAY_NAMES = {
    ACTIVITY_STATUS_ACTIVE: "Aktiv",
    ACTIVITY_STATUS_INACTIVE: "Inaktiv",
}

# ------------------------------------------------------------------------------------------------
# Raw Data Keys (members table)
# ------------------------------------------------------------------------------------------------
DATA_MEMBER_ID = "id"
DATA_MEMBER_STATUS = "status"
DATA_MEMBER_CUSTOMER_NUMBER = "fortnox_customer_number"
DATA_MEMBER_CUSTOMER_SINCE = "fortnox_customer_since"
DATA_MEMBER_PERSONAL_IDENTITY_NUMBER = "personal_identity_number"
DATA_MEMBER_LAST_ANNUAL_FEE_DATE = "last_annual_fee_date"
DATA_MEMBER_LAST_ENTRANCE_FEE_DATE = "last_entrance_fee_date"
DATA_MEMBER_LAST_QUEUE_FEE_DATE = "last_queue_fee_date"
DATA_MEMBER_FIRST_QUEUE_FEE_DATE = "first_queue_fee_date"
DATA_MEMBER_LAST_VISIT_AT = "last_visit_at"
DATA_MEMBER_APTUS_USER_ID = "aptus_user_id"
DATA_MEMBER_PARAKEY_USER_ID = "parakey_user_id"
DATA_MEMBER_BADGES = "badges"

# Earned badge rows (user_achievements)
DATA_ACHIEVEMENT_TYPE = "achievement_type"
DATA_ACHIEVEMENT_IS_ACTIVE = "is_active"

# Household relations (member_relations table)
DATA_RELATION_PRIMARY_MEMBER_ID = "primary_member_id"
DATA_RELATION_CO_BATHER_MEMBER_ID = "medbadare_member_id"

# ------------------------------------------------------------------------------------------------
# Payment Labels
# ------------------------------------------------------------------------------------------------
PAYMENT_LABEL_QUEUE_FEE = "Köavgift"
PAYMENT_LABEL_ANNUAL_FEE = "Årsavgift"
PAYMENT_LABEL_ENTRANCE_FEE = "Inträde"

# ------------------------------------------------------------------------------------------------
# Personal Identity Numbers (personnummer)
# ------------------------------------------------------------------------------------------------

# Two-digit birth years at or above this value are 1900s, below are 2000s
PIN_CENTURY_CUTOFF = 30

# ------------------------------------------------------------------------------------------------
# Badges
# ------------------------------------------------------------------------------------------------

# Badge categories
BADGE_CATEGORY_STREAK = "streak"
BADGE_CATEGORY_FREQUENCY = "frequency"
BADGE_CATEGORY_TIME_OF_DAY = "time-of-day"
BADGE_CATEGORY_MILESTONE = "milestone"
BADGE_CATEGORY_ANNIVERSARY = "anniversary"
BADGE_CATEGORY_CHALLENGE = "challenge"
BADGE_CATEGORY_OTHER = "other"

# Display order of badge categories (unknown categories sort last)
BADGE_CATEGORY_DISPLAY_ORDER = (
    BADGE_CATEGORY_FREQUENCY,
    BADGE_CATEGORY_STREAK,
    BADGE_CATEGORY_TIME_OF_DAY,
    BADGE_CATEGORY_MILESTONE,
    BADGE_CATEGORY_ANNIVERSARY,
    BADGE_CATEGORY_CHALLENGE,
)

BADGE_CATEGORY_DISPLAY_NAMES = {
    BADGE_CATEGORY_STREAK: "Streak",
    BADGE_CATEGORY_FREQUENCY: "Frekvens",
    BADGE_CATEGORY_TIME_OF_DAY: "Tid",
    BADGE_CATEGORY_MILESTONE: "Milstolpe",
    BADGE_CATEGORY_ANNIVERSARY: "Årsdag",
    BADGE_CATEGORY_CHALLENGE: "Challenge",
}

# Fallback for badge codes missing from the table
BADGE_FALLBACK_EMOJI = "🏅"
BADGE_FALLBACK_DESCRIPTION = "Specialmedalj"

# Period display texts
BADGE_PERIOD_PERMANENT = "Permanent"
BADGE_PERIOD_DAYS_FORMAT = "{days} dagar"
BADGE_PERIOD_DISPLAY_TEXTS = {
    3: "3 dagar",
    7: "Vecka",
    14: "2 veckor",
    28: "4 veckor",
    30: "Månad",
    90: "Kvartal (3 månader)",
}

# Badge definition keys
BADGE_KEY_EMOJI = "emoji"
BADGE_KEY_NAME = "name"
BADGE_KEY_DESCRIPTION = "description"
BADGE_KEY_CATEGORY = "category"
BADGE_KEY_IS_DYNAMIC = "is_dynamic"
BADGE_KEY_PERIOD_DAYS = "period_days"
BADGE_KEY_RANK = "rank"
BADGE_KEY_MAX_RANK = "max_rank"

# Badge codes (achievement_type values)
BADGE_STREAK_3D = "streak_3d"
BADGE_STREAK_7D = "streak_7d"
BADGE_STREAK_14D = "streak_14d"
BADGE_STREAK_30D = "streak_30d"
BADGE_MONTHLY_CHAMPION = "monthly_champion"
BADGE_TOP10_30D = "top10_30d"
BADGE_QUARTERLY_CHAMPION = "quarterly_champion"
BADGE_VETERAN = "veteran"
BADGE_MORNING_BIRD = "morning_bird"
BADGE_EVENING_BASTARE = "evening_bastare"
BADGE_NIGHT_OWL = "night_owl"
BADGE_VISITS_100 = "visits_100"
BADGE_VISITS_500 = "visits_500"
BADGE_VISITS_1000 = "visits_1000"
BADGE_VISITS_5000 = "visits_5000"
BADGE_NEWBIE = "newbie"
BADGE_ANNIVERSARY_1Y = "anniversary_1y"
BADGE_ANNIVERSARY_5Y = "anniversary_5y"
BADGE_ANNIVERSARY_10Y = "anniversary_10y"
BADGE_ANNIVERSARY_15Y = "anniversary_15y"
BADGE_ANNIVERSARY_20Y = "anniversary_20y"
BADGE_WEEKLY_WARRIOR = "weekly_warrior"
BADGE_MONTHLY_MARATHON = "monthly_marathon"

# Badge definitions. Dynamic badges are recomputed from visit history and can
# be revoked; permanent badges are never removed once earned.
BADGE_DEFINITIONS = {
    # --- Streak (dynamic) ---
    BADGE_STREAK_3D: {
        BADGE_KEY_EMOJI: "🔥",
        BADGE_KEY_NAME: "Hetluftsälskare",
        BADGE_KEY_DESCRIPTION: "Besökt bastun 3 dagar i rad",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_STREAK,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 3,
    },
    BADGE_STREAK_7D: {
        BADGE_KEY_EMOJI: "⭐",
        BADGE_KEY_NAME: "Vecko-Mästare",
        BADGE_KEY_DESCRIPTION: "Besökt bastun 7 dagar i rad",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_STREAK,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 7,
    },
    BADGE_STREAK_14D: {
        BADGE_KEY_EMOJI: "💪",
        BADGE_KEY_NAME: "Bastufantast",
        BADGE_KEY_DESCRIPTION: "Besökt bastun 14 dagar i rad",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_STREAK,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 14,
    },
    BADGE_STREAK_30D: {
        BADGE_KEY_EMOJI: "👑",
        BADGE_KEY_NAME: "Månadens Bastare",
        BADGE_KEY_DESCRIPTION: "Besökt bastun 30 dagar i rad",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_STREAK,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 30,
    },
    # --- Frequency, 30 days (dynamic) ---
    BADGE_MONTHLY_CHAMPION: {
        BADGE_KEY_EMOJI: "🥇",
        BADGE_KEY_NAME: "Månadens Mästare",
        BADGE_KEY_DESCRIPTION: "Flest besök senaste månaden",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_FREQUENCY,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 30,
        BADGE_KEY_RANK: 1,
    },
    BADGE_TOP10_30D: {
        BADGE_KEY_EMOJI: "⭐",
        BADGE_KEY_NAME: "Bas-Stjärna",
        BADGE_KEY_DESCRIPTION: "Topp 10 mest aktiva senaste månaden",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_FREQUENCY,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 30,
        BADGE_KEY_MAX_RANK: 10,
    },
    # --- Frequency, 90 days (dynamic) ---
    BADGE_QUARTERLY_CHAMPION: {
        BADGE_KEY_EMOJI: "🏆",
        BADGE_KEY_NAME: "Kvartals-Champion",
        BADGE_KEY_DESCRIPTION: "Flest besök senaste kvartalet",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_FREQUENCY,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 90,
        BADGE_KEY_RANK: 1,
    },
    BADGE_VETERAN: {
        BADGE_KEY_EMOJI: "🎖️",
        BADGE_KEY_NAME: "Veteran",
        BADGE_KEY_DESCRIPTION: "Topp 5 senaste kvartalet",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_FREQUENCY,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 90,
        BADGE_KEY_MAX_RANK: 5,
    },
    # --- Time of day (dynamic) ---
    BADGE_MORNING_BIRD: {
        BADGE_KEY_EMOJI: "🌅",
        BADGE_KEY_NAME: "Morgonpigg",
        BADGE_KEY_DESCRIPTION: "Flest besök 05-09 på morgonen",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_TIME_OF_DAY,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 30,
        BADGE_KEY_RANK: 1,
    },
    BADGE_EVENING_BASTARE: {
        BADGE_KEY_EMOJI: "🌆",
        BADGE_KEY_NAME: "Kvällsbastare",
        BADGE_KEY_DESCRIPTION: "Flest besök 17-21 på kvällen",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_TIME_OF_DAY,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 30,
        BADGE_KEY_RANK: 1,
    },
    BADGE_NIGHT_OWL: {
        BADGE_KEY_EMOJI: "🦉",
        BADGE_KEY_NAME: "Nattuggla",
        BADGE_KEY_DESCRIPTION: "Flest besök 21-01 på natten",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_TIME_OF_DAY,
        BADGE_KEY_IS_DYNAMIC: True,
        BADGE_KEY_PERIOD_DAYS: 30,
        BADGE_KEY_RANK: 1,
    },
    # --- Milestones (permanent) ---
    BADGE_VISITS_100: {
        BADGE_KEY_EMOJI: "💯",
        BADGE_KEY_NAME: "Hundralapp",
        BADGE_KEY_DESCRIPTION: "Totalt 100 besök",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_MILESTONE,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_VISITS_500: {
        BADGE_KEY_EMOJI: "🎯",
        BADGE_KEY_NAME: "Femhundralapp",
        BADGE_KEY_DESCRIPTION: "Totalt 500 besök",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_MILESTONE,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_VISITS_1000: {
        BADGE_KEY_EMOJI: "🚀",
        BADGE_KEY_NAME: "Tusenlapp",
        BADGE_KEY_DESCRIPTION: "Totalt 1000 besök",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_MILESTONE,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_VISITS_5000: {
        BADGE_KEY_EMOJI: "⚡",
        BADGE_KEY_NAME: "Legendarisk",
        BADGE_KEY_DESCRIPTION: "Totalt 5000 besök",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_MILESTONE,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    # --- Anniversaries (permanent) ---
    BADGE_NEWBIE: {
        BADGE_KEY_EMOJI: "🌱",
        BADGE_KEY_NAME: "Nykomling",
        BADGE_KEY_DESCRIPTION: "Ny medlem",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_ANNIVERSARY,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_ANNIVERSARY_1Y: {
        BADGE_KEY_EMOJI: "🥉",
        BADGE_KEY_NAME: "Brons-Bastare",
        BADGE_KEY_DESCRIPTION: "Medlem i 1 år",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_ANNIVERSARY,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_ANNIVERSARY_5Y: {
        BADGE_KEY_EMOJI: "🥈",
        BADGE_KEY_NAME: "Silver-Veteran",
        BADGE_KEY_DESCRIPTION: "Medlem i 5 år",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_ANNIVERSARY,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_ANNIVERSARY_10Y: {
        BADGE_KEY_EMOJI: "🥇",
        BADGE_KEY_NAME: "Guld-Legend",
        BADGE_KEY_DESCRIPTION: "Medlem i 10 år",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_ANNIVERSARY,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_ANNIVERSARY_15Y: {
        BADGE_KEY_EMOJI: "💎",
        BADGE_KEY_NAME: "Diamant-Pionjär",
        BADGE_KEY_DESCRIPTION: "Medlem i 15 år",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_ANNIVERSARY,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_ANNIVERSARY_20Y: {
        BADGE_KEY_EMOJI: "👑",
        BADGE_KEY_NAME: "Platina-Ikon",
        BADGE_KEY_DESCRIPTION: "Medlem i 20 år",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_ANNIVERSARY,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    # --- Challenges (permanent) ---
    BADGE_WEEKLY_WARRIOR: {
        BADGE_KEY_EMOJI: "⚔️",
        BADGE_KEY_NAME: "Vecko-Warrior",
        BADGE_KEY_DESCRIPTION: "Genomfört en 7-dagars streak",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_CHALLENGE,
        BADGE_KEY_IS_DYNAMIC: False,
    },
    BADGE_MONTHLY_MARATHON: {
        BADGE_KEY_EMOJI: "🏃",
        BADGE_KEY_NAME: "Månads-Marathon",
        BADGE_KEY_DESCRIPTION: "Genomfört en 28-dagars streak",
        BADGE_KEY_CATEGORY: BADGE_CATEGORY_CHALLENGE,
        BADGE_KEY_IS_DYNAMIC: False,
    },
}

# Display sort weights within a badge category (higher first). Display only,
# never used when earning or revoking badges.
BADGE_SORT_WEIGHTS = {
    # --- Frequency: by ranking breadth ---
    BADGE_TOP10_30D: 50,
    BADGE_MONTHLY_CHAMPION: 30,
    BADGE_VETERAN: 20,
    BADGE_QUARTERLY_CHAMPION: 10,
    # --- Streak: shortest first ---
    BADGE_STREAK_3D: 30,
    BADGE_STREAK_7D: 20,
    BADGE_STREAK_14D: 10,
    BADGE_STREAK_30D: 5,
    # --- Time of day ---
    BADGE_MORNING_BIRD: 3,
    BADGE_EVENING_BASTARE: 2,
    BADGE_NIGHT_OWL: 1,
    # --- Milestones: by visit count ---
    BADGE_VISITS_5000: 5000,
    BADGE_VISITS_1000: 1000,
    BADGE_VISITS_500: 500,
    BADGE_VISITS_100: 100,
    # --- Anniversaries: by years ---
    BADGE_ANNIVERSARY_20Y: 20,
    BADGE_ANNIVERSARY_15Y: 15,
    BADGE_ANNIVERSARY_10Y: 10,
    BADGE_ANNIVERSARY_5Y: 5,
    BADGE_ANNIVERSARY_1Y: 1,
    BADGE_NEWBIE: 0,
    # --- Challenges: hardest first ---
    BADGE_MONTHLY_MARATHON: 28,
    BADGE_WEEKLY_WARRIOR: 7,
}
