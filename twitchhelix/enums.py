"""
Enums for OAuth scopes and Helix string/int constants.

Single source of truth for string constants used across option records,
response records, and the client.
"""

from enum import IntEnum, StrEnum
from typing import Dict, Iterable, List


class Scope(StrEnum):
    """OAuth scopes understood by the client."""
    # Analytics
    ANALYTICS_READ_EXTENSIONS = "analytics:read:extensions"
    ANALYTICS_READ_GAMES = "analytics:read:games"

    # Bits
    BITS_READ = "bits:read"

    # Channel
    CHANNEL_EDIT_COMMERCIAL = "channel:edit:commercial"
    CHANNEL_READ_HYPE_TRAIN = "channel:read:hype_train"
    CHANNEL_READ_SUBSCRIPTIONS = "channel:read:subscriptions"
    CHANNEL_READ_STREAM_KEY = "channel:read:stream_key"
    CHANNEL_BOT = "channel:bot"

    # Clips
    CLIPS_EDIT = "clips:edit"

    # User
    USER_EDIT = "user:edit"
    USER_EDIT_BROADCAST = "user:edit:broadcast"
    USER_EDIT_FOLLOWS = "user:edit:follows"
    USER_READ_BROADCAST = "user:read:broadcast"
    USER_READ_EMAIL = "user:read:email"
    USER_READ_CHAT = "user:read:chat"
    USER_WRITE_CHAT = "user:write:chat"
    USER_BOT = "user:bot"

    # Moderation
    MODERATION_READ = "moderation:read"

    @classmethod
    def is_valid(cls, value) -> bool:
        """Check whether a raw string names a known scope."""
        return value in cls._value2member_map_


def all_scopes() -> List[Scope]:
    """Every known scope, in declaration order."""
    return list(Scope)


def scopes_by_category() -> Dict[str, List[Scope]]:
    """Group known scopes by their leading category segment."""
    categories: Dict[str, List[Scope]] = {}
    for scope in Scope:
        categories.setdefault(scope.value.split(":", 1)[0], []).append(scope)
    return categories


def has_scope(scopes: Iterable, target) -> bool:
    return any(scope == target for scope in scopes)


def scopes_to_strings(scopes: Iterable) -> List[str]:
    return [str(scope) for scope in scopes]


def strings_to_scopes(values: Iterable[str]) -> List[Scope]:
    """
    Convert raw strings to Scope members.

    Raises:
        ValueError: If a string is not a known scope.
    """
    return [Scope(value) for value in values]


def validate_scopes(scopes: Iterable) -> bool:
    return all(Scope.is_valid(scope) for scope in scopes)


def filter_valid_scopes(scopes: Iterable) -> List:
    return [scope for scope in scopes if Scope.is_valid(scope)]


def filter_invalid_scopes(scopes: Iterable) -> List:
    return [scope for scope in scopes if not Scope.is_valid(scope)]


class VideoPeriod(StrEnum):
    """Time windows for video listings."""
    ALL = "all"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class VideoSort(StrEnum):
    TIME = "time"
    TRENDING = "trending"
    VIEWS = "views"


class VideoType(StrEnum):
    ALL = "all"
    UPLOAD = "upload"
    ARCHIVE = "archive"
    HIGHLIGHT = "highlight"


class VideoViewable(StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"


class BitsLeaderboardPeriod(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class SubscriptionTier(StrEnum):
    TIER_1 = "1000"
    TIER_2 = "2000"
    TIER_3 = "3000"


class CodeRedemptionStatus(StrEnum):
    """Entitlement code states reported by the code status endpoint."""
    SUCCESSFULLY_REDEEMED = "SUCCESSFULLY_REDEEMED"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    EXPIRED = "EXPIRED"
    USER_NOT_ELIGIBLE = "USER_NOT_ELIGIBLE"
    NOT_FOUND = "NOT_FOUND"
    INACTIVE = "INACTIVE"
    UNUSED = "UNUSED"
    INCORRECT_FORMAT = "INCORRECT_FORMAT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CheermoteType(StrEnum):
    GLOBAL_FIRST_PARTY = "global_first_party"
    GLOBAL_THIRD_PARTY = "global_third_party"
    CHANNEL_CUSTOM = "channel_custom"
    DISPLAY_ONLY = "display_only"
    SPONSORED = "sponsored"


class EmoteType(StrEnum):
    BITS_TIER = "bitstier"
    FOLLOWER = "follower"
    SUBSCRIPTIONS = "subscriptions"


class EmoteFormat(StrEnum):
    ANIMATED = "animated"
    STATIC = "static"


class EmoteScale(StrEnum):
    SCALE_1_0 = "1.0"
    SCALE_2_0 = "2.0"
    SCALE_3_0 = "3.0"


class EmoteTheme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class CommercialLength(IntEnum):
    """Allowed commercial lengths, in seconds."""
    SECONDS_30 = 30
    SECONDS_60 = 60
    SECONDS_90 = 90
    SECONDS_120 = 120
    SECONDS_150 = 150
    SECONDS_180 = 180

    @classmethod
    def is_valid(cls, value: int) -> bool:
        return value in cls._value2member_map_

    @classmethod
    def clamp(cls, value: int) -> "CommercialLength":
        """Round a length up to the next allowed value, capped at 180."""
        for length in cls:
            if value <= length:
                return length
        return cls.SECONDS_180
