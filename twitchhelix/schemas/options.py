"""
Option records for Helix endpoints.

Each model declares, in order, the query parameters an endpoint accepts.
Optional fields default to None and are left out of the query string;
list fields repeat their key once per element.
"""

from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, field_validator

from twitchhelix.enums import (
    BitsLeaderboardPeriod,
    CommercialLength,
    VideoPeriod,
    VideoSort,
    VideoType,
)

PageSize = Annotated[int, Field(ge=1, le=100)]


class OptionsBase(BaseModel):
    """Common configuration for all option records."""

    model_config = {"extra": "ignore", "populate_by_name": True}


class BaseOptions(OptionsBase):
    """Cursor pagination shared by most list endpoints."""

    first: Optional[PageSize] = None
    after: Optional[str] = None
    before: Optional[str] = None


class GetStreamsOptions(BaseOptions):
    """
    Filters for the streams listing.

    ``channel`` and ``channels`` hold logins or user IDs; they are
    classified into ``user_login``/``user_id`` by the client rather than
    encoded directly.
    """

    game_id: List[str] = Field(default_factory=list)
    language: List[str] = Field(default_factory=list)
    channels: List[str] = Field(default_factory=list, exclude=True)
    channel: Optional[str] = Field(default=None, exclude=True)


class BaseClipsOptions(BaseOptions):
    ended_at: Optional[str] = None
    started_at: Optional[str] = None


class ClipsBroadcasterIdOptions(BaseClipsOptions):
    broadcaster_id: str


class ClipsGameIdOptions(BaseClipsOptions):
    game_id: str


class ClipsIdOptions(BaseClipsOptions):
    id: List[str]


class GetVideosOptions(BaseOptions):
    id: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None
    game_id: Optional[str] = None
    language: Optional[str] = None
    period: Optional[VideoPeriod] = None
    sort: Optional[VideoSort] = None
    type: Optional[VideoType] = None


class GetBitsLeaderboardOptions(OptionsBase):
    count: Optional[PageSize] = None
    period: Optional[BitsLeaderboardPeriod] = None
    started_at: Optional[str] = None
    user_id: Optional[str] = None


class GetSubsOptions(OptionsBase):
    broadcaster_id: str
    user_id: List[str] = Field(default_factory=list)


class GetChannelInfoOptions(OptionsBase):
    broadcaster_id: List[str]


class SearchOptions(OptionsBase):
    query: str
    first: Optional[PageSize] = None
    after: Optional[str] = None

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Ensure the search query is not blank."""
        if not v or not v.strip():
            raise ValueError("Search query cannot be empty")
        return v


class SearchChannelsOptions(SearchOptions):
    live_only: Optional[bool] = None


SearchCategoriesOptions = SearchOptions


class GetBannedUsersOptions(OptionsBase):
    broadcaster_id: str
    user_id: List[str] = Field(default_factory=list)
    after: Optional[str] = None
    before: Optional[str] = None


class GetExtensionTransactionsOptions(OptionsBase):
    extension_id: str
    id: List[str] = Field(default_factory=list)
    after: Optional[str] = None
    first: Optional[PageSize] = None


class GetCheermotesOptions(OptionsBase):
    broadcaster_id: Optional[str] = None


class GetStreamKeyOptions(OptionsBase):
    broadcaster_id: str


class GetStreamMarkerUserIdOptions(BaseOptions):
    user_id: str


class GetStreamMarkerVideoIdOptions(BaseOptions):
    video_id: str


class GetUserActiveExtensionsOptions(OptionsBase):
    user_id: Optional[str] = None


class ModifyChannelInformationOptions(OptionsBase):
    broadcaster_id: str
    game_id: Optional[str] = None
    broadcaster_language: Optional[str] = None
    title: Optional[str] = None


class GetCodeStatusOptions(OptionsBase):
    code: List[str]
    user_id: str


class UpdateUserOptions(OptionsBase):
    description: Optional[str] = None


class CreateClipOptions(OptionsBase):
    broadcaster_id: str
    has_delay: Optional[bool] = None


class StartCommercialOptions(OptionsBase):
    broadcaster_id: str
    length: CommercialLength

    @field_validator("length", mode="before")
    @classmethod
    def clamp_length(cls, v):
        """Round arbitrary lengths up to an allowed commercial length."""
        if isinstance(v, int) and not CommercialLength.is_valid(v):
            return CommercialLength.clamp(v)
        return v


class GetModeratorsOptions(OptionsBase):
    broadcaster_id: str
    user_id: List[str] = Field(default_factory=list)
    after: Optional[str] = None


class SendChatMessageOptions(OptionsBase):
    """Body of a chat message; sent as JSON rather than in the query."""

    broadcaster_id: str
    sender_id: str
    message: str
    reply_parent_message_id: Optional[str] = None
    for_source_only: Optional[bool] = None
