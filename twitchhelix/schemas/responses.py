"""
Response records for Helix endpoints.

Helix wraps results in a ``data`` array, optionally with ``total`` and a
``pagination`` cursor. Every record ignores unknown keys and defaults
missing ones so responses decode even as the platform adds fields.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

DEFAULT_THUMBNAIL_WIDTH = 1920
DEFAULT_THUMBNAIL_HEIGHT = 1080


class Record(BaseModel):
    """Base for decoded records."""

    model_config = {"extra": "ignore", "populate_by_name": True}


# =============================================================================
# Objects
# =============================================================================


class User(Record):
    id: str = ""
    login: str = ""
    display_name: str = ""
    type: str = ""
    broadcaster_type: str = ""
    description: str = ""
    email: str = ""
    profile_image_url: str = ""
    offline_image_url: str = ""
    view_count: int = 0
    created_at: str = ""


class Channel(Record):
    id: str = ""
    game_id: str = ""
    game_name: str = ""
    display_name: str = ""
    broadcaster_login: str = ""
    broadcaster_language: str = ""
    title: str = ""
    thumbnail_url: str = ""
    is_live: bool = False
    started_at: str = ""
    tags: List[str] = Field(default_factory=list)


class ChannelInfo(Record):
    broadcaster_id: str = ""
    broadcaster_login: str = ""
    broadcaster_name: str = ""
    broadcaster_language: str = ""
    game_id: str = ""
    game_name: str = ""
    title: str = ""
    delay: int = 0
    tags: List[str] = Field(default_factory=list)


class Game(Record):
    id: str = ""
    name: str = ""
    box_art_url: str = ""
    igdb_id: str = ""


def fill_thumbnail_template(
    url: str, width: Optional[int] = None, height: Optional[int] = None
) -> str:
    """Substitute ``{width}``/``{height}`` placeholders, defaulting to 1080p."""
    width = width if width and width > 0 else DEFAULT_THUMBNAIL_WIDTH
    height = height if height and height > 0 else DEFAULT_THUMBNAIL_HEIGHT
    return url.replace("{width}", str(width)).replace("{height}", str(height))


class Stream(Record):
    id: str = ""
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""
    game_id: str = ""
    game_name: str = ""
    type: str = ""
    title: str = ""
    tags: List[str] = Field(default_factory=list)
    viewer_count: int = 0
    started_at: str = ""
    language: str = ""
    thumbnail_url: str = ""
    is_mature: bool = False

    def thumbnail(self, width: Optional[int] = None, height: Optional[int] = None) -> str:
        """Thumbnail URL at the given size (1920x1080 by default)."""
        return fill_thumbnail_template(self.thumbnail_url, width, height)


class StreamMarker(Record):
    id: str = ""
    created_at: str = ""
    description: str = ""
    position_seconds: int = 0
    url: str = Field(default="", alias="URL")
    user_id: str = ""
    user_name: str = ""
    video_id: str = ""


class StreamMarkerVideo(Record):
    video_id: str = ""
    markers: List[StreamMarker] = Field(default_factory=list)


class StreamMarkerGroup(Record):
    """Markers of one broadcaster, grouped by video."""

    user_id: str = ""
    user_login: str = ""
    user_name: str = ""
    videos: List[StreamMarkerVideo] = Field(default_factory=list)


class StreamKey(Record):
    stream_key: str = ""


class Video(Record):
    id: str = ""
    stream_id: Optional[str] = None
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""
    title: str = ""
    description: str = ""
    created_at: str = ""
    published_at: str = ""
    url: str = ""
    thumbnail_url: str = ""
    viewable: str = ""
    view_count: int = 0
    language: str = ""
    type: str = ""
    duration: str = ""


class Clip(Record):
    id: str = ""
    url: str = ""
    embed_url: str = ""
    broadcaster_id: str = ""
    broadcaster_name: str = ""
    creator_id: str = ""
    creator_name: str = ""
    video_id: str = ""
    game_id: str = ""
    language: str = ""
    title: str = ""
    view_count: int = 0
    created_at: str = ""
    thumbnail_url: str = ""


class Sub(Record):
    broadcaster_id: str = ""
    broadcaster_login: str = ""
    broadcaster_name: str = ""
    is_gift: bool = False
    tier: str = ""
    plan_name: str = ""
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""


class BitsPosition(Record):
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""
    rank: int = 0
    score: int = 0


class Ban(Record):
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""
    expires_at: Optional[str] = None
    reason: str = ""
    broadcaster_id: str = ""
    moderator_id: str = ""
    created_at: str = ""


class Moderator(Record):
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""


class CodeStatus(Record):
    code: str = ""
    status: str = ""


class CreatedClip(Record):
    id: str = ""
    edit_url: str = ""


class Cost(Record):
    amount: int = 0
    type: str = ""


class ProductData(Record):
    domain: Optional[str] = None
    broadcast: Optional[bool] = None
    expiration: Optional[str] = None
    sku: str = ""
    cost: Cost = Field(default_factory=Cost)
    display_name: str = Field(default="", alias="displayName")
    in_development: bool = Field(default=False, alias="inDevelopment")


class ExtensionTransaction(Record):
    id: str = ""
    timestamp: str = ""
    broadcaster_id: str = ""
    broadcaster_login: str = ""
    broadcaster_name: str = ""
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""
    product_type: str = ""
    product_data: ProductData = Field(default_factory=ProductData)


class Extension(Record):
    id: str = ""
    name: str = ""
    version: str = ""
    can_activate: bool = False
    type: List[str] = Field(default_factory=list)


class ActiveExtension(Record):
    panel: Dict[str, Any] = Field(default_factory=dict)
    overlay: Dict[str, Any] = Field(default_factory=dict)
    component: Dict[str, Any] = Field(default_factory=dict)


class CheermoteImageSizes(Record):
    size_1: str = Field(default="", alias="1")
    size_1_5: str = Field(default="", alias="1.5")
    size_2: str = Field(default="", alias="2")
    size_3: str = Field(default="", alias="3")
    size_4: str = Field(default="", alias="4")


class CheermoteImages(Record):
    animated: CheermoteImageSizes = Field(default_factory=CheermoteImageSizes)
    static: CheermoteImageSizes = Field(default_factory=CheermoteImageSizes)


class CheermoteThemeImage(Record):
    dark: CheermoteImages = Field(default_factory=CheermoteImages)
    light: CheermoteImages = Field(default_factory=CheermoteImages)


class CheermoteTier(Record):
    min_bits: int = 0
    id: str = ""
    color: str = ""
    images: CheermoteThemeImage = Field(default_factory=CheermoteThemeImage)
    can_cheer: bool = False
    show_in_bits_card: bool = False


class Cheermote(Record):
    prefix: str = ""
    tiers: List[CheermoteTier] = Field(default_factory=list)
    type: str = ""
    order: int = 0
    last_updated: str = ""
    is_charitable: bool = False


class EmoteImages(Record):
    url_1x: str = ""
    url_2x: str = ""
    url_4x: str = ""


class Emote(Record):
    id: str = ""
    name: str = ""
    images: EmoteImages = Field(default_factory=EmoteImages)
    tier: str = ""
    emote_type: str = ""
    emote_set_id: str = ""
    format: List[str] = Field(default_factory=list)
    scale: List[str] = Field(default_factory=list)
    theme_mode: List[str] = Field(default_factory=list)


class DateRange(Record):
    started_at: str = ""
    ended_at: str = ""


class Commercial(Record):
    length: int = 0
    message: str = ""
    retry_after: int = 0


class BadgeVersion(Record):
    id: str = ""
    image_url_1x: str = ""
    image_url_2x: str = ""
    image_url_4x: str = ""


class Badge(Record):
    set_id: str = ""
    versions: List[BadgeVersion] = Field(default_factory=list)


class Ingest(Record):
    id: int = Field(default=0, alias="_id")
    availability: float = 0.0
    default: bool = False
    name: str = ""
    url_template: str = ""
    priority: int = 0


class DropReason(Record):
    code: str = ""
    message: str = ""


class Message(Record):
    message_id: str = ""
    is_sent: bool = False
    drop_reason: Optional[DropReason] = None


# =============================================================================
# Envelopes
# =============================================================================


class Pagination(Record):
    cursor: Optional[str] = None


class PagedResponse(Record):
    """Envelope fields shared by paginated listings."""

    total: Optional[int] = None
    pagination: Optional[Pagination] = None


class ResponseError(Record):
    """Error body Helix returns alongside 4xx/5xx statuses."""

    error: str = ""
    status: int = 0
    message: str = ""

    @property
    def is_error(self) -> bool:
        return self.status >= 400


class GameResponse(PagedResponse):
    data: List[Game] = Field(default_factory=list)


class UserResponse(PagedResponse):
    data: List[User] = Field(default_factory=list)


class ChannelResponse(PagedResponse):
    data: List[Channel] = Field(default_factory=list)


class ChannelInfoResponse(Record):
    data: List[ChannelInfo] = Field(default_factory=list)


class StreamResponse(PagedResponse):
    data: List[Stream] = Field(default_factory=list)


class StreamMarkerResponse(PagedResponse):
    data: List[StreamMarkerGroup] = Field(default_factory=list)


class StreamKeyResponse(Record):
    data: List[StreamKey] = Field(default_factory=list)


class VideoResponse(PagedResponse):
    data: List[Video] = Field(default_factory=list)


class ClipsResponse(PagedResponse):
    data: List[Clip] = Field(default_factory=list)


class SubResponse(PagedResponse):
    data: List[Sub] = Field(default_factory=list)
    points: int = 0


class BanResponse(PagedResponse):
    data: List[Ban] = Field(default_factory=list)


class ExtensionTransactionResponse(PagedResponse):
    data: List[ExtensionTransaction] = Field(default_factory=list)


class ExtensionResponse(Record):
    data: List[Extension] = Field(default_factory=list)


class ActiveUserExtensionResponse(Record):
    data: ActiveExtension = Field(default_factory=ActiveExtension)


class CheermoteResponse(Record):
    data: List[Cheermote] = Field(default_factory=list)


class EmotesResponse(Record):
    data: List[Emote] = Field(default_factory=list)
    template: str = ""


class CreateClipResponse(Record):
    data: List[CreatedClip] = Field(default_factory=list)


class ModeratorResponse(PagedResponse):
    data: List[Moderator] = Field(default_factory=list)


class CodeStatusResponse(Record):
    data: List[CodeStatus] = Field(default_factory=list)


class BitsLeaderboardResponse(Record):
    data: List[BitsPosition] = Field(default_factory=list)
    date_range: DateRange = Field(default_factory=DateRange)
    total: int = 0


class CommercialResponse(Record):
    data: List[Commercial] = Field(default_factory=list)


class BadgesResponse(Record):
    data: List[Badge] = Field(default_factory=list)


class IngestsResponse(Record):
    ingests: List[Ingest] = Field(default_factory=list)


class MessageResponse(Record):
    data: List[Message] = Field(default_factory=list)


class TokenResponse(Record):
    """Payload of a token exchange with the identity service."""

    access_token: str = ""
    refresh_token: str = ""
    token_type: Optional[str] = None
    expires_in: int = 0
    scope: List[str] = Field(default_factory=list)
