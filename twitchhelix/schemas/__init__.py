"""
Option and response records for the Helix API.

Option records describe the query parameters of an endpoint; response
records are what decoded responses look like.
"""

from .options import (
    BaseOptions,
    GetStreamsOptions,
    BaseClipsOptions,
    ClipsBroadcasterIdOptions,
    ClipsGameIdOptions,
    ClipsIdOptions,
    GetVideosOptions,
    GetBitsLeaderboardOptions,
    GetSubsOptions,
    GetChannelInfoOptions,
    SearchOptions,
    SearchChannelsOptions,
    SearchCategoriesOptions,
    GetBannedUsersOptions,
    GetExtensionTransactionsOptions,
    GetCheermotesOptions,
    GetStreamKeyOptions,
    GetStreamMarkerUserIdOptions,
    GetStreamMarkerVideoIdOptions,
    GetUserActiveExtensionsOptions,
    ModifyChannelInformationOptions,
    GetCodeStatusOptions,
    UpdateUserOptions,
    CreateClipOptions,
    StartCommercialOptions,
    GetModeratorsOptions,
    SendChatMessageOptions,
)
from .responses import (
    User,
    Game,
    Stream,
    Video,
    Clip,
    ResponseError,
    TokenResponse,
    UserResponse,
    GameResponse,
    StreamResponse,
)

__all__ = [
    'BaseOptions',
    'GetStreamsOptions',
    'BaseClipsOptions',
    'ClipsBroadcasterIdOptions',
    'ClipsGameIdOptions',
    'ClipsIdOptions',
    'GetVideosOptions',
    'GetBitsLeaderboardOptions',
    'GetSubsOptions',
    'GetChannelInfoOptions',
    'SearchOptions',
    'SearchChannelsOptions',
    'SearchCategoriesOptions',
    'GetBannedUsersOptions',
    'GetExtensionTransactionsOptions',
    'GetCheermotesOptions',
    'GetStreamKeyOptions',
    'GetStreamMarkerUserIdOptions',
    'GetStreamMarkerVideoIdOptions',
    'GetUserActiveExtensionsOptions',
    'ModifyChannelInformationOptions',
    'GetCodeStatusOptions',
    'UpdateUserOptions',
    'CreateClipOptions',
    'StartCommercialOptions',
    'GetModeratorsOptions',
    'SendChatMessageOptions',
    'User',
    'Game',
    'Stream',
    'Video',
    'Clip',
    'ResponseError',
    'TokenResponse',
    'UserResponse',
    'GameResponse',
    'StreamResponse',
]
