"""
Twitch Helix client facade.

TwitchClient wires the auth manager, request pipeline and event registry
together and exposes one typed method per supported endpoint.
"""

import logging
import threading
from typing import Any, Optional, Type, TypeVar, Union

import requests
from pydantic import BaseModel

from twitchhelix.enums import Scope, has_scope
from twitchhelix.schemas.options import (
    BaseClipsOptions,
    BaseOptions,
    CreateClipOptions,
    GetBannedUsersOptions,
    GetBitsLeaderboardOptions,
    GetChannelInfoOptions,
    GetCheermotesOptions,
    GetCodeStatusOptions,
    GetExtensionTransactionsOptions,
    GetModeratorsOptions,
    GetStreamKeyOptions,
    GetStreamMarkerUserIdOptions,
    GetStreamMarkerVideoIdOptions,
    GetStreamsOptions,
    GetSubsOptions,
    GetUserActiveExtensionsOptions,
    GetVideosOptions,
    ModifyChannelInformationOptions,
    SearchCategoriesOptions,
    SearchChannelsOptions,
    SendChatMessageOptions,
    StartCommercialOptions,
    UpdateUserOptions,
)
from twitchhelix.schemas.responses import (
    ActiveUserExtensionResponse,
    BadgesResponse,
    BanResponse,
    BitsLeaderboardResponse,
    ChannelInfoResponse,
    ChannelResponse,
    CheermoteResponse,
    ClipsResponse,
    CodeStatusResponse,
    CommercialResponse,
    CreateClipResponse,
    EmotesResponse,
    ExtensionResponse,
    ExtensionTransactionResponse,
    GameResponse,
    IngestsResponse,
    MessageResponse,
    ModeratorResponse,
    StreamKeyResponse,
    StreamMarkerResponse,
    StreamResponse,
    SubResponse,
    TokenResponse,
    User,
    UserResponse,
    VideoResponse,
)

from .auth import AuthState, Credentials, HelixAuthManager
from .credentials import ClientConfig
from .deadline import Deadline
from .encoding import (
    build_query,
    encode_mixed_param,
    encode_options,
)
from .events import EventEmitter, EventHandler
from .exceptions import HelixAPIError, HelixPreconditionError, HelixScopeError
from .http_client import API_HELIX, API_INGEST, HelixHTTPClient, decode_response

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

Identifiers = Union[str, int, list, tuple]


class TwitchClient:
    """
    Client for the Twitch Helix API.

    Constructed with a pre-seeded access token, the client looks up the
    authenticated user in a background thread; ``wait_for_bootstrap``
    joins it.

    Example:
        config = ClientConfig.from_env()
        with TwitchClient(config) as client:
            users = client.get_users(["twitchdev", "141981764"])
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        bootstrap: bool = True,
    ):
        self.config = config
        if config.verbose:
            logging.getLogger("twitchhelix").setLevel(logging.DEBUG)

        self._session = session or requests.Session()
        self._emitter = EventEmitter()
        self._auth = HelixAuthManager(
            client_id=config.client_id,
            client_secret=config.client_secret,
            scopes=config.scopes,
            redirect_uri=config.redirect_uri,
            credentials=Credentials(config.access_token, config.refresh_token),
            session=self._session,
            emitter=self._emitter,
            timeout=config.timeout,
        )
        self._http = HelixHTTPClient(
            self._auth,
            emitter=self._emitter,
            session=self._session,
            throw_rate_limit_errors=config.throw_rate_limit_errors,
            timeout=config.timeout,
        )
        self.user: Optional[User] = None

        self._bootstrap_thread: Optional[threading.Thread] = None
        if bootstrap and config.access_token:
            self._bootstrap_thread = threading.Thread(
                target=self._bootstrap_user,
                name="twitchhelix-bootstrap",
                daemon=True,
            )
            self._bootstrap_thread.start()

    def __enter__(self) -> "TwitchClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._http.close()

    # -----------------------------------------------------------------
    # State
    # -----------------------------------------------------------------

    @property
    def auth(self) -> HelixAuthManager:
        return self._auth

    @property
    def http(self) -> HelixHTTPClient:
        return self._http

    @property
    def access_token(self) -> Optional[str]:
        return self._auth.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._auth.refresh_token

    @property
    def auth_state(self) -> AuthState:
        return self._auth.state

    @property
    def refresh_attempts(self) -> int:
        return self._auth.refresh_attempts

    @property
    def scopes(self) -> tuple:
        return self._auth.scopes

    def has_scope(self, scope: Scope) -> bool:
        return has_scope(self._auth.scopes, scope)

    def _require(self, *scopes: Scope) -> None:
        """Raise unless at least one of ``scopes`` was granted."""
        if not any(self.has_scope(scope) for scope in scopes):
            raise HelixScopeError(*scopes)

    def _bootstrap_user(self) -> None:
        try:
            self.user = self.get_current_user()
        except Exception as e:
            # A failed lookup only leaves the cached user unset.
            logger.debug("Background user lookup failed: %s", e)

    def wait_for_bootstrap(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the background user lookup started at construction.

        Returns:
            True once no lookup is pending.
        """
        if self._bootstrap_thread is None:
            return True
        self._bootstrap_thread.join(timeout)
        return not self._bootstrap_thread.is_alive()

    # -----------------------------------------------------------------
    # Events
    # -----------------------------------------------------------------

    def add_event_handler(self, event: str, handler: EventHandler) -> None:
        self._emitter.register(event, handler)

    def remove_event_handler(self, event: str) -> None:
        self._emitter.unregister(event)

    # -----------------------------------------------------------------
    # Authorization
    # -----------------------------------------------------------------

    def get_auth_url(self, state: Optional[str] = None) -> str:
        return self._auth.get_auth_url(state)

    def get_user_access(
        self, code: str, deadline: Optional[Deadline] = None
    ) -> TokenResponse:
        """Complete the user consent flow with the code from the redirect."""
        return self._auth.exchange_code(code, deadline)

    # -----------------------------------------------------------------
    # Request helpers
    # -----------------------------------------------------------------

    def _get(
        self,
        endpoint: str,
        model: Type[T],
        api: str = API_HELIX,
        deadline: Optional[Deadline] = None,
    ) -> T:
        body = self._http.get(endpoint, api=api, deadline=deadline)
        logger.debug("GET Decode: Endpoint(%s), Data(%s)", endpoint, body)
        return decode_response(body, model)

    def _send(
        self,
        method: str,
        endpoint: str,
        model: Type[T],
        data: Any = None,
        deadline: Optional[Deadline] = None,
    ) -> T:
        sender = getattr(self._http, method)
        body = sender(endpoint, data, deadline=deadline)
        logger.debug("%s Decode: Endpoint(%s), Data(%s)", method.upper(), endpoint, body)
        return decode_response(body, model)

    # -----------------------------------------------------------------
    # Users
    # -----------------------------------------------------------------

    def get_users(
        self, ids: Identifiers, deadline: Optional[Deadline] = None
    ) -> UserResponse:
        """
        Look up users by login or ID.

        Args:
            ids: A login, a numeric ID (int or digit string), or a list
                mixing both.
        """
        if isinstance(ids, (list, tuple, str)) or (
            isinstance(ids, int) and not isinstance(ids, bool)
        ):
            query = encode_mixed_param(ids, "login", "id")
        else:
            raise HelixPreconditionError(
                "ids must be a string, int, or list of strings/ints"
            )
        return self._get("/users" + build_query(query), UserResponse, deadline=deadline)

    def get_current_user(self, deadline: Optional[Deadline] = None) -> User:
        """The user the access token belongs to."""
        result = self._get("/users", UserResponse, deadline=deadline)
        if not result.data:
            raise HelixAPIError("failed to get current user")
        return result.data[0]

    def update_user(
        self,
        options: Optional[UpdateUserOptions] = None,
        deadline: Optional[Deadline] = None,
    ) -> UserResponse:
        self._require(Scope.USER_EDIT)
        query = build_query(encode_options(options))
        return self._send("put", "/users" + query, UserResponse, deadline=deadline)

    def get_user_extensions(self, deadline: Optional[Deadline] = None) -> ExtensionResponse:
        self._require(Scope.USER_READ_BROADCAST)
        return self._get("/users/extensions/list", ExtensionResponse, deadline=deadline)

    def get_user_active_extensions(
        self,
        options: Optional[GetUserActiveExtensionsOptions] = None,
        deadline: Optional[Deadline] = None,
    ) -> ActiveUserExtensionResponse:
        self._require(Scope.USER_READ_BROADCAST, Scope.USER_EDIT_BROADCAST)
        query = build_query(encode_options(options))
        return self._get("/users/extensions" + query, ActiveUserExtensionResponse, deadline=deadline)

    # -----------------------------------------------------------------
    # Games and search
    # -----------------------------------------------------------------

    def get_games(
        self, games: Identifiers, deadline: Optional[Deadline] = None
    ) -> GameResponse:
        """Look up games by name or ID."""
        query = build_query(encode_mixed_param(games, "name", "id"))
        return self._get("/games" + query, GameResponse, deadline=deadline)

    def get_top_games(
        self,
        options: Optional[BaseOptions] = None,
        deadline: Optional[Deadline] = None,
    ) -> GameResponse:
        query = build_query(encode_options(options))
        return self._get("/games/top" + query, GameResponse, deadline=deadline)

    def search_channels(
        self, options: SearchChannelsOptions, deadline: Optional[Deadline] = None
    ) -> ChannelResponse:
        query = build_query(encode_options(options))
        return self._get("/search/channels" + query, ChannelResponse, deadline=deadline)

    def search_categories(
        self, options: SearchCategoriesOptions, deadline: Optional[Deadline] = None
    ) -> GameResponse:
        query = build_query(encode_options(options))
        return self._get("/search/categories" + query, GameResponse, deadline=deadline)

    # -----------------------------------------------------------------
    # Streams, videos and clips
    # -----------------------------------------------------------------

    def get_streams(
        self,
        options: Optional[GetStreamsOptions] = None,
        deadline: Optional[Deadline] = None,
    ) -> StreamResponse:
        """
        List live streams.

        ``options.channel`` and ``options.channels`` accept logins or user
        IDs; each is routed to ``user_login`` or ``user_id``.
        """
        if options is None:
            return self._get("/streams", StreamResponse, deadline=deadline)

        query = build_query(
            encode_mixed_param(options.channel, "user_login", "user_id"),
            encode_mixed_param(options.channels, "user_login", "user_id"),
            encode_options(options),
        )
        return self._get("/streams" + query, StreamResponse, deadline=deadline)

    def get_stream_key(
        self, options: GetStreamKeyOptions, deadline: Optional[Deadline] = None
    ) -> str:
        self._require(Scope.CHANNEL_READ_STREAM_KEY)
        query = build_query(encode_options(options))
        result = self._get("/streams/key" + query, StreamKeyResponse, deadline=deadline)
        if not result.data:
            raise HelixAPIError("no stream key found")
        return result.data[0].stream_key

    def get_stream_markers(
        self,
        options: Union[GetStreamMarkerUserIdOptions, GetStreamMarkerVideoIdOptions],
        deadline: Optional[Deadline] = None,
    ) -> StreamMarkerResponse:
        self._require(Scope.USER_READ_BROADCAST)
        query = build_query(encode_options(options))
        return self._get("/streams/markers" + query, StreamMarkerResponse, deadline=deadline)

    def get_videos(
        self, options: GetVideosOptions, deadline: Optional[Deadline] = None
    ) -> VideoResponse:
        query = build_query(encode_options(options))
        return self._get("/videos" + query, VideoResponse, deadline=deadline)

    def get_clips(
        self, options: BaseClipsOptions, deadline: Optional[Deadline] = None
    ) -> ClipsResponse:
        """Clips by broadcaster, game or ID, depending on the options type."""
        query = build_query(encode_options(options))
        return self._get("/clips" + query, ClipsResponse, deadline=deadline)

    def create_clip(
        self, options: CreateClipOptions, deadline: Optional[Deadline] = None
    ) -> CreateClipResponse:
        self._require(Scope.CLIPS_EDIT)
        query = build_query(encode_options(options))
        return self._send("post", "/clips" + query, CreateClipResponse, deadline=deadline)

    # -----------------------------------------------------------------
    # Channels
    # -----------------------------------------------------------------

    def get_channel_information(
        self, options: GetChannelInfoOptions, deadline: Optional[Deadline] = None
    ) -> ChannelInfoResponse:
        query = build_query(encode_options(options))
        return self._get("/channels" + query, ChannelInfoResponse, deadline=deadline)

    def modify_channel_information(
        self,
        options: ModifyChannelInformationOptions,
        deadline: Optional[Deadline] = None,
    ) -> None:
        self._require(Scope.USER_EDIT_BROADCAST)
        query = build_query(encode_options(options))
        self._http.patch("/channels" + query, deadline=deadline)

    def start_commercial(
        self, options: StartCommercialOptions, deadline: Optional[Deadline] = None
    ) -> CommercialResponse:
        self._require(Scope.CHANNEL_EDIT_COMMERCIAL)
        query = build_query(encode_options(options))
        return self._send("post", "/channels/commercial" + query, CommercialResponse, deadline=deadline)

    def get_subs(
        self, options: GetSubsOptions, deadline: Optional[Deadline] = None
    ) -> SubResponse:
        self._require(Scope.CHANNEL_READ_SUBSCRIPTIONS)
        query = build_query(encode_options(options))
        return self._get("/subscriptions" + query, SubResponse, deadline=deadline)

    # -----------------------------------------------------------------
    # Chat
    # -----------------------------------------------------------------

    def get_global_badges(self, deadline: Optional[Deadline] = None) -> BadgesResponse:
        return self._get("/chat/badges/global", BadgesResponse, deadline=deadline)

    def get_channel_badges(
        self, broadcaster_id: str, deadline: Optional[Deadline] = None
    ) -> BadgesResponse:
        query = build_query(f"broadcaster_id={broadcaster_id}")
        return self._get("/chat/badges" + query, BadgesResponse, deadline=deadline)

    def get_global_emotes(self, deadline: Optional[Deadline] = None) -> EmotesResponse:
        return self._get("/chat/emotes/global", EmotesResponse, deadline=deadline)

    def get_channel_emotes(
        self, broadcaster_id: str, deadline: Optional[Deadline] = None
    ) -> EmotesResponse:
        query = build_query(f"broadcaster_id={broadcaster_id}")
        return self._get("/chat/emotes" + query, EmotesResponse, deadline=deadline)

    def send_chat_message(
        self, options: SendChatMessageOptions, deadline: Optional[Deadline] = None
    ) -> MessageResponse:
        self._require(Scope.USER_BOT)
        return self._send("post", "/chat/messages", MessageResponse, data=options, deadline=deadline)

    def shoutout_user(
        self, channel: str, user: str, deadline: Optional[Deadline] = None
    ) -> None:
        """Shout out ``user`` in ``channel`` as the authenticated moderator."""
        channel_user, mod_user, target = self._resolve_moderation_users(channel, user, deadline)
        self._http.post(
            "/chat/shoutouts",
            {
                "from_broadcaster_id": channel_user.id,
                "to_broadcaster_id": target.id,
                "moderator_id": mod_user.id,
            },
            deadline=deadline,
        )

    # -----------------------------------------------------------------
    # Moderation
    # -----------------------------------------------------------------

    def _resolve_moderation_users(
        self, channel: str, user: str, deadline: Optional[Deadline]
    ):
        """Look up the channel, the local moderator and the target user by login."""
        if self.user is None:
            raise HelixPreconditionError("local user is null")

        users = self.get_users([channel, self.user.login, user], deadline=deadline)
        by_login = {u.login: u for u in users.data}
        resolved = (
            by_login.get(channel),
            by_login.get(self.user.login),
            by_login.get(user),
        )
        if any(u is None for u in resolved):
            raise HelixAPIError("failed to fetch required users")
        return resolved

    def ban_user(
        self,
        channel: str,
        user: str,
        reason: str = "",
        deadline: Optional[Deadline] = None,
    ) -> BanResponse:
        """Ban ``user`` from ``channel`` as the authenticated moderator."""
        channel_user, mod_user, target = self._resolve_moderation_users(channel, user, deadline)

        query = build_query(
            f"broadcaster_id={channel_user.id}",
            f"moderator_id={mod_user.id}",
        )
        ban = {"user_id": target.id}
        if reason:
            ban["reason"] = reason
        return self._send("post", "/moderation/bans" + query, BanResponse, data={"data": ban}, deadline=deadline)

    def get_banned_users(
        self, options: GetBannedUsersOptions, deadline: Optional[Deadline] = None
    ) -> BanResponse:
        self._require(Scope.MODERATION_READ)
        query = build_query(encode_options(options))
        return self._get("/moderation/banned" + query, BanResponse, deadline=deadline)

    def get_moderators(
        self, options: GetModeratorsOptions, deadline: Optional[Deadline] = None
    ) -> ModeratorResponse:
        self._require(Scope.MODERATION_READ)
        query = build_query(encode_options(options))
        return self._get("/moderation/moderators" + query, ModeratorResponse, deadline=deadline)

    # -----------------------------------------------------------------
    # Bits, extensions and entitlements
    # -----------------------------------------------------------------

    def get_bits_leaderboard(
        self,
        options: Optional[GetBitsLeaderboardOptions] = None,
        deadline: Optional[Deadline] = None,
    ) -> BitsLeaderboardResponse:
        self._require(Scope.BITS_READ)
        query = build_query(encode_options(options))
        return self._get("/bits/leaderboard" + query, BitsLeaderboardResponse, deadline=deadline)

    def get_cheermotes(
        self,
        options: Optional[GetCheermotesOptions] = None,
        deadline: Optional[Deadline] = None,
    ) -> CheermoteResponse:
        query = build_query(encode_options(options))
        return self._get("/bits/cheermotes" + query, CheermoteResponse, deadline=deadline)

    def get_extension_transactions(
        self,
        options: GetExtensionTransactionsOptions,
        deadline: Optional[Deadline] = None,
    ) -> ExtensionTransactionResponse:
        query = build_query(encode_options(options))
        return self._get("/extensions/transactions" + query, ExtensionTransactionResponse, deadline=deadline)

    def get_code_status(
        self, options: GetCodeStatusOptions, deadline: Optional[Deadline] = None
    ) -> CodeStatusResponse:
        query = build_query(encode_options(options))
        return self._get("/entitlements/codes" + query, CodeStatusResponse, deadline=deadline)

    # -----------------------------------------------------------------
    # Ingest
    # -----------------------------------------------------------------

    def get_ingest_servers(self, deadline: Optional[Deadline] = None) -> IngestsResponse:
        """Ingest endpoints, served from the ingest base URL."""
        return self._get("/ingests", IngestsResponse, api=API_INGEST, deadline=deadline)
