"""Typed screen router for Quadboard clients.

Each client session owns a `ScreenRouter`. Screens form a closed set, every
transition must be declared in `TRANSITIONS`, and screens that show a single
post or group require the matching payload type.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class NavigationError(ValueError):
    """Raised for undeclared transitions or mismatched payloads."""


class Screen(str, enum.Enum):
    """Every screen the client can show."""

    SPLASH = "splash"
    LOGIN = "login"
    FORGOT_PASSWORD = "forgotPassword"
    VERIFICATION = "verification"
    PUBLIC_CHAT = "publicChat"
    CREATE_POST = "createPost"
    COMMENTS_POST = "commentsPost"
    COMMUNITY_GROUPS = "communityGroups"
    CREATE_GROUP = "createCommunityGroup"
    COMMENT_COMMUNITY_GROUP = "commentCommunityGroup"
    MANAGE_JOIN_REQUESTS = "manageJoinRequests"
    NOTIFICATIONS = "notifications"


class NotificationsTab(str, enum.Enum):
    """Tabs on the notifications screen."""

    NOTIFICATIONS = "notifications"
    POSTS = "posts"
    REPLIES = "replies"
    PINNED = "pinned"


@dataclass(frozen=True)
class PostPayload:
    """Opens the comments screen for a post."""

    post_id: int
    from_tab: NotificationsTab | None = None


@dataclass(frozen=True)
class GroupPayload:
    """Opens a group's chat or its join-request queue."""

    group_id: int


@dataclass(frozen=True)
class NotificationsPayload:
    """Opens the notifications screen on a given tab."""

    initial_tab: NotificationsTab = NotificationsTab.NOTIFICATIONS


Payload = PostPayload | GroupPayload | NotificationsPayload

# Tab bar destinations, reachable from any signed-in screen.
_TABS = frozenset({Screen.PUBLIC_CHAT, Screen.COMMUNITY_GROUPS, Screen.NOTIFICATIONS})
_SIGNED_IN = frozenset(Screen) - {
    Screen.SPLASH,
    Screen.LOGIN,
    Screen.FORGOT_PASSWORD,
    Screen.VERIFICATION,
}

TRANSITIONS: dict[Screen, frozenset[Screen]] = {
    Screen.SPLASH: frozenset({Screen.LOGIN}),
    Screen.LOGIN: frozenset({Screen.FORGOT_PASSWORD, Screen.VERIFICATION}),
    Screen.FORGOT_PASSWORD: frozenset({Screen.LOGIN}),
    Screen.VERIFICATION: frozenset({Screen.PUBLIC_CHAT}),
    Screen.PUBLIC_CHAT: _TABS | {Screen.CREATE_POST, Screen.COMMENTS_POST},
    Screen.CREATE_POST: _TABS,
    Screen.COMMENTS_POST: _TABS,
    Screen.COMMUNITY_GROUPS: _TABS | {
        Screen.CREATE_GROUP,
        Screen.COMMENT_COMMUNITY_GROUP,
        Screen.MANAGE_JOIN_REQUESTS,
    },
    Screen.CREATE_GROUP: _TABS,
    Screen.COMMENT_COMMUNITY_GROUP: _TABS,
    Screen.MANAGE_JOIN_REQUESTS: _TABS,
    Screen.NOTIFICATIONS: _TABS | {Screen.COMMENTS_POST, Screen.COMMENT_COMMUNITY_GROUP},
}

_REQUIRED_PAYLOAD: dict[Screen, type] = {
    Screen.COMMENTS_POST: PostPayload,
    Screen.COMMENT_COMMUNITY_GROUP: GroupPayload,
    Screen.MANAGE_JOIN_REQUESTS: GroupPayload,
}
_OPTIONAL_PAYLOAD: dict[Screen, type] = {
    Screen.NOTIFICATIONS: NotificationsPayload,
}

# Opening a post from these notification tabs returns there on back.
_RETURN_TO_NOTIFICATIONS = frozenset(
    {NotificationsTab.POSTS, NotificationsTab.REPLIES, NotificationsTab.PINNED}
)


@dataclass
class ScreenRouter:
    """Current screen plus its payload for one client session."""

    screen: Screen = Screen.SPLASH
    payload: Payload | None = None
    from_tab: NotificationsTab | None = None
    history: list[tuple[Screen, Payload | None]] = field(default_factory=list)

    def can_navigate(self, target: Screen) -> bool:
        return target in TRANSITIONS[self.screen]

    def navigate(self, target: Screen, payload: Payload | None = None) -> Screen:
        """Move to `target`, validating the transition and its payload."""
        target = Screen(target)
        if not self.can_navigate(target):
            raise NavigationError(f"Cannot navigate from {self.screen.value} to {target.value}")

        required = _REQUIRED_PAYLOAD.get(target)
        optional = _OPTIONAL_PAYLOAD.get(target)
        if required is not None and not isinstance(payload, required):
            raise NavigationError(f"{target.value} requires a {required.__name__}")
        if required is None and payload is not None and (
            optional is None or not isinstance(payload, optional)
        ):
            raise NavigationError(f"{target.value} does not accept {type(payload).__name__}")

        if isinstance(payload, PostPayload):
            self.from_tab = payload.from_tab
        elif isinstance(payload, NotificationsPayload):
            self.from_tab = payload.initial_tab

        self.history.append((self.screen, self.payload))
        self.screen = target
        self.payload = payload
        return self.screen

    def back_target(self) -> tuple[Screen, Payload | None]:
        """Return where the back action leads from the current screen."""
        if self.screen == Screen.COMMENTS_POST:
            if self.from_tab in _RETURN_TO_NOTIFICATIONS:
                return Screen.NOTIFICATIONS, NotificationsPayload(initial_tab=self.from_tab)
            return Screen.PUBLIC_CHAT, None
        if self.screen == Screen.FORGOT_PASSWORD:
            return Screen.LOGIN, None
        if self.screen in (Screen.CREATE_GROUP, Screen.COMMENT_COMMUNITY_GROUP,
                           Screen.MANAGE_JOIN_REQUESTS):
            return Screen.COMMUNITY_GROUPS, None
        if self.screen == Screen.CREATE_POST:
            return Screen.PUBLIC_CHAT, None
        raise NavigationError(f"{self.screen.value} has no back action")

    def back(self) -> Screen:
        """Follow the back action of the current screen."""
        target, payload = self.back_target()
        self.history.append((self.screen, self.payload))
        self.screen = target
        self.payload = payload
        return self.screen

    @property
    def signed_in(self) -> bool:
        return self.screen in _SIGNED_IN
