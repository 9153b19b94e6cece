"""Android specific options for messages sent through the FCM connection server."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from fcm_client.models.common import ProtoDuration, UtcDatetime, WireModel


class AndroidMessagePriority(str, Enum):
    """
    Delivery priority of the message, not to be confused with NotificationPriority.

    HIGH lets FCM wake a sleeping device; NORMAL may be delayed to save battery.
    """

    NORMAL = "normal"
    HIGH = "high"


class NotificationPriority(str, Enum):
    PRIORITY_UNSPECIFIED = "PRIORITY_UNSPECIFIED"
    PRIORITY_MIN = "PRIORITY_MIN"
    PRIORITY_LOW = "PRIORITY_LOW"
    PRIORITY_DEFAULT = "PRIORITY_DEFAULT"
    PRIORITY_HIGH = "PRIORITY_HIGH"
    PRIORITY_MAX = "PRIORITY_MAX"


class Visibility(str, Enum):
    VISIBILITY_UNSPECIFIED = "VISIBILITY_UNSPECIFIED"
    PRIVATE = "PRIVATE"
    PUBLIC = "PUBLIC"
    SECRET = "SECRET"


class Proxy(str, Enum):
    """When a notification may be proxied by the device."""

    PROXY_UNSPECIFIED = "PROXY_UNSPECIFIED"
    ALLOW = "ALLOW"
    DENY = "DENY"
    IF_PRIORITY_LOWERED = "IF_PRIORITY_LOWERED"


class Color(WireModel):
    """google.type.Color, every channel in [0, 1]."""

    red: float
    green: float
    blue: float
    alpha: float | None = None


class LightSettings(WireModel):
    """Notification LED color and blink rate."""

    color: Color
    light_on_duration: ProtoDuration | None = None
    light_off_duration: ProtoDuration | None = None


class AndroidFcmOptions(WireModel):
    analytics_label: str | None = None


class AndroidNotification(WireModel):
    """
    Notification to send to Android devices.

    Fields set here override the matching fields of the top-level
    Notification for Android targets.
    """

    title: str | None = None
    body: str | None = None
    icon: str | None = None
    color: str | None = Field(None, description="Icon color in #rrggbb format")
    sound: str | None = None
    tag: str | None = None
    click_action: str | None = None
    body_loc_key: str | None = None
    body_loc_args: list[str] | None = None
    title_loc_key: str | None = None
    title_loc_args: list[str] | None = None
    channel_id: str | None = None
    ticker: str | None = None
    sticky: bool | None = None
    event_time: UtcDatetime | None = None
    local_only: bool | None = None
    notification_priority: NotificationPriority | None = None
    default_sound: bool | None = None
    default_vibrate_timings: bool | None = None
    default_light_settings: bool | None = None
    vibrate_timings: list[ProtoDuration] | None = None
    visibility: Visibility | None = None
    notification_count: int | None = None
    light_settings: LightSettings | None = None
    image: str | None = None
    proxy: Proxy | None = None
    bypass_proxy_notification: bool | None = None


class AndroidConfig(WireModel):
    """
    Android specific options.

    ``data`` is independent of Message.data and overrides it for Android
    targets when present. ``ttl`` is rounded down to whole seconds by FCM.
    """

    collapse_key: str | None = None
    priority: AndroidMessagePriority | None = None
    ttl: ProtoDuration | None = None
    restricted_package_name: str | None = None
    data: dict[str, str] | None = None
    notification: AndroidNotification | None = None
    fcm_options: AndroidFcmOptions | None = None
    direct_boot_ok: bool | None = None
