"""
Apple Push Notification service specific options.

The APNs payload is the ``aps`` dictionary plus any custom keys the app
expects, all at the same level:

    {"aps": {"content-available": 1}, "message": "Hello"}

ApnsPayload keeps the two apart and joins them only when serialized.
See https://developer.apple.com/documentation/usernotifications/generating-a-remote-notification
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, ClassVar

from pydantic import (
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from fcm_client.models.common import EpochSeconds, WireModel


class ApnsPushType(str, Enum):
    """Value of the apns-push-type header; must match the payload contents."""

    ALERT = "alert"
    BACKGROUND = "background"
    LOCATION = "location"
    VOIP = "voip"
    COMPLICATION = "complication"
    FILEPROVIDER = "fileprovider"
    MDM = "mdm"
    LIVEACTIVITY = "liveactivity"
    PUSHTOTALK = "pushtotalk"


class ApnsPriority(str, Enum):
    """Value of the apns-priority header. APNs uses 10 when omitted."""

    IMMEDIATE = "10"
    POWER_CONSIDERATE = "5"
    POWER_CONSIDERATE_NO_WAKE = "1"


class ContentAvailable(IntEnum):
    OFF = 0
    ON = 1


class MutableContent(IntEnum):
    OFF = 0
    ON = 1


class ApnsAlert(WireModel):
    """Structured alert. A plain string alert is also accepted by Aps."""

    title: str | None = None
    subtitle: str | None = None
    body: str | None = None
    launch_image: str | None = Field(None, alias="launch-image")
    title_loc_key: str | None = Field(None, alias="title-loc-key")
    title_loc_args: list[str] | None = Field(None, alias="title-loc-args")
    subtitle_loc_key: str | None = Field(None, alias="subtitle-loc-key")
    subtitle_loc_args: list[str] | None = Field(None, alias="subtitle-loc-args")
    loc_key: str | None = Field(None, alias="loc-key")
    loc_args: list[str] | None = Field(None, alias="loc-args")


class CriticalSound(WireModel):
    """Sound settings for critical alerts."""

    critical: int = 1
    name: str
    volume: float | None = Field(None, description="0 (silent) to 1 (full volume)")


class Aps(WireModel):
    alert: str | ApnsAlert | None = None
    badge: int | None = None
    sound: str | CriticalSound | None = None
    thread_id: str | None = Field(None, alias="thread-id")
    category: str | None = None
    content_available: ContentAvailable | None = Field(None, alias="content-available")
    mutable_content: MutableContent | None = Field(None, alias="mutable-content")
    target_content_id: str | None = Field(None, alias="target-content-id")
    interruption_level: str | None = Field(None, alias="interruption-level")
    relevance_score: float | None = Field(None, alias="relevance-score")
    # Live Activity fields
    timestamp: int | None = None
    event: str | None = None
    dismissal_date: int | None = Field(None, alias="dismissal-date")
    stale_date: int | None = Field(None, alias="stale-date")
    attributes_type: str | None = Field(None, alias="attributes-type")
    attributes: dict[str, Any] | None = None
    content_state: dict[str, Any] | None = Field(None, alias="content-state")


class ApnsPayload(WireModel):
    """
    The APNs payload: ``aps`` plus custom keys merged beside it.

    Custom keys must not be ``aps`` or ``custom_data``; the latter is the
    field name, so a wire payload using it could not be told apart from
    constructor arguments. When parsing a wire payload, every key other
    than ``aps`` becomes custom data.
    """

    RESERVED_KEY: ClassVar[str] = "aps"
    RESERVED_CUSTOM_KEYS: ClassVar[frozenset[str]] = frozenset({"aps", "custom_data"})

    aps: Aps = Field(default_factory=Aps)
    custom_data: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _split_wire_payload(cls, value: Any) -> Any:
        # {"aps": {...}, "foo": "bar"} -> aps={...}, custom_data={"foo": "bar"}
        if not isinstance(value, dict):
            return value
        if not isinstance(value.get("custom_data", {}), dict):
            msg = "Custom APNs data must not use the reserved 'custom_data' key"
            raise ValueError(msg)
        if not set(value) <= cls.RESERVED_CUSTOM_KEYS:
            custom = {key: item for key, item in value.items() if key != cls.RESERVED_KEY}
            return {"aps": value.get(cls.RESERVED_KEY, {}), "custom_data": custom}
        return value

    @model_validator(mode="after")
    def _check_reserved_key(self) -> ApnsPayload:
        reserved = sorted(self.RESERVED_CUSTOM_KEYS.intersection(self.custom_data))
        if reserved:
            msg = f"Custom APNs data must not use the reserved '{reserved[0]}' key"
            raise ValueError(msg)
        return self

    @model_serializer(mode="wrap")
    def _merge_custom_data(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        serialized = handler(self)
        custom = serialized.pop("custom_data", None) or {}
        serialized.setdefault(self.RESERVED_KEY, {})
        return {**serialized, **custom}


class ApnsHeaders(WireModel):
    """
    APNs HTTP request headers.

    See https://developer.apple.com/documentation/usernotifications/sending-notification-requests-to-apns
    """

    authorization: str | None = None
    apns_id: str | None = Field(None, alias="apns-id")
    apns_push_type: ApnsPushType | None = Field(None, alias="apns-push-type")
    # 0 means deliver once without storing
    apns_expiration: EpochSeconds | None = Field(None, alias="apns-expiration")
    apns_priority: ApnsPriority | None = Field(None, alias="apns-priority")
    apns_topic: str | None = Field(None, alias="apns-topic")
    apns_collapse_id: str | None = Field(None, alias="apns-collapse-id")

    @classmethod
    def background(cls) -> ApnsHeaders:
        return cls(
            apns_push_type=ApnsPushType.BACKGROUND,
            apns_priority=ApnsPriority.POWER_CONSIDERATE,
        )


class ApnsFcmOptions(WireModel):
    analytics_label: str | None = None
    image: str | None = None


class ApnsConfig(WireModel):
    """Apple Push Notification service specific options."""

    headers: ApnsHeaders | None = None
    payload: ApnsPayload | None = None
    fcm_options: ApnsFcmOptions | None = None

    @classmethod
    def build(
        cls,
        aps: Aps,
        data: dict[str, Any] | None = None,
        headers: ApnsHeaders | dict[str, Any] | None = None,
        fcm_options: ApnsFcmOptions | None = None,
    ) -> ApnsConfig:
        """
        Build a config from an Aps dictionary and custom payload keys.

        Args:
            aps: The aps dictionary
            data: Custom keys merged beside ``aps`` in the payload
            headers: APNs headers, typed or as a mapping of header names
            fcm_options: FCM options for Apple devices

        Raises:
            ValueError: If ``data`` uses the reserved ``aps`` or ``custom_data`` key
        """
        if isinstance(headers, dict):
            headers = ApnsHeaders.model_validate(headers)
        return cls(
            payload=ApnsPayload(aps=aps, custom_data=data or {}),
            headers=headers,
            fcm_options=fcm_options,
        )

    @classmethod
    def background(cls, data: dict[str, Any] | None = None) -> ApnsConfig:
        """Silent notification that wakes the app in the background."""
        return cls.build(
            Aps(content_available=ContentAvailable.ON),
            data,
            ApnsHeaders.background(),
        )
