"""
FCM v1 message model.

A message has exactly one target (a registration token, a topic or a
condition) and any subset of the shared and platform specific fields.
See https://firebase.google.com/docs/reference/fcm/rest/v1/projects.messages
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)

from fcm_client.models.android import AndroidConfig
from fcm_client.models.apns import ApnsConfig
from fcm_client.models.common import TOPIC_PREFIX, ResponseModel, WireModel
from fcm_client.models.webpush import WebpushConfig


class _Target(WireModel):
    value: str = Field(..., min_length=1)

    def __init__(self, value: str | None = None, /, **data: Any) -> None:
        if value is not None:
            data["value"] = value
        super().__init__(**data)


class Token(_Target):
    """Registration token of a single app instance."""

    kind: Literal["token"] = "token"


class Topic(_Target):
    """Topic name, e.g. "weather". A leading "/topics/" is dropped."""

    kind: Literal["topic"] = "topic"

    @field_validator("value")
    @classmethod
    def _strip_prefix(cls, v: str) -> str:
        if v.startswith(TOPIC_PREFIX):
            v = v[len(TOPIC_PREFIX):]
        if not v:
            msg = "Topic name must not be empty"
            raise ValueError(msg)
        return v


class Condition(_Target):
    """Condition over topics, e.g. "'foo' in topics && 'bar' in topics"."""

    kind: Literal["condition"] = "condition"


MessageTarget = Annotated[Token | Topic | Condition, Field(discriminator="kind")]


class Notification(WireModel):
    """Basic notification template to use across all platforms."""

    title: str | None = None
    body: str | None = None
    image: str | None = Field(None, description="URL of an image shown in the notification")


class FcmOptions(WireModel):
    """Platform independent options for features provided by the FCM SDKs."""

    analytics_label: str | None = None


class Message(WireModel):
    """
    Message to send through FCM.

    Build it with one of the constructors so that exactly one target is set:

        Message.to_topic("weather", notification=Notification(title="Rain"))

    Serialized, the target appears under its own key (``token``, ``topic``
    or ``condition``) and every unset field is left out.
    """

    TARGET_KEYS: ClassVar[tuple[str, ...]] = ("token", "topic", "condition")

    target: MessageTarget
    name: str | None = None
    data: dict[str, str] | None = None
    notification: Notification | None = None
    fcm_options: FcmOptions | None = None
    android: AndroidConfig | None = None
    webpush: WebpushConfig | None = None
    apns: ApnsConfig | None = None

    @classmethod
    def to_token(cls, token: str, **fields: Any) -> Message:
        return cls(target=Token(token), **fields)

    @classmethod
    def to_topic(cls, topic: str, **fields: Any) -> Message:
        return cls(target=Topic(topic), **fields)

    @classmethod
    def to_condition(cls, condition: str, **fields: Any) -> Message:
        return cls(target=Condition(condition), **fields)

    @model_validator(mode="before")
    @classmethod
    def _lift_target(cls, value: Any) -> Any:
        if not isinstance(value, dict) or "target" in value:
            return value
        present = [key for key in cls.TARGET_KEYS if key in value]
        if len(present) != 1:
            msg = f"Message needs exactly one of {', '.join(cls.TARGET_KEYS)}, got {present or 'none'}"
            raise ValueError(msg)
        key = present[0]
        rest = {k: v for k, v in value.items() if k != key}
        return {"target": {"kind": key, "value": value[key]}, **rest}

    @model_serializer(mode="wrap")
    def _flatten_target(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        serialized = handler(self)
        target = serialized.pop("target")
        return {target["kind"]: target["value"], **serialized}


class MessageEnvelope(WireModel):
    """Request body of projects.messages.send."""

    validate_only: bool = False
    message: Message


class MessageOutput(ResponseModel):
    """Response of projects.messages.send."""

    name: str = Field(..., description="projects/{project_id}/messages/{message_id}")

    @property
    def message_id(self) -> str:
        return self.name.rsplit("/", 1)[-1]
