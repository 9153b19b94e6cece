"""Shared pieces of the FCM wire model."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, PlainSerializer

TOPIC_PREFIX = "/topics/"

_DURATION_PATTERN = re.compile(r"^(-?\d+(?:\.\d{1,9})?)s$")


class WireModel(BaseModel):
    """
    Base for every outbound FCM structure.

    Values are immutable. Field names double as the wire keys unless an
    alias says otherwise; both spellings are accepted when parsing.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="forbid",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON object expected by the API, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResponseModel(BaseModel):
    """Base for decoded API responses. Unknown keys sent by the API are ignored."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )


def format_duration(value: timedelta) -> str:
    """
    Encode a timedelta as a protobuf JSON Duration.

    3 seconds is "3s", 3 seconds and 1 nanosecond would be "3.000000001s".
    """
    seconds = value.total_seconds()
    if seconds == int(seconds):
        return f"{int(seconds)}s"
    return f"{seconds:.9f}".rstrip("0").rstrip(".") + "s"


def parse_duration(value: Any) -> Any:
    if isinstance(value, str):
        match = _DURATION_PATTERN.match(value.strip())
        if match is None:
            msg = f"Invalid duration {value!r}, expected a number of seconds ending in 's'"
            raise ValueError(msg)
        return timedelta(seconds=float(match.group(1)))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    return value


def assume_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_epoch_seconds(value: datetime) -> str:
    return str(int(assume_utc(value).timestamp()))


def parse_epoch_seconds(value: Any) -> Any:
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    if isinstance(value, int) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return value


# protobuf Duration, e.g. "3.5s"
ProtoDuration = Annotated[
    timedelta,
    BeforeValidator(parse_duration),
    PlainSerializer(format_duration, return_type=str, when_used="json"),
]

# UNIX epoch seconds carried as a string header value, e.g. "1700000000"
EpochSeconds = Annotated[
    datetime,
    BeforeValidator(parse_epoch_seconds),
    PlainSerializer(format_epoch_seconds, return_type=str, when_used="json"),
]

# RFC 3339 timestamp; always sent with an offset
UtcDatetime = Annotated[datetime, AfterValidator(assume_utc)]
