"""Tests for APNs payload merging and headers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from fcm_client.models import (
    ApnsAlert,
    ApnsConfig,
    ApnsFcmOptions,
    ApnsHeaders,
    ApnsPayload,
    ApnsPriority,
    ApnsPushType,
    Aps,
    ContentAvailable,
    CriticalSound,
    Message,
    MutableContent,
)


class TestApnsPayload:
    """Custom data is merged beside the aps dictionary."""

    def test_custom_data_merged_beside_aps(self) -> None:
        config = ApnsConfig.build(Aps(alert="Hello", badge=1), data={"conversation_id": "42"})

        assert config.to_wire() == {
            "payload": {
                "aps": {"alert": "Hello", "badge": 1},
                "conversation_id": "42",
            }
        }

    def test_reserved_aps_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="reserved 'aps' key"):
            ApnsConfig.build(Aps(alert="Hello"), data={"aps": {"badge": 2}})

    def test_reserved_custom_data_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="reserved 'custom_data' key"):
            ApnsConfig.build(Aps(badge=1), data={"custom_data": "x"})

    def test_wire_payload_with_custom_data_key_rejected(self) -> None:
        wire = {"token": "abc", "apns": {"payload": {"aps": {"badge": 1}, "custom_data": "x"}}}

        with pytest.raises(ValidationError, match="reserved 'custom_data' key"):
            Message.model_validate(wire)

    def test_wire_payload_with_custom_data_beside_other_keys_rejected(self) -> None:
        with pytest.raises(ValidationError, match="reserved 'custom_data' key"):
            ApnsPayload.model_validate({"aps": {}, "custom_data": {"a": "b"}, "other": "1"})

    def test_message_round_trip_with_custom_keys(self) -> None:
        message = Message.to_token("abc", apns=ApnsConfig.build(Aps(badge=1), data={"payload_id": "7"}))

        assert Message.model_validate(message.to_wire()) == message

    def test_empty_payload_keeps_aps(self) -> None:
        assert ApnsPayload().to_wire() == {"aps": {}}

    def test_hyphenated_aps_keys(self) -> None:
        aps = Aps(
            alert=ApnsAlert(title="Title", loc_key="BODY_KEY", loc_args=["a"]),
            sound=CriticalSound(name="alarm.caf", volume=0.5),
            thread_id="thread-1",
            mutable_content=MutableContent.ON,
            interruption_level="time-sensitive",
        )

        assert aps.to_wire() == {
            "alert": {"title": "Title", "loc-key": "BODY_KEY", "loc-args": ["a"]},
            "sound": {"critical": 1, "name": "alarm.caf", "volume": 0.5},
            "thread-id": "thread-1",
            "mutable-content": 1,
            "interruption-level": "time-sensitive",
        }

    def test_parse_wire_payload(self) -> None:
        payload = ApnsPayload.model_validate(
            {
                "aps": {"alert": {"title": "T", "loc-key": "K"}, "content-available": 1},
                "conversation_id": "42",
                "nested": {"a": 1},
            }
        )

        assert isinstance(payload.aps.alert, ApnsAlert)
        assert payload.aps.alert.loc_key == "K"
        assert payload.aps.content_available is ContentAvailable.ON
        assert payload.custom_data == {"conversation_id": "42", "nested": {"a": 1}}

    def test_round_trip(self) -> None:
        config = ApnsConfig.build(
            Aps(alert="Hello", category="MESSAGE"),
            data={"sender": "alice"},
            headers=ApnsHeaders(apns_priority=ApnsPriority.IMMEDIATE),
            fcm_options=ApnsFcmOptions(image="https://example.com/a.png"),
        )

        assert ApnsConfig.model_validate(config.to_wire()) == config


class TestApnsHeaders:
    def test_header_names(self) -> None:
        headers = ApnsHeaders(
            apns_push_type=ApnsPushType.ALERT,
            apns_priority=ApnsPriority.POWER_CONSIDERATE,
            apns_collapse_id="score",
            apns_expiration=datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
        )

        assert headers.to_wire() == {
            "apns-push-type": "alert",
            "apns-priority": "5",
            "apns-collapse-id": "score",
            "apns-expiration": "1700000000",
        }

    def test_headers_from_mapping(self) -> None:
        config = ApnsConfig.build(
            Aps(alert="Hello"),
            headers={"apns-priority": "10", "apns-expiration": "0"},
        )

        assert config.headers is not None
        assert config.headers.apns_priority is ApnsPriority.IMMEDIATE
        assert config.headers.apns_expiration == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_unknown_header_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ApnsHeaders.model_validate({"apns-unknown": "1"})


class TestBackgroundConfig:
    def test_background_notification(self) -> None:
        config = ApnsConfig.background({"sync": "inbox"})

        assert config.to_wire() == {
            "headers": {"apns-push-type": "background", "apns-priority": "5"},
            "payload": {"aps": {"content-available": 1}, "sync": "inbox"},
        }

    def test_background_without_data(self) -> None:
        config = ApnsConfig.background()

        assert config.to_wire()["payload"] == {"aps": {"content-available": 1}}


def test_custom_data_with_content_available() -> None:
    config = ApnsConfig.build(Aps(content_available=ContentAvailable.ON), data={"foo": "bar"})

    assert config.to_wire()["payload"] == {"aps": {"content-available": 1}, "foo": "bar"}
