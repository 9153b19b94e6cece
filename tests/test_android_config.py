"""Tests for Android specific message options."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from fcm_client.models import (
    AndroidConfig,
    AndroidFcmOptions,
    AndroidMessagePriority,
    AndroidNotification,
    Color,
    LightSettings,
    NotificationPriority,
    Proxy,
    Visibility,
)
from fcm_client.models.common import format_duration, parse_duration


class TestDuration:
    """timedelta <-> protobuf Duration string."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (timedelta(seconds=3), "3s"),
            (timedelta(seconds=3.5), "3.5s"),
            (timedelta(hours=1), "3600s"),
            (timedelta(0), "0s"),
            (timedelta(microseconds=1), "0.000001s"),
        ],
    )
    def test_format(self, value: timedelta, expected: str) -> None:
        assert format_duration(value) == expected

    def test_parse_string(self) -> None:
        assert parse_duration("3.5s") == timedelta(seconds=3.5)

    def test_parse_number(self) -> None:
        assert parse_duration(60) == timedelta(seconds=60)

    def test_parse_rejects_missing_unit(self) -> None:
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration("3.5")


class TestAndroidConfig:
    def test_ttl_and_priority(self) -> None:
        config = AndroidConfig(ttl=timedelta(seconds=3.5), priority=AndroidMessagePriority.HIGH)

        assert config.to_wire() == {"ttl": "3.5s", "priority": "high"}

    def test_normal_priority(self) -> None:
        config = AndroidConfig(priority=AndroidMessagePriority.NORMAL)

        assert config.to_wire() == {"priority": "normal"}

    def test_unset_priority_is_omitted(self) -> None:
        config = AndroidConfig(collapse_key="scores")

        assert config.to_wire() == {"collapse_key": "scores"}

    def test_ttl_parsed_from_wire(self) -> None:
        config = AndroidConfig.model_validate({"ttl": "86400s", "priority": "high"})

        assert config.ttl == timedelta(days=1)
        assert config.priority is AndroidMessagePriority.HIGH

    def test_unknown_priority_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AndroidConfig.model_validate({"priority": "urgent"})

    def test_all_top_level_fields(self) -> None:
        config = AndroidConfig(
            collapse_key="scores",
            priority=AndroidMessagePriority.HIGH,
            ttl=timedelta(minutes=5),
            restricted_package_name="com.example.app",
            data={"score": "3x1"},
            fcm_options=AndroidFcmOptions(analytics_label="android-campaign"),
            direct_boot_ok=True,
        )

        assert config.to_wire() == {
            "collapse_key": "scores",
            "priority": "high",
            "ttl": "300s",
            "restricted_package_name": "com.example.app",
            "data": {"score": "3x1"},
            "fcm_options": {"analytics_label": "android-campaign"},
            "direct_boot_ok": True,
        }


class TestAndroidNotification:
    def test_enums_use_proto_names(self) -> None:
        notification = AndroidNotification(
            title="Goal",
            channel_id="sports",
            notification_priority=NotificationPriority.PRIORITY_HIGH,
            visibility=Visibility.PUBLIC,
            proxy=Proxy.DENY,
        )

        assert notification.to_wire() == {
            "title": "Goal",
            "channel_id": "sports",
            "notification_priority": "PRIORITY_HIGH",
            "visibility": "PUBLIC",
            "proxy": "DENY",
        }

    def test_vibrate_timings_and_light_settings(self) -> None:
        notification = AndroidNotification(
            vibrate_timings=[timedelta(seconds=0.5), timedelta(seconds=1)],
            light_settings=LightSettings(
                color=Color(red=1, green=0, blue=0),
                light_on_duration=timedelta(seconds=1),
                light_off_duration=timedelta(seconds=0.25),
            ),
        )

        assert notification.to_wire() == {
            "vibrate_timings": ["0.5s", "1s"],
            "light_settings": {
                "color": {"red": 1.0, "green": 0.0, "blue": 0.0},
                "light_on_duration": "1s",
                "light_off_duration": "0.25s",
            },
        }

    def test_localized_fields(self) -> None:
        notification = AndroidNotification(body_loc_key="GOAL_BODY", body_loc_args=["Home", "Away"])

        assert notification.to_wire() == {
            "body_loc_key": "GOAL_BODY",
            "body_loc_args": ["Home", "Away"],
        }

    def test_naive_event_time_sent_as_utc(self) -> None:
        notification = AndroidNotification(event_time=datetime(2024, 1, 2, 3, 4, 5))

        assert notification.event_time == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert notification.to_wire() == {"event_time": "2024-01-02T03:04:05Z"}

    def test_aware_event_time_keeps_offset(self) -> None:
        notification = AndroidNotification(event_time=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))

        assert notification.to_wire() == {"event_time": "2024-01-02T03:04:05Z"}
