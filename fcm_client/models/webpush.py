"""Webpush protocol (RFC 8030) options."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict, Field

from fcm_client.models.common import WireModel


class WebpushNotificationAction(WireModel):
    action: str
    title: str
    icon: str | None = None


class WebpushNotification(WireModel):
    """
    Web Notification options, mirroring the browser Notification API.

    ``title`` and ``body`` override the top-level Notification for web
    targets. Notification API properties not declared here are passed
    through unchanged.
    See https://developer.mozilla.org/en-US/docs/Web/API/Notification
    """

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    body: str | None = None
    icon: str | None = None
    badge: str | None = None
    image: str | None = None
    lang: str | None = None
    tag: str | None = None
    dir: Literal["auto", "ltr", "rtl"] | None = None
    renotify: bool | None = None
    require_interaction: bool | None = Field(None, alias="requireInteraction")
    silent: bool | None = None
    timestamp: int | None = None
    vibrate: list[int] | None = None
    actions: list[WebpushNotificationAction] | None = None
    data: Any | None = None


class WebpushFcmOptions(WireModel):
    # HTTPS is required for the link
    link: str | None = None
    analytics_label: str | None = None


class WebpushConfig(WireModel):
    """
    Webpush specific options.

    ``headers`` are webpush protocol headers, e.g. {"TTL": "15"}.
    """

    headers: dict[str, str] | None = None
    data: dict[str, str] | None = None
    notification: WebpushNotification | None = None
    fcm_options: WebpushFcmOptions | None = None
