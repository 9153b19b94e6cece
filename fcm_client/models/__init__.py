"""Typed FCM and IID wire models."""

from fcm_client.models.android import (
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
from fcm_client.models.apns import (
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
    MutableContent,
)
from fcm_client.models.message import (
    Condition,
    FcmOptions,
    Message,
    MessageEnvelope,
    MessageOutput,
    Notification,
    Token,
    Topic,
)
from fcm_client.models.topic import (
    ApnsImportRequest,
    ApnsImportResponse,
    ApnsImportResult,
    Rel,
    TopicInfoResponse,
    TopicManagementRequest,
    TopicManagementResponse,
    TopicManagementResult,
    TopicSubscription,
)
from fcm_client.models.webpush import (
    WebpushConfig,
    WebpushFcmOptions,
    WebpushNotification,
    WebpushNotificationAction,
)

__all__ = [
    "AndroidConfig",
    "AndroidFcmOptions",
    "AndroidMessagePriority",
    "AndroidNotification",
    "ApnsAlert",
    "ApnsConfig",
    "ApnsFcmOptions",
    "ApnsHeaders",
    "ApnsImportRequest",
    "ApnsImportResponse",
    "ApnsImportResult",
    "ApnsPayload",
    "ApnsPriority",
    "ApnsPushType",
    "Aps",
    "Color",
    "Condition",
    "ContentAvailable",
    "CriticalSound",
    "FcmOptions",
    "LightSettings",
    "Message",
    "MessageEnvelope",
    "MessageOutput",
    "MutableContent",
    "Notification",
    "NotificationPriority",
    "Proxy",
    "Rel",
    "Token",
    "Topic",
    "TopicInfoResponse",
    "TopicManagementRequest",
    "TopicManagementResponse",
    "TopicManagementResult",
    "TopicSubscription",
    "Visibility",
    "WebpushConfig",
    "WebpushFcmOptions",
    "WebpushNotification",
    "WebpushNotificationAction",
]
