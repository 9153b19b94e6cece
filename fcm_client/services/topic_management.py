"""
Topic subscription management over the Instance ID server API.

See https://developers.google.com/instance-id/reference/server

Google offers no API to list the tokens of a topic, and expired tokens are
not removed automatically. Callers that need that view should record the
token/topic relation themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from fcm_client.exceptions import DecodeError
from fcm_client.models.common import TOPIC_PREFIX
from fcm_client.models.topic import (
    ApnsImportRequest,
    ApnsImportResponse,
    TopicInfoResponse,
    TopicManagementRequest,
    TopicManagementResponse,
    TopicManagementResult,
)
from fcm_client.utils.redaction import mask_token

if TYPE_CHECKING:
    from fcm_client.services.transport import GoogleRestTransport

logger = logging.getLogger(__name__)

# OAuth2 access tokens are only accepted by the IID API with this header
IID_HEADERS = {"access_token_auth": "true"}


class TopicManagementService:
    def __init__(self, transport: GoogleRestTransport, base_url: str) -> None:
        self.transport = transport
        self.base_url = base_url

    async def register_tokens(
        self,
        topic: str,
        tokens: Sequence[str],
    ) -> TopicManagementResponse:
        """Subscribe tokens to a topic (iid/v1:batchAdd)."""
        return await self._batch("batchAdd", topic, tokens)

    async def unregister_tokens(
        self,
        topic: str,
        tokens: Sequence[str],
    ) -> TopicManagementResponse:
        """Unsubscribe tokens from a topic (iid/v1:batchRemove)."""
        return await self._batch("batchRemove", topic, tokens)

    async def _batch(
        self,
        action: str,
        topic: str,
        tokens: Sequence[str],
    ) -> TopicManagementResponse:
        request = TopicManagementRequest.for_topic(topic, tokens)
        url = f"{self.base_url}/iid/v1:{action}"

        response = await self.transport.post(
            url,
            TopicManagementResponse,
            payload=request.to_wire(),
            headers=IID_HEADERS,
        )

        # results are matched to tokens by position
        if len(response.results) != len(request.registration_tokens):
            raise DecodeError(
                f"expected {len(request.registration_tokens)} results, got {len(response.results)}",
                context={"url": url, "topic": request.to},
            )

        logger.info(
            "Topic management call completed",
            extra={
                "action": action,
                "topic": request.to,
                "token_count": len(request.registration_tokens),
                "failure_count": response.failure_count,
            },
        )
        return response

    async def register_token(self, topic: str, token: str) -> TopicManagementResult:
        """Subscribe a single token (iid/v1/{token}/rel/topics/{topic})."""
        topic_name = topic.removeprefix(TOPIC_PREFIX)
        url = f"{self.base_url}/iid/v1/{token}/rel/topics/{topic_name}"

        result = await self.transport.post(url, TopicManagementResult, headers=IID_HEADERS)

        logger.info(
            "Token registered to topic",
            extra={"topic": topic_name, "token": mask_token(token), "error_code": result.error},
        )
        return result

    async def get_info(self, token: str, include_topics: bool = False) -> TopicInfoResponse:
        """
        Look up a token (iid/info/{token}).

        Args:
            token: Registration token to inspect
            include_topics: Request ``details=true`` so that ``rel.topics``
                            lists the token's subscriptions
        """
        url = f"{self.base_url}/iid/info/{token}"
        params = {"details": "true"} if include_topics else None

        info = await self.transport.get(url, TopicInfoResponse, params=params, headers=IID_HEADERS)

        logger.debug(
            "Token info retrieved",
            extra={"token": mask_token(token), "topic_count": len(info.topic_names)},
        )
        return info

    async def import_apns_tokens(
        self,
        application: str,
        apns_tokens: Sequence[str],
        sandbox: bool = False,
    ) -> ApnsImportResponse:
        """
        Turn APNs device tokens into FCM registration tokens (iid/v1:batchImport).

        Args:
            application: Bundle id of the app, e.g. "com.google.FCMTestApp"
            apns_tokens: APNs device tokens
            sandbox: True for the APNs sandbox environment
        """
        request = ApnsImportRequest(
            application=application,
            sandbox=sandbox,
            apns_tokens=list(apns_tokens),
        )
        url = f"{self.base_url}/iid/v1:batchImport"

        response = await self.transport.post(
            url,
            ApnsImportResponse,
            payload=request.to_wire(),
            headers=IID_HEADERS,
        )

        logger.info(
            "APNs tokens imported",
            extra={
                "application": application,
                "token_count": len(request.apns_tokens),
                "imported": sum(1 for r in response.results if r.registration_token),
            },
        )
        return response
