"""
FCMClient: typed access to the FCM v1 send API and the Instance ID topic APIs.

On creation the client loads credentials from the well-known locations
(for example the service account file named by GOOGLE_APPLICATION_CREDENTIALS)
and resolves the Firebase project id. See https://google.aip.dev/auth/4110

    async with await FCMClient.create() as client:
        response = await client.register_tokens_to_topic("news", ["token_0", "token_1"])
        # results: [{}, {"error": "INVALID_ARGUMENT"}]
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import Sequence
from typing import TYPE_CHECKING

import httpx

from fcm_client.config import Settings, load_settings
from fcm_client.exceptions import ConstructionError
from fcm_client.services.auth import GoogleTokenProvider
from fcm_client.services.messaging import MessagingService
from fcm_client.services.topic_management import TopicManagementService
from fcm_client.services.transport import GoogleRestTransport
from fcm_client.utils.error_handling import log_errors

if TYPE_CHECKING:
    from types import TracebackType

    from google.auth.credentials import Credentials

    from fcm_client.models.message import Message, MessageOutput
    from fcm_client.models.topic import (
        ApnsImportResponse,
        TopicInfoResponse,
        TopicManagementResponse,
        TopicManagementResult,
    )

logger = logging.getLogger(__name__)


class FCMClient:
    """
    Client handle for FCM and Instance ID APIs.

    Build it once with ``await FCMClient.create()`` and share it freely
    between tasks: it holds only read-only configuration, the credentials
    and the HTTP client. Every method is one HTTP round trip with no retry.
    """

    def __init__(
        self,
        project_id: str,
        token_provider: GoogleTokenProvider,
        http_client: httpx.AsyncClient,
        settings: Settings,
        owns_http_client: bool = True,
    ) -> None:
        self.project_id = project_id
        self.settings = settings
        self.http_client = http_client
        self._owns_http_client = owns_http_client

        self.transport = GoogleRestTransport(http_client, token_provider)
        self.messaging = MessagingService(self.transport, project_id, settings.fcm_base_url)
        self.topics = TopicManagementService(self.transport, settings.iid_base_url)

    @classmethod
    async def create(
        cls,
        project_id: str | None = None,
        *,
        settings: Settings | None = None,
        credentials: Credentials | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> FCMClient:
        """
        Build a ready-to-use client.

        Args:
            project_id: Firebase project id. Defaults to the settings
                        (GOOGLE_CLOUD_PROJECT / GCP_PROJECT), then to the
                        project of the loaded credentials.
            settings: Settings to use instead of ``load_settings()``
            credentials: google-auth credentials to use instead of discovery
            http_client: httpx client to use; the caller then owns closing it

        Raises:
            ConstructionError: If settings, credentials or the project id
                               cannot be acquired
        """
        if settings is None:
            settings = load_settings()

        token_provider = await asyncio.to_thread(
            GoogleTokenProvider.from_settings,
            settings,
            credentials,
        )

        project_id = project_id or settings.project_id or token_provider.project_id
        if not project_id:
            msg = (
                "Cannot detect Google Cloud project id. "
                "Provide it with the GOOGLE_CLOUD_PROJECT environment variable."
            )
            raise ConstructionError(msg, context={"checked": ["GOOGLE_CLOUD_PROJECT", "GCP_PROJECT", "credentials"]})

        owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=settings.timeout_seconds,
                verify=_tls_verify(settings),
            )

        logger.info(
            "FCM client created",
            extra={
                "project_id": project_id,
                "fcm_base_url": settings.fcm_base_url,
                "iid_base_url": settings.iid_base_url,
            },
        )
        return cls(
            project_id,
            token_provider,
            http_client,
            settings,
            owns_http_client=owns_http_client,
        )

    @log_errors("send")
    async def send(self, message: Message) -> MessageOutput:
        """Send the message through FCM."""
        return await self.messaging.send(message)

    @log_errors("validate")
    async def validate(self, message: Message) -> MessageOutput:
        """Validate the message with FCM without delivering it (dry run)."""
        return await self.messaging.send(message, validate_only=True)

    @log_errors("register_tokens_to_topic")
    async def register_tokens_to_topic(
        self,
        topic: str,
        tokens: Sequence[str],
    ) -> TopicManagementResponse:
        """
        Subscribe tokens to a topic.

        Args:
            topic: Topic to follow, without the "/topics/" prefix
            tokens: Registration tokens; ``results[i]`` of the response is the
                    outcome for ``tokens[i]``. An empty list is still sent.
        """
        return await self.topics.register_tokens(topic, tokens)

    @log_errors("unregister_tokens_from_topic")
    async def unregister_tokens_from_topic(
        self,
        topic: str,
        tokens: Sequence[str],
    ) -> TopicManagementResponse:
        """Unsubscribe tokens from a topic; results are positional like registration."""
        return await self.topics.unregister_tokens(topic, tokens)

    @log_errors("register_token_to_topic")
    async def register_token_to_topic(self, topic: str, token: str) -> TopicManagementResult:
        return await self.topics.register_token(topic, token)

    @log_errors("get_info_by_iid_token")
    async def get_info_by_iid_token(
        self,
        token: str,
        include_topics: bool = False,
    ) -> TopicInfoResponse:
        """
        Get what the IID service knows about a token.

        ``rel.topics`` is filled in if and only if ``include_topics`` is set.
        """
        return await self.topics.get_info(token, include_topics)

    @log_errors("import_apns_tokens")
    async def import_apns_tokens(
        self,
        application: str,
        apns_tokens: Sequence[str],
        sandbox: bool = False,
    ) -> ApnsImportResponse:
        return await self.topics.import_apns_tokens(application, apns_tokens, sandbox)

    async def aclose(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> FCMClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _tls_verify(settings: Settings) -> bool | ssl.SSLContext:
    if settings.ca_bundle is None:
        return settings.verify_tls
    try:
        return ssl.create_default_context(cafile=str(settings.ca_bundle))
    except (OSError, ssl.SSLError) as e:
        msg = f"Unable to load CA bundle: {e}"
        raise ConstructionError(msg, context={"ca_bundle": str(settings.ca_bundle)}) from e
