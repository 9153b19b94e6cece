"""Firebase Cloud Messaging v1 send API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fcm_client.models.message import Message, MessageEnvelope, MessageOutput

if TYPE_CHECKING:
    from fcm_client.services.transport import GoogleRestTransport

logger = logging.getLogger(__name__)


class MessagingService:
    """Wraps https://firebase.google.com/docs/reference/fcm/rest/v1/projects.messages/send"""

    def __init__(self, transport: GoogleRestTransport, project_id: str, base_url: str) -> None:
        self.transport = transport
        self.project_id = project_id
        self.base_url = base_url

    @property
    def send_endpoint(self) -> str:
        return f"{self.base_url}/v1/projects/{self.project_id}/messages:send"

    async def send(self, message: Message, validate_only: bool = False) -> MessageOutput:
        """
        Submit a message.

        Args:
            message: Message to deliver
            validate_only: Dry run; FCM validates the message without delivering it

        Returns:
            The name FCM assigned to the message
        """
        envelope = MessageEnvelope(validate_only=validate_only, message=message)

        logger.debug(
            "Sending message",
            extra={
                "target_kind": message.target.kind,
                "validate_only": validate_only,
            },
        )

        output = await self.transport.post(
            self.send_endpoint,
            MessageOutput,
            payload=envelope.to_wire(),
        )

        logger.info(
            "Message accepted",
            extra={
                "message_name": output.name,
                "validate_only": validate_only,
            },
        )
        return output
