"""Bearer credentials for Google APIs, delegated to google-auth."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import google.auth
from google.auth import exceptions as google_auth_exceptions
from google.auth.credentials import Credentials, with_scopes_if_required
from google.auth.transport.requests import Request

from fcm_client.exceptions import AuthError, ConstructionError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fcm_client.config import Settings

logger = logging.getLogger(__name__)


class GoogleTokenProvider:
    """
    Supplies an Authorization header value for each request.

    Token caching and expiry are handled by the google-auth credentials
    object; this class only asks it for a fresh token when the current one
    is missing or expired. A failed refresh is reported as AuthError and not
    retried.
    """

    def __init__(self, credentials: Credentials, project_id: str | None = None) -> None:
        self.credentials = credentials
        self.project_id = project_id

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        credentials: Credentials | None = None,
    ) -> GoogleTokenProvider:
        """
        Acquire credentials the way Google client libraries do.

        Order: explicit ``credentials``, then ``settings.credentials_file``,
        then Application Default Credentials (GOOGLE_APPLICATION_CREDENTIALS,
        gcloud user credentials, metadata server).

        Raises:
            ConstructionError: If no usable credentials are found
        """
        scopes: Sequence[str] = settings.scopes
        project_id: str | None = None

        try:
            if credentials is not None:
                credentials = with_scopes_if_required(credentials, scopes)
                project_id = getattr(credentials, "project_id", None)
                source = "explicit"
            elif settings.credentials_file is not None:
                credentials, project_id = google.auth.load_credentials_from_file(
                    str(settings.credentials_file),
                    scopes=scopes,
                )
                source = "file"
            else:
                credentials, project_id = google.auth.default(scopes=scopes)
                source = "default"
        except google_auth_exceptions.DefaultCredentialsError as e:
            msg = f"Unable to load Google credentials: {e}"
            raise ConstructionError(
                msg,
                context={
                    "credentials_file": str(settings.credentials_file)
                    if settings.credentials_file
                    else None,
                },
            ) from e

        logger.info(
            "Google credentials loaded",
            extra={"credentials_source": source, "project_id": project_id},
        )
        return cls(credentials, project_id)

    async def authorization_header(self) -> str:
        """
        Return "Bearer <token>", refreshing the credentials first if needed.

        The refresh is blocking I/O and runs in a worker thread.

        Raises:
            AuthError: If the credentials cannot be refreshed
        """
        if not self.credentials.valid:
            try:
                await asyncio.to_thread(self.credentials.refresh, Request())
            except (google_auth_exceptions.RefreshError, google_auth_exceptions.TransportError) as e:
                msg = "Unable to obtain an access token"
                raise AuthError(msg, context={"reason": str(e)}) from e
            logger.debug("Access token refreshed")
        return f"Bearer {self.credentials.token}"
