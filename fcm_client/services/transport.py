"""Authenticated JSON round trips against Google REST APIs."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from fcm_client.exceptions import (
    AuthError,
    DecodeError,
    InvalidRequestError,
    ServerError,
    TransportError,
    UnexpectedStatusError,
)
from fcm_client.version import user_agent

if TYPE_CHECKING:
    from fcm_client.services.auth import GoogleTokenProvider

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def parse_retry_after(value: str | None) -> timedelta | None:
    """Parse a Retry-After header given either in seconds or as an HTTP date."""
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        return timedelta(seconds=int(value))
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max(retry_at - datetime.now(timezone.utc), timedelta(0))


class GoogleRestTransport:
    """
    Sends one authenticated request per call and decodes the JSON answer.

    The httpx client and the token provider are shared read-only by every
    concurrent call. Nothing is retried: network failures, rejected
    credentials, non-success statuses and undecodable bodies each surface
    as their own exception.
    """

    def __init__(self, http_client: httpx.AsyncClient, token_provider: GoogleTokenProvider) -> None:
        self.http_client = http_client
        self.token_provider = token_provider

    async def post(
        self,
        url: str,
        response_model: type[ResponseT],
        payload: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ResponseT:
        return await self.request("POST", url, response_model, payload=payload, headers=headers)

    async def get(
        self,
        url: str,
        response_model: type[ResponseT],
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ResponseT:
        return await self.request("GET", url, response_model, params=params, headers=headers)

    async def request(
        self,
        method: str,
        url: str,
        response_model: type[ResponseT],
        payload: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> ResponseT:
        """
        Send a request and decode the response into ``response_model``.

        Args:
            method: HTTP method
            url: Absolute endpoint URL
            response_model: Pydantic model describing a successful body
            payload: JSON body, already in wire form
            params: Query parameters
            headers: Extra headers for this endpoint

        Raises:
            AuthError: If no token can be obtained or the API answers 401
            TransportError: If the request never got a response
            InvalidRequestError: On 4xx
            ServerError: On 5xx
            UnexpectedStatusError: On any other non-success status
            DecodeError: If a success body does not match ``response_model``
        """
        request_headers = {
            "Authorization": await self.token_provider.authorization_header(),
            "Accept": "application/json",
            "User-Agent": user_agent(),
        }
        if payload is not None:
            request_headers["Content-Type"] = "application/json"
        request_headers.update(headers or {})

        logger.debug("Sending request", extra={"method": method, "url": url})

        try:
            response = await self.http_client.request(
                method,
                url,
                json=payload,
                params=params,
                headers=request_headers,
            )
        except httpx.RequestError as e:
            msg = f"{method} {url} failed: {type(e).__name__}: {e}"
            raise TransportError(
                msg,
                cause=e,
                context={"method": method, "url": url, "error_type": type(e).__name__},
            ) from e

        logger.info(
            "Response received",
            extra={"method": method, "url": url, "status_code": response.status_code},
        )

        return self.handle_response(response, response_model, method=method, url=url)

    @staticmethod
    def handle_response(
        response: httpx.Response,
        response_model: type[ResponseT],
        method: str = "",
        url: str = "",
    ) -> ResponseT:
        status_code = response.status_code
        context: dict[str, object] = {"method": method, "url": url, "status_code": status_code}

        if response.is_success:
            try:
                return response_model.model_validate_json(response.content)
            except ValidationError as e:
                raise DecodeError(
                    f"expected {response_model.__name__}: {e}",
                    body=response.text,
                    context={**context, "response_model": response_model.__name__},
                ) from e

        details = response.text or None

        if status_code == 401:
            msg = "Unable to access Firebase resource, credentials were rejected"
            raise AuthError(msg, context={**context, "details": details})

        if response.is_client_error:
            msg = f"Request rejected by the API ({status_code})"
            raise InvalidRequestError(msg, status_code, details, context=context)

        if response.is_server_error:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            msg = f"API server error ({status_code})"
            raise ServerError(
                msg,
                status_code,
                details,
                retry_after=retry_after,
                context={**context, "retry_after_seconds": retry_after.total_seconds() if retry_after else None},
            )

        msg = f"Unexpected response status ({status_code})"
        raise UnexpectedStatusError(msg, status_code, details, context=context)
