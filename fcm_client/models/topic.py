"""
Instance ID (IID) topic management request/response models.

See https://developers.google.com/instance-id/reference/server
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import Field

from fcm_client.models.common import TOPIC_PREFIX, ResponseModel, WireModel


def topic_path(topic: str) -> str:
    """Return "/topics/{topic}", accepting names with or without the prefix."""
    if topic.startswith(TOPIC_PREFIX):
        return topic
    return f"{TOPIC_PREFIX}{topic}"


class TopicManagementRequest(WireModel):
    """Body of iid/v1:batchAdd and iid/v1:batchRemove."""

    to: str
    registration_tokens: list[str]

    @classmethod
    def for_topic(cls, topic: str, tokens: Sequence[str]) -> TopicManagementRequest:
        return cls(to=topic_path(topic), registration_tokens=list(tokens))


class TopicManagementResult(ResponseModel):
    """
    Outcome for one token of a bulk call.

    ``{}`` means the token was (un)registered; otherwise ``error`` holds the
    code reported by the API, e.g. NOT_FOUND, INVALID_ARGUMENT, INTERNAL,
    TOO_MANY_TOPICS.
    """

    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class TopicManagementResponse(ResponseModel):
    """
    Raw response of a bulk topic management call.

        {"results": [{}, {"error": "INVALID_ARGUMENT"}, {}]}

    ``results[i]`` is the outcome for the i-th token of the request.
    """

    results: list[TopicManagementResult]

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.results) - self.success_count

    def pair_with(self, tokens: Sequence[str]) -> list[tuple[str, TopicManagementResult]]:
        """
        Pair each request token with its result, position for position.

        Raises:
            ValueError: If ``tokens`` is not the token list of the request
        """
        if len(tokens) != len(self.results):
            msg = f"Got {len(self.results)} results for {len(tokens)} tokens"
            raise ValueError(msg)
        return list(zip(tokens, self.results))

    def failed_tokens(self, tokens: Sequence[str]) -> dict[str, str]:
        """Map every token that failed to its error code."""
        return {
            token: result.error
            for token, result in self.pair_with(tokens)
            if result.error is not None
        }


class TopicSubscription(ResponseModel):
    add_date: str | None = Field(None, alias="addDate")


class Rel(ResponseModel):
    topics: dict[str, TopicSubscription] = Field(default_factory=dict)


class TopicInfoResponse(ResponseModel):
    """
    Response of iid/info/{token}.

    ``rel`` is only present when the details were requested and the token
    follows at least one topic.
    """

    application: str
    authorized_entity: str = Field(..., alias="authorizedEntity")
    platform: str
    app_signer: str | None = Field(None, alias="appSigner")
    application_version: str | None = Field(None, alias="applicationVersion")
    attest_status: str | None = Field(None, alias="attestStatus")
    connection_type: str | None = Field(None, alias="connectionType")
    connect_date: str | None = Field(None, alias="connectDate")
    rel: Rel | None = None

    @property
    def topic_names(self) -> list[str]:
        if self.rel is None:
            return []
        return sorted(self.rel.topics)


class ApnsImportRequest(WireModel):
    """Body of iid/v1:batchImport."""

    application: str
    sandbox: bool = False
    apns_tokens: list[str]


class ApnsImportResult(ResponseModel):
    apns_token: str
    status: str
    # only present when the import succeeded
    registration_token: str | None = None


class ApnsImportResponse(ResponseModel):
    results: list[ApnsImportResult]
