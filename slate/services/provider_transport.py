"""HTTP transport to the OpenAI and OpenRouter chat-completions APIs."""

import logging

import httpx
from pydantic import ValidationError

from slate.core.config import Settings, settings as default_settings
from slate.exceptions.provider import (
    DecodeFailureError,
    InvalidEndpointError,
    NoContentError,
    ProviderResponseError,
    TransportFailureError,
)
from slate.schemas.catalog import ModelListResponse
from slate.schemas.completion import ChatCompletionResponse, CompletionRequest
from slate.schemas.settings import APIProvider

logger = logging.getLogger(__name__)


class ProviderTransport:
    """Single request/response calls to a completion provider.

    No retries and no streaming. An ``httpx.AsyncClient`` can be injected;
    otherwise one is created lazily and closed by :meth:`aclose`.
    """

    def __init__(self, config: Settings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = config or default_settings
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.request_timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def complete(self, provider: APIProvider, api_key: str, request: CompletionRequest) -> str:
        """POST the payload and return the first choice's message content.

        Raises:
            InvalidEndpointError: If the provider base URL is unusable.
            TransportFailureError: On network, timeout or connection errors.
            ProviderResponseError: If the provider answers with an error status.
            DecodeFailureError: If the body is not a chat completion.
            NoContentError: If there is no choice or its content is null.
        """
        url = self._endpoint(provider, "chat/completions")
        logger.debug("Sending completion request to %s with model %s", provider.value, request.model)

        response = await self._send("POST", url, provider, api_key, json=request.to_payload())
        body = self._decode(response, ChatCompletionResponse)

        content = body.first_content
        if content is None:
            raise NoContentError()
        return content

    async def list_models(self, provider: APIProvider, api_key: str) -> list[str]:
        """GET the provider's model listing and return the ids."""
        url = self._endpoint(provider, "models")
        response = await self._send("GET", url, provider, api_key)
        body = self._decode(response, ModelListResponse)
        return [entry.id for entry in body.data]

    def headers_for(self, provider: APIProvider, api_key: str) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if provider == APIProvider.OPENROUTER:
            headers["HTTP-Referer"] = self.settings.openrouter_referer
            headers["X-Title"] = self.settings.openrouter_title
        return headers

    # Private helper methods

    def _endpoint(self, provider: APIProvider, path: str) -> httpx.URL:
        base = self.settings.base_url_for(provider)
        try:
            url = httpx.URL(base.rstrip("/") + "/" + path)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidEndpointError(f"Invalid endpoint for {provider.value}: {base}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidEndpointError(f"Invalid endpoint for {provider.value}: {base}")
        return url

    async def _send(
        self,
        method: str,
        url: httpx.URL,
        provider: APIProvider,
        api_key: str,
        json: dict | None = None,
    ) -> httpx.Response:
        try:
            response = await self.client.request(
                method, url, headers=self.headers_for(provider, api_key), json=json
            )
        except httpx.HTTPError as e:
            logger.warning("%s request to %s failed: %s", method, provider.value, e)
            raise TransportFailureError(f"Could not reach {provider.value}: {e}") from e

        if response.status_code >= 400:
            raise ProviderResponseError(
                _provider_error_message(response, provider), status=response.status_code
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response, schema):
        try:
            return schema.model_validate(response.json())
        except ValueError as e:
            # pydantic's ValidationError and json.JSONDecodeError are both ValueErrors
            kind = "unexpected response format" if isinstance(e, ValidationError) else "invalid JSON"
            raise DecodeFailureError(f"Could not decode the provider response: {kind}") from e


def _provider_error_message(response: httpx.Response, provider: APIProvider) -> str:
    """Pull ``error.message`` out of an error body when the provider sends one."""
    try:
        body = response.json()
    except ValueError:
        body = None

    error = body.get("error") if isinstance(body, dict) else None
    message = error.get("message") if isinstance(error, dict) else error
    if not message:
        message = response.reason_phrase or "request failed"
    return f"{provider.value} returned HTTP {response.status_code}: {message}"
