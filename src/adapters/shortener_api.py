"""Gateway to the shortening service (JSON over HTTP).

Endpoints (relative to `<api_base_url>/api`):
- POST   /shorten                     body: the long URL as a JSON string
- GET    /shorten/{code}/stats
- PUT    /shorten/{code}              body: the new long URL as a JSON string
- DELETE /shorten/{code}
- GET    /health                      plain-text body

Error mapping:
- no response at all          -> NetworkError
- 404 on a short-code route   -> NotFoundError
- any other non-2xx           -> ApiError (server `message` when present)
- 2xx with an unusable body   -> ApiError
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import ShortenResult, StatsResult
from core.errors import ApiError, NetworkError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _code_path(short_code: str) -> str:
    return "/shorten/" + quote(short_code, safe="")


def _server_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


class ShortenerApiClient:
    """HTTP implementation of `core.interfaces.gateway.ShortenerGateway`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.request(method, path, **kwargs)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc
        logger.debug("%s %s -> HTTP %s", method, path, response.status_code)
        return response

    @staticmethod
    def _parse(response: httpx.Response, model: type[ModelT], failure: str) -> ModelT:
        try:
            return model.model_validate(response.json())
        except (ValueError, ModelValidationError) as exc:
            logger.warning("Unexpected %s body: %s", model.__name__, exc)
            raise ApiError(failure, status_code=response.status_code) from exc

    async def shorten(self, long_url: str) -> ShortenResult:
        failure = "Failed to shorten URL"
        response = await self._request("POST", "/shorten", json=long_url)
        if not response.is_success:
            raise ApiError(_server_message(response) or failure, status_code=response.status_code)
        return self._parse(response, ShortenResult, failure)

    async def fetch_stats(self, short_code: str) -> StatsResult:
        failure = "Failed to retrieve statistics"
        response = await self._request("GET", _code_path(short_code) + "/stats")
        if response.status_code == 404:
            raise NotFoundError()
        if not response.is_success:
            raise ApiError(_server_message(response) or failure, status_code=response.status_code)
        return self._parse(response, StatsResult, failure)

    async def update(self, short_code: str, long_url: str) -> ShortenResult:
        failure = "Failed to update URL"
        response = await self._request("PUT", _code_path(short_code), json=long_url)
        if response.status_code == 404:
            raise NotFoundError()
        if not response.is_success:
            raise ApiError(_server_message(response) or failure, status_code=response.status_code)
        return self._parse(response, ShortenResult, failure)

    async def delete(self, short_code: str) -> None:
        response = await self._request("DELETE", _code_path(short_code))
        if response.status_code == 404:
            raise NotFoundError()
        if not response.is_success:
            raise ApiError(
                _server_message(response) or "Failed to delete URL",
                status_code=response.status_code,
            )

    async def check_health(self) -> bool:
        """True only on a 2xx answer; never raises."""

        try:
            response = await self._request("GET", "/health")
        except Exception as exc:
            logger.error("API health check failed: %s", exc)
            return False
        if response.is_success:
            logger.info("API health: %s", response.text.strip())
            return True
        logger.warning("API health check returned HTTP %s", response.status_code)
        return False
