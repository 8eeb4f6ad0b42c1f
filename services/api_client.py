import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote

import requests

from services import config

logger = logging.getLogger(__name__)

# Characters left unescaped by the browser's encodeURIComponent
_UNRESERVED = "-_.!~*'()"


class ApiError(Exception):
    """Raised for transport failures, non-2xx statuses and undecodable bodies."""

    def __init__(self, path: str, status: Optional[int] = None, message: Optional[str] = None):
        self.path = path
        self.status = status
        self.message = message
        if status is not None:
            text = f"API error: {status} for {path}"
        else:
            text = f"API request to {path} failed"
        if message:
            text = f"{text} ({message})"
        super().__init__(text)


@dataclass(frozen=True)
class ApiResult:
    value: Any = None
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = 'true' if value else 'false'
    return quote(str(value), safe=_UNRESERVED)


def build_query_string(params: Optional[Mapping[str, Any]]) -> str:
    if not params:
        return ''
    return '&'.join(
        f"{_encode(key)}={_encode(value)}"
        for key, value in params.items()
        if value is not None
    )


def build_url(base_url: str, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    query = build_query_string(params)
    url = f"{base_url}{path}"
    return f"{url}?{query}" if query else url


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url if base_url is not None else config.API_URL).rstrip('/')
        self.api_key = api_key if api_key is not None else config.API_KEY
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['x-api-key'] = self.api_key
        return headers

    def call(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Issue a GET for ``path`` and return the decoded JSON body.

        Parameters whose value is None are left out of the query string.
        Any failure is logged and raised as ApiError; there is no retry.
        """
        url = build_url(self.base_url, path, params)
        try:
            response = self.session.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.error("Error fetching %s: %s", path, exc)
            raise ApiError(path, message=str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.error("Error fetching %s: HTTP %s", path, response.status_code)
            raise ApiError(path, status=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Error decoding %s response: %s", path, exc)
            raise ApiError(path, status=response.status_code, message='invalid JSON body') from exc

    def fetch(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResult:
        try:
            return ApiResult(value=self.call(path, params))
        except ApiError as exc:
            return ApiResult(error=exc)


_client: Optional[ApiClient] = None


def get_api_client() -> ApiClient:
    """Gets the process-wide client built from the environment configuration."""
    global _client
    if _client is None:
        _client = ApiClient()
    return _client
