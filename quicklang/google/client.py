from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from quicklang.exceptions import AuthenticationError, GoogleApiError

logger = logging.getLogger(__name__)

DEFAULT_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/calendar",
]


def _error_message(resp: httpx.Response) -> str:
    try:
        return resp.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return resp.text[:200]


def require(**params: Any) -> None:
    """Raise ValueError for the first identifying parameter that is missing or empty."""
    for name, value in params.items():
        if value is None or value == "" or value == []:
            raise ValueError(f"{name} is required")


class GoogleApiClient:
    """Authenticated HTTP access to Google REST APIs with a service account.

    ``initialize()`` performs the one-time credential handshake. Every request
    after that carries the bearer token, refreshed when it expires.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        key_file_path: str,
        scopes: list[str] | None = None,
    ):
        self._http = http_client
        self._key_file_path = key_file_path
        self._scopes = scopes or DEFAULT_SCOPES
        self._credentials: service_account.Credentials | None = None

    @property
    def authenticated(self) -> bool:
        return self._credentials is not None

    def _load_credentials(self) -> service_account.Credentials:
        credentials = service_account.Credentials.from_service_account_file(
            self._key_file_path, scopes=self._scopes
        )
        credentials.refresh(Request())
        return credentials

    async def initialize(self) -> None:
        try:
            # google-auth is synchronous; keep the token exchange off the event loop
            credentials = await asyncio.to_thread(self._load_credentials)
        except (GoogleAuthError, OSError, ValueError) as e:
            logger.error("Google API authentication failed: %s", e)
            raise AuthenticationError("Could not authenticate with Google APIs") from e
        self._credentials = credentials
        logger.info("Google API client initialized")

    async def _auth_headers(self, operation: str) -> dict[str, str]:
        if self._credentials is None:
            raise RuntimeError("Google API client is not initialized. Call initialize() first.")
        if not self._credentials.valid:
            try:
                await asyncio.to_thread(self._credentials.refresh, Request())
            except GoogleAuthError as e:
                logger.error("%s: token refresh failed: %s", operation, e)
                raise GoogleApiError(operation, None, f"token refresh failed: {e}") from e
        return {"Authorization": f"Bearer {self._credentials.token}"}

    async def request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict:
        """Issue one API call and return the decoded JSON body.

        ``None`` values are dropped from ``params`` so optional arguments the
        caller left out never reach the API.
        """
        request_headers = await self._auth_headers(operation)
        if headers:
            request_headers.update(headers)
        query = {k: v for k, v in (params or {}).items() if v is not None}

        try:
            resp = await self._http.request(
                method,
                url,
                params=query or None,
                json=json,
                content=content,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            logger.error("%s failed: %s", operation, e)
            raise GoogleApiError(operation, None, str(e)) from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.error("%s failed [%s]: %s", operation, resp.status_code, message)
            raise GoogleApiError(operation, resp.status_code, message)

        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as e:
            logger.error("%s returned a non-JSON body [%s]", operation, resp.status_code)
            raise GoogleApiError(operation, resp.status_code, "Response body is not JSON") from e
        if not isinstance(data, dict):
            logger.error("%s returned a non-object body [%s]", operation, resp.status_code)
            raise GoogleApiError(operation, resp.status_code, "Response body is not a JSON object")
        return data
