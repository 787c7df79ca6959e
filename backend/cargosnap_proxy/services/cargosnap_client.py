"""
CargoSnap Proxy — Upstream Client
===================================

What:  Sends a single request to the CargoSnap API with the server-held token attached.
How:   Builds the URL from the configured base, places parameters in the query string
       (GET/PATCH/DELETE) or the body (POST: JSON, or multipart when files are given),
       and translates any non-2xx answer or transport failure into UpstreamError.
Who:   Called by every route handler.
When:  Once per proxied request; never retried.

Credential placement (CARGOSNAP_AUTH_MODE):
    bearer → Authorization: Bearer <token>
    query  → ?token=<token>
"""

import logging
from typing import IO, Any, Dict, List, Optional, Tuple

import httpx

from cargosnap_proxy.config import settings
from cargosnap_proxy.exceptions import UpstreamError

logger = logging.getLogger(__name__)

# (field name, (filename, file object, content type)); httpx streams the file in chunks
FilePart = Tuple[str, Tuple[str, IO[bytes], str]]

ALLOWED_METHODS = {"GET", "POST", "PATCH", "DELETE"}


class CargoSnapClient:
    """
    Thin adapter over httpx for the CargoSnap API.

    A fresh httpx.AsyncClient is opened per call, so instances hold nothing but
    configuration and are safe to share across concurrent requests.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        auth_mode: Optional[str] = None,
    ):
        """
        Args:
            base_url:  Override settings.cargosnap_url (used in tests).
            api_key:   Override settings.cargosnap_api_key.
            auth_mode: Override settings.cargosnap_auth_mode ("bearer" or "query").
        """
        self.base_url = (base_url if base_url is not None else settings.cargosnap_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.cargosnap_api_key
        self.auth_mode = auth_mode or settings.cargosnap_auth_mode

    async def request(
        self,
        endpoint: str,
        method: str,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[List[FilePart]] = None,
    ) -> Any:
        """
        Forward one request to CargoSnap and return its body.

        Args:
            endpoint: Path below the base URL, starting with "/" (e.g. "/files/123").
            method:   GET, POST, PATCH or DELETE.
            params:   Query parameters, or body fields for POST. None values are dropped.
            files:    Multipart parts; switches a POST body from JSON to multipart.

        Returns:
            The parsed JSON body on any 2xx status, the raw text if the body is not
            JSON, or None when the body is empty.

        Raises:
            UpstreamError: Non-2xx status or transport failure (already logged).
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported method '{method}'. Must be one of: {ALLOWED_METHODS}")

        url = f"{self.base_url}{endpoint}"
        payload = {key: value for key, value in (params or {}).items() if value is not None}
        headers = {"Accept": "application/json"}
        query: Dict[str, Any] = {}

        if self.auth_mode == "query":
            query["token"] = self.api_key
        else:
            headers["Authorization"] = f"Bearer {self.api_key}"

        request_kwargs: Dict[str, Any] = {"headers": headers}
        if method == "POST":
            if files:
                request_kwargs["data"] = payload
                request_kwargs["files"] = files
            else:
                request_kwargs["json"] = payload
        else:
            query.update(payload)
        if query:
            request_kwargs["params"] = query

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(method, url, **request_kwargs)
        except httpx.RequestError as e:
            logger.error(
                "CargoSnap request failed: %s %s (%s: %s)",
                method,
                endpoint,
                type(e).__name__,
                str(e),
            )
            raise UpstreamError(context={"endpoint": endpoint, "method": method}) from e

        if not response.is_success:
            message = self._extract_message(response)
            logger.error(
                "CargoSnap responded %d to %s %s: %s",
                response.status_code,
                method,
                endpoint,
                message or response.text[:200],
            )
            raise UpstreamError(
                message=message,
                status_code=response.status_code,
                context={"endpoint": endpoint, "method": method},
            )

        return self._parse_body(response)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        """Decodes a success body: JSON when possible, text otherwise, None when empty."""
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _extract_message(response: httpx.Response) -> Optional[str]:
        """Pulls the upstream's own error message out of a failure body, if it sent one."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            for key in ("message", "error"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return None


# ── Singleton Instance ────────────────────────────────────────────────────
cargosnap_client = CargoSnapClient()
