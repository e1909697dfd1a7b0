"""HTTP client for the upstream PFM vendor API used by data migrations."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pfm_simulator.config import get_settings

logger = logging.getLogger(__name__)


class VendorFetchError(RuntimeError):
    """Raised when the vendor API answers with a non-2xx status or is unreachable."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class VendorAPIClient:
    """Minimal read-only client for ``https://{partner_domain}/api/v2``."""

    def __init__(
        self,
        partner_domain: str,
        token: str,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.partner_domain = partner_domain
        self.base_url = f"{settings.vendor_api_scheme}://{partner_domain}/api/v2"
        self.token = token
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or settings.vendor_api_timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "VendorAPIClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def set_token(self, token: str) -> None:
        self.token = token

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``endpoint`` and return the decoded JSON body."""

        logger.info("Fetching vendor resource %s%s", self.base_url, endpoint)
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }
        try:
            response = self._client.get(endpoint, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise VendorFetchError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            msg = f"Geezeo API error ({response.status_code}): {response.text}"
            raise VendorFetchError(msg, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise VendorFetchError(
                f"Geezeo API returned invalid JSON for {endpoint}"
            ) from exc

    def get_current_user(self) -> dict[str, Any]:
        payload = self.get("/users/current")
        if not isinstance(payload, dict):
            return {}
        if isinstance(payload.get("user"), dict):
            return payload["user"]
        users = payload.get("users")
        if isinstance(users, list) and users and isinstance(users[0], dict):
            return users[0]
        return payload

    def list_resource(self, endpoint: str, key: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return the list stored under ``key`` in the JSON response."""

        payload = self.get(endpoint, params=params)
        if isinstance(payload, dict):
            items = payload.get(key) or []
        elif isinstance(payload, list):
            items = payload
        else:
            items = []
        return [item for item in items if isinstance(item, dict)]


__all__ = ["VendorAPIClient", "VendorFetchError"]
