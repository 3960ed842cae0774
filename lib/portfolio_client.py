# =============================================================================
# lib/portfolio_client.py - Portfolio API Client
# =============================================================================
# HTTP client for the portfolio API, used by the public site renderer,
# scripts and integration checks.
#
# GET requests are deduplicated: within `dedup_interval` seconds the same
# URL is answered from the local cache instead of the network. A 404
# resolves to None (and is cached too); any other error raises
# PortfolioClientError. Nothing is retried.
#
# Usage:
#   from lib.portfolio_client import PortfolioClient
#
#   with PortfolioClient("http://localhost:8000") as client:
#       profile = client.public_profile()
#       jobs = client.public_experience()
# =============================================================================

from __future__ import annotations

import copy
import logging
import time
from typing import Any

import httpx

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_DEDUP_INTERVAL = 60.0  # seconds


class PortfolioClientError(ApplicationError):
    """Non-404 error response from the portfolio API."""

    def __init__(self, message: str, status_code: int, url: str):
        super().__init__(
            message,
            code="API_ERROR",
            details={"status_code": status_code, "url": url},
        )
        self.status_code = status_code


class PortfolioClient:
    """
    Small typed client over the REST API.

    Args:
        base_url: API origin, e.g. "https://me.dev"
        access_token: Supabase access token for dashboard endpoints (optional)
        dedup_interval: Seconds a GET response is reused for the same URL
        transport: Custom httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        dedup_interval: float = DEFAULT_DEDUP_INTERVAL,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ):
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self.dedup_interval = dedup_interval
        self._cache: dict[str, tuple[float, Any]] = {}

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> PortfolioClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Core request helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _cache_key(path: str, params: dict[str, Any] | None) -> str:
        if not params:
            return path
        query = "&".join(f"{k}={v}" for k, v in sorted(params.items()) if v is not None)
        return f"{path}?{query}" if query else path

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = response.text
        if isinstance(body, dict):
            message = body.get("detail") or "Request failed"
        else:
            message = body or "Request failed"
        raise PortfolioClientError(str(message), response.status_code, str(response.url))

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET with dedup.

        Each call returns its own copy, so callers may modify the result
        without touching the cache.

        Returns:
            Decoded JSON body, or None for 404

        Raises:
            PortfolioClientError: For any other non-2xx response
        """
        key = self._cache_key(path, params)
        now = time.monotonic()

        cached = self._cache.get(key)
        if cached and now - cached[0] < self.dedup_interval:
            logger.debug(f"Dedup hit: {key}")
            return copy.deepcopy(cached[1])

        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        response = self._http.get(path, params=clean_params or None)

        if response.status_code == 404:
            data = None
        else:
            self._raise_for_error(response)
            data = response.json()

        self._cache[key] = (now, data)
        return copy.deepcopy(data)

    def send(self, method: str, path: str, **kwargs: Any) -> Any:
        """Non-GET request; never cached."""
        response = self._http.request(method, path, **kwargs)
        self._raise_for_error(response)
        return response.json()

    def mutate(self, path: str | None = None) -> None:
        """
        Drop cached GET responses.

        Args:
            path: Drop entries for this path (any query string). All entries
                when omitted.
        """
        if path is None:
            self._cache.clear()
            return
        for key in [k for k in self._cache if k == path or k.startswith(f"{path}?")]:
            del self._cache[key]

    # -------------------------------------------------------------------------
    # Public site
    # -------------------------------------------------------------------------

    def public_profile(self, profile_id: str | None = None) -> dict[str, Any] | None:
        return self.get("/api/profile/public", {"id": profile_id})

    def public_education(self, profile_id: str | None = None) -> list[dict[str, Any]]:
        return self.get("/api/education/public", {"profile_id": profile_id}) or []

    def public_experience(self, profile_id: str | None = None) -> list[dict[str, Any]]:
        return self.get("/api/experience/public", {"profile_id": profile_id}) or []

    def public_skills(self, profile_id: str | None = None) -> list[dict[str, Any]]:
        return self.get("/api/skills/public", {"profile_id": profile_id}) or []

    def public_projects(self, profile_id: str | None = None) -> list[dict[str, Any]]:
        return self.get("/api/projects/public", {"profile_id": profile_id}) or []

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    def my_profile(self) -> dict[str, Any] | None:
        return self.get("/api/profile")

    def update_profile(self, **fields: Any) -> dict[str, Any]:
        """PUT the given profile fields, then invalidate cached profile reads."""
        profile = self.send("PUT", "/api/profile", json=fields)
        self.mutate("/api/profile")
        self.mutate("/api/profile/public")
        return profile
