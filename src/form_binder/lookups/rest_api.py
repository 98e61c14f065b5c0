"""REST API lookup — resolves a key with ``GET {endpoint}``.

The key is interpolated into the endpoint (``/issues/{key}``).  A 404 means
"not found"; any other HTTP or transport error is a
:class:`~form_binder.failures.LookupFailure`.  Token auth comes from an
environment variable, so it can live in ``.env``.
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import quote

import httpx

from form_binder.failures import LookupFailure
from form_binder.lookups.base import NOT_FOUND, BaseLookup
from form_binder.registry import register_lookup

logger = logging.getLogger(__name__)


@register_lookup("rest_api")
class RESTAPILookup(BaseLookup):
    """Fetch a single JSON resource per key from a REST API."""

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        if "{key}" not in config.get("endpoint", ""):
            raise ValueError("rest_api lookup endpoint must contain a '{key}' placeholder")
        self._client: httpx.Client | None = None

    def connect(self) -> None:
        headers: dict[str, str] = dict(self._config.get("headers", {}))

        # Token auth from env var
        token_env = self._config.get("auth_token_env")
        if token_env:
            token = os.environ.get(token_env, "")
            if token:
                headers["Authorization"] = f"Bearer {token}"
            else:
                logger.warning(
                    "auth_token_env=%r is set in config but the env var is empty/unset",
                    token_env,
                )

        base_url = self._config.get("base_url", "")
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=self._config.get("timeout", 30),
        )
        logger.info("Connected to %s", base_url or "(no base_url)")

    def resolve(self, key: str) -> Any:
        if self._client is None:
            self.connect()

        endpoint = self._config["endpoint"].format(key=quote(key, safe=""))
        try:
            resp = self._client.get(endpoint)  # type: ignore[union-attr]
        except httpx.HTTPError as exc:
            raise LookupFailure(key, f"request to {endpoint} failed: {exc}") from exc

        if resp.status_code == 404:
            logger.debug("%s: %s returned 404", self.name, endpoint)
            return NOT_FOUND
        try:
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPStatusError, ValueError) as exc:
            raise LookupFailure(key, f"bad response from {endpoint}: {exc}") from exc

        if not isinstance(data, dict):
            raise LookupFailure(key, f"expected a JSON object from {endpoint}")
        return self._build_entity(key, data)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("Disconnected HTTP client")
