"""HTTP fetch of remote collection documents."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pycivmap._redact import summarize_for_log
from pycivmap.config import CivMapConfig
from pycivmap.exceptions import CivMapTransportError

_logger = logging.getLogger(__name__)


class JsonFetcher(Protocol):
    """Structural fetch interface used by the orchestrator.

    Implementations resolve exactly once: they return the decoded JSON
    document or raise :class:`CivMapTransportError`.
    """

    async def fetch_json(self, url: str) -> Any: ...


class HttpJsonFetcher:
    """aiohttp-backed :class:`JsonFetcher`."""

    def __init__(self, config: CivMapConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def fetch_json(self, url: str) -> Any:
        """GET *url* and decode the body as JSON.

        Raises
        ------
        CivMapTransportError
            On network errors, timeouts, non-200 responses and invalid JSON.
        """
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        timeout = aiohttp.ClientTimeout(total=self._config.fetch_timeout)

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise CivMapTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except CivMapTransportError:
            raise
        except TimeoutError as exc:
            raise CivMapTransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise CivMapTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CivMapTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc

        if self._config.trace_enabled:
            _logger.debug(
                "Fetched %s: %s",
                url,
                summarize_for_log(document, max_string=self._config.log_max_string),
            )
        return document
