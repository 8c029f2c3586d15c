"""HTTP client with retry/backoff for the catalogue, weather and water fetches."""
from __future__ import annotations

import logging
import random
import time
from typing import Any, Dict, Optional

import requests

from . import config

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = (429, 500, 502, 503, 504)


class HttpError(RuntimeError):
    pass


class HttpClient:
    def __init__(
        self,
        timeout: Optional[int] = None,
        retry_max: Optional[int] = None,
        backoff_base: Optional[float] = None,
        backoff_max: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        # Unset values are read from config at construction time.
        self.timeout = config.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
        self.retry_max = max(1, config.HTTP_RETRY_MAX if retry_max is None else retry_max)
        self.backoff_base = config.HTTP_BACKOFF_BASE if backoff_base is None else backoff_base
        self.backoff_max = config.HTTP_BACKOFF_MAX if backoff_max is None else backoff_max
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", config.HTTP_USER_AGENT)

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        resp = self._get(url, params=params, timeout=timeout)
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Non-JSON response from %s", url)
            raise HttpError(f"Non-JSON response from {url}") from exc

    def get_text(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> str:
        return self._get(url, params=params, timeout=timeout).text

    def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        timeout = self.timeout if timeout is None else timeout
        for attempt in range(1, self.retry_max + 1):
            try:
                resp = self.session.get(url, params=params, timeout=timeout)
            except requests.RequestException as exc:
                if attempt >= self.retry_max:
                    raise HttpError(f"GET {url} failed: {exc}") from exc
                self._sleep_backoff(attempt)
                continue

            status = resp.status_code
            if status == 200:
                return resp

            if status in RETRYABLE_STATUSES:
                logger.warning("HTTP %s from %s (attempt %s)", status, url, attempt)
                if attempt >= self.retry_max:
                    raise HttpError(f"HTTP {status} from {url}")
                if not self._sleep_retry_after(resp):
                    self._sleep_backoff(attempt)
                continue

            # Non-retryable
            logger.error("HTTP %s from %s", status, url)
            raise HttpError(f"HTTP {status} from {url}")

        raise HttpError("Unexpected HTTP retry loop exit")

    def _sleep_backoff(self, attempt: int) -> None:
        base = min(self.backoff_base * (2 ** (attempt - 1)), self.backoff_max)
        jitter = random.uniform(0, self.backoff_base)
        time.sleep(base + jitter)

    def _sleep_retry_after(self, resp: requests.Response) -> bool:
        retry_after = resp.headers.get("Retry-After")
        if not retry_after:
            return False
        try:
            delay = float(retry_after)
        except ValueError:
            return False
        delay = max(0.0, min(delay, self.backoff_max))
        time.sleep(delay)
        return True
