"""HTTP client for the leaderboard API.

Used by the terminal front end. Reads fall back to the last leaderboard
seen for the same mode and config; writes never discard local results,
so a failed claim can simply be retried.
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests

from .scoring import Stats


logger = logging.getLogger(__name__)

TIMEOUT = 8

SOURCE_LIVE = "live"
SOURCE_CACHED = "cached"
SOURCE_UNAVAILABLE = "unavailable"


class SubmissionError(Exception):
    """A score could not be cached or claimed on the server."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class LeaderboardResult:
    mode: str
    config: int
    entries: List[Dict[str, Any]] = field(default_factory=list)
    source: str = SOURCE_LIVE

    @property
    def available(self) -> bool:
        return self.source != SOURCE_UNAVAILABLE


class LeaderboardClient:
    def __init__(
        self,
        base_url: str,
        *,
        http: Optional[requests.Session] = None,
        cache_path: Optional[Path] = None,
        timeout: float = TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.cache_path = Path(cache_path) if cache_path else None
        self.timeout = timeout
        self.selection: Optional[Tuple[str, int]] = None
        self.current: Optional[LeaderboardResult] = None
        self._cache: Dict[Tuple[str, int], List[Dict[str, Any]]] = self._load_cache()
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    # ---------- reads ----------

    def select(self, mode: str, config: int) -> None:
        """Change the mode/config whose leaderboard is on display."""
        with self._lock:
            self.selection = (mode, config)
            if self.current and (self.current.mode, self.current.config) != self.selection:
                self.current = None

    def fetch_top(self, mode: str, config: int) -> LeaderboardResult:
        try:
            response = self.http.get(
                f"{self.base_url}/api/leaderboard",
                params={"mode": mode, "config": config},
                timeout=self.timeout,
            )
            response.raise_for_status()
            entries = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Leaderboard fetch failed for %s/%s: %s", mode, config, exc)
            cached = self._cache.get((mode, config))
            if cached is not None:
                return LeaderboardResult(mode, config, list(cached), SOURCE_CACHED)
            return LeaderboardResult(mode, config, [], SOURCE_UNAVAILABLE)

        with self._lock:
            self._cache[(mode, config)] = list(entries)
        self._save_cache()
        return LeaderboardResult(mode, config, list(entries), SOURCE_LIVE)

    def apply_result(self, result: LeaderboardResult) -> bool:
        """Show ``result`` unless the selection moved on while it loaded."""
        with self._lock:
            if self.selection != (result.mode, result.config):
                logger.debug("Dropping stale leaderboard for %s/%s", result.mode, result.config)
                return False
            self.current = result
            return True

    def refresh(self) -> "Future[LeaderboardResult]":
        """Fetch the selected leaderboard in the background."""
        if self.selection is None:
            raise RuntimeError("Select a mode and config before refreshing.")
        mode, config = self.selection
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1)
        future = self._executor.submit(self.fetch_top, mode, config)
        future.add_done_callback(lambda done: self.apply_result(done.result()))
        return future

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self.http.close()

    # ---------- writes ----------

    def submit_score(self, stats: Stats, mode: str, config: int) -> None:
        """Cache a finished test's score in the server session."""
        self._post("/api/session-score", stats.as_payload(mode, config), expected=200)

    def claim(self, name: str, recaptcha_token: Optional[str] = None) -> int:
        """Attach ``name`` to the cached score; returns the new record id."""
        body = self._post(
            "/api/leaderboard",
            {"name": name, "recaptchaToken": recaptcha_token},
            expected=201,
        )
        return body["id"]

    def _post(self, path: str, payload: Dict[str, Any], *, expected: int) -> Dict[str, Any]:
        try:
            response = self.http.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SubmissionError(f"Could not reach the leaderboard server: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.status_code != expected:
            message = body.get("error") if isinstance(body, dict) else None
            raise SubmissionError(
                message or f"Unexpected response ({response.status_code}).",
                status_code=response.status_code,
            )
        return body

    # ---------- on-disk fallback ----------

    def _load_cache(self) -> Dict[Tuple[str, int], List[Dict[str, Any]]]:
        if not self.cache_path or not self.cache_path.exists():
            return {}
        try:
            raw = json.loads(self.cache_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable leaderboard cache %s: %s", self.cache_path, exc)
            return {}
        cache = {}
        for key, entries in raw.items():
            mode, _, config = key.partition(":")
            if config.isdigit():
                cache[(mode, int(config))] = entries
        return cache

    def _save_cache(self) -> None:
        if not self.cache_path:
            return
        with self._lock:
            raw = {f"{mode}:{config}": entries for (mode, config), entries in self._cache.items()}
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            self.cache_path.write_text(json.dumps(raw, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write leaderboard cache %s: %s", self.cache_path, exc)
