"""
Hint service client and the hint side panel.

HintClient posts the current question to {API_BASE}/api/ai/hint and always
returns display text; failures become short placeholder messages.

HintPanel runs fetches in the background. It never touches lesson state,
and the latest request wins: a reply to an older request is dropped.
"""

import json
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from adaptlearn.utils.hint_parser import ParsedHint, parse_hint


logger = logging.getLogger(__name__)

HINT_PATH = "/api/ai/hint"
DEFAULT_TIMEOUT = 15.0
NO_HINT_MESSAGE = "No hint available"
FETCH_FAILED_MESSAGE = "Failed to fetch hint"


class HintClient:
    """Thin wrapper around the hint endpoint."""

    def __init__(
        self,
        api_base: Optional[str],
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_base = (api_base or "").rstrip("/")
        self.token = token
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.api_base}{HINT_PATH}"

    def _build_request(self, prompt: str) -> Request:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        body = json.dumps({"prompt": prompt}).encode("utf-8")
        return Request(self.url, data=body, headers=headers, method="POST")

    def fetch_hint(self, prompt: str) -> str:
        """
        Ask the hint service about a question prompt.

        Returns:
            The hint text, or a placeholder message on any failure
        """
        if not self.api_base:
            logger.warning("Hint requested but no API base URL is configured")
            return NO_HINT_MESSAGE

        req = self._build_request(prompt)
        try:
            with urlopen(req, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    logger.warning(f"Hint service returned HTTP {status}")
                    return NO_HINT_MESSAGE
                data = json.loads(response.read().decode("utf-8"))
        except HTTPError as e:
            logger.warning(f"Hint service returned HTTP {e.code}")
            return NO_HINT_MESSAGE
        except (URLError, OSError, ValueError) as e:
            logger.warning(f"Hint fetch failed: {e}")
            return FETCH_FAILED_MESSAGE

        hint = data.get("hint") if isinstance(data, dict) else None
        if not isinstance(hint, str) or not hint.strip():
            logger.warning("Hint service response has no hint text")
            return NO_HINT_MESSAGE
        return hint


class HintPanel:
    """
    Side panel state for AI hints.

    request() returns immediately; the reply lands in text/parsed when it
    arrives, unless a newer request or clear() came in first.

    Pass a shared executor to run fetches on a pool that outlives the
    panel; shutdown() only stops a pool the panel created itself.
    """

    def __init__(
        self,
        client: HintClient,
        executor: Optional[Executor] = None,
        max_workers: int = 2,
    ):
        self.client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="hint"
        )
        self._lock = threading.Lock()
        self._generation = 0
        self._loading = False
        self._text: Optional[str] = None

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    @property
    def text(self) -> Optional[str]:
        with self._lock:
            return self._text

    @property
    def parsed(self) -> Optional[ParsedHint]:
        text = self.text
        return parse_hint(text) if text else None

    def request(self, prompt: str) -> Future:
        """Start fetching a hint for prompt in the background."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._loading = True
            self._text = None
        return self._executor.submit(self._fetch, generation, prompt)

    def _fetch(self, generation: int, prompt: str) -> str:
        text = self.client.fetch_hint(prompt)
        with self._lock:
            if generation == self._generation:
                self._text = text
                self._loading = False
            else:
                logger.debug(f"Dropping superseded hint reply (request {generation})")
        return text

    def clear(self):
        """Hide the current hint and drop any reply still in flight."""
        with self._lock:
            self._generation += 1
            self._loading = False
            self._text = None

    def shutdown(self):
        self.clear()
        if self._owns_executor:
            self._executor.shutdown(wait=False)
