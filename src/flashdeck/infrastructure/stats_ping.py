"""
Usage counter ping.

Reports "one more game played" to a public counter and reads the total back.
Strictly best effort: every failure is logged at debug level and otherwise
ignored.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class StatsPingClient:
    def __init__(self, url: str, origin: str, timeout: float = 3.0):
        self.url = url
        self.origin = origin
        self.timeout = timeout

    def _get(self, action: str) -> httpx.Response:
        return httpx.get(
            self.url,
            params={"origin": self.origin, "action": action},
            timeout=self.timeout,
        )

    def read(self) -> int:
        """Games played according to the counter, or 0 when unavailable."""
        try:
            response = self._get("read")
            if response.status_code != 200:
                return 0
            count = response.json().get("accesscounts")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.debug(f"[ping] read failed: {e}")
            return 0

        if isinstance(count, int) and not isinstance(count, bool) and count >= 0:
            return count
        return 0

    def write(self) -> None:
        try:
            self._get("write")
        except httpx.HTTPError as e:
            logger.debug(f"[ping] write failed: {e}")
