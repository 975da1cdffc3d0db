from typing import Any, Dict, List, Optional
import hashlib
import logging
import time

import requests

from .position import Position

DEFAULT_API_TIMEOUT = 10
POSITIONS_PATH = "/api/positions"
HEALTH_PATH = "/health"

logger = logging.getLogger(__name__)


class PositionsApiError(RuntimeError):
    """The positions backend answered with ``success: false``."""


def api_key_from_password(password: str) -> str:
    """Derive the API key the backend expects for a client password (SHA-256 hex)."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _is_retryable_error(e: requests.exceptions.HTTPError) -> bool:
    """Check if an HTTP error is retryable."""
    if e.response is not None:
        return e.response.status_code == 429 or e.response.status_code >= 500
    error_msg = str(e).lower()
    return any(code in error_msg for code in ["429", "500", "502", "503", "504"])


class PositionsClient:
    """Read-only client for the positions backend."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: int = DEFAULT_API_TIMEOUT,
        max_retries: int = 5,
        base_delay: float = 2.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def _get(self, path: str) -> requests.Response:
        """GET with exponential backoff on 429 and 5xx responses.

        Raises:
            requests.exceptions.RequestException: On network or HTTP errors after retries
        """
        url = f"{self.base_url}{path}"
        attempt = 0

        while True:
            logger.debug(f"API request: GET {url}")
            try:
                response = requests.get(url, headers=self._headers(), timeout=self.timeout)
                response.raise_for_status()
                return response
            except requests.exceptions.HTTPError as e:
                status_code = e.response.status_code if e.response is not None else None
                if _is_retryable_error(e) and attempt < self.max_retries:
                    delay = self.base_delay * (2**attempt)
                    error_type = (
                        "Server error"
                        if status_code and status_code >= 500
                        else "Rate limited"
                    )
                    logger.warning(
                        f"{error_type} ({status_code or 'unknown'}), retrying in {delay:.0f}s (attempt {attempt + 1} of {self.max_retries + 1})"
                    )
                    time.sleep(delay)
                    attempt += 1
                    continue
                if status_code == 401:
                    logger.error("Invalid or missing API key")
                elif status_code == 403:
                    logger.error("Request rejected by the backend's network restrictions")
                raise

    def get_positions(self) -> List[Position]:
        """
        Fetch all recorded positions.

        Returns:
            Positions as ordered by the backend (oldest first)

        Raises:
            PositionsApiError: If the backend reports failure or the body is not an object
            requests.exceptions.RequestException: On network or HTTP errors after retries
            ValueError: If a position in the response is malformed
        """
        payload: Dict[str, Any] = self._get(POSITIONS_PATH).json()
        if not isinstance(payload, dict):
            raise PositionsApiError(
                f"Unexpected response from positions backend: {type(payload).__name__}"
            )
        if not payload.get("success", False):
            raise PositionsApiError(payload.get("error") or "Failed to fetch positions")
        positions = [Position.from_dict(item) for item in payload.get("data") or []]
        logger.info(f"Fetched {len(positions)} positions from {self.base_url}")
        return positions

    def health_check(self) -> bool:
        """Return True if the backend answers its health endpoint."""
        try:
            response = requests.get(
                f"{self.base_url}{HEALTH_PATH}", timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Health check failed: {e}")
            return False
        return response.status_code == 200
