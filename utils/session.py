"""
Thin wrapper around requests.Session used by every outbound data source.

get() never raises for transport problems: it logs the failure, records it
in ``last_error`` and returns None, so callers can use the ``if not resp``
check. A returned Response is falsy for 4xx/5xx statuses.
"""

import logging
from typing import Dict, Iterable, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "dart-summary-api/1.0 (+https://opendart.fss.or.kr)"

# Query parameters whose values must never reach logs or error messages
SECRET_PARAMS = ("crtfc_key", "api_key", "token")


class RequestSession:
    """HTTP session with a default timeout and User-Agent."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        secret_params: Iterable[str] = SECRET_PARAMS,
    ):
        self.timeout = timeout
        self.secret_params = tuple(secret_params)
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json",
        })
        self.last_error: Optional[str] = None

    def _scrub(self, message: str, params: Optional[Dict]) -> str:
        """Mask secret parameter values; requests errors echo the full URL."""
        for name in self.secret_params:
            value = (params or {}).get(name)
            if value:
                message = message.replace(str(value), "***")
        return message

    def get(self, url: str, params: Optional[Dict] = None, **kwargs) -> Optional[requests.Response]:
        """
        Issue a single GET request.

        Returns:
            The Response, or None when the request could not be completed
            (connection error, timeout, invalid URL).
        """
        self.last_error = None
        kwargs.setdefault("timeout", self.timeout)
        try:
            resp = self.session.get(url, params=params, **kwargs)
        except requests.Timeout:
            self.last_error = f"timed out after {kwargs['timeout']}s"
            logger.error(f"GET {url} {self.last_error}")
            return None
        except requests.RequestException as e:
            self.last_error = self._scrub(str(e), params)
            logger.error(f"GET {url} failed: {self.last_error}")
            return None

        if not resp.ok:
            self.last_error = f"HTTP {resp.status_code}"
            logger.warning(f"GET {url} returned HTTP {resp.status_code}")
        return resp

    def close(self) -> None:
        self.session.close()
