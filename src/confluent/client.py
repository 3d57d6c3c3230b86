from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.auth import HTTPBasicAuth
from loguru import logger

from src.confluent.errors import TransportError

DEFAULT_API_URL = "https://api.confluent.cloud"
REQUEST_TIMEOUT = 10


@dataclass(frozen=True)
class Credentials:
    key: str
    secret: str

    def __repr__(self):
        return f"Credentials(key={self.key!r}, secret='***')"


@dataclass
class ApiResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_status(self):
        if not self.ok:
            raise TransportError(
                f"HTTP request error. Response code: {self.status_code}",
                status_code=self.status_code,
                body=self.body,
            )


class ConfluentClient:
    """Thin HTTP client for the Confluent Cloud management API.

    Every request is authenticated with the shared credential pair, sent once
    (no retries) and bounded by a fixed timeout.
    """

    def __init__(self, credentials: Credentials, base_url: str = DEFAULT_API_URL):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")

    def execute(self, method: str, path: str, params: Optional[Dict[str, str]] = None,
                body: Optional[Dict[str, Any]] = None) -> ApiResponse:
        url = f"{self.base_url}{path}"
        logger.debug(f"Confluent Cloud request: {method} {url} params={params}")

        try:
            rsp = requests.request(
                method,
                url,
                params=params,
                json=body,
                auth=HTTPBasicAuth(self.credentials.key, self.credentials.secret),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Confluent Cloud request {method} {url} failed: {e}")
            raise TransportError(f"Request {method} {url} failed: {e}") from e

        response = ApiResponse(status_code=rsp.status_code, body=rsp.text)
        if not response.ok:
            logger.warning(f"Confluent Cloud response {rsp.status_code} for {method} {url}: {rsp.text}")
        else:
            logger.trace(f"Confluent Cloud response {rsp.status_code} for {method} {url}")

        return response

    def request(self, method: str, path: str, params: Optional[Dict[str, str]] = None,
                body: Optional[Dict[str, Any]] = None) -> str:
        response = self.execute(method, path, params=params, body=body)
        response.raise_for_status()
        return response.body
