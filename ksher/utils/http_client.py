"""
HTTP client for Ksher API communication.
"""

import logging
import time
from typing import Dict, NamedTuple, Optional

import requests

from ksher.constants import FORM_CONTENT_TYPE
from ksher.exceptions import APIError, KsherTimeoutError

logger = logging.getLogger(__name__)

# Small reads so the deadline is checked while a body trickles in
READ_CHUNK_SIZE = 1


class HTTPResponse(NamedTuple):
    """Status code and decoded body of an API response."""
    status_code: int
    text: str


class HTTPClient:
    """
    HTTP client wrapper for Ksher API requests.
    Sends form-encoded POSTs and logs requests/responses. It never retries;
    failures surface to the caller. A positive timeout caps the whole call,
    from send until the last byte of the body.
    """

    def __init__(self, base_url: str, timeout_ms: int = 0):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for API requests
            timeout_ms: Request timeout in milliseconds; 0 or less disables it
        """
        self.base_url = base_url.rstrip('/')
        self.timeout_ms = timeout_ms
        self.session = requests.Session()

    @property
    def timeout(self) -> Optional[float]:
        """Timeout in seconds as understood by requests."""
        if self.timeout_ms and self.timeout_ms > 0:
            return self.timeout_ms / 1000
        return None

    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, headers: Dict):
        """Log API request details."""
        logger.info(f"Ksher API Request: {method} {url}")
        logger.debug(f"Headers: {headers}")

    def _log_response(self, url: str, response: HTTPResponse):
        """Log API response details."""
        logger.info(f"Ksher API Response: {response.status_code} from {url}")
        logger.debug(f"Response: {response.text}")

    def post_form(
        self,
        endpoint: str,
        body: str,
        headers: Optional[Dict[str, str]] = None
    ) -> HTTPResponse:
        """
        Make a form-encoded POST request to the API.

        Args:
            endpoint: API endpoint path
            body: URL-encoded form body
            headers: Extra request headers

        Returns:
            HTTPResponse with the status code and raw body text

        Raises:
            KsherTimeoutError: If the timeout passes before the body is fully read
            APIError: If the request fails at the transport level
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})
        headers.setdefault('Content-Type', FORM_CONTENT_TYPE)

        self._log_request('POST', url, headers)

        timeout = self.timeout
        deadline = time.monotonic() + timeout if timeout is not None else None

        try:
            response = self.session.post(
                url,
                data=body,
                headers=headers,
                timeout=timeout,
                stream=True
            )
            content = self._read_body(response, deadline)
        except requests.Timeout as e:
            logger.warning(f"Request to {url} aborted after {self.timeout_ms}ms")
            raise KsherTimeoutError(
                f"Request timed out after {self.timeout_ms}ms: {str(e)}"
            ) from e
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            raise APIError(f"Request failed: {str(e)}") from e

        result = HTTPResponse(
            status_code=response.status_code,
            text=content.decode('utf-8', errors='replace')
        )
        self._log_response(url, result)
        return result

    def _read_body(self, response: requests.Response, deadline: Optional[float]) -> bytes:
        """
        Read a streamed response body, giving up once ``deadline`` passes.

        Raises:
            requests.Timeout: If the deadline passes before the body is complete
        """
        chunks = []
        try:
            self._check_deadline(deadline)
            for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                chunks.append(chunk)
                self._check_deadline(deadline)
        except requests.ConnectionError as e:
            # requests reports a read timeout while streaming as a ConnectionError
            if deadline is not None and time.monotonic() >= deadline:
                raise requests.Timeout(str(e)) from e
            raise
        finally:
            response.close()
        return b''.join(chunks)

    def _check_deadline(self, deadline: Optional[float]):
        if deadline is not None and time.monotonic() > deadline:
            raise requests.Timeout(f"no complete response within {self.timeout_ms}ms")

    def close(self):
        """Close the session."""
        self.session.close()
