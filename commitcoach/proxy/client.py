"""Completion client - ask the CommitCoach proxy for a commit message."""

import http.client
import json
import logging
import socket
import urllib.error
import urllib.request

from commitcoach import FALLBACK_MESSAGE, __version__

logger = logging.getLogger(__name__)

COMMIT_PATH = "/v1/commitcoach"


class BackendError(Exception):
    """The proxy answered with a non-success status or could not be reached."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


def extract_message(data) -> str:
    """Pull the trimmed message out of a success body, or fall back."""
    if not isinstance(data, dict):
        return FALLBACK_MESSAGE
    message = data.get("message")
    if not isinstance(message, str) or not message.strip():
        return FALLBACK_MESSAGE
    return message.strip()


class CoachClient:
    """HTTP client for the proxy's POST /v1/commitcoach endpoint."""

    DEFAULT_TIMEOUT = 60

    def __init__(self, server: str, timeout: int | None = None):
        self.server = server.rstrip('/')
        self.timeout = timeout or self.DEFAULT_TIMEOUT

    @property
    def url(self) -> str:
        return f"{self.server}{COMMIT_PATH}"

    def suggest(self, diff: str, style: str | None = None) -> str:
        """Send one request and return the suggested message.

        Raises:
            BackendError: non-2xx status, network failure, or an unreadable body
        """
        payload = {"diff": diff}
        if style:
            payload["style"] = style

        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(
            self.url,
            data=data,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": f"commitcoach/{__version__}",
            },
        )
        logger.debug("POST %s (%d bytes)", self.url, len(data))

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                raw = response.read().decode('utf-8', errors='replace')
        except urllib.error.HTTPError as e:
            body = e.read().decode('utf-8', errors='replace') if e.fp else ""
            raise BackendError(f"Proxy error {e.code}: {body}", status=e.code, body=body)
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise BackendError(f"Request to {self.server} timed out after {self.timeout}s")
            raise BackendError(f"Could not reach {self.server}: {e.reason}")
        except socket.timeout:
            raise BackendError(f"Request to {self.server} timed out after {self.timeout}s")
        except (http.client.HTTPException, OSError) as e:
            raise BackendError(f"Connection to {self.server} failed: {e}")

        try:
            parsed = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            raise BackendError(f"Invalid response from {self.server}: {raw[:200]}", body=raw)

        return extract_message(parsed)
