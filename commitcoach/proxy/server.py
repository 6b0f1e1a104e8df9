"""CommitCoach proxy - forward diffs to an LLM provider so the CLI needs no API key."""

import json
import logging
import sys
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

from commitcoach import DEFAULT_STYLE, __version__
from commitcoach.config import ConfigError, ProxyConfig, load_env
from commitcoach.git.diff import truncate_diff
from commitcoach.llm import LLMClient, LLMError, UpstreamError, get_client, message_or_fallback
from commitcoach.output import print_error
from commitcoach.prompts import compose
from commitcoach.proxy.client import COMMIT_PATH
from commitcoach.proxy.ratelimit import RateLimiter

logger = logging.getLogger(__name__)

HEALTH_PATH = "/healthz"
MAX_BODY_BYTES = 1_000_000
DRAIN_CHUNK_BYTES = 64 * 1024
RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class ProxyServer(ThreadingHTTPServer):
    """Threaded HTTP server holding the upstream client and the rate limiter."""

    daemon_threads = True

    def __init__(self, address: tuple[str, int], llm: LLMClient, limiter: RateLimiter):
        super().__init__(address, ProxyHandler)
        self.llm = llm
        self.limiter = limiter


class ProxyHandler(BaseHTTPRequestHandler):
    """Handles POST /v1/commitcoach and GET /healthz."""

    server: ProxyServer
    server_version = f"commitcoach-proxy/{__version__}"

    def do_GET(self):
        path = urlsplit(self.path).path
        if path == HEALTH_PATH:
            self._send_json(200, {"status": "ok"})
            return
        if not self._admit():
            return
        if path == COMMIT_PATH:
            self._send_json(405, {"error": "method not allowed"}, {"Allow": "POST"})
        else:
            self._send_json(404, {"error": "not found"})

    def do_POST(self):
        # Read the body up front so early rejections don't leave it unread
        raw = self._read_body()
        if not self._admit():
            return
        if urlsplit(self.path).path != COMMIT_PATH:
            self._send_json(404, {"error": "not found"})
            return
        if raw is None:
            self._send_json(413, {"error": "payload too large"})
            return

        try:
            status, body = self._handle_commitcoach(raw)
        except Exception:
            logger.exception("unhandled error in %s", COMMIT_PATH)
            status, body = 500, {"error": "server error"}
        self._send_json(status, body)

    def _read_body(self) -> bytes | None:
        """Return the request body, or None when it exceeds MAX_BODY_BYTES."""
        try:
            length = int(self.headers.get('Content-Length') or 0)
        except ValueError:
            length = 0
        if length > MAX_BODY_BYTES:
            self._discard(length)
            return None
        return self.rfile.read(length) if length > 0 else b""

    def _discard(self, length: int) -> None:
        """Consume an oversized body so the client is done sending before the reply."""
        while length > 0:
            chunk = self.rfile.read(min(length, DRAIN_CHUNK_BYTES))
            if not chunk:
                self.close_connection = True
                return
            length -= len(chunk)

    def _handle_commitcoach(self, raw: bytes) -> tuple[int, dict]:
        try:
            payload = json.loads(raw) if raw.strip() else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            return 400, {"error": "invalid JSON"}

        diff = payload.get("diff") if isinstance(payload, dict) else None
        if not isinstance(diff, str) or not diff:
            return 400, {"error": "diff required"}

        style = payload.get("style")
        if not isinstance(style, str) or not style:
            style = DEFAULT_STYLE

        prompt = compose(style, truncate_diff(diff))
        try:
            response = self.server.llm.generate(prompt)
        except UpstreamError as e:
            logger.warning("upstream failure (status=%s): %s", e.status, e)
            return 502, {"error": str(e)}

        logger.debug("suggested message with %s (%d tokens)", self.server.llm.name, response.tokens_used)
        return 200, {"message": message_or_fallback(response.content)}

    def _admit(self) -> bool:
        """Apply the per-client ceiling; sends the 429 itself when rejecting."""
        result = self.server.limiter.check(self.client_address[0])
        self._rate_headers = {
            "RateLimit-Limit": str(result.limit),
            "RateLimit-Remaining": str(result.remaining),
            "RateLimit-Reset": str(result.retry_after),
        }
        if result.allowed:
            return True

        logger.info("rate limit exceeded for %s", self.client_address[0])
        self._send_json(429, {"error": RATE_LIMIT_MESSAGE}, {"Retry-After": str(result.retry_after)})
        return False

    def _send_json(self, status: int, body: dict, headers: dict | None = None) -> None:
        data = json.dumps(body).encode('utf-8')
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        for name, value in {**getattr(self, '_rate_headers', {}), **(headers or {})}.items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def create_server(config: ProxyConfig, llm: LLMClient | None = None) -> ProxyServer:
    """Build a ready-to-serve proxy from config; ``llm`` overrides the provider client."""
    if llm is None:
        llm = get_client(provider=config.provider, api_key=config.api_key, model=config.model)
    limiter = RateLimiter(limit=config.rate_limit, window=config.rate_window)
    return ProxyServer((config.host, config.port), llm, limiter)


def main() -> int:
    """Entry point for commitcoach-proxy."""
    load_env()
    try:
        config = ProxyConfig.from_env()
    except ConfigError as e:
        print_error(str(e))
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        server = create_server(config)
    except (LLMError, OSError) as e:
        print_error(str(e))
        return 1

    host, port = server.server_address[:2]
    logger.info("CommitCoach proxy running on http://%s:%s using %s", host, port, server.llm.name)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()
    return 0
