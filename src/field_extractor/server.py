"""HTTP sidecar server for field-extractor.

Runs as a lightweight stdlib HTTP server on localhost so other
processes can call the extractor without spawning the CLI per request.

Endpoints:
    POST /extract   — Extract fields; body {"text": "..."}
    GET  /rules     — Pattern source for each field
    GET  /health    — Health check

All endpoints return JSON.
"""

from __future__ import annotations
import json
import logging
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any

from .config import DEFAULT_PORT
from .extractor import Extractor
from .output import describe_rules, to_payload

logger = logging.getLogger(__name__)


class BadRequest(ValueError):
    """Request body that can't be turned into extractor input."""


class ExtractHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the extraction sidecar."""

    extractor: Extractor = Extractor()
    indent: int | None = None

    def _read_json(self) -> dict[str, Any]:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError as e:
            raise BadRequest("invalid Content-Length") from e
        if length < 0:
            raise BadRequest("invalid Content-Length")
        try:
            body = self.rfile.read(length).decode("utf-8")
        except UnicodeDecodeError as e:
            raise BadRequest("body is not valid UTF-8") from e
        if not body:
            return {}
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise BadRequest(f"invalid JSON body: {e.msg}") from e
        if not isinstance(data, dict):
            raise BadRequest("body must be a JSON object")
        return data

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False, indent=self.indent).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok"})
        elif self.path == "/rules":
            self._respond(200, describe_rules(self.extractor.rules))
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        if self.path != "/extract":
            self._respond(404, {"error": "not found"})
            return
        try:
            body = self._read_json()
            text = body.get("text", "")
            if not isinstance(text, str):
                raise BadRequest("'text' must be a string")
            result = self.extractor.extract(text)
            self._respond(200, to_payload(result, self.extractor.rules))
        except BadRequest as e:
            self._respond(400, {"error": str(e)})
        except Exception as e:
            logger.exception("extract request failed")
            self._respond(500, {"error": str(e)})


def make_server(
    host: str = "127.0.0.1",
    port: int = DEFAULT_PORT,
    *,
    extractor: Extractor | None = None,
    indent: int | None = None,
) -> HTTPServer:
    """Build (but don't start) a sidecar server.  port=0 picks a free port."""
    handler = type("BoundExtractHandler", (ExtractHandler,), {
        "extractor": extractor or Extractor(),
        "indent": indent,
    })
    return HTTPServer((host, port), handler)


def serve(host: str = "127.0.0.1", port: int = DEFAULT_PORT, *, indent: int | None = None) -> None:
    """Start the extraction HTTP sidecar."""
    server = make_server(host, port, indent=indent)
    logger.info("field-extractor sidecar listening on http://%s:%d", *server.server_address[:2])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    import argparse
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="field-extractor HTTP sidecar")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args()
    serve(host=args.host, port=args.port)
