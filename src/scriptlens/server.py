"""HTTP sidecar server for scriptlens.

Runs a small stdlib HTTP server on localhost so an editor host can call
the pipeline without spawning a process per keystroke.

Endpoints:
    GET  /health     — Health check
    POST /beautify   — {"text": ...} → {"text": formatted}
    POST /scan       — {"text": ...} → {"findings": [...]}
    POST /annotate   — {"text": ..., "beautify": bool} → {"text": markup, "findings": [...]}

All endpoints expect/return JSON.  Requests are independent; the host
discards responses that arrive after a newer request was sent.
"""

from __future__ import annotations
import json
import os
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .config import create_pipeline, load_from_yaml
from .log import configure_logging, get_logger
from .pipeline import Pipeline

DEFAULT_PORT = int(os.environ.get("SCRIPTLENS_PORT", "18792"))

logger = get_logger(__name__)


class BadRequest(ValueError):
    """Request body is not usable."""


class ScriptlensHandler(BaseHTTPRequestHandler):
    """HTTP request handler; the pipeline is attached to the server."""

    @property
    def pipeline(self) -> Pipeline:
        return self.server.pipeline  # type: ignore[attr-defined]

    def _read_json(self) -> dict[str, Any]:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError as e:
            raise BadRequest("invalid Content-Length") from e
        try:
            body = self.rfile.read(length).decode("utf-8")
        except UnicodeDecodeError as e:
            raise BadRequest("body is not valid UTF-8") from e
        try:
            data = json.loads(body) if body else {}
        except json.JSONDecodeError as e:
            raise BadRequest(f"invalid JSON: {e.msg}") from e
        if not isinstance(data, dict):
            raise BadRequest("body must be a JSON object")
        return data

    def _text(self, body: dict[str, Any]) -> str:
        text = body.get("text", "")
        if not isinstance(text, str):
            raise BadRequest("'text' must be a string")
        return text

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("http", client=self.client_address[0], line=format % args)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok"})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            body = self._read_json()

            if self.path == "/beautify":
                self._respond(200, {"text": self.pipeline.beautify(self._text(body))})

            elif self.path == "/scan":
                findings = self.pipeline.scan(self._text(body))
                self._respond(200, {"findings": [f.as_dict() for f in findings]})

            elif self.path == "/annotate":
                text = self._text(body)
                if body.get("beautify"):
                    result = self.pipeline.process(text)
                else:
                    result = self.pipeline.annotate(text)
                self._respond(200, {
                    "text": result.text,
                    "findings": [f.as_dict() for f in result.findings],
                })

            else:
                self._respond(404, {"error": "not found"})

        except BadRequest as e:
            logger.info("bad request", path=self.path, error=str(e))
            self._respond(400, {"error": str(e)})
        except Exception as e:
            logger.exception("request failed", path=self.path)
            self._respond(500, {"error": str(e)})


def make_server(
    host: str = "127.0.0.1",
    port: int = DEFAULT_PORT,
    pipeline: Pipeline | None = None,
) -> ThreadingHTTPServer:
    """Build (but do not start) the sidecar server.  ``port=0`` picks a free port."""
    server = ThreadingHTTPServer((host, port), ScriptlensHandler)
    server.pipeline = pipeline or create_pipeline()  # type: ignore[attr-defined]
    return server


def serve(port: int = DEFAULT_PORT, config_path: str | None = None) -> None:
    """Start the scriptlens HTTP sidecar."""
    pipeline = create_pipeline(load_from_yaml(config_path) if config_path else None)
    server = make_server(port=port, pipeline=pipeline)
    logger.info("listening", url=f"http://127.0.0.1:{server.server_address[1]}", config=config_path)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="scriptlens HTTP sidecar")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default=None, help="YAML config path")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--json-logs", action="store_true")
    args = parser.parse_args()
    configure_logging(args.log_level, json_output=args.json_logs)
    serve(port=args.port, config_path=args.config)
