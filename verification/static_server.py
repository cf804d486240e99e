
import logging
import os
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]

CONTENT_TYPES = {
    ".html": "text/html",
    ".json": "application/json",
    ".js": "text/javascript",
    ".css": "text/css",
}
DEFAULT_CONTENT_TYPE = "text/plain"
DEFAULT_DOCUMENT = "index.html"


def site_root():
    # KEYBOARD_SITE_ROOT overrides the served directory
    return Path(os.environ.get("KEYBOARD_SITE_ROOT", PROJECT_ROOT))


def content_type_for(path):
    return CONTENT_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_path(root, request_path):
    path = unquote(request_path.split("?")[0])
    if path == "/":
        return Path(root) / DEFAULT_DOCUMENT
    return Path(root) / path[1:]


class StaticFileHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        self._serve(send_body=True)

    def do_HEAD(self):
        self._serve(send_body=False)

    def _serve(self, send_body):
        file_path = resolve_path(self.server.root, self.path)
        try:
            data = file_path.read_bytes()
        except OSError:
            # Missing files, directories and permission errors all end up here
            self._respond(404, b"Not found", DEFAULT_CONTENT_TYPE, send_body)
            return
        self._respond(200, data, content_type_for(file_path), send_body)

    def _respond(self, status, body, content_type, send_body):
        self.send_response(status)
        self.send_header("content-type", content_type)
        self.send_header("content-length", str(len(body)))
        self.end_headers()
        if send_body:
            self.wfile.write(body)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class StaticServer:
    def __init__(self, root=None, host="127.0.0.1", port=0):
        self.root = Path(root) if root is not None else site_root()
        self.host = host
        self.port = port
        self._httpd = None
        self._thread = None

    @property
    def url(self):
        if self._httpd is None:
            raise RuntimeError("server is not running")
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def start(self):
        if self._httpd is not None:
            return self
        httpd = ThreadingHTTPServer((self.host, self.port), StaticFileHandler)
        httpd.root = self.root
        self._httpd = httpd
        self._thread = threading.Thread(
            target=httpd.serve_forever, name="static-server", daemon=True
        )
        self._thread.start()
        logger.info("Serving %s at %s", self.root, self.url)
        return self

    def stop(self):
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join()
        logger.info("Stopped static server for %s", self.root)
        self._httpd = None
        self._thread = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
