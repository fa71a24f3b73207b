"""Tiny server that previews the generated site."""

import functools
import logging
import os
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from config import SiteConfig
from errors import SiteError

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"


class PreviewHandler(SimpleHTTPRequestHandler):
    def end_headers(self):
        # Prevent caching so a rebuild is seen on the next reload
        self.send_header("Cache-Control", "no-cache, max-age=0")
        super().end_headers()

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(config: SiteConfig, host: str = HOST) -> ThreadingHTTPServer:
    """Bind a static file server to config.output_dir without starting it."""
    if not os.path.isdir(config.output_dir):
        raise SiteError(f"Output directory {config.output_dir} does not exist, run a build first")
    handler = functools.partial(PreviewHandler, directory=os.path.abspath(config.output_dir))
    return ThreadingHTTPServer((host, config.port), handler)


def serve(config: SiteConfig) -> None:
    server = make_server(config)
    print(f"  Listening on http://{HOST}:{server.server_address[1]}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("  Stopped.")
    finally:
        server.server_close()
