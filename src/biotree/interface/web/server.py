from __future__ import annotations

"""
Web Server Bootstrap.

Starts the Flask application and, optionally, opens the default browser on
the viewer once the server is about to accept connections.
"""

import logging
import socket
import threading
import webbrowser

from biotree.domain.config import AppConfig
from biotree.domain.registry import NameRegistry
from biotree.infra.network.common import base_url_for
from biotree.interface.web.app import create_app

logger = logging.getLogger(__name__)

BROWSER_DELAY_SECONDS = 1.0


def server_url(cfg: AppConfig) -> str:
    return base_url_for(cfg.host, cfg.port)


def check_port_available(host: str, port: int) -> None:
    """
    Bind host:port once and release it.

    The Flask development server exits the process when it cannot bind, so
    the check runs before it starts.

    Raises:
        OSError: If the address cannot be bound.
    """
    family, kind, proto, _, address = socket.getaddrinfo(host or None, port, type=socket.SOCK_STREAM)[0]
    with socket.socket(family, kind, proto) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(address)
        except OSError as e:
            raise OSError(f"Port {port} is not available on {host}: {e}") from e


def run_server(cfg: AppConfig, registry: NameRegistry) -> None:
    """
    Serve the application until interrupted.

    Args:
        cfg: Runtime configuration (host, port, open_browser).
        registry: Name registry loaded at startup.

    Raises:
        OSError: If the configured port cannot be bound.
    """
    check_port_available(cfg.host, cfg.port)
    app = create_app(cfg, registry)
    url = server_url(cfg)

    if cfg.open_browser:
        timer = threading.Timer(BROWSER_DELAY_SECONDS, _open_browser, args=(url,))
        timer.daemon = True
        timer.start()

    logger.info(f"Server running at {url}")
    app.run(host=cfg.host, port=cfg.port, debug=False, use_reloader=False)


def _open_browser(url: str) -> None:
    if not webbrowser.open(url):
        logger.warning(f"Could not open a browser. Visit {url} manually.")
