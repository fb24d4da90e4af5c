from __future__ import annotations

USER_AGENT = "BioTree-Client/0.1.0"
DEFAULT_TIMEOUT = 10
DEFAULT_SERVER_URL = "http://localhost:3000"

# Bind addresses reached through the loopback name
_LOCAL_BIND_HOSTS = ("127.0.0.1", "0.0.0.0", "")


def base_url_for(host: str, port: int) -> str:
    """Browser-facing URL of a server bound to host:port."""
    name = "localhost" if host in _LOCAL_BIND_HOSTS else host
    return f"http://{name}:{port}"
