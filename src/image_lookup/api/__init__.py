"""HTTP API for image lookup."""

from .server import app, create_api_server, run_api_server

__all__ = ["app", "create_api_server", "run_api_server"]
