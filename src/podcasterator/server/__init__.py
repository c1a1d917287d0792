"""Local HTTP server for the podcast feed."""

from podcasterator.server.app import create_app
from podcasterator.server.lifecycle import ServerController
from podcasterator.server.network import get_local_ip

__all__ = ["ServerController", "create_app", "get_local_ip"]
