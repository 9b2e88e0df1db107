"""HTTP server for the analyzer."""

from ugf.server.app import UgfServer, create_app
from ugf.server.runner import ServerRunner

__all__ = ["ServerRunner", "UgfServer", "create_app"]
