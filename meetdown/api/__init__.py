"""
meetdown API module.

Provides FastAPI HTTP endpoints for creating and resolving proposals.
"""

from meetdown.api.main import app, create_app, run_server

__all__ = ["app", "create_app", "run_server"]
