"""
FastAPI application for the mission control dashboard.

API Endpoints:
- GET /health - Liveness
- GET /mc/status - Server status
- GET /mc/crons - Crontab entries with next-run labels
- GET /mc/services - Service reachability
- GET /mc/agents - Agent roster
- GET /mc/dwe-stats - Cached tracker statistics
- GET /mc/notion-tasks - Tracker tasks and counts

Usage:
    missionctl serve

    # Or from Python
    from missionctl.core.dashboard.api import create_app
    app = create_app(load_config())
"""

from missionctl.core.dashboard.api.app import create_app

__all__ = ["create_app"]
