"""
Dashboard server for missionctl.

The dashboard is a thin HTTP layer (api/) over the core components:
- missionctl.core.schedule - crontab listing and next-run labels
- missionctl.core.health - service checks and agent roster
- missionctl.core.tracker - cached task-tracker statistics
"""

__all__: list[str] = []
