"""Core components for missionctl."""
