"""
API route modules for the dashboard.

Each module defines a FastAPI router for a panel of the dashboard.
"""
