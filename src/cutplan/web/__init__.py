"""FastAPI REST API for cut optimization.

This module provides a REST API for optimizing cut plans and exporting
them to various formats.

Usage:
    uvicorn cutplan.web:app --reload
"""

from cutplan.web.app import app, create_app

__all__ = ["app", "create_app"]
