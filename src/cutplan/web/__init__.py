"""FastAPI REST API for cut planning.

This module provides a REST API for packing cut lists onto stock sheets and
exporting the resulting plans.

Usage:
    uvicorn cutplan.web:app --reload
"""

from cutplan.web.app import app, create_app

__all__ = ["app", "create_app"]
