"""
Core module for application configuration and utilities.

Only settings is re-exported here; app.models imports datetime_utils from
app.core, so auth must be imported directly: from app.core.auth import ...
"""
from .config import settings

__all__ = ["settings"]
