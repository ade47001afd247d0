"""CLI command modules."""

from .database import db
from .intelligence import ask, core, dashboard
from .server import serve

__all__ = [
    "dashboard",
    "core",
    "ask",
    "db",
    "serve",
]
