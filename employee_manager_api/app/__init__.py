"""
Application package initializer.

The service is split into a thin API layer (``api``), request and
response schemas (``schemas``), the store access layer (``services``)
and shared infrastructure such as configuration, logging and the
database connection helpers (``core``).
"""

from .main import app  # noqa: F401
