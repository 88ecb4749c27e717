"""Routers package."""

from . import (
    health,
    lint,
    preferences,
)
