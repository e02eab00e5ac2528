"""Logging helpers shared by the courseware tools."""

from .logging import configure_logging

__all__ = ["configure_logging"]
