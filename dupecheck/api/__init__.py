"""
API package for Image Duplicate Checker.

Provides Flask routes and the background check runner for the web interface.
"""

from __future__ import annotations

from .routes import api
from .runner import CheckRunner

__all__ = ['api', 'CheckRunner']
