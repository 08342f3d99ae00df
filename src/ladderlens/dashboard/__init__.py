# Copyright (c) Syntropy Systems
"""ladderlens web dashboard."""

from .server import create_app

__all__ = ["create_app"]
