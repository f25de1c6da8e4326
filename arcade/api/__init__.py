"""
API Module

FastAPI endpoints for Go and Xiangqi sessions.
"""

from arcade.api.app import create_app

__all__ = ["create_app"]
