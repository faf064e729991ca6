"""Jyotishi Baje HTTP API.

Functions:
    create_app: Build the FastAPI application.
"""
from api.server import create_app

__all__ = ["create_app"]
