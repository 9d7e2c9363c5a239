"""Dependency providers for the API."""

from __future__ import annotations

from fastapi import Request

from ...config import ServerConfig
from ...pipeline import CvGenerator


def get_generator(request: Request) -> CvGenerator:
    """Access the shared CV generator from app state."""
    return request.app.state.generator


def get_server_config(request: Request) -> ServerConfig:
    return request.app.state.server_config
