"""Pydantic configuration models for cartmesh."""

from __future__ import annotations

from .grid_config import CartesianGridConfig, GridForm

__all__ = ["CartesianGridConfig", "GridForm"]
