"""Drift Engine module."""

from archlens.infrastructure.drift.engine import DriftEngine

__all__ = ["DriftEngine"]
