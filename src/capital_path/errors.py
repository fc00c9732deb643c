"""Typed failures raised by the simulator and its loaders."""

from __future__ import annotations


class CapitalPathError(Exception):
    """Base class for capital path failures."""


class ConfigurationError(CapitalPathError, ValueError):
    """Invalid or incomplete capital-management configuration."""


class DataError(CapitalPathError, ValueError):
    """A trade log row is temporally or numerically malformed."""
