"""Configuration utilities for HRMS services."""

from .base import ServiceSettings

__all__ = ["ServiceSettings"]
