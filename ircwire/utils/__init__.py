"""Utility helpers shared by the client."""

from .retry import retry_transport  # noqa: F401

__all__ = ["retry_transport"]
