"""Infrastructure layer implementations."""

from stockflow.infrastructure import storage

__all__ = ["storage"]
