"""Infrastructure layer implementations."""

from sims.infrastructure import storage

__all__ = ["storage"]
