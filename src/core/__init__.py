"""Application wiring: data store lifecycle and repository injection."""

from .dependencies import DependencyContainer

__all__ = ["DependencyContainer"]
