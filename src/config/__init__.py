"""Configuration management for the LightBnB data layer."""

from .database import DatabaseConfig
from .settings import Settings

__all__ = ["Settings", "DatabaseConfig"]
