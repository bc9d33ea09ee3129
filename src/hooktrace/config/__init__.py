"""
Configuration module for hooktrace.

Uses pydantic-settings for environment variable loading.
"""

from hooktrace.config.settings import Settings, SinkKind

__all__ = ["Settings", "SinkKind"]
