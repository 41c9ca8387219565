"""
KIISHA Tool Layer Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from kiisha_config.settings import Settings

__all__ = ["Settings"]
