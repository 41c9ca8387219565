"""
KIISHA Assistant Applications Package.

Contains:
- assistant_api: FastAPI application for the `api` channel
"""

__version__ = "0.1.0"
