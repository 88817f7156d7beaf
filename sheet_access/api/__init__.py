"""HTTP transport for the sheet access service."""

from .app import create_app, describe_sheet

__all__ = ["create_app", "describe_sheet"]
