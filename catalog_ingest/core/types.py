"""Common type definitions for the application.

This module provides shared type aliases used across multiple modules
to avoid duplication and ensure consistency.
"""

from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

# Type alias for async session factory functions
# Used by services that need to create database sessions
SessionFactory = Callable[[], AsyncSession]

# One spreadsheet row: column name -> trimmed cell value
SpreadsheetRecord = dict[str, str]

__all__ = [
    "SessionFactory",
    "SpreadsheetRecord",
]
