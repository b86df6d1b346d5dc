"""
Data models for MiniFileExplorer.

This module contains the transient records printed by the commands and the
configuration models.
"""

from .entries import EntryType, ListingEntry, SearchResult, FileStatus
from .config import ExplorerConfig, LoggingConfig, LogLevel

__all__ = [
    'EntryType',
    'ListingEntry',
    'SearchResult',
    'FileStatus',
    'ExplorerConfig',
    'LoggingConfig',
    'LogLevel'
]
