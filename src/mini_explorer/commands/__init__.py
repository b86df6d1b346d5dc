"""
Shell commands for MiniFileExplorer.

This package contains the terminal channel and the handlers implementing
each explorer command.
"""

from .terminal import Terminal
from .handlers import CommandError, CommandHandlers

__all__ = ['Terminal', 'CommandError', 'CommandHandlers']
