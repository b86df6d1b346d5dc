"""
Low-level tools for MiniFileExplorer.

This package contains the command-line tokenizer and the filesystem probe
that every command handler builds on.
"""

from .tokenizer import TokenizeError, tokenize
from .fs_probe import FSProbe, ProbeEntry, ProbeError

__all__ = ['TokenizeError', 'tokenize', 'FSProbe', 'ProbeEntry', 'ProbeError']
