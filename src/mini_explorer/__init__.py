"""
MiniFileExplorer - Core Package

An interactive command-line file explorer: a read-eval-print loop that
navigates, lists, creates, deletes, inspects, searches, copies, moves and
measures files on the local filesystem.
"""

__version__ = "0.1.0"
__author__ = "MiniFileExplorer Team"
