"""
Command handlers for MiniFileExplorer.

Each public method implements one shell command. A handler receives the
full token list (token 0 is the command name), validates its arguments in a
fixed order, performs the operation through the filesystem probe and writes
its output to the terminal. Failures are raised as CommandError carrying the
exact one-line message the shell prints; no handler ever ends the session.
"""

import os
from stat import S_ISDIR
import logging
from enum import Enum
from typing import Callable, Dict, List

from ..models.entries import (
    DEFAULT_TIME_FORMAT,
    EntryType,
    FileStatus,
    ListingEntry,
    SearchResult,
    timestamp_to_datetime,
)
from ..tools.fs_probe import FSProbe, ProbeEntry, ProbeError
from .terminal import Terminal


logger = logging.getLogger(__name__)

KB = 1024
MB = 1024 * 1024

INVALID_TARGET_PATH = "Invalid target path"
SOURCE_NOT_FOUND = "Source not found"

LS_HEADERS = ["Name", "Type", "Size(B)", "Modify Time"]

HELP_LINES = [
    "Supported commands:",
    "  cd [path]: Switch to target directory",
    "  cd ~: Switch to home directory",
    "  ls: List all files and directories",
    "  ls -s: List and sort by size (desc)",
    "  ls -t: List and sort by modify time (desc)",
    "  touch [file]: Create an empty file",
    "  mkdir [dir]: Create an empty directory",
    "  rm [file]: Delete a file (with confirmation)",
    "  rmdir [dir]: Delete an empty directory",
    "  stat [name]: Show detailed information",
    "  search [keyword]: Search files and directories recursively",
    "  cp [src] [dst]: Copy a file",
    "  mv [src] [dst]: Move/rename a file or directory",
    "  du [dir]: Calculate total directory size",
    "  help: Show all commands",
    "  exit: Exit the program",
]


class CommandError(Exception):
    """Raised by a handler with the exact message to show the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ListMode(Enum):
    """Ordering requested from `ls`."""
    NORMAL = ""
    SORT_SIZE = "-s"
    SORT_TIME = "-t"


def ascii_lower(value: str) -> str:
    """Lowercase ASCII letters only; other characters are left as they are."""
    return ''.join(chr(ord(ch) + 32) if 'A' <= ch <= 'Z' else ch for ch in value)


def format_du_size(total_bytes: int) -> str:
    """
    Render a byte count the way `du` reports it.

    Whole megabytes from 1 MB upwards, whole kilobytes below that, both
    rounded half-up.
    """
    if total_bytes >= MB:
        return f"{(total_bytes + MB // 2) // MB} MB"
    return f"{(total_bytes + KB // 2) // KB} KB"


def render_table(rows: List[List[str]]) -> List[str]:
    """
    Align the `ls` table.

    Widths are the widest cell of each column, header included. Name and
    Type are left-aligned, Size is right-aligned, Modify Time is last and
    left unpadded.
    """
    widths = [len(header) for header in LS_HEADERS]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = []
    for name, type_tag, size, modified in [LS_HEADERS] + rows:
        lines.append(
            f"{name:<{widths[0]}} {type_tag:<{widths[1]}} {size:>{widths[2]}} {modified}"
        )
    return lines


class CommandHandlers:
    """
    Implementation of every explorer command except `exit`.

    All path arguments are resolved by the probe against its current
    directory, so a `cd` affects every later command.
    """

    def __init__(self, probe: FSProbe, terminal: Terminal, time_format: str = DEFAULT_TIME_FORMAT):
        """
        Initialize the handlers.

        Args:
            probe: Filesystem probe holding the current directory
            terminal: Channel for output and confirmation prompts
            time_format: strftime format for printed timestamps
        """
        self.probe = probe
        self.terminal = terminal
        self.time_format = time_format

    def get_command_table(self) -> Dict[str, Callable[[List[str]], None]]:
        """Map command names to their handler methods."""
        return {
            'help': self.help,
            'cd': self.cd,
            'ls': self.ls,
            'touch': self.touch,
            'mkdir': self.mkdir,
            'rm': self.rm,
            'rmdir': self.rmdir,
            'stat': self.stat,
            'search': self.search,
            'cp': self.cp,
            'mv': self.mv,
            'du': self.du,
        }

    def help(self, tokens: List[str]) -> None:
        for line in HELP_LINES:
            self.terminal.write_line(line)

    def cd(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing path: Please enter 'cd [path]'")

        arg = tokens[1]
        target = self.probe.home_directory() if arg == "~" else arg

        if not target or not self.probe.exists(target):
            raise CommandError(f"Invalid directory: {arg}")
        if not self.probe.is_directory(target):
            raise CommandError(f"Not a directory: {arg}")
        try:
            self.probe.change_current_working_directory(target)
        except ProbeError as e:
            logger.warning(f"cd to {target} failed: {e}")
            raise CommandError(f"Invalid directory: {arg}") from e

    # Listing
    def ls(self, tokens: List[str]) -> None:
        mode = self._parse_list_mode(tokens)

        try:
            children = self.probe.list_immediate_children()
        except ProbeError as e:
            logger.warning(f"Listing current directory failed: {e}")
            raise CommandError("Failed to access current directory") from e

        entries = [self._build_listing_entry(child, mode) for child in children]

        if mode == ListMode.SORT_TIME:
            entries.sort(key=lambda e: (-e.sort_timestamp, e.display_name))
        elif mode == ListMode.SORT_SIZE:
            entries.sort(key=lambda e: (e.is_empty_dir, -e.size_bytes, e.display_name))

        rows = [entry.to_row(self.time_format) for entry in entries]
        for line in render_table(rows):
            self.terminal.write_line(line)

    def _parse_list_mode(self, tokens: List[str]) -> ListMode:
        if len(tokens) == 1:
            return ListMode.NORMAL
        if len(tokens) == 2 and tokens[1] in (ListMode.SORT_SIZE.value, ListMode.SORT_TIME.value):
            return ListMode(tokens[1])
        raise CommandError("Invalid option: ls")

    def _build_listing_entry(self, child: ProbeEntry, mode: ListMode) -> ListingEntry:
        size = None
        size_bytes = 0
        is_empty_dir = False

        if child.is_dir and mode == ListMode.SORT_SIZE:
            size_bytes, file_count = self.probe.directory_size(child.path)
            size = size_bytes
            is_empty_dir = file_count == 0
        elif child.is_file:
            size = self.probe.file_size_bytes(child.path)
            size_bytes = size or 0

        # Skips str validation, names may hold surrogate escapes
        return ListingEntry.model_construct(
            name=child.name,
            entry_type=EntryType.DIR if child.is_dir else EntryType.FILE,
            size=size,
            size_bytes=size_bytes,
            modified_time=timestamp_to_datetime(self.probe.last_modify_time(child.path)),
            is_empty_dir=is_empty_dir
        )

    # Creation and removal
    def touch(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing filename: Please enter 'touch [name]'")

        name = tokens[1]
        if self.probe.exists(name):
            raise CommandError(f"File already exists: {name}")
        try:
            self.probe.create_empty_file(name)
        except ProbeError as e:
            logger.warning(str(e))
            raise CommandError(f"Failed to create file: {name}") from e

    def mkdir(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing directory name: Please enter 'mkdir [name]'")

        name = tokens[1]
        if self.probe.exists(name):
            raise CommandError(f"Directory already exists: {name}")
        try:
            self.probe.create_directory(name)
        except ProbeError as e:
            logger.warning(str(e))
            raise CommandError(f"Failed to create directory: {name}") from e

    def rm(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing filename: Please enter 'rm [name]'")

        name = tokens[1]
        if not self.probe.exists(name):
            raise CommandError(f"File not found: {name}")
        if not self.probe.is_regular_file(name):
            raise CommandError(f"Not a file: {name}")

        if not self.terminal.confirm(f"Are you sure to delete {name}? (y/n)"):
            logger.debug(f"Deletion of {name} declined")
            return

        try:
            self.probe.remove_file(name)
        except ProbeError as e:
            logger.warning(str(e))
            raise CommandError(f"Failed to delete file: {name}") from e

    def rmdir(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing directory name: Please enter 'rmdir [name]'")

        name = tokens[1]
        if not self.probe.exists(name):
            raise CommandError(f"Directory not found: {name}")
        if not self.probe.is_directory(name):
            raise CommandError(f"Not a directory: {name}")
        if not self.probe.is_empty_directory(name):
            raise CommandError(f"Directory not empty: {name}")
        try:
            self.probe.remove_empty_directory(name)
        except ProbeError as e:
            logger.warning(str(e))
            raise CommandError(f"Failed to delete directory: {name}") from e

    # Inspection
    def stat(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing target: Please enter'stat [name]'")

        name = tokens[1]
        stat_result = self.probe.stat(name)
        if stat_result is None:
            raise CommandError(f"Target not found: {name}")

        is_dir = S_ISDIR(stat_result.st_mode)
        status = FileStatus.model_construct(
            entry_type=EntryType.DIR if is_dir else EntryType.FILE,
            path=self.probe.absolute_path(name),
            size=None if is_dir else stat_result.st_size,
            created_time=timestamp_to_datetime(self.probe.creation_time(name)),
            modified_time=timestamp_to_datetime(stat_result.st_mtime),
            accessed_time=timestamp_to_datetime(stat_result.st_atime)
        )
        for line in status.to_lines(self.time_format):
            self.terminal.write_line(line)

    def search(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing keyword: Please enter 'search [keyword]'")

        keyword = tokens[1]
        needle = ascii_lower(keyword)

        results = [
            SearchResult.from_path(entry.path, entry.is_dir)
            for entry in self.probe.walk_recursive()
            if needle in ascii_lower(entry.name)
        ]

        if not results:
            raise CommandError(f"No results found for '{keyword}'")

        self.terminal.write_line(f"Search results for '{keyword}' ({len(results)} items):")
        for result in results:
            self.terminal.write_line(str(result))

    def du(self, tokens: List[str]) -> None:
        if len(tokens) < 2:
            raise CommandError("Missing directory name: Please enter 'du [name]'")

        arg = tokens[1]
        if not self.probe.is_directory(arg):
            raise CommandError(f"Invalid directory: {arg}")

        total_bytes, _ = self.probe.directory_size(arg)
        self.terminal.write_line(f"Total size of {arg}: {format_du_size(total_bytes)}")

    # Copy and move
    def _effective_target(self, src: str, dst: str) -> str:
        """Destination path, descending into dst when it is an existing directory."""
        if self.probe.is_directory(dst):
            return os.path.join(dst, os.path.basename(src))
        return dst

    def _require_target_parent(self, target: str) -> None:
        parent = os.path.dirname(target) or "."
        if not self.probe.is_directory(parent):
            raise CommandError(INVALID_TARGET_PATH)

    def cp(self, tokens: List[str]) -> None:
        if len(tokens) < 3:
            raise CommandError(INVALID_TARGET_PATH)

        src, dst = tokens[1], tokens[2]
        if not self.probe.is_regular_file(src):
            raise CommandError(SOURCE_NOT_FOUND)

        target = self._effective_target(src, dst)
        self._require_target_parent(target)
        if self.probe.is_directory(target):
            raise CommandError(INVALID_TARGET_PATH)

        overwrite = False
        if self.probe.exists(target):
            if not self.terminal.confirm("File exists in target: Overwrite? (y/n)"):
                logger.debug(f"Overwrite of {target} declined")
                return
            overwrite = True

        try:
            self.probe.copy_file(src, target, overwrite=overwrite)
        except ProbeError as e:
            logger.warning(str(e))
            raise CommandError(INVALID_TARGET_PATH) from e

    def mv(self, tokens: List[str]) -> None:
        if len(tokens) < 3:
            raise CommandError(INVALID_TARGET_PATH)

        src, dst = tokens[1], tokens[2]
        if not self.probe.exists(src):
            raise CommandError(SOURCE_NOT_FOUND)

        target = self._effective_target(src, dst)
        self._require_target_parent(target)
        if self.probe.exists(target):
            raise CommandError(INVALID_TARGET_PATH)

        try:
            self.probe.rename_or_move(src, target)
            return
        except ProbeError as e:
            logger.debug(f"Rename failed, trying copy and delete: {e}")

        # Only plain files get the copy-then-delete fallback; a failed removal
        # leaves the copy in place.
        if not self.probe.is_regular_file(src):
            raise CommandError(INVALID_TARGET_PATH)
        try:
            self.probe.copy_file(src, target)
            self.probe.remove_file(src)
        except ProbeError as e:
            logger.warning(str(e))
            raise CommandError(INVALID_TARGET_PATH) from e
