"""
Filesystem probe for MiniFileExplorer.

This module is the only place that talks to the host filesystem. It answers
existence/type/size/time questions, performs the create/remove/copy/rename
primitives the commands need, and enumerates directories either one level
deep or recursively. Relative paths are resolved against the probe's own
current directory, so a single probe instance carries the explorer's
working-directory state between commands.
"""

import os
import shutil
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


logger = logging.getLogger(__name__)


class ProbeError(OSError):
    """Raised when a filesystem mutation or directory change fails."""
    pass


@dataclass
class ProbeEntry:
    """
    One directory entry found while enumerating.

    Attributes:
        path: Current directory joined with the entry's location
        name: Base name of the entry
        is_dir: Whether the entry is (or points to) a directory
        is_file: Whether the entry is (or points to) a regular file
    """
    path: str
    name: str
    is_dir: bool
    is_file: bool


class FSProbe:
    """
    Semantic layer over the host filesystem.

    Query methods never raise: they answer False/None when the underlying
    call fails. Mutations raise ProbeError chained from the OSError that
    caused them.
    """

    def __init__(self, cwd: Optional[str] = None):
        """
        Initialize the probe.

        Args:
            cwd: Starting directory; defaults to the process working directory
        """
        self._cwd = os.path.abspath(cwd) if cwd else os.getcwd()

    # Path resolution
    def resolve(self, path: str) -> str:
        """Resolve a path against the current directory."""
        return os.path.join(self._cwd, path)

    def absolute_path(self, path: str) -> str:
        """Absolute form of a path, without collapsing '.' or '..' parts."""
        return self.resolve(path)

    def current_working_directory(self) -> str:
        return self._cwd

    def change_current_working_directory(self, path: str) -> None:
        """
        Make a directory the current directory.

        Args:
            path: Directory to switch to, relative or absolute

        Raises:
            ProbeError: If the target is not an accessible directory
        """
        target = self.resolve(path)
        if not os.path.isdir(target):
            raise ProbeError(f"Not a directory: {target}")
        if not os.access(target, os.X_OK):
            raise ProbeError(f"Permission denied: {target}")
        self._cwd = os.path.realpath(target)
        logger.debug(f"Current directory is now {self._cwd}")

    def home_directory(self) -> str:
        """Home directory of the current user, or '' when it cannot be determined."""
        home = os.path.expanduser('~')
        return '' if home == '~' else home

    # Queries
    def stat(self, path: str) -> Optional[os.stat_result]:
        try:
            return os.stat(self.resolve(path))
        except (OSError, ValueError) as e:
            logger.debug(f"stat failed for {path}: {e}")
            return None

    def exists(self, path: str) -> bool:
        return self.stat(path) is not None

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(self.resolve(path))

    def is_regular_file(self, path: str) -> bool:
        return os.path.isfile(self.resolve(path))

    def is_empty_directory(self, path: str) -> bool:
        """Check whether a directory has no entries at all."""
        try:
            with os.scandir(self.resolve(path)) as it:
                return next(it, None) is None
        except OSError as e:
            logger.debug(f"Cannot read directory {path}: {e}")
            return False

    def file_size_bytes(self, path: str) -> Optional[int]:
        stat_result = self.stat(path)
        return stat_result.st_size if stat_result else None

    def last_modify_time(self, path: str) -> Optional[float]:
        stat_result = self.stat(path)
        return stat_result.st_mtime if stat_result else None

    def last_access_time(self, path: str) -> Optional[float]:
        stat_result = self.stat(path)
        return stat_result.st_atime if stat_result else None

    def creation_time(self, path: str) -> Optional[float]:
        """
        Creation time of a path, or None when the platform cannot tell.

        Uses st_birthtime where available; elsewhere falls back to st_ctime,
        which is the inode change time on Linux.
        """
        stat_result = self.stat(path)
        if stat_result is None:
            return None
        return self._creation_time_of(stat_result)

    @staticmethod
    def _creation_time_of(stat_result: os.stat_result) -> Optional[float]:
        if hasattr(stat_result, 'st_birthtime'):
            # macOS, BSD and Windows on newer interpreters
            return stat_result.st_birthtime
        elif hasattr(stat_result, 'st_ctime'):
            return stat_result.st_ctime
        return None

    # Mutations
    def create_empty_file(self, path: str) -> None:
        try:
            with open(self.resolve(path), 'xb'):
                pass
        except OSError as e:
            raise ProbeError(f"Cannot create file {path}: {e}") from e

    def create_directory(self, path: str) -> None:
        try:
            os.mkdir(self.resolve(path))
        except OSError as e:
            raise ProbeError(f"Cannot create directory {path}: {e}") from e

    def remove_file(self, path: str) -> None:
        try:
            os.remove(self.resolve(path))
        except OSError as e:
            raise ProbeError(f"Cannot remove file {path}: {e}") from e

    def remove_empty_directory(self, path: str) -> None:
        try:
            os.rmdir(self.resolve(path))
        except OSError as e:
            raise ProbeError(f"Cannot remove directory {path}: {e}") from e

    def copy_file(self, src: str, dst: str, overwrite: bool = False) -> None:
        """
        Copy a regular file's content and permission bits.

        Args:
            src: Source file
            dst: Destination file path (not a directory)
            overwrite: Whether an existing destination may be replaced

        Raises:
            ProbeError: If the destination exists and overwrite is False, or the copy fails
        """
        src_path = self.resolve(src)
        dst_path = self.resolve(dst)
        if not overwrite and os.path.lexists(dst_path):
            raise ProbeError(f"Destination already exists: {dst}")
        try:
            shutil.copy(src_path, dst_path)
        except (OSError, shutil.Error) as e:
            raise ProbeError(f"Cannot copy {src} to {dst}: {e}") from e

    def rename_or_move(self, src: str, dst: str) -> None:
        """Atomically rename src to dst; fails across filesystems."""
        try:
            os.rename(self.resolve(src), self.resolve(dst))
        except OSError as e:
            raise ProbeError(f"Cannot rename {src} to {dst}: {e}") from e

    # Enumeration
    def list_immediate_children(self, directory: Optional[str] = None) -> List[ProbeEntry]:
        """
        List the entries of one directory, skipping those that cannot be inspected.

        Args:
            directory: Directory to list; defaults to the current directory

        Returns:
            Entries in filesystem enumeration order

        Raises:
            ProbeError: If the directory itself cannot be read
        """
        base = self.resolve(directory) if directory else self._cwd
        entries = []
        try:
            with os.scandir(base) as it:
                for dir_entry in it:
                    try:
                        is_dir = dir_entry.is_dir()
                        is_file = dir_entry.is_file()
                    except OSError as e:
                        logger.debug(f"Skipping {dir_entry.path}: {e}")
                        continue
                    entries.append(ProbeEntry(
                        path=dir_entry.path,
                        name=dir_entry.name,
                        is_dir=is_dir,
                        is_file=is_file
                    ))
        except OSError as e:
            raise ProbeError(f"Cannot list directory {base}: {e}") from e
        return entries

    def walk_recursive(self, directory: Optional[str] = None) -> Iterator[ProbeEntry]:
        """
        Yield every entry strictly below a directory.

        Symbolic links to directories are reported but not descended into.
        Subtrees that cannot be read are skipped rather than aborting the walk.

        Args:
            directory: Root of the walk; defaults to the current directory

        Yields:
            ProbeEntry for each descendant; the root itself is never yielded
        """
        base = self.resolve(directory) if directory else self._cwd
        for current_dir, subdirs, files in os.walk(base, onerror=self._on_walk_error):
            for name in subdirs:
                yield ProbeEntry(
                    path=os.path.join(current_dir, name),
                    name=name,
                    is_dir=True,
                    is_file=False
                )
            for name in files:
                path = os.path.join(current_dir, name)
                yield ProbeEntry(
                    path=path,
                    name=name,
                    is_dir=False,
                    is_file=os.path.isfile(path)
                )

    def _on_walk_error(self, error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory {error.filename}: {error}")

    def directory_size(self, directory: str) -> Tuple[int, int]:
        """
        Total apparent size of the regular files below a directory.

        Args:
            directory: Directory to measure

        Returns:
            Tuple of (total bytes, number of regular files counted)
        """
        total = 0
        file_count = 0
        for entry in self.walk_recursive(directory):
            if not entry.is_file:
                continue
            try:
                total += os.path.getsize(entry.path)
            except OSError as e:
                logger.debug(f"Cannot size {entry.path}: {e}")
                continue
            file_count += 1
        return total, file_count
