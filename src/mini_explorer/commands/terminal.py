"""
Line-based terminal channel used by the shell and the command handlers.
"""

import sys
from typing import Optional, TextIO


CONFIRM_ANSWER = "y"


class Terminal:
    """
    Blocking, line-oriented input/output channel.

    Wraps a pair of text streams so the shell can run against the real
    console or against in-memory streams in tests.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def write(self, text: str) -> None:
        """Write text without a newline and flush, for prompts."""
        self.stdout.write(text)
        self.stdout.flush()

    def write_line(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def read_line(self) -> Optional[str]:
        """
        Read one line.

        Returns:
            The line without its line terminator, or None at end of input
        """
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question; only an exact 'y' counts as yes."""
        self.write(prompt)
        answer = self.read_line()
        return answer == CONFIRM_ANSWER
