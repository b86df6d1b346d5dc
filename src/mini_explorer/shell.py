"""
Interactive shell for MiniFileExplorer.

This module implements the read-eval-print loop: print the prompt, read a
line, tokenize it, look the command up in the dispatch table and run its
handler, until `exit` or end of input.
"""

import logging
from enum import Enum
from typing import List, Optional

from .commands.handlers import CommandError, CommandHandlers
from .commands.terminal import Terminal
from .models.entries import DEFAULT_TIME_FORMAT
from .tools.fs_probe import FSProbe
from .tools.tokenizer import TokenizeError, tokenize


logger = logging.getLogger(__name__)

PROMPT = "Enter command (type 'help' for all commands): "
CLOSING_BANNER = "MiniFileExplorer closed successfully"
INVALID_COMMAND = "Invalid command: unmatched quote"
EXIT_COMMAND = "exit"


class ShellState(Enum):
    """Lifecycle of the read-eval-print loop."""
    RUNNING = "running"
    TERMINATED = "terminated"


class Shell:
    """
    Read-eval-print loop over a terminal channel.

    The shell owns the dispatch table; handlers report failures by raising
    CommandError, which the shell prints before prompting again.
    """

    def __init__(
        self,
        probe: Optional[FSProbe] = None,
        terminal: Optional[Terminal] = None,
        time_format: str = DEFAULT_TIME_FORMAT
    ):
        """
        Initialize the shell.

        Args:
            probe: Filesystem probe holding the current directory
            terminal: Input/output channel; defaults to stdin/stdout
            time_format: strftime format for printed timestamps
        """
        self.probe = probe if probe is not None else FSProbe()
        self.terminal = terminal if terminal is not None else Terminal()
        self.handlers = CommandHandlers(self.probe, self.terminal, time_format)
        self.commands = self.handlers.get_command_table()
        self.state = ShellState.RUNNING

    def run(self) -> int:
        """
        Run the loop until `exit` or end of input.

        Returns:
            Process exit status
        """
        while self.state == ShellState.RUNNING:
            self.terminal.write(PROMPT)
            line = self.terminal.read_line()
            if line is None:
                logger.debug("End of input, leaving the shell")
                self.state = ShellState.TERMINATED
                break
            self.execute_line(line)
        return 0

    def execute_line(self, line: str) -> ShellState:
        """
        Tokenize and run one input line.

        Args:
            line: Raw line without its terminator

        Returns:
            The shell state after the line has run
        """
        try:
            tokens = tokenize(line)
        except TokenizeError as e:
            logger.debug(f"Rejected input {line!r}: {e}")
            self.terminal.write_line(INVALID_COMMAND)
            return self.state

        if tokens:
            self.dispatch(tokens)
        return self.state

    def dispatch(self, tokens: List[str]) -> None:
        """Run the handler named by the first token."""
        name = tokens[0]
        if name == EXIT_COMMAND:
            self.terminal.write_line(CLOSING_BANNER)
            self.state = ShellState.TERMINATED
            return

        handler = self.commands.get(name)
        if handler is None:
            self.terminal.write_line(f"Unknown command: {name}")
            return

        logger.debug(f"Dispatching {name} with {len(tokens) - 1} argument(s)")
        try:
            handler(tokens)
        except CommandError as e:
            self.terminal.write_line(e.message)
        except Exception as e:
            logger.exception(f"Command {name} failed unexpectedly")
            summary = next((line for line in str(e).splitlines() if line.strip()), type(e).__name__)
            self.terminal.write_line(f"Command failed: {name}: {summary}")
