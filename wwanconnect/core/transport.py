"""
Command transport abstraction.

Every collaborator (qmicli, ip, iptables, modprobe, systemctl) is reached by
running an external command. The runner is injected so tests can substitute
canned results for real process execution.
"""

import logging
import shlex
import subprocess
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..exceptions import TransportError, CommandNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Exit status and combined stdout/stderr of one command."""
    argv: list[str]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        """Shell-quoted command line, for logs and error context."""
        return shlex.join(self.argv)


class CommandRunner(ABC):
    """Abstract base class for command execution."""

    @abstractmethod
    def run(self, argv: Sequence[str]) -> CommandResult:
        """
        Run a command to completion.

        A non-zero exit status is not an error at this layer: callers decide
        whether a failure is fatal.

        Args:
            argv: Program and arguments

        Returns:
            CommandResult with exit status and captured output

        Raises:
            CommandNotFoundError: If the program is not installed
            TransportError: If the command cannot be started
        """
        pass


class SubprocessRunner(CommandRunner):
    """Runs commands as child processes."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        """
        Initialize subprocess runner.

        Args:
            timeout: Per-command timeout in seconds (None = wait forever)
        """
        self.timeout = timeout

    def run(self, argv: Sequence[str]) -> CommandResult:
        """Run command, merging stderr into the captured output."""
        argv = list(argv)
        command_line = shlex.join(argv)
        logger.debug(f"Running: {command_line}")

        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False
            )
        except FileNotFoundError as e:
            logger.error(f"Command not found: {argv[0]}")
            raise CommandNotFoundError(
                f"Command not found: {argv[0]}",
                command=command_line
            ) from e
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"Failed to run {command_line}: {e}")
            raise TransportError(
                f"Failed to run command: {e}",
                command=command_line
            ) from e

        result = CommandResult(argv=argv, returncode=proc.returncode, output=proc.stdout or "")
        logger.debug(f"Exit status {result.returncode}, output: {result.output!r}")
        return result


ResponseHandler = Callable[[list[str]], CommandResult]


def _matches(pattern: tuple[str, ...], argv: list[str]) -> bool:
    """
    Check if argv matches a mock pattern.

    The program must be equal; every other pattern element must appear in
    argv, either verbatim or as the name of a ``--flag=value`` argument.
    """
    if not argv or not pattern or argv[0] != pattern[0]:
        return False

    return all(
        any(arg == item or arg.startswith(item + "=") for arg in argv[1:])
        for item in pattern[1:]
    )


class MockRunner(CommandRunner):
    """
    Mock runner for testing.

    Returns queued results for matching commands without starting processes.
    Commands without a queued result or handler succeed with empty output.
    """

    def __init__(self) -> None:
        """Initialize mock runner."""
        self.calls: list[list[str]] = []
        self._responses: list[tuple[tuple[str, ...], CommandResult]] = []
        self._handlers: dict[str, ResponseHandler] = {}
        self._lock = threading.Lock()
        logger.info("Initialized MockRunner")

    def add_response(
        self,
        pattern: Sequence[str],
        output: str = "",
        returncode: int = 0
    ) -> None:
        """
        Queue a result for the next command matching ``pattern``.

        Args:
            pattern: Program followed by arguments that must appear
                     (e.g., ["qmicli", "--wds-start-network"])
            output: Captured output to return
            returncode: Exit status to return
        """
        with self._lock:
            self._responses.append(
                (tuple(pattern), CommandResult(argv=list(pattern), returncode=returncode, output=output))
            )
            logger.debug(f"Added mock response for {list(pattern)}: rc={returncode}")

    def set_handler(self, program: str, handler: ResponseHandler) -> None:
        """
        Route every call of ``program`` to ``handler``.

        Handlers let tests simulate stateful tools such as iptables.
        Queued responses take precedence over handlers.
        """
        with self._lock:
            self._handlers[program] = handler

    def run(self, argv: Sequence[str]) -> CommandResult:
        """Record the call and return the matching queued result."""
        argv = list(argv)

        with self._lock:
            self.calls.append(argv)
            logger.debug(f"Mock run: {argv}")

            for index, (pattern, response) in enumerate(self._responses):
                if _matches(pattern, argv):
                    self._responses.pop(index)
                    return CommandResult(
                        argv=argv,
                        returncode=response.returncode,
                        output=response.output
                    )

            handler = self._handlers.get(argv[0]) if argv else None

        if handler is not None:
            return handler(argv)

        return CommandResult(argv=argv, returncode=0, output="")

    def calls_for(self, *pattern: str) -> list[list[str]]:
        """Return recorded calls matching ``pattern``, in call order."""
        return [call for call in self.calls if _matches(pattern, call)]

    def clear_responses(self) -> None:
        """Clear all queued responses (useful for testing)."""
        with self._lock:
            self._responses.clear()
            logger.debug("Cleared mock response queue")
