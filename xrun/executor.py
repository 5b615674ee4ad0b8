"""Execution of the wrapped CLI commands."""

import os
import shlex
import subprocess
import time
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from xrun.errors import CommandExecutionError
from xrun.utils.logging import get_logger


class CommandRunner(Protocol):
    """Runs a command line and returns its standard output."""

    def execute(self, command: str, env: Optional[Dict[str, str]] = None) -> str:
        ...


class SubprocessCommandRunner:
    """Runs commands as child processes, without a shell.

    When ``dependency_dir`` is set, the binary is taken from that directory
    instead of ``$PATH`` so only installed tools can be invoked.
    """

    def __init__(self, dependency_dir: Optional[str] = None, timeout: Optional[float] = 30.0):
        """Initialize the runner.

        Args:
            dependency_dir: Directory holding the allowed binaries
            timeout: Timeout in seconds, None waits forever
        """
        self.dependency_dir = dependency_dir
        self.timeout = timeout
        self.logger = get_logger("xrun.executor")

    def execute(self, command: str, env: Optional[Dict[str, str]] = None) -> str:
        """Run ``command`` and return its standard output.

        Args:
            command: Command line, split with shell quoting rules
            env: Extra environment variables, e.g. ``{"KUBECONFIG": "..."}``

        Returns:
            Standard output of the command

        Raises:
            CommandExecutionError: If the command cannot be parsed, started,
                exits with a non-zero code or times out
        """
        args = self._build_args(command)

        run_env = dict(os.environ)
        run_env.update(env or {})

        self.logger.debug("Executing command", command=command, args=args)
        start_time = time.time()
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
                env=run_env,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandExecutionError(
                f"command timed out after {self.timeout} seconds", command=command
            ) from e
        except OSError as e:
            raise CommandExecutionError(f"while starting command: {e}", command=command) from e

        self.logger.debug(
            "Command finished",
            command=command,
            exit_code=result.returncode,
            duration=round(time.time() - start_time, 3),
        )

        if result.returncode != 0:
            raise CommandExecutionError(
                _run_error(result.stdout, result.stderr, result.returncode),
                command=command,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return result.stdout

    def _build_args(self, command: str) -> List[str]:
        try:
            args = shlex.split(command)
        except ValueError as e:
            raise CommandExecutionError(f"invalid raw command {command!r}: {e}", command=command) from e

        if not args:
            raise CommandExecutionError(f"invalid raw command: {command!r}", command=command)

        if self.dependency_dir:
            args[0] = str(Path(self.dependency_dir) / args[0])
        return args


def _run_error(stdout: str, stderr: str, exit_code: int) -> str:
    parts = [part.rstrip("\n") for part in (stdout, stderr) if part]
    parts.append(f"exit status {exit_code}")
    return "\n".join(parts)
