"""Read-dispatch loop for tildesh."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from tildesh.builtins import CD, EXIT, change_directory, path_length
from tildesh.constants import EXIT_FAILURE, EXIT_SUCCESS, WHITESPACE
from tildesh.environment import Environment, OsEnvironment
from tildesh.errors import PathTooLongError, ProcessCreationError, ShellError
from tildesh.models import ShellConfig
from tildesh.process import ForkSpawner, ProcessSpawner, split_background
from tildesh.prompt import build_prompt
from tildesh.tokenizer import tokenize

log = logging.getLogger(__name__)


class Shell:
    """Interactive shell: prompt, read a line, run it, repeat.

    Process-wide state is reached only through *env* and child processes only
    through *spawner*, so both can be replaced in tests.
    """

    def __init__(
        self,
        config: ShellConfig | None = None,
        env: Environment | None = None,
        spawner: ProcessSpawner | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.config = config or ShellConfig()
        self.env = env or OsEnvironment()
        self.spawner = spawner or ForkSpawner()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def _error(self, message: str) -> None:
        print(message, file=self.stderr)
        self.stderr.flush()

    def prompt(self) -> None:
        self.stdout.write(build_prompt(self.env, color=self.config.color))
        self.stdout.flush()

    def read_line(self) -> str | None:
        """Return the next input line, or ``None`` at end of input."""
        line = self.stdin.readline()
        if not line:
            return None
        return line

    def execute(self, line: str) -> int | None:
        """Interpret one input line.

        Returns:
            The shell's exit status when the line ends the shell, else ``None``.
        """
        tokens = tokenize(line, WHITESPACE, self.config.max_tokens)
        if tokens.overflow:
            self._error("Exceeded length")
            log.debug("dropped line with more than %d words", self.config.max_tokens - 1)
            return None
        if not tokens:
            return None

        command = tokens[0]
        if command == EXIT:
            log.debug("exit requested")
            return EXIT_SUCCESS
        if command == CD:
            self.run_cd(tokens.at(1))
            return None
        return self.run_external(tokens.argv())

    def run_cd(self, given_path: str | None) -> None:
        if given_path is not None and path_length(given_path) > self.config.path_max:
            self._error("ERROR: Path Invalid: too long")
            return
        try:
            change_directory(
                given_path, self.env, path_max=self.config.path_max, stdout=self.stdout
            )
        except PathTooLongError:
            self._error("ERROR: Path Invalid: too long")
        except ShellError as e:
            self._error(str(e))

    def run_external(self, tokens: list[str]) -> int | None:
        """Launch a program, waiting for it unless the line ended with ``&``.

        Returns:
            ``EXIT_FAILURE`` when no child process could be created, else ``None``.
        """
        argv, background = split_background(tokens)
        if not argv:
            return None

        try:
            pid = self.spawner.spawn(argv)
        except ProcessCreationError as e:
            self._error(str(e))
            return EXIT_FAILURE

        if background:
            self.spawner.detach(pid)
            print(f"Job {pid}", file=self.stdout)
            self.stdout.flush()
        else:
            self.spawner.wait(pid)
        return None

    def run(self) -> int:
        """Run until ``exit``, end of input, or a fatal error.

        Returns:
            The process exit status for the shell.
        """
        while True:
            self.prompt()
            try:
                line = self.read_line()
            except KeyboardInterrupt:
                self.stdout.write("\n")
                self.stdout.flush()
                continue
            if line is None:
                # End of input behaves like exit.
                self.stdout.write("\n")
                self.stdout.flush()
                return EXIT_SUCCESS

            status = self.execute(line)
            if status is not None:
                return status
