"""
Commandeer Shell Module

The terminal front end of the virtual file system.

Author: Commandeer Developers
Version: 1.0.0
"""

import sys
from typing import Optional, TextIO

from .parser import CommandParser
from .builtins import BuiltinCommands
from commandeer.core.config_loader import Config, get_config
from commandeer.filesystem.vfs import VirtualFileSystem
from commandeer.logger import get_logger
from commandeer.search import FileSearch


class Shell:
    """
    Commandeer interactive shell.

    Provides:
    - Command parsing
    - Built-in commands
    - Command history
    - Current working directory

    Example:
        >>> shell = Shell(VirtualFileSystem.with_sample_layout())
        >>> shell.execute('cd Documents; ls')
        0
    """

    def __init__(
        self,
        vfs: Optional[VirtualFileSystem] = None,
        search: Optional[FileSearch] = None,
        stdout: Optional[TextIO] = None,
        config: Optional[Config] = None
    ):
        self._config = config or get_config()
        self._vfs = vfs if vfs is not None else VirtualFileSystem.from_config(self._config)
        self._search = search or FileSearch(self._vfs)
        self._stdout = stdout
        self._logger = get_logger('shell')
        self._parser = CommandParser(history_size=self._config.shell.history_size)
        self._builtins = BuiltinCommands(self)
        self._exiting = False
        self._cwd = '/'

    @property
    def vfs(self) -> VirtualFileSystem:
        return self._vfs

    @property
    def search(self) -> FileSearch:
        return self._search

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def cwd(self) -> str:
        return self._cwd

    @cwd.setter
    def cwd(self, value: str):
        self._cwd = value

    @property
    def exiting(self) -> bool:
        return self._exiting

    def write(self, text: str = '', end: str = '\n') -> None:
        """Write output to the shell's stream (stdout by default)."""
        stream = self._stdout or sys.stdout
        stream.write(text + end)

    def prompt(self) -> str:
        """Generate the shell prompt."""
        cwd_display = '~' if self._cwd == '/' else self._cwd
        return f"{self._config.shell.user}@{self._config.shell.hostname}:{cwd_display}$ "

    def run(self) -> None:
        """
        Run the interactive shell.

        This is the main REPL loop.
        """
        self.write("Welcome to Commandeer")
        self.write("Type 'help' for a list of commands.\n")

        while not self._exiting:
            try:
                line = input(self.prompt())
            except EOFError:
                self.write()
                break
            except KeyboardInterrupt:
                self.write("^C")
                continue

            self.execute(line)

    def execute(self, line: str) -> int:
        """
        Execute a command line.

        Commands separated by ';' run in order; execution stops early if
        one of them is 'exit'.

        Args:
            line: Command line string

        Returns:
            Exit code of the last command run
        """
        exit_code = 0

        for cmd in self._parser.parse(line):
            self._logger.debug(
                "Executing command",
                context={'command': cmd.command, 'args': cmd.args, 'cwd': self._cwd}
            )
            exit_code = self._builtins.execute(cmd.command, cmd.args)
            if self._exiting:
                break

        return exit_code

    def run_script(self, script: str) -> int:
        """
        Run a script (multiple commands).

        Args:
            script: Script content, one command line per line

        Returns:
            Last exit code
        """
        exit_code = 0

        for line in script.splitlines():
            if self._exiting:
                break
            line = line.strip()
            if line and not line.startswith('#'):
                exit_code = self.execute(line)

        return exit_code

    def request_exit(self) -> None:
        """Request the shell to exit."""
        self._exiting = True


def create_shell(
    vfs: Optional[VirtualFileSystem] = None,
    stdout: Optional[TextIO] = None
) -> Shell:
    """Factory function to create a shell."""
    return Shell(vfs=vfs, stdout=stdout)
