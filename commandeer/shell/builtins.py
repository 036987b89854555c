"""
Shell Built-in Commands

Implements the terminal commands on top of the virtual file system.

Author: Commandeer Developers
Version: 1.0.0
"""

from typing import Callable, List, Optional

from commandeer.exceptions import FileSystemException, TreeCorruptionError
from commandeer.filesystem import (
    NodeKind,
    PathResolver,
    format_mode,
    format_permissions,
    format_size,
    format_timestamp,
    parse_mode,
    sort_nodes,
)
from commandeer.filesystem.formatting import SORT_KEYS
from commandeer.logger import get_logger


HELP_TEXT = """\
Available commands:
  ls [-r] [--sort=name|size|modified] [path]   List files
  pwd                       Print working directory
  cd [path|..|home]         Change directory
  mkdir <name>...           Create directory
  touch <name>...           Create file
  rm <path>...              Remove file or directory (recursively)
  mv <src> <dest>           Move/Rename
  cp <src> <dest>           Copy (recursively)
  chmod <mode> <path>       Change permissions (e.g., 755)
  stat <path>               Show node details
  tree [path]               Show the directory tree
  find <query>              Search for files below the current directory
  history                   Show command history
  clear                     Clear the screen
  help                      Show this help
  exit                      Leave the terminal"""


class BuiltinCommands:
    """
    Built-in terminal commands.

    Each command returns an exit code: 0 on success, 1 on failure, 2 on
    bad usage. Failures print a message naming the command and the path.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._logger = get_logger('shell')
        self._commands: dict[str, Callable[[List[str]], int]] = {
            'help': self.cmd_help,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
            'ls': self.cmd_ls,
            'cd': self.cmd_cd,
            'pwd': self.cmd_pwd,
            'mkdir': self.cmd_mkdir,
            'touch': self.cmd_touch,
            'rm': self.cmd_rm,
            'mv': self.cmd_mv,
            'cp': self.cmd_cp,
            'chmod': self.cmd_chmod,
            'stat': self.cmd_stat,
            'tree': self.cmd_tree,
            'find': self.cmd_find,
            'history': self.cmd_history,
            'clear': self.cmd_clear,
        }

    def execute(self, name: str, args: List[str]) -> int:
        """
        Execute a built-in command.

        Args:
            name: Command name
            args: Command arguments

        Returns:
            Exit code
        """
        cmd = self._commands.get(name)
        if cmd is None:
            self._out(f"{name}: command not found")
            return 127

        try:
            return cmd(args)
        except TreeCorruptionError:
            raise
        except Exception as e:
            self._logger.exception(f"Command '{name}' crashed", exc=e, context={'args': args})
            self._out(f"{name}: {e}")
            return 1

    # Helpers

    def _out(self, text: str = '') -> None:
        self._shell.write(text)

    @property
    def _vfs(self):
        return self._shell.vfs

    def _resolve(self, path: str) -> str:
        return PathResolver.resolve(path, self._shell.cwd)

    def _failure(self, name: str, verb: str, path: str) -> int:
        """Report the filesystem's last error for ``path``."""
        error: Optional[FileSystemException] = self._vfs.last_error
        reason = error.message if error is not None else "operation failed"
        self._out(f"{name}: cannot {verb} '{path}': {reason}")
        return 1

    # Command implementations

    def cmd_help(self, args: List[str]) -> int:
        """Display help information."""
        self._out(HELP_TEXT)
        return 0

    def cmd_exit(self, args: List[str]) -> int:
        """Exit the shell."""
        self._out("Goodbye!")
        self._shell.request_exit()
        return 0

    def cmd_pwd(self, args: List[str]) -> int:
        """Print working directory."""
        self._out(self._shell.cwd)
        return 0

    def cmd_cd(self, args: List[str]) -> int:
        """Change directory. 'home' and no argument both go to '/'."""
        target = args[0] if args else '/'
        if target == 'home':
            target = '/'

        resolved = self._resolve(target)
        node = self._vfs.lookup(resolved)

        if node is None:
            self._out(f"cd: no such file or directory: {target}")
            return 1
        if not node.is_directory:
            self._out(f"cd: not a directory: {target}")
            return 1

        self._shell.cwd = resolved
        return 0

    def cmd_ls(self, args: List[str]) -> int:
        """List directory contents."""
        reverse = False
        sort_key = 'name'
        paths: List[str] = []

        for arg in args:
            if arg == '-r':
                reverse = True
            elif arg.startswith('--sort='):
                sort_key = arg.split('=', 1)[1]
                if sort_key not in SORT_KEYS:
                    self._out(f"ls: invalid sort key '{sort_key}' (choose from {', '.join(SORT_KEYS)})")
                    return 2
            elif arg.startswith('-') and arg != '-':
                self._out(f"ls: unknown option '{arg}'")
                return 2
            else:
                paths.append(arg)

        resolved = self._resolve(paths[0]) if paths else self._shell.cwd
        node = self._vfs.lookup(resolved)

        if node is None:
            self._out(f"ls: cannot access '{paths[0]}': No such file or directory")
            return 1

        entries = [node] if node.is_file else self._vfs.list(resolved)

        for entry in sort_nodes(entries, key=sort_key, reverse=reverse):
            size = '-' if entry.is_directory else format_size(entry.size)
            name = entry.name + '/' if entry.is_directory else entry.name
            self._out(
                f"{format_mode(entry)} {size:>8}  {format_timestamp(entry.modified_at)}  {name}"
            )

        return 0

    def _create_all(self, name: str, args: List[str], kind: NodeKind) -> int:
        if not args:
            self._out(f"Usage: {name} <name>")
            return 2

        status = 0
        for path in args:
            if self._vfs.create(path, kind, cwd=self._shell.cwd) is None:
                status = self._failure(name, 'create', path)
            else:
                label = 'Directory' if kind is NodeKind.DIRECTORY else 'File'
                self._out(f"{label} created: {path}")
        return status

    def cmd_mkdir(self, args: List[str]) -> int:
        """Create directories."""
        return self._create_all('mkdir', args, NodeKind.DIRECTORY)

    def cmd_touch(self, args: List[str]) -> int:
        """Create empty files."""
        return self._create_all('touch', args, NodeKind.FILE)

    def cmd_rm(self, args: List[str]) -> int:
        """Remove files or directories, including their contents."""
        if not args:
            self._out("Usage: rm <path>")
            return 2

        status = 0
        for path in args:
            resolved = self._resolve(path)
            if self._vfs.remove(resolved):
                self._out(f"Removed: {resolved}")
            else:
                status = self._failure('rm', 'remove', path)

            # removing the cwd or one of its ancestors leaves us nowhere
            if not self._vfs.is_directory(self._shell.cwd):
                self._shell.cwd = '/'
        return status

    def _transfer(self, name: str, args: List[str]) -> int:
        if len(args) != 2:
            self._out(f"Usage: {name} <source> <destination>")
            return 2

        source = self._resolve(args[0])
        destination = self._resolve(args[1])
        operation = self._vfs.rename if name == 'mv' else self._vfs.copy

        if not operation(source, destination):
            verb = 'move' if name == 'mv' else 'copy'
            return self._failure(name, verb, args[0])

        self._out(f"Success: {source} -> {destination}")

        if name == 'mv' and PathResolver.is_within(self._shell.cwd, source):
            self._shell.cwd = destination + self._shell.cwd[len(source):]
        return 0

    def cmd_mv(self, args: List[str]) -> int:
        """Move or rename."""
        return self._transfer('mv', args)

    def cmd_cp(self, args: List[str]) -> int:
        """Copy recursively."""
        return self._transfer('cp', args)

    def cmd_chmod(self, args: List[str]) -> int:
        """Change file permissions."""
        if len(args) != 2:
            self._out("Usage: chmod <mode> <path>")
            return 2

        try:
            mode = parse_mode(args[0])
        except ValueError:
            self._out(f"chmod: invalid mode: '{args[0]}'")
            return 1

        resolved = self._resolve(args[1])
        if not self._vfs.chmod(resolved, mode):
            return self._failure('chmod', 'change permissions of', args[1])

        self._out(f"Permissions changed for {resolved}: {format_permissions(mode)}")
        return 0

    def cmd_stat(self, args: List[str]) -> int:
        """Show node details."""
        if len(args) != 1:
            self._out("Usage: stat <path>")
            return 2

        resolved = self._resolve(args[0])
        node = self._vfs.lookup(resolved)
        if node is None:
            self._out(f"stat: cannot stat '{args[0]}': No such file or directory")
            return 1

        info = node.to_dict()
        self._out(f"  Path: {resolved}")
        self._out(f"    Id: {info['id']}")
        self._out(f"  Type: {info['kind']}")
        self._out(f"  Mode: {info['permissions']} ({format_mode(node)})")
        self._out(f"  Size: {info['size']} ({format_size(node.size)})")
        self._out(f"Modify: {info['modified']}")
        self._out(f"Parent: {info['parent_id'] if info['parent_id'] is not None else '-'}")
        if info['children'] is not None:
            self._out(f"Entries: {info['children']}")
        return 0

    def cmd_tree(self, args: List[str]) -> int:
        """Show the directory tree."""
        target = args[0] if args else self._shell.cwd
        resolved = self._resolve(target)
        node = self._vfs.lookup(resolved)

        if node is None:
            self._out(f"tree: '{target}': No such file or directory")
            return 1

        self._out(resolved)
        directories = files = 0
        # (node, indent prefix, is last sibling)
        stack = [(child, '', i == 0) for i, child in enumerate(reversed(sort_nodes(node.list_children())))]
        while stack:
            child, prefix, last = stack.pop()
            branch = '└── ' if last else '├── '
            self._out(f"{prefix}{branch}{child.name}")
            if child.is_directory:
                directories += 1
                children = sort_nodes(child.list_children())
                next_prefix = prefix + ('    ' if last else '│   ')
                stack.extend(
                    (grandchild, next_prefix, i == 0)
                    for i, grandchild in enumerate(reversed(children))
                )
            else:
                files += 1

        self._out()
        self._out(f"{directories} directories, {files} files")
        return 0

    def cmd_find(self, args: List[str]) -> int:
        """Search below the current directory."""
        if not args:
            self._out("Usage: find <query>")
            return 2

        query = ' '.join(args)
        results = self._shell.search.search(query, scope=self._shell.cwd)

        if not results:
            self._out(f"find: no matches for '{query}'")
            return 1

        for path in results:
            self._out(path)
        return 0

    def cmd_history(self, args: List[str]) -> int:
        """Display command history."""
        for i, cmd in enumerate(self._shell.parser.get_history(), 1):
            self._out(f"{i:>5}  {cmd}")
        return 0

    def cmd_clear(self, args: List[str]) -> int:
        """Clear screen."""
        self._shell.write("\033[2J\033[H", end='')
        return 0
