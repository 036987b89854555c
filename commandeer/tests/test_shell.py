#!/usr/bin/env python3
"""
Shell Unit Tests

Command parsing and the terminal commands, driven through
``Shell.execute`` with output captured in memory.

Author: Commandeer Developers
Version: 1.0.0
"""

import io
import unittest
from unittest import mock

from commandeer.core.config_loader import Config, ConfigLoader
from commandeer.exceptions import TreeCorruptionError
from commandeer.filesystem import VirtualFileSystem
from commandeer.logger import Logger
from commandeer.main import main
from commandeer.shell import CommandParser, Shell, create_shell


class TestCommandParser(unittest.TestCase):
    """Test command line parsing."""

    def setUp(self):
        self.parser = CommandParser()

    def test_simple_command(self):
        cmds = self.parser.parse('ls -r /Documents')
        self.assertEqual(len(cmds), 1)
        self.assertEqual(cmds[0].command, 'ls')
        self.assertEqual(cmds[0].args, ['-r', '/Documents'])

    def test_sequence(self):
        """Semicolons split commands, empty pieces are skipped."""
        cmds = self.parser.parse('mkdir a;cd a ;; pwd')
        self.assertEqual([c.command for c in cmds], ['mkdir', 'cd', 'pwd'])
        self.assertEqual(cmds[1].args, ['a'])

    def test_quotes(self):
        cmds = self.parser.parse('mkdir "My Files" \'semi;colon\'')
        self.assertEqual(cmds[0].args, ['My Files', 'semi;colon'])

    def test_escapes(self):
        cmds = self.parser.parse(r'touch a\ b "c\"d" ' + r"'e\f'")
        self.assertEqual(cmds[0].args, ['a b', 'c"d', 'e\\f'])

    def test_empty_quoted_argument(self):
        cmds = self.parser.parse('find ""')
        self.assertEqual(cmds[0].args, [''])

    def test_blank_and_comment(self):
        self.assertEqual(self.parser.parse('   '), [])
        self.assertEqual(self.parser.parse('# note'), [])
        self.assertEqual(self.parser.get_history(), [])

    def test_history_trimmed(self):
        parser = CommandParser(history_size=2)
        for line in ('pwd', 'ls', 'tree'):
            parser.parse(line)
        self.assertEqual(parser.get_history(), ['ls', 'tree'])
        parser.clear_history()
        self.assertEqual(parser.get_history(), [])

    def test_zero_history_keeps_nothing(self):
        parser = CommandParser(history_size=0)
        for _ in range(5):
            parser.parse('pwd')
        self.assertEqual(parser.get_history(), [])


class ShellTestCase(unittest.TestCase):
    """Shell over the sample tree with output captured."""

    def setUp(self):
        self.out = io.StringIO()
        self.vfs = VirtualFileSystem.with_sample_layout()
        self.shell = Shell(vfs=self.vfs, stdout=self.out, config=Config())

    def run_cmd(self, line: str) -> int:
        self.out.seek(0)
        self.out.truncate()
        return self.shell.execute(line)

    @property
    def output(self) -> str:
        return self.out.getvalue()

    @property
    def lines(self) -> list:
        return self.output.splitlines()


class TestNavigation(ShellTestCase):
    """cd and pwd."""

    def test_prompt(self):
        self.assertEqual(self.shell.prompt(), 'user@commandeer:~$ ')
        self.run_cmd('cd Documents')
        self.assertEqual(self.shell.prompt(), 'user@commandeer:/Documents$ ')

    def test_cd_and_pwd(self):
        self.assertEqual(self.run_cmd('cd Documents'), 0)
        self.run_cmd('pwd')
        self.assertEqual(self.lines, ['/Documents'])

        self.run_cmd('cd ..')
        self.assertEqual(self.shell.cwd, '/')

    def test_cd_home_and_bare(self):
        """'cd home' and a bare 'cd' both return to the root."""
        self.run_cmd('cd /Pictures')
        self.run_cmd('cd home')
        self.assertEqual(self.shell.cwd, '/')

        self.run_cmd('cd /Pictures; cd')
        self.assertEqual(self.shell.cwd, '/')

    def test_cd_errors(self):
        self.assertEqual(self.run_cmd('cd nope'), 1)
        self.assertEqual(self.lines, ['cd: no such file or directory: nope'])

        self.assertEqual(self.run_cmd('cd main.cpp'), 1)
        self.assertEqual(self.lines, ['cd: not a directory: main.cpp'])
        self.assertEqual(self.shell.cwd, '/')


class TestListing(ShellTestCase):
    """ls, tree, stat."""

    def test_scenario_mkdir_touch_ls(self):
        self.run_cmd('mkdir /a; touch /a/b.txt')
        self.assertEqual(self.lines, ['Directory created: /a', 'File created: /a/b.txt'])

        self.assertEqual(self.run_cmd('ls /a'), 0)
        self.assertEqual(len(self.lines), 1)
        self.assertTrue(self.lines[0].startswith('-rw-r--r--      0 B  '))
        self.assertTrue(self.lines[0].endswith('  b.txt'))

    def test_ls_dirs_first(self):
        self.run_cmd('ls')
        names = [line.split()[-1] for line in self.lines]
        self.assertEqual(
            names,
            ['Documents/', 'home/', 'Pictures/', 'main.cpp', 'README.md']
        )

    def test_ls_sort_size_reverse(self):
        self.run_cmd('ls -r --sort=size /Documents')
        names = [line.split()[-1] for line in self.lines]
        self.assertEqual(names, ['report.docx', 'notes.txt'])

    def test_ls_bad_usage(self):
        self.assertEqual(self.run_cmd('ls --sort=colour'), 2)
        self.assertEqual(self.run_cmd('ls -l'), 2)

    def test_ls_missing(self):
        self.assertEqual(self.run_cmd('ls nope'), 1)
        self.assertEqual(self.lines, ["ls: cannot access 'nope': No such file or directory"])

    def test_ls_file(self):
        self.run_cmd('ls main.cpp')
        self.assertEqual(len(self.lines), 1)
        self.assertIn('5 KB', self.lines[0])

    def test_tree(self):
        self.assertEqual(self.run_cmd('tree'), 0)
        self.assertEqual(self.lines[0], '/')
        self.assertIn('├── Documents', self.lines)
        self.assertIn('│   └── report.docx', self.lines)
        self.assertEqual(self.lines[-1], '3 directories, 5 files')

    def test_stat(self):
        self.run_cmd('chmod 600 main.cpp; stat main.cpp')
        self.assertIn('  Mode: 600 (-rw-------)', self.lines)
        self.assertIn('  Type: file', self.lines)
        self.assertIn('Parent: 1', self.lines)

    def test_stat_directory_entries(self):
        self.assertEqual(self.run_cmd('stat Documents'), 0)
        self.assertIn('  Mode: 755 (drwxr-xr-x)', self.lines)
        self.assertIn('Entries: 2', self.lines)


class TestMutations(ShellTestCase):
    """mkdir, touch, rm, mv, cp, chmod."""

    def test_create_existing(self):
        self.assertEqual(self.run_cmd('mkdir Documents'), 1)
        self.assertEqual(
            self.lines,
            ["mkdir: cannot create 'Documents': File exists: /Documents"]
        )

    def test_create_usage(self):
        self.assertEqual(self.run_cmd('touch'), 2)
        self.assertEqual(self.lines, ['Usage: touch <name>'])

    def test_rm(self):
        self.assertEqual(self.run_cmd('rm main.cpp'), 0)
        self.assertEqual(self.lines, ['Removed: /main.cpp'])
        self.assertFalse(self.vfs.exists('/main.cpp'))

    def test_rm_protected(self):
        self.assertEqual(self.run_cmd('rm /home'), 1)
        self.assertTrue(self.lines[0].startswith("rm: cannot remove '/home': "))
        self.assertTrue(self.vfs.exists('/home'))

    def test_rm_cwd_returns_to_root(self):
        self.run_cmd('cd /Pictures; rm /Pictures')
        self.assertEqual(self.shell.cwd, '/')

    def test_mv(self):
        self.assertEqual(self.run_cmd('mv README.md Documents/README.md'), 0)
        self.assertEqual(self.lines, ['Success: /README.md -> /Documents/README.md'])
        self.assertTrue(self.vfs.is_file('/Documents/README.md'))

    def test_mv_follows_cwd(self):
        self.run_cmd('cd /Documents; mv /Documents /Docs')
        self.assertEqual(self.shell.cwd, '/Docs')

    def test_mv_failure(self):
        self.assertEqual(self.run_cmd('mv nope x'), 1)
        self.assertEqual(
            self.lines,
            ["mv: cannot move 'nope': No such file or directory: /nope"]
        )

    def test_mv_protected(self):
        """Protected directories cannot be moved out of the way."""
        self.assertEqual(self.run_cmd('mv /home /h'), 1)
        self.assertEqual(
            self.lines,
            ["mv: cannot move '/home': Operation not permitted: /home (protected path)"]
        )
        self.assertTrue(self.vfs.is_directory('/home'))

    def test_mv_usage(self):
        self.assertEqual(self.run_cmd('mv a'), 2)
        self.assertEqual(self.lines, ['Usage: mv <source> <destination>'])

    def test_cp(self):
        self.assertEqual(self.run_cmd('cp Documents Backup'), 0)
        self.assertEqual(self.lines, ['Success: /Documents -> /Backup'])
        self.assertTrue(self.vfs.is_file('/Backup/notes.txt'))
        self.assertNotEqual(
            self.vfs.lookup('/Backup/notes.txt').id,
            self.vfs.lookup('/Documents/notes.txt').id
        )

    def test_chmod(self):
        self.assertEqual(self.run_cmd('chmod 600 main.cpp'), 0)
        self.assertEqual(self.lines, ['Permissions changed for /main.cpp: rw-------'])
        self.assertEqual(self.vfs.lookup('/main.cpp').permissions, 0o600)

    def test_chmod_invalid_mode(self):
        self.assertEqual(self.run_cmd('chmod 9x main.cpp'), 1)
        self.assertEqual(self.lines, ["chmod: invalid mode: '9x'"])


class TestShellControl(ShellTestCase):
    """Dispatch, exit, search and history."""

    def test_unknown_command(self):
        self.assertEqual(self.run_cmd('frobnicate now'), 127)
        self.assertEqual(self.lines, ['frobnicate: command not found'])

    def test_exit_stops_line(self):
        self.assertEqual(self.run_cmd('exit; mkdir /late'), 0)
        self.assertEqual(self.lines, ['Goodbye!'])
        self.assertTrue(self.shell.exiting)
        self.assertFalse(self.vfs.exists('/late'))

    def test_find_scoped_to_cwd(self):
        self.assertEqual(self.run_cmd('find note'), 0)
        self.assertEqual(self.lines, ['/Documents/notes.txt'])

        self.run_cmd('cd /Pictures')
        self.assertEqual(self.run_cmd('find note'), 1)
        self.assertEqual(self.lines, ["find: no matches for 'note'"])

    def test_history(self):
        self.run_cmd('pwd')
        self.run_cmd('history')
        self.assertEqual(self.lines, ['    1  pwd', '    2  history'])

    def test_run_script(self):
        code = self.shell.run_script('mkdir /s\n# skipped\n\ncd /s\npwd')
        self.assertEqual(code, 0)
        self.assertEqual(self.lines[-1], '/s')

    def test_corruption_propagates(self):
        """A broken tree is not reported as an ordinary command failure."""
        self.vfs.lookup('/Documents').children = None
        with self.assertRaises(TreeCorruptionError):
            self.run_cmd('ls /Documents')

    def test_interactive_loop(self):
        """The REPL reads lines until exit."""
        out = io.StringIO()
        shell = create_shell(vfs=self.vfs, stdout=out)
        with mock.patch('builtins.input', side_effect=['mkdir /r', 'exit', 'mkdir /late']):
            shell.run()

        self.assertIn('Directory created: /r', out.getvalue())
        self.assertTrue(out.getvalue().rstrip().endswith('Goodbye!'))
        self.assertFalse(self.vfs.exists('/late'))

    def test_interactive_loop_ends_on_eof(self):
        shell = create_shell(vfs=self.vfs, stdout=io.StringIO())
        with mock.patch('builtins.input', side_effect=EOFError):
            shell.run()
        self.assertFalse(shell.exiting)


class TestMain(unittest.TestCase):
    """Test the command line entry point."""

    def tearDown(self):
        ConfigLoader().reset()
        Logger.reset()

    def test_commands(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            code = main(['--empty', '-c', 'mkdir /x; ls /'])

        self.assertEqual(code, 0)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], 'Directory created: /x')
        self.assertTrue(lines[1].endswith('  x/'))
        self.assertEqual(len(lines), 2)

    def test_bad_usage(self):
        with mock.patch('sys.stderr', new_callable=io.StringIO) as err:
            with self.assertRaises(SystemExit) as ctx:
                main(['--bogus'])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn('usage: commandeer', err.getvalue())

    def test_help(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            with self.assertRaises(SystemExit) as ctx:
                main(['-h'])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn('--empty', out.getvalue())

    def test_missing_config(self):
        with mock.patch('sys.stderr', new_callable=io.StringIO) as err:
            self.assertEqual(main(['--config', '/nonexistent/commandeer.json']), 1)
        self.assertIn('Configuration file not found', err.getvalue())


if __name__ == '__main__':
    unittest.main()
