"""
Commandeer Shell Module

Provides the terminal:
- Command parsing
- Built-in commands
- Interactive loop
"""

from .parser import CommandParser, ParsedCommand, Token, TokenType
from .builtins import BuiltinCommands, HELP_TEXT
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'Token',
    'TokenType',
    'BuiltinCommands',
    'HELP_TEXT',
    'Shell',
    'create_shell',
]
