"""
Command Parser Module

Parses terminal input into commands.

Author: Commandeer Developers
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List
from enum import Enum


class TokenType(Enum):
    """Token types for command parsing."""
    WORD = "word"
    SEMICOLON = "semicolon"


@dataclass
class Token:
    """A parsed token."""
    type: TokenType
    value: str


@dataclass
class ParsedCommand:
    """A single command and its arguments."""
    command: str
    args: List[str] = field(default_factory=list)


class CommandParser:
    """
    Parses terminal command lines.

    Handles:
    - Command and arguments
    - Sequencing (;)
    - Quoted strings
    - Escape sequences
    - Comment lines (#)

    Example:
        >>> parser = CommandParser()
        >>> cmds = parser.parse('mkdir "My Files"; cd "My Files"')
        >>> [c.command for c in cmds]
        ['mkdir', 'cd']
    """

    def __init__(self, history_size: int = 1000):
        self._history: List[str] = []
        self._history_size = history_size

    def parse(self, line: str) -> List[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string

        Returns:
            Parsed commands in order; empty for blank or comment lines
        """
        line = line.strip()

        if not line or line.startswith('#'):
            return []

        self._remember(line)

        commands: List[ParsedCommand] = []
        words: List[str] = []

        for token in self._tokenize(line):
            if token.type == TokenType.SEMICOLON:
                command = self._build(words)
                if command:
                    commands.append(command)
                words = []
            else:
                words.append(token.value)

        command = self._build(words)
        if command:
            commands.append(command)

        return commands

    def _remember(self, line: str) -> None:
        if self._history_size <= 0:
            return
        self._history.append(line)
        if len(self._history) > self._history_size:
            del self._history[:-self._history_size]

    def _tokenize(self, line: str) -> List[Token]:
        """Convert a line into tokens."""
        tokens = []
        current = ""
        # a quoted empty string ("") is still a word
        has_word = False
        in_quote = None
        i = 0

        while i < len(line):
            char = line[i]

            # Handle quotes
            if char in ('"', "'") and in_quote is None:
                in_quote = char
                has_word = True
                i += 1
                continue

            if char == in_quote:
                in_quote = None
                i += 1
                continue

            # Handle escape (not inside single quotes)
            if char == '\\' and in_quote != "'" and i + 1 < len(line):
                current += line[i + 1]
                has_word = True
                i += 2
                continue

            # Inside quotes, just add character
            if in_quote:
                current += char
                i += 1
                continue

            if char == ';':
                if has_word:
                    tokens.append(Token(TokenType.WORD, current))
                    current = ""
                    has_word = False
                tokens.append(Token(TokenType.SEMICOLON, ';'))
                i += 1
                continue

            # Handle whitespace
            if char.isspace():
                if has_word:
                    tokens.append(Token(TokenType.WORD, current))
                    current = ""
                    has_word = False
                i += 1
                continue

            # Regular character
            current += char
            has_word = True
            i += 1

        if has_word:
            tokens.append(Token(TokenType.WORD, current))

        return tokens

    @staticmethod
    def _build(words: List[str]) -> Optional[ParsedCommand]:
        if not words:
            return None
        return ParsedCommand(command=words[0], args=words[1:])

    def get_history(self) -> List[str]:
        """Get command history."""
        return list(self._history)

    def clear_history(self) -> None:
        """Clear command history."""
        self._history.clear()
