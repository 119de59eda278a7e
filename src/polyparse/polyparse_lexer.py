"""
Scanner for the polynomial grammar.

This module converts a character source into the token stream consumed by the
polynomial parser:

Classes:
    CharacterStream: Reads characters from a string or text stream with line/column tracking.
    Token: A single token with type, text payload and source location.
    Scanner: Classifies characters into word, operator, quoted and end-of-stream tokens,
        with a single pushback slot.

Token classification:
    - Word tokens: runs of ASCII letters, digits, `_`, `/`, `.`, `~` and code points >= 160,
      so that `x_1`, `3/4`, `0.25` and `~2` each scan as one word.
    - Operator tokens: every other non-whitespace character, one character per token.
    - `#` starts a comment running to the end of the line.
    - `"` and `'` delimit quoted literals.
    - End-of-stream is a distinct terminal token, returned repeatedly once reached.

Raises:
    StreamFailure: If the underlying text stream raises `OSError`.
    MalformedExpression: If a quoted literal is not terminated.

Example:
    >>> scanner = Scanner(CharacterStream("3 x_1^2"))
    >>> scanner.next_token()
    Token(WORD, 3)

Exports:
    - CharacterStream
    - Token
    - Scanner
    - token_hashmap
"""

from typing import Any, TextIO

from polyparse.polyparse_constants import (
    COMMENT_CHAR,
    HIGH_WORD_CODEPOINT,
    QUOTE_CHARS,
    token_hashmap,
    word_punctuation,
)
from polyparse.polyparse_errors import MalformedExpression, StreamFailure

_CHUNK_SIZE = 4096


def is_word_char(ch: str) -> bool:
    return (
        (ch.isascii() and ch.isalnum())
        or ch in word_punctuation
        or ord(ch) >= HIGH_WORD_CODEPOINT
    )


class CharacterStream:
    """
    Reads characters from a string or a text stream with line and column tracking.

    Text streams are read lazily in chunks, so parsing is demand-driven and may
    block on the source. The stream is never closed here; the caller owns it.

    Attributes:
        source (str): Characters read so far (the full text for string sources).
        position (int): Current index in `source`.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(
        self,
        source: str | TextIO,
        position: int = 0,
        line: int = 1,
        column: int = 1,
    ):
        if isinstance(source, str):
            self.source = source
            self._reader: TextIO | None = None
        else:
            self.source = ""
            self._reader = source
        self.position = position
        self.line = line
        self.column = column

    def _fill(self, index: int) -> bool:
        """Reads from the text stream until `index` is buffered; False at end of input."""
        while index >= len(self.source):
            if self._reader is None:
                return False
            try:
                chunk = self._reader.read(_CHUNK_SIZE)
            except OSError as exc:
                raise StreamFailure(
                    f"Character source failed: {exc}", self.line, self.column
                ) from exc
            if not chunk:
                self._reader = None
                return False
            self.source += chunk
        return True

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if not self._fill(self.position):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset without advancing.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or not self._fill(index):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return not self._fill(self.position)


class Token:
    """A single token of the polynomial grammar.

    Attributes:
        type (str): `WORD`, `STRING`, `EOF`, an operator type from `token_hashmap`
            (e.g. `LPAREN`), or `CHAR` for any other single character.
        value (str): The literal text of the token (`EOF` for end-of-stream).
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    @property
    def text(self) -> str | None:
        """The text payload of word and quoted tokens, None for operators and EOF."""
        if self.type in ("WORD", "STRING"):
            return self.value
        return None

    def is_word(self) -> bool:
        return self.type == "WORD"

    def is_eof(self) -> bool:
        return self.type == "EOF"

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Scanner:
    """Tokenizer over a CharacterStream with exactly one pushback slot.

    `next_token()` returns the buffered token if one was pushed back, otherwise
    scans the next one. `push_back()` may be called at most once between two
    `next_token()` calls.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self._pushed: Token | None = None

    def push_back(self, token: Token) -> None:
        """Returns one token to be replayed by the next `next_token()` call.

        Raises:
            RuntimeError: If a token is already waiting in the pushback slot.
        """
        if self._pushed is not None:
            raise RuntimeError(
                f"Pushback slot already holds {self._pushed!r}, cannot push {token!r}"
            )
        self._pushed = token

    def skip_whitespace(self) -> None:
        """Skips whitespace (every character up to and including space) and comments."""
        while not self.stream.end_of_file():
            ch = self.stream.peek()
            if ord(ch) <= 32:
                self.stream.next()
            elif ch == COMMENT_CHAR:
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.stream.peek() != "\n":
            self.stream.next()

    def next_token(self) -> Token:
        """Consumes and returns the next Token.

        Raises:
            MalformedExpression: On an unterminated quoted literal.
            StreamFailure: If the character source fails.
        """
        if self._pushed is not None:
            token, self._pushed = self._pushed, None
            return token

        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "EOF", line, col)

        ch = self.stream.peek()

        # 1. Word: identifier, numeral, fraction, decimal, x_1
        if is_word_char(ch):
            word = ""
            while not self.stream.end_of_file() and is_word_char(self.stream.peek()):
                word += self.stream.next()
            return Token("WORD", word, line, col)

        # 2. Quoted literal
        if ch in QUOTE_CHARS:
            quote = self.stream.next()
            val = ""
            while not self.stream.end_of_file():
                if self.stream.peek() == quote:
                    self.stream.next()
                    return Token("STRING", val, line, col)
                val += self.stream.next()
            raise MalformedExpression("Unterminated quoted literal", line, col)

        # 3. Single-character operator
        op = self.stream.next()
        return Token(token_hashmap.get(op, "CHAR"), op, line, col)


__all__ = ["CharacterStream", "Scanner", "Token", "is_word_char", "token_hashmap"]
