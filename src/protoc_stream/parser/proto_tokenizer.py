"""Tokenizer for the simplified schema language.

Tokens are maximal runs of bytes outside the delimiter set
(space, ``;``, newline, tab, ``=``). ``;`` and ``=`` are also returned as
one-character tokens; whitespace only separates. Braces are ordinary
bytes, so ``Name{`` is a single token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, Tuple

_SEPARATORS = frozenset(b" \n\t")
_PUNCTUATION = frozenset(b";=")


@dataclass(frozen=True)
class ProtoToken:
    value: str
    line: int
    col: int


class ProtoParseError(Exception):
    """Raised when the schema text cannot be tokenized or parsed."""

    def __init__(self, message: str, token: Optional[ProtoToken] = None):
        if token is not None:
            super().__init__(f"Line {token.line}:{token.col}: {message}")
        else:
            super().__init__(message)
        self.token = token


class TokenReader:
    """Lazily splits a byte stream into tokens."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._buffer = bytearray()
        self._start: Tuple[int, int] = (1, 1)
        self._pending: Optional[ProtoToken] = None
        self._line = 1
        self._col = 1

    def __iter__(self) -> Iterator[ProtoToken]:
        while True:
            tok = self.next_token()
            if tok is None:
                return
            yield tok

    def next_token(self) -> Optional[ProtoToken]:
        """Return the next token, or None once the stream is exhausted."""
        while True:
            if self._pending is not None:
                tok = self._pending
                self._pending = None
                return tok

            chunk = self._stream.read(1)
            if not chunk:
                return self._flush()

            b = chunk[0]
            line, col = self._line, self._col
            if b == 0x0A:
                self._line += 1
                self._col = 1
            else:
                self._col += 1

            if b in _SEPARATORS or b in _PUNCTUATION:
                if b in _PUNCTUATION:
                    self._pending = ProtoToken(chr(b), line, col)
                tok = self._flush()
                if tok is not None:
                    return tok
                continue

            if not self._buffer:
                self._start = (line, col)
            self._buffer.append(b)

    def _flush(self) -> Optional[ProtoToken]:
        """Return the accumulated token (if any) and reset the buffer."""
        if not self._buffer:
            return None
        raw = bytes(self._buffer)
        self._buffer.clear()
        line, col = self._start
        try:
            value = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtoParseError(
                f"invalid UTF-8 in token {raw!r}", ProtoToken("", line, col)
            ) from e
        return ProtoToken(value, line, col)
