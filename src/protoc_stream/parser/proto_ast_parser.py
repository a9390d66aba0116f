"""Recursive descent parser for schema files.

Consumes tokens one at a time from a TokenReader and produces proto AST
nodes. The grammar needs no lookahead, so there is no backtracking.
Any error inside a package, message or field declaration aborts the
whole parse; unknown tokens at the top level are logged and skipped.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .proto_ast import FIELD_ATTRIBUTES, ProtoField, ProtoFile, ProtoMessage
from .proto_tokenizer import ProtoParseError, ProtoToken, TokenReader

logger = logging.getLogger(__name__)

_FIELD_NUMBER_RE = re.compile(r"^[0-9]+$")
_MAX_FIELD_NUMBER = 2**63 - 1


class ProtoParser:
    """Recursive descent parser over a lazy token stream."""

    def __init__(self, reader: TokenReader):
        self._reader = reader
        self._last: Optional[ProtoToken] = None

    # -- public API --

    def parse(self) -> ProtoFile:
        """Parse the full token stream into a ProtoFile AST."""
        package = ""
        messages: List[ProtoMessage] = []

        while True:
            tok = self._reader.next_token()
            if tok is None:
                break
            self._last = tok

            if tok.value == "package":
                package = self._parse_package()
            elif tok.value == "message":
                messages.append(self._parse_message())
            else:
                logger.warning(
                    "Line %d:%d: Unrecognized token: %s", tok.line, tok.col, tok.value
                )

        return ProtoFile(package=package, messages=tuple(messages))

    # -- declarations --

    def _parse_package(self) -> str:
        """Parse: PACKAGE IDENT SEMICOLON (PACKAGE already consumed)"""
        name_tok = self._next("package name")
        self._expect(";", "expected semicolon after package name")
        logger.debug("Package: %s", name_tok.value)
        return name_tok.value

    def _parse_message(self) -> ProtoMessage:
        """Parse: MESSAGE IDENT LBRACE body RBRACE (MESSAGE already consumed)"""
        name_tok = self._next("message name")
        self._expect("{", "expected opening bracket after message name")

        fields: List[ProtoField] = []
        nested: List[ProtoMessage] = []

        while True:
            tok = self._next(f"closing bracket of message {name_tok.value}")

            if tok.value == "}":
                break
            elif tok.value in FIELD_ATTRIBUTES:
                fields.append(self._parse_field(tok.value))
            elif tok.value == "message":
                nested.append(self._parse_message())
            else:
                raise ProtoParseError(f"Unrecognized token: {tok.value}", tok)

        logger.debug(
            "Parsed message %s: %d field(s), %d nested message(s)",
            name_tok.value,
            len(fields),
            len(nested),
        )
        return ProtoMessage(
            name=name_tok.value,
            fields=tuple(fields),
            nested_messages=tuple(nested),
        )

    def _parse_field(self, attribute: str) -> ProtoField:
        """Parse: TYPE IDENT EQUALS NUMBER SEMICOLON (attribute already consumed)"""
        type_tok = self._next("field type")
        name_tok = self._next("field name")
        self._expect("=", "expected equals sign after field name")

        num_tok = self._next("field number")
        number = 0
        if _FIELD_NUMBER_RE.match(num_tok.value):
            try:
                number = int(num_tok.value)
            except ValueError:
                number = 0
        if not 1 <= number <= _MAX_FIELD_NUMBER:
            raise ProtoParseError(
                f"expected integer field number, got {num_tok.value[:32]!r}", num_tok
            )

        self._expect(";", "expected a semicolon after field number")

        return ProtoField(
            type_name=type_tok.value,
            field_name=name_tok.value,
            field_number=number,
            attribute=attribute,
            line=type_tok.line,
            col=type_tok.col,
        )

    # -- token helpers --

    def _next(self, what: str) -> ProtoToken:
        """Return the next token; running out of input here is fatal."""
        tok = self._reader.next_token()
        if tok is None:
            raise ProtoParseError(f"unexpected end of input, expected {what}", self._last)
        self._last = tok
        return tok

    def _expect(self, literal: str, message: str) -> ProtoToken:
        tok = self._next(repr(literal))
        if tok.value != literal:
            raise ProtoParseError(f"{message}, got {tok.value!r}", tok)
        return tok
