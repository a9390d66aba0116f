from __future__ import annotations

import io
import logging
from typing import BinaryIO

from .proto_ast import ProtoFile
from .proto_ast_parser import ProtoParser
from .proto_tokenizer import TokenReader

logger = logging.getLogger(__name__)


def parse_proto(stream: BinaryIO) -> ProtoFile:
    """Parse a schema from a binary stream."""
    return ProtoParser(TokenReader(stream)).parse()


def parse_proto_text(text: str) -> ProtoFile:
    """Parse a schema held in a string."""
    return parse_proto(io.BytesIO(text.encode("utf-8")))


def parse_proto_file(file_path: str) -> ProtoFile:
    """Parse a schema file from disk."""
    with open(file_path, "rb") as f:
        ast = parse_proto(f)
    logger.debug("Parsed %s: %d top-level message(s)", file_path, len(ast.messages))
    return ast
