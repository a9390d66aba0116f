from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from protoc_stream.generator.go_stream_generator import (
    generate_go,
    generate_go_file,
    message_names,
)
from protoc_stream.generator.profile import DEFAULT_PROFILE, PROFILES, get_profile
from protoc_stream.parser.proto_parser import parse_proto_file
from protoc_stream.parser.proto_tokenizer import ProtoParseError

USAGE_MESSAGE = "specify protobuf file to compile"


def run(
    proto_path: str,
    output_path: Optional[str] = None,
    profile_name: str = DEFAULT_PROFILE,
    go_package: Optional[str] = None,
    extra_imports: Optional[List[str]] = None,
    idempotent_close: bool = True,
) -> None:
    """Main pipeline: parse, generate, emit."""
    profile = get_profile(profile_name)
    if extra_imports:
        profile = profile.with_imports(extra_imports)

    try:
        ast = parse_proto_file(proto_path)
    except (OSError, ProtoParseError) as e:
        print(e, file=sys.stderr)
        return

    if output_path is None:
        sys.stdout.write(generate_go(ast, profile, go_package, idempotent_close))
        return

    generate_go_file(ast, output_path, profile, go_package, idempotent_close)
    for name in message_names(ast):
        print(f"  Generated type: {name}")
    print(f"Wrote {output_path}")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Compile a schema into Go streaming message types",
    )
    parser.add_argument(
        "proto_file",
        nargs="?",
        help="Schema file to compile",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write generated Go source to this file instead of stdout",
    )
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE,
        choices=sorted(PROFILES),
        help="Emission profile describing the target serialization library",
    )
    parser.add_argument(
        "--go-package",
        default=None,
        help="Go package name, overriding the schema's package declaration",
    )
    parser.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        metavar="PATH",
        help="Additional Go import path (repeatable), e.g. the package providing StreamMessage",
    )
    parser.add_argument(
        "--strict-close",
        action="store_true",
        help="Emit Close() without a once-guard; a second call panics",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.proto_file:
        print(USAGE_MESSAGE)
        return

    run(
        args.proto_file,
        output_path=args.output,
        profile_name=args.profile,
        go_package=args.go_package,
        extra_imports=args.imports,
        idempotent_close=not args.strict_close,
    )


if __name__ == "__main__":
    main()
