from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader

from protoc_stream.generator.profile import DEFAULT_PROFILE, EmissionProfile, get_profile
from protoc_stream.models import GoMessage
from protoc_stream.parser.proto_ast import ProtoFile
from protoc_stream.parser.proto_transform import transform_proto

logger = logging.getLogger(__name__)

DEFAULT_GO_PACKAGE = "main"


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _collect_imports(
    messages: List[GoMessage],
    profile: EmissionProfile,
    idempotent_close: bool,
) -> List[str]:
    """Standard library imports first, then the profile's imports."""
    imports: List[str] = []
    if not messages:
        return imports
    if idempotent_close and any(m.stream for m in messages):
        imports.append("sync")
    for path in profile.imports:
        if path not in imports:
            imports.append(path)
    return imports


def generate_go(
    ast: ProtoFile,
    profile: Optional[EmissionProfile] = None,
    go_package: Optional[str] = None,
    idempotent_close: bool = True,
) -> str:
    """Generate Go source for every message in the schema.

    Top-level messages become streaming types whose repeated fields are
    channels; nested messages at any depth become plain types.

    Args:
        ast: Parsed schema.
        profile: Target library conventions; defaults to the ``golang`` profile.
        go_package: Overrides the schema's package name. When neither is
            set, ``main`` is used.
        idempotent_close: Guard ``Close()`` with a ``sync.Once`` so a second
            call is a no-op. When False, a second call panics on the
            already-closed channels.
    """
    if profile is None:
        profile = get_profile(DEFAULT_PROFILE)

    messages = transform_proto(ast)
    package = go_package or ast.package or DEFAULT_GO_PACKAGE
    logger.debug(
        "Rendering %d message(s) into package %s with profile %s",
        len(messages),
        package,
        profile.name,
    )

    template = _get_template_env().get_template("stream.go.j2")
    return template.render(
        go_package=package,
        imports=_collect_imports(messages, profile, idempotent_close),
        messages=messages,
        profile=profile,
        idempotent_close=idempotent_close,
    )


def generate_go_file(
    ast: ProtoFile,
    output_path: str,
    profile: Optional[EmissionProfile] = None,
    go_package: Optional[str] = None,
    idempotent_close: bool = True,
) -> str:
    """Generate Go source and write it to ``output_path``.

    Returns the path written.
    """
    source = generate_go(ast, profile, go_package, idempotent_close)
    out_dir = os.path.dirname(output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    Path(output_path).write_text(source, encoding="utf-8")
    return output_path


def message_names(ast: ProtoFile) -> List[str]:
    """Flattened type names that ``generate_go`` will emit, in output order."""
    return [m.name for m in transform_proto(ast)]
