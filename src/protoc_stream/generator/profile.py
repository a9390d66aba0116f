"""Emission profiles.

A profile holds everything the generated code assumes about the target
serialization library: which packages to import, which interfaces the
generated types claim to satisfy, how ``String()`` is implemented and
which struct tag key carries the field metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple


@dataclass(frozen=True)
class EmissionProfile:
    name: str
    imports: Tuple[str, ...] = ()
    stream_capability: str = "pbs.StreamMessage"
    message_capability: str = "proto.Message"
    compact_text_func: str = "proto.CompactTextString"
    tag_key: str = "protobuf"

    def with_imports(self, extra: Iterable[str]) -> EmissionProfile:
        """Return a copy with ``extra`` appended to the imports, skipping duplicates."""
        imports = list(self.imports)
        for path in extra:
            if path not in imports:
                imports.append(path)
        return replace(self, imports=tuple(imports))

    def format_tag(self, proto_type: str, number: int, attribute_code: str, name: str) -> str:
        return f'`{self.tag_key}:"{proto_type},{number},{attribute_code},name={name}"`'


GOLANG = EmissionProfile(
    name="golang",
    imports=("github.com/golang/protobuf/proto",),
)

BARE = EmissionProfile(name="bare")

PROFILES: Mapping[str, EmissionProfile] = MappingProxyType({
    GOLANG.name: GOLANG,
    BARE.name: BARE,
})

DEFAULT_PROFILE = GOLANG.name


def get_profile(name: str) -> EmissionProfile:
    """Look up a registered profile by name."""
    try:
        return PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise ValueError(f"Unknown emission profile {name!r} (known: {known})") from None
