"""Generation of the C source that defines an application manifest.

A manifest is described in JSON as an object with a ``version`` and a list
of ``devices``. Each device has an alphanumeric ``name`` and a ``type``. The
generated C source is compiled and linked into the application binary.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import BinaryIO, Iterable, List, Optional, Sequence, TextIO, Union

from unimft.jsonparse import JsonParseError, parse
from unimft.jsontree import JsonType, JsonValue

_TYPE_NAMES = {
    JsonType.NULL: "NULL",
    JsonType.TRUE: "BOOLEAN",
    JsonType.FALSE: "BOOLEAN",
    JsonType.STRING: "STRING",
    JsonType.ARRAY: "ARRAY",
    JsonType.OBJECT: "OBJECT",
    JsonType.INT: "INTEGER",
    JsonType.REAL: "REAL",
}

_ALNUM = frozenset(b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")

_HEADER = (
    "#define MFT_ENTRIES {count}\n"
    '#include "mft_abi.h"\n'
    "\n"
    "MFT_NOTE_BEGIN\n"
    "{{\n"
    "  .version = MFT_VERSION, .entries = {count},\n"
    "  .e = {{\n"
)
_ENTRY = '    {{ .name = "{name}", .type = MFT_{type} }},\n'
_FOOTER = "  }\n}\nMFT_NOTE_END\n"


class ManifestError(ValueError):
    """Raised when a manifest source is invalid or cannot be processed."""


@dataclass(frozen=True)
class ManifestLimits:
    """Constraints of the manifest format the output is built for."""

    version: int = 1
    max_entries: int = 64
    name_max: int = 67


@dataclass(frozen=True)
class DeviceEntry:
    """One device declared in a manifest."""

    name: str
    type: str


def _type_name(kind: JsonType) -> str:
    return _TYPE_NAMES.get(kind, "UNKNOWN")


def _expect(kind: JsonType, node: JsonValue, where: str) -> None:
    if node.kind is not kind:
        raise ManifestError(
            f"{where}: expected {_type_name(kind)}, got {_type_name(node.kind)}"
        )


def _read_device(node: JsonValue, limits: ManifestLimits) -> DeviceEntry:
    _expect(JsonType.OBJECT, node, ".devices[]")
    name: Optional[str] = None
    device_type: Optional[str] = None
    for member in node.value:
        if member.name == "name":
            _expect(JsonType.STRING, member, ".devices[...]")
            name = member.value
        elif member.name == "type":
            _expect(JsonType.STRING, member, ".devices[...]")
            device_type = member.value
        else:
            raise ManifestError(f".devices[...]: unknown key: {member.name}")

    if name is None:
        raise ManifestError(".devices[...]: missing .name")
    raw = name.encode("utf-8", errors="surrogateescape")
    if not raw:
        raise ManifestError(".devices[...]: .name may not be empty")
    if len(raw) > limits.name_max:
        raise ManifestError(".devices[...]: name too long")
    if not all(byte in _ALNUM for byte in raw):
        raise ManifestError(".devices[...]: name is not alphanumeric")
    if device_type is None:
        raise ManifestError(".devices[...]: missing .type")
    return DeviceEntry(name, device_type)


def load_manifest(
    stream: Union[BinaryIO, TextIO], limits: Optional[ManifestLimits] = None
) -> List[DeviceEntry]:
    """Read and validate a JSON manifest source, returning its devices."""
    limits = limits or ManifestLimits()
    try:
        root = parse(stream)
    except JsonParseError as exc:
        raise ManifestError(str(exc)) from exc
    root.update()
    _expect(JsonType.OBJECT, root, "(root)")

    version: Optional[JsonValue] = None
    devices: Optional[JsonValue] = None
    count = 0
    for member in root.value:
        if member.name == "version":
            _expect(JsonType.INT, member, ".version")
            version = member
        elif member.name == "devices":
            _expect(JsonType.ARRAY, member, ".devices")
            for device in member.value:
                _expect(JsonType.OBJECT, device, ".devices[]")
                count += 1
            devices = member
        else:
            raise ManifestError(f"(root): unknown key: {member.name}")

    if version is None:
        raise ManifestError("missing .version")
    if devices is None:
        raise ManifestError("missing .devices[]")
    if version.value != limits.version:
        raise ManifestError(
            f".version: invalid version {version.value}, expected {limits.version}"
        )
    if count > limits.max_entries:
        raise ManifestError(
            f".devices[]: too many entries, maximum {limits.max_entries}"
        )

    return [_read_device(device, limits) for device in devices.value]


def render_manifest(entries: Iterable[DeviceEntry]) -> str:
    """Return the C source defining a manifest with ``entries``."""
    entries = list(entries)
    body = "".join(_ENTRY.format(name=e.name, type=e.type) for e in entries)
    return _HEADER.format(count=len(entries)) + body + _FOOTER


def generate(
    source: Union[str, os.PathLike],
    output: Union[str, os.PathLike],
    limits: Optional[ManifestLimits] = None,
) -> None:
    """Read the manifest at ``source`` and write its C source to ``output``."""
    try:
        src = open(source, "rb")
    except OSError as exc:
        raise ManifestError(f"Could not open {source}: {exc.strerror}") from exc
    with src:
        try:
            out = open(output, "w", encoding="utf-8")
        except OSError as exc:
            raise ManifestError(f"Could not open {output}: {exc.strerror}") from exc
        with out:
            try:
                entries = load_manifest(src, limits)
            except ManifestError as exc:
                raise ManifestError(f"{source}: {exc}") from exc
            out.write(render_manifest(entries))


def _usage(prog: str) -> None:
    print(
        f"usage: {prog} COMMAND ...\n\n"
        "COMMAND is:\n"
        "    gen SOURCE OUTPUT:\n"
        "        Generate application manifest from SOURCE, writing to OUTPUT.",
        file=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line tool; return the process exit status."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "unimft"
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3 or args[0] != "gen":
        _usage(prog)
        return 1
    try:
        generate(args[1], args[2])
    except ManifestError as exc:
        print(f"{prog}: {exc}", file=sys.stderr)
        return 1
    return 0