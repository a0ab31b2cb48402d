"""Manycore System XML codec (decode + build, encode).

Decoding turns a `<ManycoreSystem>` document into the Schema Model and, unless
asked not to, runs the construction pipeline
(`manycore.core.build.build_system`) so callers receive a fully validated,
fully derived model or exactly one `ManycoreError`.

Encoding writes the wire fields back with 4-space indentation. Derived fields
are never serialized, so `decode -> encode -> decode` yields an equal model.
"""

from __future__ import annotations

from pathlib import Path

from manycore.codecs._xml_decoder import decode_text
from manycore.codecs._xml_encoder import encode_text
from manycore.core.build import build_system
from manycore.core.errors import IoError
from manycore.core.model import System
from manycore.core.options import ParseOptions


def decode_manycore_text(text: str) -> System:
    """Decode XML text into an un-built `System` (no validation or derivation).

    Raises:
        DecodeError: malformed markup or a missing/invalid required field.
    """
    if not isinstance(text, str):
        raise TypeError(f"decode_manycore_text: expected str, got {type(text).__name__}")
    return decode_text(text)


def parse_manycore_text(text: str, *, options: ParseOptions | None = None) -> System:
    """Decode XML text and run the construction pipeline.

    Args:
        text: The `<ManycoreSystem>` document.
        options: Strictness options; defaults to `ParseOptions()`.

    Raises:
        DecodeError, StructuralMismatch, IdentifierSequenceError, and the
        strict-mode errors enabled by `options`.
    """
    return build_system(decode_manycore_text(text), options=options)


def read_manycore_xml(path: str | Path, *, options: ParseOptions | None = None) -> System:
    """Read a Manycore System XML file from disk and parse it.

    Raises:
        IoError: the file could not be read.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(p, str(e)) from e
    return parse_manycore_text(text, options=options)


def dump_manycore_text(system: System) -> str:
    """Encode `system` into XML text (wire fields only)."""
    return encode_text(system)


def write_manycore_xml(path: str | Path, system: System) -> None:
    """Write `system` as XML. Use newline="" to prevent newline translation."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        f.write(dump_manycore_text(system))


__all__ = [
    "decode_manycore_text",
    "dump_manycore_text",
    "parse_manycore_text",
    "read_manycore_xml",
    "write_manycore_xml",
]
