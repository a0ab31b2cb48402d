"""Codecs for reading/writing Manycore System documents.

The XML codec delegates tokenizing to lxml; model construction lives in
`manycore.core`.
"""

from __future__ import annotations

from .manycore_xml import (
    decode_manycore_text,
    dump_manycore_text,
    parse_manycore_text,
    read_manycore_xml,
    write_manycore_xml,
)

__all__ = [
    "decode_manycore_text",
    "dump_manycore_text",
    "parse_manycore_text",
    "read_manycore_xml",
    "write_manycore_xml",
]
