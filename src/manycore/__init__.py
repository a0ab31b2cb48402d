"""manycore: Manycore System XML model.

Decodes a `<ManycoreSystem>` document into a validated, cross-referenced
model (grid topology, router ids, border associations, task placement and an
inferred attribute schema) for downstream routing/rendering layers.
"""

from __future__ import annotations

from manycore.codecs import dump_manycore_text, parse_manycore_text, read_manycore_xml, write_manycore_xml
from manycore.core import ManycoreError, ParseOptions, System

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ManycoreError",
    "ParseOptions",
    "System",
    "dump_manycore_text",
    "parse_manycore_text",
    "read_manycore_xml",
    "write_manycore_xml",
]
