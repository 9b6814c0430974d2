"""Binary STL writer.

Layout (all little-endian):
    80 bytes   header text, NUL padded
    uint32     facet count
    per facet  12 x float32 (normal, three vertices) + uint16 attribute count

A file for N facets is exactly 84 + 50 * N bytes. The count is written up
front from the prediction and checked against the streamed facets at the end.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional

from hm2stl.core.errors import (
    ExportAborted,
    FacetCountMismatch,
    InvalidGrid,
    InvalidParameter,
    IOFailure,
)
from ._solid_mesher import FACET_NORMAL, Facet

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
RECORD_SIZE = 50
MAX_FACETS = 0xFFFFFFFF

_COUNT = struct.Struct("<I")
_RECORD = struct.Struct("<12fH")


def make_header(text: str) -> bytes:
    """Encode ``text`` into the fixed 80-byte header.

    Readers sniff files starting with ``solid`` as ASCII STL, so such text
    gets a prefix.
    """
    raw = text.encode("ascii", errors="replace")
    if raw[:5].lower() == b"solid":
        raw = b"STL " + raw
    return raw[:HEADER_SIZE].ljust(HEADER_SIZE, b"\x00")


def pack_facet(facet: Facet) -> bytes:
    a, b, c = facet
    try:
        return _RECORD.pack(
            *FACET_NORMAL,
            a.x, a.y, a.z,
            b.x, b.y, b.z,
            c.x, c.y, c.z,
            0,
        )
    except OverflowError as e:
        raise InvalidParameter(f"Coordinate out of float32 range in {facet}") from e


def encode_binary(
    facets: Iterable[Facet],
    stream: BinaryIO,
    facet_count: int,
    header_text: str = "",
    *,
    abort: Optional[Callable[[], bool]] = None,
) -> int:
    """Write header, count and records to ``stream``. Returns facets streamed.

    Raises:
        FacetCountMismatch: streamed facets differ from ``facet_count``.
        ExportAborted: ``abort`` returned True.
    """
    if not 0 <= facet_count <= MAX_FACETS:
        raise InvalidGrid(f"{facet_count} facets do not fit a binary STL count field")

    stream.write(make_header(header_text))
    stream.write(_COUNT.pack(facet_count))

    written = 0
    for facet in facets:
        if abort is not None and abort():
            raise ExportAborted(f"Binary export aborted after {written} facets")
        stream.write(pack_facet(facet))
        written += 1

    if written != facet_count:
        raise FacetCountMismatch(facet_count, written)
    return written


def write_binary_stl(
    facets: Iterable[Facet],
    output_path: Path,
    facet_count: int,
    header_text: str = "",
    *,
    abort: Optional[Callable[[], bool]] = None,
) -> int:
    """Write a binary STL file and verify its size.

    Returns:
        Number of facets written.

    Raises:
        IOFailure: the file could not be created or written.
        FacetCountMismatch: facet stream or file size disagrees with ``facet_count``.
        ExportAborted: ``abort`` returned True.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as f:
            written = encode_binary(facets, f, facet_count, header_text, abort=abort)
            size = f.tell()
    except OSError as e:
        raise IOFailure(f"Failed to write {output_path}: {e}") from e

    expected_size = HEADER_SIZE + _COUNT.size + RECORD_SIZE * written
    if size != expected_size:
        raise FacetCountMismatch(facet_count, (size - HEADER_SIZE - _COUNT.size) // RECORD_SIZE)

    size_mb = size / (1024 * 1024)
    logger.info(f"Binary STL exported: {output_path} ({size_mb:.2f} MB, {written} facets)")
    return written
