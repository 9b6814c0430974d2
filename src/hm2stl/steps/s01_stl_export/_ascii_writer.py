"""ASCII STL writer.

Each facet becomes a fixed 7-line block; coordinates use Python's shortest
round-tripping float text, so identical meshes give identical files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO

from hm2stl.core.errors import ExportAborted, IOFailure
from ._solid_mesher import Facet
from ._vertex_field import Vertex

logger = logging.getLogger(__name__)


def _vertex_line(v: Vertex) -> str:
    return f"    vertex {v.x!r} {v.y!r} {v.z!r}\n"


def format_facet(facet: Facet) -> str:
    """Render one facet as its STL text block."""
    return (
        "facet normal 0 0 0\n"
        "  outer loop\n"
        + _vertex_line(facet.a)
        + _vertex_line(facet.b)
        + _vertex_line(facet.c)
        + "  endloop\n"
        "endfacet\n"
    )


def encode_ascii(
    facets: Iterable[Facet],
    stream: TextIO,
    model_name: str,
    *,
    abort: Optional[Callable[[], bool]] = None,
) -> int:
    """Write a complete ``solid ... endsolid`` body to ``stream``. Returns facet count."""
    count = 0
    stream.write(f"solid {model_name}\n")
    for facet in facets:
        if abort is not None and abort():
            raise ExportAborted(f"ASCII export aborted after {count} facets")
        stream.write(format_facet(facet))
        count += 1
    stream.write(f"endsolid {model_name}\n")
    return count


def write_ascii_stl(
    facets: Iterable[Facet],
    output_path: Path,
    model_name: str,
    *,
    expected_facets: Optional[int] = None,
    abort: Optional[Callable[[], bool]] = None,
) -> int:
    """Write an ASCII STL file.

    Args:
        facets: Facet stream, consumed once.
        output_path: Output .stl path; parent directories are created.
        model_name: Name used in the ``solid``/``endsolid`` lines.
        expected_facets: Predicted count, compared for the statistics log.
        abort: Polled before every facet; returning True stops the export.

    Returns:
        Number of facets written.

    Raises:
        IOFailure: the file could not be created or written.
        ExportAborted: ``abort`` returned True.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="ascii", errors="replace", newline="\n") as f:
            count = encode_ascii(facets, f, model_name, abort=abort)
    except OSError as e:
        raise IOFailure(f"Failed to write {output_path}: {e}") from e

    if expected_facets is not None and count != expected_facets:
        logger.warning(f"Expected {expected_facets} facets, model has {count}")

    size_mb = output_path.stat().st_size / (1024 * 1024)
    logger.info(f"ASCII STL exported: {output_path} ({size_mb:.2f} MB, {count} facets)")
    return count
