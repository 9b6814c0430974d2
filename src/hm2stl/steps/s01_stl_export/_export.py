"""Export facade: height grid + parameters -> STL file, reported as an ExportResult."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from hm2stl.core.contracts import ExportResult, ModelParameters, predict_facet_count
from hm2stl.core.errors import FacetCountMismatch, HeightmapError
from ._ascii_writer import write_ascii_stl
from ._binary_writer import write_binary_stl
from ._solid_mesher import iter_facets
from ._vertex_field import build_vertex_field

logger = logging.getLogger(__name__)


def default_header(model_name: str) -> str:
    return f"hm2stl binary STL: {model_name}"


def export_heightmap(
    grid,
    params: ModelParameters,
    output_path: Path,
    *,
    header_text: Optional[str] = None,
    abort: Optional[Callable[[], bool]] = None,
) -> ExportResult:
    """Mesh ``grid`` into a closed solid and write it as ASCII or binary STL.

    Facets are streamed straight from the mesher into the writer. Failures
    are returned in the result (``success=False`` plus ``error_kind``); a
    partially written file is left on disk for the caller to handle.
    """
    t0 = time.time()
    output_path = Path(output_path)
    result = ExportResult(success=False, output_path=output_path, binary=params.binary)

    try:
        params.validate_scaling()
        field = build_vertex_field(grid, params.pitch, params.z_scale, params.base_thickness)
        result.rows, result.cols = field.rows, field.cols
        result.expected_facets = predict_facet_count(field.rows, field.cols)
        logger.info(
            f"Meshing {field.rows}x{field.cols} grid -> {result.expected_facets} facets "
            f"({'binary' if params.binary else 'ASCII'})"
        )

        facets = iter_facets(field)
        if params.binary:
            header = header_text if header_text is not None else default_header(params.model_name)
            written = write_binary_stl(
                facets, output_path, result.expected_facets, header, abort=abort
            )
        else:
            written = write_ascii_stl(
                facets,
                output_path,
                params.model_name,
                expected_facets=result.expected_facets,
                abort=abort,
            )
        result.facets_written = written
        result.success = True
    except FacetCountMismatch as e:
        result.error_kind = e.kind
        result.message = str(e)
        result.facets_written = e.actual
    except HeightmapError as e:
        result.error_kind = e.kind
        result.message = str(e)

    if not result.success:
        logger.error(f"Export failed [{result.error_kind}]: {result.message}")
    if output_path.is_file():
        result.bytes_written = output_path.stat().st_size
    result.elapsed_seconds = time.time() - t0
    return result
