"""CLI entry point for hm2stl.

Usage:
    hm2stl export grid.npy model.stl --binary   # One-shot export
    hm2stl predict 512 512                      # Facet count and file size
    hm2stl run                                  # Run full pipeline
    hm2stl run-step s01_stl_export              # Run single step
    hm2stl info                                 # Show pipeline info
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from hm2stl.core.logging import setup_logging

app = typer.Typer(name="hm2stl", help="Heightmap to 3D-printable STL")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


@app.command()
def run(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Run the full pipeline."""
    setup_logging()
    from hm2stl.core.pipeline_runner import run_pipeline

    run_pipeline(config)


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. s01_stl_export)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging()
    from hm2stl.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    if input_json:
        input_data = json.loads(input_json)
    else:
        required = step_cls.get_input_schema().get("required", [])
        if required:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {required}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  hm2stl run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)
        input_data = {}

    console.print(f"[green]Running step: {step_name}[/green]")
    step_input = step_cls.input_type(**input_data)
    output = step_instance.execute(step_input)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def export(
    grid: Path = typer.Argument(..., help="Height grid (.npy, .csv or .txt)"),
    output: Path = typer.Argument(..., help="Output .stl path"),
    binary: bool = typer.Option(False, "--binary/--ascii", help="STL flavour"),
    model_name: str = typer.Option(None, "--name", help="Model name (default: output file stem)"),
    scan_size: float = typer.Option(2500.0, help="Physical scan width, e.g. in nm"),
    samples_per_line: float = typer.Option(1024.0, help="Samples per scan line"),
    peak_height: float = typer.Option(5.0, help="Model height of a saturated sample"),
    base_thickness: float = typer.Option(1.0, help="Base thickness below the lowest sample"),
    flip_rows: bool = typer.Option(True, "--flip-rows/--no-flip-rows", help="First stored row becomes the back edge"),
    log_level: str = typer.Option("INFO", help="Logging level"),
    log_file: Path = typer.Option(None, help="Also append log records to this file"),
) -> None:
    """Export a height grid as a closed STL solid."""
    log_handler = setup_logging(log_level, log_file)
    try:
        _export(grid, output, binary, model_name, scan_size, samples_per_line,
                peak_height, base_thickness, flip_rows)
    finally:
        _detach(log_handler)


def _detach(handler: Optional[logging.Handler]) -> None:
    if handler is not None:
        logging.getLogger().removeHandler(handler)
        handler.close()


def _export(
    grid: Path,
    output: Path,
    binary: bool,
    model_name: Optional[str],
    scan_size: float,
    samples_per_line: float,
    peak_height: float,
    base_thickness: float,
    flip_rows: bool,
) -> None:
    from hm2stl.core.contracts import ModelParameters
    from hm2stl.core.errors import HeightmapError
    from hm2stl.steps.s01_stl_export._export import export_heightmap
    from hm2stl.utils.io import read_height_grid

    try:
        raw = read_height_grid(grid)
    except (HeightmapError, OSError) as e:
        console.print(f"[red]Cannot read grid: {e}[/red]")
        raise typer.Exit(1)
    if flip_rows and raw.ndim == 2:
        raw = raw[::-1]

    params = ModelParameters(
        model_name=model_name or output.stem,
        scan_size=scan_size,
        samples_per_line=samples_per_line,
        peak_model_height=peak_height,
        base_thickness=base_thickness,
        binary=binary,
    )
    result = export_heightmap(raw, params, output)
    if not result.success:
        console.print(f"[red]{result.error_kind}: {result.message}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Model Statistics: {params.model_name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Grid", f"{result.rows} x {result.cols}")
    table.add_row("Format", "binary" if result.binary else "ASCII")
    table.add_row("Expected facets", str(result.expected_facets))
    table.add_row("Model facets", str(result.facets_written))
    table.add_row("Bytes", str(result.bytes_written))
    table.add_row("Output", str(result.output_path))
    console.print(table)


@app.command()
def predict(
    rows: int = typer.Argument(..., help="Grid rows"),
    cols: int = typer.Argument(..., help="Grid columns"),
) -> None:
    """Show the facet count and binary file size for a grid size."""
    from hm2stl.core.contracts import predict_binary_size, predict_facet_count

    if rows < 2 or cols < 2:
        console.print("[red]InvalidGrid: rows and cols must be at least 2[/red]")
        raise typer.Exit(1)
    console.print(f"Facets: {predict_facet_count(rows, cols)}")
    console.print(f"Binary size: {predict_binary_size(rows, cols)} bytes")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from hm2stl.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


if __name__ == "__main__":
    app()
