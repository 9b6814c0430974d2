"""Tests for core pipeline runner and contracts."""

from pathlib import Path

import pytest
import yaml

from hm2stl.core.contracts import (
    ExportResult,
    ModelParameters,
    PipelineConfig,
    StepEntry,
    StepMeta,
    predict_binary_size,
    predict_facet_count,
)
from hm2stl.core.errors import InvalidParameter
from hm2stl.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config


class TestContracts:
    def test_step_meta(self):
        meta = StepMeta(step_name="test", elapsed_seconds=1.5, params={"a": 1})
        assert meta.step_name == "test"
        assert meta.elapsed_seconds == 1.5

    def test_pipeline_config(self):
        cfg = PipelineConfig(
            project_name="test",
            data_root=Path("./data"),
            steps=[StepEntry(name="s1", module="hm2stl.steps.s00_load_grid", config_file="c.yaml")],
        )
        assert len(cfg.steps) == 1
        assert cfg.steps[0].enabled is True

    def test_export_result_defaults(self):
        result = ExportResult(success=True)
        assert result.error_kind is None
        assert result.facets_written == 0


class TestFacetPrediction:
    @pytest.mark.parametrize("rows,cols,expected", [
        (2, 2, 14),
        (4, 4, 70),
        (2, 3, 24),
        (3, 2, 24),
        (10, 20, 850),
    ])
    def test_predict_facet_count(self, rows, cols, expected):
        assert predict_facet_count(rows, cols) == expected

    def test_predict_binary_size(self):
        assert predict_binary_size(4, 4) == 3584


class TestModelParameters:
    def test_defaults(self):
        params = ModelParameters()
        assert params.scan_size == 2500.0
        assert params.samples_per_line == 1024.0
        assert params.binary is False
        assert params.pitch == pytest.approx(2500.0 / 1024.0)
        assert params.z_scale == pytest.approx(5.0 / 255)
        params.validate_scaling()

    def test_unit_scaling(self):
        params = ModelParameters(scan_size=1.0, samples_per_line=1.0, peak_model_height=255.0)
        assert params.pitch == 1.0
        assert params.z_scale == 1.0

    @pytest.mark.parametrize("overrides", [
        {"scan_size": 0.0},
        {"scan_size": -10.0},
        {"samples_per_line": 0.0},
        {"peak_model_height": 0.0},
        {"base_thickness": -1.0},
        {"scan_size": float("nan")},
        {"peak_model_height": float("inf")},
        {"model_name": "   "},
        {"model_name": "scan\nfacet normal 1 1 1"},
        {"model_name": "scan\r"},
    ])
    def test_invalid_parameters(self, overrides):
        with pytest.raises(InvalidParameter):
            ModelParameters(**overrides).validate_scaling()

    def test_zero_base_is_allowed(self):
        ModelParameters(base_thickness=0.0).validate_scaling()


class TestPipelineRunner:
    def test_load_pipeline_config(self, tmp_path: Path):
        config = {
            "project_name": "test_project",
            "data_root": str(tmp_path / "data"),
            "steps": [
                {"name": "load_grid", "module": "hm2stl.steps.s00_load_grid",
                 "config_file": "configs/steps/s00_load_grid.yaml", "depends_on": [], "enabled": True},
            ],
        }
        config_file = tmp_path / "pipeline.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config, f)

        cfg = load_pipeline_config(config_file)
        assert cfg.project_name == "test_project"
        assert len(cfg.steps) == 1

    def test_import_step_class(self):
        cls = import_step_class("hm2stl.steps.s01_stl_export")
        assert cls.__name__ == "StlExportStep"
        assert hasattr(cls, "input_type")
        assert hasattr(cls, "output_type")

    def test_import_all_steps(self):
        for module in ["hm2stl.steps.s00_load_grid", "hm2stl.steps.s01_stl_export"]:
            cls = import_step_class(module)
            assert cls.name, f"{module} has empty name"
            schema = cls.get_input_schema()
            assert "properties" in schema

    def test_load_step_config(self, tmp_path: Path):
        from hm2stl.steps.s01_stl_export.config import StlExportConfig

        config_data = {"model_name": "afm", "binary": True, "base_thickness": 2.0}
        config_file = tmp_path / "s01.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

        cfg = load_step_config(config_file, StlExportConfig)
        assert cfg.model_name == "afm"
        assert cfg.binary is True
        assert cfg.base_thickness == 2.0

    def test_missing_step_config_uses_defaults(self, tmp_path: Path):
        from hm2stl.steps.s00_load_grid.config import LoadGridConfig

        cfg = load_step_config(tmp_path / "missing.yaml", LoadGridConfig)
        assert cfg.flip_rows is True
