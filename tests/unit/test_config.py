"""Tests for configuration schema, loading, merging and adaptation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from cutplan.application.config import (
    ConfigError,
    OptimizerConfiguration,
    OutputFormatConfig,
    OversizedPolicyConfig,
    config_to_optimizer,
    load_config,
    load_config_from_dict,
    merge_config_with_cli,
)
from cutplan.application.config.loader import _format_json_path
from cutplan.domain import SheetConfig


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def full_config_data() -> dict[str, Any]:
    return {
        "schema_version": "1.0",
        "sheet": {"width": 2440, "height": 1220},
        "packing": {
            "default_thickness": "15",
            "oversized_policy": "place",
            "max_instances": 1000,
        },
        "output": {"format": "ascii", "svg_scale": 0.5},
    }


@pytest.fixture
def config_file(tmp_path: Path, full_config_data: dict[str, Any]) -> Path:
    path = tmp_path / "shop.json"
    path.write_text(json.dumps(full_config_data), encoding="utf-8")
    return path


# =============================================================================
# Schema Tests
# =============================================================================


class TestOptimizerConfiguration:
    """Tests for the root configuration model."""

    def test_minimal_config_uses_defaults(self) -> None:
        """Only schema_version is required."""
        config = OptimizerConfiguration(schema_version="1.0")
        assert config.sheet.width == 2750
        assert config.sheet.height == 1850
        assert config.packing.default_thickness == "18"
        assert config.packing.oversized_policy == OversizedPolicyConfig.REJECT
        assert config.packing.max_instances == 50_000
        assert config.output.format == OutputFormatConfig.SUMMARY
        assert config.output.svg_scale == 0.2

    def test_full_config(self, full_config_data: dict[str, Any]) -> None:
        """All sections are parsed."""
        config = OptimizerConfiguration.model_validate(full_config_data)
        assert config.sheet.width == 2440
        assert config.packing.oversized_policy == OversizedPolicyConfig.PLACE
        assert config.output.format == OutputFormatConfig.ASCII

    def test_schema_version_required(self) -> None:
        """A missing schema_version is rejected."""
        with pytest.raises(ValidationError):
            OptimizerConfiguration.model_validate({})

    @pytest.mark.parametrize("version", ["1.0", "1.3"])
    def test_supported_versions(self, version: str) -> None:
        """Minor versions of a supported major are accepted."""
        assert OptimizerConfiguration(schema_version=version).schema_version == version

    @pytest.mark.parametrize("version", ["2.0", "1", "v1.0"])
    def test_unsupported_versions(self, version: str) -> None:
        """Other majors and malformed versions are rejected."""
        with pytest.raises(ValidationError):
            OptimizerConfiguration(schema_version=version)

    def test_unknown_keys_forbidden(self) -> None:
        """Unknown keys are rejected at every level."""
        with pytest.raises(ValidationError):
            OptimizerConfiguration.model_validate({"schema_version": "1.0", "kerf": 3})
        with pytest.raises(ValidationError):
            OptimizerConfiguration.model_validate(
                {"schema_version": "1.0", "sheet": {"width": 100, "depth": 3}}
            )

    @pytest.mark.parametrize(
        "section,values",
        [
            ("sheet", {"width": 0}),
            ("sheet", {"height": -1}),
            ("packing", {"max_instances": 0}),
            ("packing", {"oversized_policy": "rotate"}),
            ("packing", {"default_thickness": ""}),
            ("output", {"format": "pdf"}),
            ("output", {"svg_scale": 0}),
        ],
    )
    def test_invalid_values(self, section: str, values: dict[str, Any]) -> None:
        """Out-of-range and unknown values are rejected."""
        with pytest.raises(ValidationError):
            OptimizerConfiguration.model_validate({"schema_version": "1.0", section: values})

    def test_max_instances_nullable(self) -> None:
        """A null max_instances disables the limit."""
        config = OptimizerConfiguration.model_validate(
            {"schema_version": "1.0", "packing": {"max_instances": None}}
        )
        assert config.packing.max_instances is None


# =============================================================================
# Loader Tests
# =============================================================================


class TestLoadConfig:
    """Tests for load_config and load_config_from_dict."""

    def test_load_file(self, config_file: Path) -> None:
        """A valid file loads."""
        assert load_config(config_file).sheet.width == 2440

    def test_file_not_found(self, tmp_path: Path) -> None:
        """A missing file reports file_not_found."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == tmp_path / "missing.json"

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON reports json_parse with position details."""
        path = tmp_path / "broken.json"
        path.write_text('{\n  "schema_version": "1.0",\n}', encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 3

    def test_validation_error_details(self, tmp_path: Path) -> None:
        """Schema errors report the JSON path of each offending field."""
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"schema_version": "1.0", "sheet": {"width": -5}}), encoding="utf-8"
        )
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "sheet.width"
        assert error.details[0]["value"] == -5
        assert error.details[0]["hint"].startswith("stock sheet width in mm")
        assert str(error).startswith(f"Invalid optimizer configuration in {path}:")

    def test_max_instances_hint(self) -> None:
        """A bad piece limit explains the accepted values."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"schema_version": "1.0", "packing": {"max_instances": 0}})
        detail = exc_info.value.details[0]
        assert detail["path"] == "packing.max_instances"
        assert "null for no limit" in detail["hint"]
        assert "null for no limit" in str(exc_info.value)

    def test_field_without_hint(self) -> None:
        """Unknown keys are reported without a hint."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"schema_version": "1.0", "sheet": {"depth": 5}})
        detail = exc_info.value.details[0]
        assert detail["path"] == "sheet.depth"
        assert "hint" not in detail

    def test_load_from_dict(self, full_config_data: dict[str, Any]) -> None:
        """Dictionaries are validated the same way."""
        assert load_config_from_dict(full_config_data).packing.max_instances == 1000

    def test_load_from_dict_invalid(self) -> None:
        """Invalid dictionaries raise ConfigError without a path."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"schema_version": "9.0"})
        assert exc_info.value.error_type == "validation"
        assert exc_info.value.path is None

    def test_format_json_path(self) -> None:
        """Location tuples become dotted paths with indices."""
        assert _format_json_path(("sheet", "width")) == "sheet.width"
        assert _format_json_path(("pieces", 0, "width")) == "pieces[0].width"


# =============================================================================
# Merger and Adapter Tests
# =============================================================================


class TestMergeConfigWithCli:
    """Tests for merge_config_with_cli."""

    def test_none_keeps_config_values(self, full_config_data: dict[str, Any]) -> None:
        """No overrides leave the configuration unchanged."""
        config = OptimizerConfiguration.model_validate(full_config_data)
        assert merge_config_with_cli(config) == config

    def test_overrides(self, full_config_data: dict[str, Any]) -> None:
        """Non-None overrides replace config values."""
        config = OptimizerConfiguration.model_validate(full_config_data)
        merged = merge_config_with_cli(
            config,
            sheet_width=3000,
            oversized_policy="reject",
            output_format="json",
        )
        assert merged.sheet.width == 3000
        assert merged.sheet.height == 1220
        assert merged.packing.oversized_policy == OversizedPolicyConfig.REJECT
        assert merged.packing.default_thickness == "15"
        assert merged.output.format == OutputFormatConfig.JSON
        assert merged.output.svg_scale == 0.5

    def test_invalid_override(self) -> None:
        """Overrides are validated."""
        with pytest.raises(ValidationError):
            merge_config_with_cli(
                OptimizerConfiguration(schema_version="1.0"), sheet_height=-10
            )


class TestConfigToOptimizer:
    """Tests for config_to_optimizer."""

    def test_conversion(self, full_config_data: dict[str, Any]) -> None:
        """Every packing setting reaches the engine configuration."""
        optimizer = config_to_optimizer(
            OptimizerConfiguration.model_validate(full_config_data)
        )
        assert optimizer.sheet_size == SheetConfig(2440, 1220)
        assert optimizer.default_thickness == "15"
        assert optimizer.oversized_policy == "place"
        assert optimizer.max_instances == 1000
