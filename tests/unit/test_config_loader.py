"""Unit tests for the job file schema and loader.

These tests verify:
- Valid job files are loaded correctly
- Schema violations produce errors with JSON paths
- Unknown fields are rejected (extra="forbid")
- Schema version checks
- Loader error handling (file not found, JSON parse errors)
"""

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from stockcut.application.config import (
    SUPPORTED_VERSIONS,
    ConfigError,
    JobConfiguration,
    LinearItemConfig,
    OutputConfig,
    RectItemConfig,
    RingJobConfig,
    load_config,
    load_config_from_dict,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "jobs"


@pytest.fixture
def linear_data() -> dict[str, Any]:
    return {
        "schema_version": "1.0",
        "linear": {
            "material_length": 6000,
            "items": [{"id": "A", "length": 1000, "quantity": 2}],
        },
    }


class TestItemModels:
    """Tests for item configuration models."""

    def test_linear_item_defaults(self) -> None:
        item = LinearItemConfig(id="A", length=100)
        assert item.quantity == 1

    def test_rect_item_defaults(self) -> None:
        item = RectItemConfig(id="P", width=100, height=50)
        assert item.quantity == 1
        assert item.can_rotate is True

    @pytest.mark.parametrize(
        "field,value", [("length", 0), ("length", -1), ("quantity", 0), ("id", "")]
    )
    def test_linear_item_rejects_bad_values(self, field: str, value: Any) -> None:
        data: dict[str, Any] = {"id": "A", "length": 100, "quantity": 1}
        data[field] = value
        with pytest.raises(PydanticValidationError):
            LinearItemConfig(**data)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            RectItemConfig(id="P", width=1, height=1, grain="long")  # type: ignore[call-arg]


class TestRingJobConfig:
    def test_defaults(self) -> None:
        rings = RingJobConfig()
        assert rings.multiplier == 1
        assert rings.material_length == 6000
        assert rings.algorithm == "first-fit"

    def test_multiplier_must_be_positive(self) -> None:
        with pytest.raises(PydanticValidationError):
            RingJobConfig(multiplier=0)


class TestJobConfiguration:
    """Tests for the root model."""

    def test_supported_versions(self) -> None:
        assert "1.0" in SUPPORTED_VERSIONS

    def test_output_defaults(self, linear_data: dict[str, Any]) -> None:
        config = JobConfiguration.model_validate(linear_data)
        assert config.output == OutputConfig()
        assert config.output.format == "text"
        assert config.plate is None

    def test_newer_minor_version_accepted(self, linear_data: dict[str, Any]) -> None:
        linear_data["schema_version"] = "1.4"
        assert JobConfiguration.model_validate(linear_data).schema_version == "1.4"

    def test_unsupported_major_version(self, linear_data: dict[str, Any]) -> None:
        linear_data["schema_version"] = "2.0"
        with pytest.raises(PydanticValidationError, match="Unsupported schema version"):
            JobConfiguration.model_validate(linear_data)

    def test_malformed_version(self, linear_data: dict[str, Any]) -> None:
        linear_data["schema_version"] = "one"
        with pytest.raises(PydanticValidationError):
            JobConfiguration.model_validate(linear_data)

    def test_at_least_one_section(self) -> None:
        with pytest.raises(PydanticValidationError, match="must be configured"):
            JobConfiguration.model_validate({"schema_version": "1.0"})

    def test_unknown_algorithm_rejected(self, linear_data: dict[str, Any]) -> None:
        linear_data["linear"]["algorithm"] = "next-fit"
        with pytest.raises(PydanticValidationError):
            JobConfiguration.model_validate(linear_data)


# =============================================================================
# Loader
# =============================================================================


class TestLoadConfig:
    """Tests for load_config."""

    def test_valid_file(self) -> None:
        config = load_config(FIXTURES_PATH / "valid_linear.json")

        assert config.linear is not None
        assert config.linear.material_length == 6000
        assert [item.id for item in config.linear.items] == ["A", "B"]
        assert config.linear.items[1].quantity == 1

    def test_all_sections(self) -> None:
        config = load_config(FIXTURES_PATH / "valid_all_sections.json")

        assert config.linear is not None and config.linear.algorithm == "best-fit"
        assert config.plate is not None and config.plate.items[1].can_rotate is False
        assert config.rings is not None and config.rings.small_ring_a == 100

    def test_file_not_found(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.json"
        with pytest.raises(ConfigError) as excinfo:
            load_config(path)

        assert excinfo.value.error_type == "file_not_found"
        assert excinfo.value.path == path
        assert "Job file not found" in str(excinfo.value)

    def test_malformed_json(self) -> None:
        with pytest.raises(ConfigError) as excinfo:
            load_config(FIXTURES_PATH / "malformed.json")

        assert excinfo.value.error_type == "json_parse"
        assert "line" in excinfo.value.details[0]
        assert "Invalid JSON" in excinfo.value.message

    def test_schema_error_has_path(self) -> None:
        with pytest.raises(ConfigError) as excinfo:
            load_config(FIXTURES_PATH / "negative_length.json")

        error = excinfo.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "linear.items[0].length"
        assert error.details[0]["value"] == -5
        assert error.message.startswith("Job file validation failed:")
        assert "(got: -5)" in error.message

    def test_schema_error_is_chained(self) -> None:
        with pytest.raises(ConfigError) as excinfo:
            load_config(FIXTURES_PATH / "negative_length.json")
        assert isinstance(excinfo.value.__cause__, PydanticValidationError)


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict."""

    def test_valid_dict(self, linear_data: dict[str, Any]) -> None:
        config = load_config_from_dict(linear_data)
        assert config.linear is not None

    def test_extra_field_path(self, linear_data: dict[str, Any]) -> None:
        linear_data["linear"]["colour"] = "red"
        with pytest.raises(ConfigError) as excinfo:
            load_config_from_dict(linear_data)

        detail = excinfo.value.details[0]
        assert detail["path"] == "linear.colour"
        assert detail["error_type"] == "extra_forbidden"
        assert excinfo.value.path is None

    def test_root_error_labelled(self) -> None:
        with pytest.raises(ConfigError) as excinfo:
            load_config_from_dict({"schema_version": "1.0"})
        assert "(root)" in excinfo.value.message
