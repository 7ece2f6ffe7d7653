"""Pydantic configuration schema models for cutting job files.

A job file describes one or more optimization runs (1D bars, 2D plates,
FF-CA-01 rings) plus output options. Structural rules live here; rules
that relate several fields to each other, such as a piece being longer
than its bar, are checked by the validator module.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stockcut.domain.services.ring_pattern import DEFAULT_RING_MATERIAL_LENGTH

# Supported schema versions for job files
# Version 1.0: Initial schema with linear, plate and rings sections
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

LinearAlgorithmConfig = Literal["first-fit", "best-fit", "worst-fit"]
PlateAlgorithmConfig = Literal["simple", "guillotine", "maxrects"]


class LinearItemConfig(BaseModel):
    """A requested linear piece.

    Attributes:
        id: Identifier shown in reports.
        length: Nominal length, before kerf.
        quantity: Number of pieces required.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    length: float = Field(..., gt=0)
    quantity: int = Field(default=1, ge=1)


class RectItemConfig(BaseModel):
    """A requested rectangular piece.

    Attributes:
        id: Identifier shown in reports.
        width: Nominal width, before kerf.
        height: Nominal height, before kerf.
        quantity: Number of pieces required.
        can_rotate: Whether the piece may be turned 90 degrees.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    quantity: int = Field(default=1, ge=1)
    can_rotate: bool = True


class LinearJobConfig(BaseModel):
    """Configuration for a 1D bar cutting run."""

    model_config = ConfigDict(extra="forbid")

    material_length: float = Field(..., gt=0, description="Bar length")
    kerf: float = Field(default=0.0, ge=0, description="Saw kerf added to each piece")
    algorithm: LinearAlgorithmConfig = "first-fit"
    items: list[LinearItemConfig] = Field(..., min_length=1)


class PlateJobConfig(BaseModel):
    """Configuration for a 2D plate cutting run."""

    model_config = ConfigDict(extra="forbid")

    plate_width: float = Field(..., gt=0)
    plate_height: float = Field(..., gt=0)
    kerf: float = Field(default=0.0, ge=0, description="Saw kerf added to each side")
    algorithm: PlateAlgorithmConfig = "simple"
    items: list[RectItemConfig] = Field(..., min_length=1)


class RingJobConfig(BaseModel):
    """Configuration for an FF-CA-01 ring run.

    A ring dimension of 0 leaves that ring out. Pattern rules (complete
    pairs, small below big) are checked by the validator.
    """

    model_config = ConfigDict(extra="forbid")

    small_ring_a: float = Field(default=0.0, ge=0)
    big_ring_a: float = Field(default=0.0, ge=0)
    small_ring_b: float = Field(default=0.0, ge=0)
    big_ring_b: float = Field(default=0.0, ge=0)
    multiplier: int = Field(default=1, ge=1, description="Number of sets to cut")
    kerf: float = Field(default=0.0, ge=0)
    material_length: float = Field(default=DEFAULT_RING_MATERIAL_LENGTH, gt=0)
    algorithm: LinearAlgorithmConfig = "first-fit"


class OutputConfig(BaseModel):
    """Configuration for report format and destination.

    Attributes:
        format: ``text`` for tables, ``json`` for the data contract.
        output_file: Write the report, text or JSON, to this path instead of stdout.
    """

    model_config = ConfigDict(extra="forbid")

    format: Literal["text", "json"] = "text"
    output_file: str | None = None


class JobConfiguration(BaseModel):
    """Root model of a job file.

    Example:
        >>> config = JobConfiguration(
        ...     schema_version="1.0",
        ...     linear=LinearJobConfig(
        ...         material_length=6000,
        ...         items=[LinearItemConfig(id="A", length=1000, quantity=2)],
        ...     ),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    linear: LinearJobConfig | None = Field(default=None, description="1D bar job")
    plate: PlateJobConfig | None = Field(default=None, description="2D plate job")
    rings: RingJobConfig | None = Field(default=None, description="FF-CA-01 job")
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minor versions of them."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_has_job(self) -> "JobConfiguration":
        """Require at least one job section."""
        if self.linear is None and self.plate is None and self.rings is None:
            raise ValueError(
                "At least one of 'linear', 'plate' or 'rings' must be configured"
            )
        return self
