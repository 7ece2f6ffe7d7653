"""Job file schema, loading and validation.

Public API:
    - JobConfiguration: Root job file model
    - LinearJobConfig / PlateJobConfig / RingJobConfig: Job sections
    - OutputConfig: Report format and destination
    - load_config: Load a job file from disk
    - load_config_from_dict: Validate a job held in a dictionary
    - ConfigError: Exception for job file errors
    - validate_config: Semantic checks returning a ValidationResult
    - config_to_linear_job / config_to_plate_job / config_to_ring_job:
      Build application DTOs from a job file

Example:
    >>> from pathlib import Path
    >>> from stockcut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("job.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from stockcut.application.config.adapter import (
    config_to_linear_job,
    config_to_plate_job,
    config_to_ring_job,
    ring_config_to_params,
)
from stockcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from stockcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    JobConfiguration,
    LinearItemConfig,
    LinearJobConfig,
    OutputConfig,
    PlateJobConfig,
    RectItemConfig,
    RingJobConfig,
)
from stockcut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "JobConfiguration",
    "LinearItemConfig",
    "LinearJobConfig",
    "OutputConfig",
    "PlateJobConfig",
    "RectItemConfig",
    "RingJobConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_linear_job",
    "config_to_plate_job",
    "config_to_ring_job",
    "load_config",
    "load_config_from_dict",
    "ring_config_to_params",
    "validate_config",
]
