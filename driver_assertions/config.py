"""Configuration for driver assertion sessions.

Configuration is an ``AssertionsConfig`` pydantic model, built from keyword
arguments or loaded from a JSON file.
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import CONFIG_ENV_VAR, LOGGER_NAME, VALUE_PRESENCE_KEYS
from .errors import ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)


class ResolutionOrder(str, Enum):
    """Order in which report events reach the reporter."""
    ARRIVAL = "arrival"      # as soon as the driver answers
    ISSUANCE = "issuance"    # in the order the checks were called


class AssertionsConfig(BaseModel):
    """Settings for one assertion session."""

    model_config = {"frozen": True, "extra": "forbid"}

    resolution_order: ResolutionOrder = Field(
        ResolutionOrder.ARRIVAL,
        description="Report in answer-arrival order or in check-call order",
    )
    suppress_absent_expected: bool = Field(
        True,
        description="Skip comparison for value-presence kinds called without an expected value",
    )
    value_presence_keys: FrozenSet[str] = Field(
        VALUE_PRESENCE_KEYS,
        description="Semantic keys subject to the absent-expected suppression",
    )
    log_level: str = Field("WARNING", description="Level for the driver_assertions logger")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    def apply_logging(self) -> None:
        """Set the package logger to the configured level.

        Only a level given explicitly is applied; otherwise the level the host
        application set is left alone.
        """
        if "log_level" not in self.model_fields_set:
            return
        logging.getLogger(LOGGER_NAME).setLevel(self.log_level)


def load_config(path: Optional[Path] = None) -> AssertionsConfig:
    """Load configuration from a JSON file.

    Args:
        path: JSON file to read. Defaults to the file named by the
            DRIVER_ASSERTIONS_CONFIG environment variable.

    Returns:
        AssertionsConfig; defaults if no file is configured

    Raises:
        ConfigurationError: If the file cannot be read or fails validation
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            logger.debug("No configuration file configured, using defaults")
            return AssertionsConfig()
        path = Path(env_path)

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Failed to load configuration: {e}",
            file_path=str(path),
            code=ErrorCode.CONFIG_LOAD_FAILED,
            suggestion="Check that the file exists and contains valid JSON",
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration must be a JSON object",
            file_path=str(path),
        )

    try:
        config = AssertionsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s): {e.errors()[0]['msg']}",
            file_path=str(path),
            suggestion="Valid keys: " + ", ".join(AssertionsConfig.model_fields),
        ) from e

    logger.info(f"Loaded configuration from {path} (resolution_order={config.resolution_order.value})")
    return config
