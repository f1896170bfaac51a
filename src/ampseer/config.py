# ================================================================================
# Configuration model for panel classification
#
# Uses Pydantic for runtime validation of configuration parameters.
# ================================================================================

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

# Empirical rate at which an unrelated panel still matches read anchors.
EXPECTED_NON_MATCHING_RATIO = 0.005

ANCHOR_LENGTH = 16


class ClassifierConfig(BaseModel):
    """Parameters for anchor extraction and panel resolution."""

    # 2 bits per base; 32 bases fill a 64-bit word
    anchor_length: int = Field(default=ANCHOR_LENGTH, ge=4, le=32)

    expected_non_matching_ratio: float = Field(
        default=EXPECTED_NON_MATCHING_RATIO,
        gt=0.0,
        lt=1.0,
        description="Background fraction of anchors an unrelated panel recognizes.",
    )
    dominance_factor: float = Field(
        default=1000.0,
        gt=0.0,
        description="Stage 1: top/second fraction ratio must exceed "
        "expected_non_matching_ratio * dominance_factor.",
    )
    unique_anchor_factor: float = Field(
        default=100.0,
        gt=0.0,
        description="Stage 2: unique-anchor count ratio must exceed "
        "expected_non_matching_ratio * unique_anchor_factor.",
    )

    @property
    def dominance_threshold(self) -> float:
        return self.expected_non_matching_ratio * self.dominance_factor

    @property
    def unique_anchor_threshold(self) -> float:
        return self.expected_non_matching_ratio * self.unique_anchor_factor

    @classmethod
    def from_json_file(cls, file_path: str | Path) -> ClassifierConfig:
        """
        Load configuration from a JSON file.

        Parameters
        ----------
        file_path : str | Path
            Path to the JSON configuration file.

        Returns
        -------
        ClassifierConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError
            If the configuration file does not exist.
        ValidationError
            If the configuration fails validation.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Export configuration to a dictionary."""
        return self.model_dump()

    def to_json_file(self, file_path: str | Path) -> None:
        """
        Save configuration to a JSON file.

        Parameters
        ----------
        file_path : str | Path
            Path to the output JSON file.
        """
        path = Path(file_path)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=4)
        logger.info(f"Configuration saved to: {path}")


def load_config(config_path: str | Path | None = None) -> ClassifierConfig:
    """
    Load and validate classifier configuration.

    Parameters
    ----------
    config_path : str | Path | None
        Path to a custom configuration JSON file. Defaults are used when None.

    Raises
    ------
    ValidationError
        If the configuration fails validation.
    FileNotFoundError
        If the specified config file does not exist.
    """
    if config_path is not None:
        logger.info(f"Loading config from: {config_path}")
        return ClassifierConfig.from_json_file(config_path)

    return ClassifierConfig()
