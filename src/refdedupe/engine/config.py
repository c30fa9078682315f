"""Detection configuration and result dataclasses."""

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema

from refdedupe.models import DuplicatePair
from refdedupe.scoring.weights import (
    DEFAULT_WEIGHTS,
    FIELD_NAMES,
    canonical_field_name,
    normalize_weights,
)

__all__ = [
    "ConfigError",
    "DetectionConfig",
    "DetectionResult",
    "SkippedRecord",
    "load_config",
    "weights_from_pairs",
    "CONFIG_SCHEMA_PATH",
]

DEFAULT_THRESHOLD = 0.6

CONFIG_SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "config.schema.json"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or is invalid."""


@dataclass
class DetectionConfig:
    """Configuration for a duplicate detection run.

    Out-of-range values are coerced rather than rejected: the threshold is
    clamped into [0, 1] and negative weights become 0. Weights are
    normalized to sum to 1; if every weight is 0 they stay at 0 and every
    weighted score is 0.

    Attributes
    ----------
    weights : dict[str, float]
        Field weights keyed by field name (aliases such as 'DOI' or
        'shortTitle' are accepted). Fields not listed get weight 0.
        Defaults to ``DEFAULT_WEIGHTS``.
    threshold : float
        Minimum weighted similarity for a pair to be reported (default: 0.6).
    use_exact_match : bool
        Report exact URL/DOI matches with similarity 1.0 (default: True).
    use_fuzzy_title : bool
        Blend edit similarity into title comparison (default: True).
    require_same_type : bool
        Veto weighted matches across item types (default: False).
    """

    weights: dict[str, float] | None = None
    threshold: float = DEFAULT_THRESHOLD
    use_exact_match: bool = True
    use_fuzzy_title: bool = True
    require_same_type: bool = False

    def __post_init__(self) -> None:
        """Coerce weights and threshold into their valid ranges."""
        source = DEFAULT_WEIGHTS if self.weights is None else self.weights

        weights = dict.fromkeys(FIELD_NAMES, 0.0)
        for name, value in source.items():
            weights[canonical_field_name(name)] = max(0.0, float(value))
        self.weights = normalize_weights(weights)

        threshold = float(self.threshold)
        if math.isnan(threshold):
            threshold = DEFAULT_THRESHOLD
        self.threshold = min(1.0, max(0.0, threshold))

    def with_weights(self, **updates: float) -> "DetectionConfig":
        """Return a copy with some weights replaced and all re-normalized.

        Parameters
        ----------
        **updates : float
            Field name to new (unnormalized) weight.

        Returns
        -------
        DetectionConfig
            New configuration; this one is unchanged.
        """
        weights = dict(self.weights or {})
        for name, value in updates.items():
            weights[canonical_field_name(name)] = value
        return DetectionConfig(
            weights=weights,
            threshold=self.threshold,
            use_exact_match=self.use_exact_match,
            use_fuzzy_title=self.use_fuzzy_title,
            require_same_type=self.require_same_type,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "weights": dict(self.weights or {}),
            "threshold": self.threshold,
            "use_exact_match": self.use_exact_match,
            "use_fuzzy_title": self.use_fuzzy_title,
            "require_same_type": self.require_same_type,
        }


def load_config(path: str | Path) -> DetectionConfig:
    """Load a detection configuration from a JSON file.

    The file is validated against ``schemas/config.schema.json``.

    Parameters
    ----------
    path : str | Path
        Path to the JSON configuration file.

    Returns
    -------
    DetectionConfig
        Parsed configuration. Keys missing from the file use defaults.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ConfigError
        If the file is not valid JSON or does not match the schema.

    Examples
    --------
    A config file putting all weight on title and authors:

        {"threshold": 0.8, "weights": {"title": 2, "creators": 1}}
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path.name}: {e}") from e

    with CONFIG_SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"Invalid config {config_path.name} at {location}: {e.message}") from e

    return DetectionConfig(**data)


@dataclass(frozen=True)
class SkippedRecord:
    """Record excluded from comparison because it could not be normalized.

    Attributes
    ----------
    record_id : str | None
        Identifier of the record, if it could be read.
    message : str
        Failure description.
    """

    record_id: str | None
    message: str


@dataclass
class DetectionResult:
    """Results from a detection run.

    Attributes
    ----------
    pairs : list[DuplicatePair]
        Duplicate candidates, sorted by similarity descending; ties keep
        encounter order.
    records_in : int
        Records received from the source.
    records_compared : int
        Records normalized and compared.
    skipped : list[SkippedRecord]
        Records excluded because normalization failed.
    comparisons_total : int
        Pairs to compare, ``n * (n - 1) / 2``.
    comparisons_done : int
        Pairs actually compared.
    pairs_failed : int
        Pairs whose evaluation raised and were left out.
    cancelled : bool
        Whether the run was stopped before comparing every pair.
    """

    pairs: list[DuplicatePair]
    records_in: int
    records_compared: int
    skipped: list[SkippedRecord] = field(default_factory=list)
    comparisons_total: int = 0
    comparisons_done: int = 0
    pairs_failed: int = 0
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON reports."""
        return {
            "records_in": self.records_in,
            "records_compared": self.records_compared,
            "skipped": [
                {"record_id": s.record_id, "message": s.message} for s in self.skipped
            ],
            "comparisons_total": self.comparisons_total,
            "comparisons_done": self.comparisons_done,
            "pairs_failed": self.pairs_failed,
            "cancelled": self.cancelled,
            "pairs": [pair.to_dict() for pair in self.pairs],
        }


def weights_from_pairs(items: Mapping[str, float] | list[tuple[str, float]]) -> dict[str, float]:
    """Build a canonical weight mapping from name/value pairs.

    Raises
    ------
    ValueError
        If a name is not a scored field.
    """
    pairs = items.items() if isinstance(items, Mapping) else items
    return {canonical_field_name(name): float(value) for name, value in pairs}
