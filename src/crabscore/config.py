"""Configuration loading and management for CrabScore.

Configuration sources are merged in priority order:
    1. Defaults (defined in ScoreConfig)
    2. Global config (~/.crabscore.toml)
    3. Project config (<project>/crabscore.toml)
    4. Explicit config file
    5. Environment variables (CRABSCORE_* prefix)
    6. CLI overrides (passed as kwargs)

The resolved :class:`ScoreConfig` is passed explicitly into logging setup and
the scoring pipeline; nothing downstream reads the environment.

Example:
    >>> config = load_config(verbosity="verbose", measured_iterations=10)
    >>> config.measured_iterations
    10
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError
from .exceptions.base import CrabScoreError
from .profiles import CustomProfile, Profile, ProfileWeights, parse_profile

Verbosity = Literal["quiet", "normal", "verbose", "debug"]

_VERBOSITIES = ("quiet", "normal", "verbose", "debug")

CONFIG_FILENAME = "crabscore.toml"


@dataclass(frozen=True)
class ScoreConfig:
    """Configuration for one scoring run.

    Attributes:
        Scoring:
            profile: Industry preset name (ignored when custom_weights is set)
            custom_weights: Optional explicit {performance, energy, cost}

        Benchmarking:
            warmup_iterations: Runs executed and discarded before measuring
            measured_iterations: Runs whose wall-clock time is sampled
            benchmark_args: Arguments passed to the benchmarked executable
            run_timeout_seconds: Limit for a single benchmarked run

        Building:
            build_timeout_seconds: Limit for a single ``cargo build``

        Cost data:
            cost_file: JSON cost file, relative paths resolve against the project

        Output control:
            verbosity: Logging verbosity level
    """

    profile: str = "web_services"
    custom_weights: Optional[dict[str, float]] = None

    warmup_iterations: int = 1
    measured_iterations: int = 5
    benchmark_args: list[str] = field(default_factory=list)
    run_timeout_seconds: float = 60.0

    build_timeout_seconds: float = 600.0

    cost_file: str = "cost.json"

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.warmup_iterations < 0:
            raise InvalidConfigError(
                "warmup_iterations", self.warmup_iterations, "must be non-negative"
            )
        if self.measured_iterations < 0:
            raise InvalidConfigError(
                "measured_iterations", self.measured_iterations, "must be non-negative"
            )
        if self.run_timeout_seconds <= 0:
            raise InvalidConfigError(
                "run_timeout_seconds", self.run_timeout_seconds, "must be positive"
            )
        if self.build_timeout_seconds <= 0:
            raise InvalidConfigError(
                "build_timeout_seconds", self.build_timeout_seconds, "must be positive"
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )
        # Resolve eagerly so a bad profile or weight table fails at load time
        self.resolve_profile()

    def resolve_profile(self) -> Profile:
        """Return the scoring profile this configuration selects."""
        if self.custom_weights is not None:
            try:
                return CustomProfile(weights=ProfileWeights(**self.custom_weights))
            except (TypeError, ValueError) as e:
                raise InvalidConfigError("weights", self.custom_weights, str(e))
        try:
            return parse_profile(self.profile)
        except ValueError as e:
            raise InvalidConfigError("profile", self.profile, str(e))


def load_config(
    config_file: Optional[Path] = None,
    project_dir: Optional[Path] = None,
    **overrides: Any,
) -> ScoreConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        project_dir: Directory searched for ``crabscore.toml`` (default: cwd)
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored

    Returns:
        Validated ScoreConfig instance

    Raises:
        CrabScoreError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_root = project_dir if project_dir is not None else Path.cwd()
    if project_root.is_file():
        project_root = project_root.parent
    project_config = project_root / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise CrabScoreError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    merged.update({k: v for k, v in overrides.items() if v is not None})

    # [weights] table from TOML
    weights = merged.pop("weights", None)
    if weights is not None:
        if not isinstance(weights, dict):
            raise InvalidConfigError("weights", weights, "expected a table")
        merged["custom_weights"] = weights

    try:
        return ScoreConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise CrabScoreError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CRABSCORE_* environment variables.

    Supported environment variables:
        CRABSCORE_PROFILE: preset name
        CRABSCORE_WARMUP_ITERATIONS: int
        CRABSCORE_MEASURED_ITERATIONS: int
        CRABSCORE_RUN_TIMEOUT_SECONDS: float
        CRABSCORE_BUILD_TIMEOUT_SECONDS: float
        CRABSCORE_COST_FILE: path
        CRABSCORE_VERBOSITY: quiet/normal/verbose/debug

    Returns:
        Dict of field_name -> parsed_value for any CRABSCORE_* vars found.
    """
    type_hints = get_type_hints(ScoreConfig)

    result: dict[str, Any] = {}

    for field_name in ScoreConfig.__dataclass_fields__:
        env_key = f"CRABSCORE_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed in a single variable
    (lists, tables).
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]; list/dict-valued fields are skipped
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        return None
    if origin in (list, dict) or type_hint in (list, dict):
        return None

    if type_hint is int:
        return int(value)
    if type_hint is float:
        return float(value)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    Raises:
        CrabScoreError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise CrabScoreError(f"Invalid config file '{path}': {e}")
