"""Configuration loading and management for codegauge.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.codegauge.toml)
    3. Project config (./codegauge.toml)
    4. Explicit config file
    5. Environment variables (CODEGAUGE_* prefix)
    6. Keyword overrides (API / CLI)

Example:
    >>> config = load_config(workers=4, min_duplicate_lines=6)
    >>> config.workers
    4
    >>> config.weights.maintainability
    0.4
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError
from .scanning.languages import GRAMMAR_BY_EXTENSION, get_supported_extensions

DEFAULT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")

ENV_PREFIX = "CODEGAUGE_"


@dataclass(frozen=True)
class ScoreWeights:
    """Weights of the overall score. Must sum to 1.0.

    Maintainability weighs most; complexity and inverted duplication share
    the remainder equally.
    """

    complexity: float = 0.3
    maintainability: float = 0.4
    duplication: float = 0.3

    def __post_init__(self) -> None:
        for name in ("complexity", "maintainability", "duplication"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(f"weights.{name}", value, "must be between 0.0 and 1.0")
        total = self.complexity + self.maintainability + self.duplication
        if not 0.99 <= total <= 1.01:
            raise InvalidConfigError("weights", f"{total:.3f}", "weights must sum to 1.0")


@dataclass(frozen=True)
class RecommendationThresholds:
    """Rule thresholds for the recommendation generator.

    Attributes:
        complexity_score: Project complexity above this suggests decomposition
        maintainability_score: Project maintainability below this suggests docs
        duplication_percentage: Duplication above this suggests shared utilities
        max_file_recommendations: File-specific recommendations to emit
    """

    complexity_score: float = 70
    maintainability_score: float = 65
    duplication_percentage: float = 15
    max_file_recommendations: int = 3

    def __post_init__(self) -> None:
        for name in ("complexity_score", "maintainability_score", "duplication_percentage"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise InvalidConfigError(
                    f"recommendations.{name}", value, "must be between 0 and 100"
                )
        if self.max_file_recommendations < 0:
            raise InvalidConfigError(
                "recommendations.max_file_recommendations",
                self.max_file_recommendations,
                "must be non-negative",
            )


DEFAULT_WEIGHTS = ScoreWeights()
DEFAULT_THRESHOLDS = RecommendationThresholds()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        File discovery:
            extensions: Recognized source extensions (case-insensitive)
            exclude_dirs: Directory names pruned besides dot-directories
            follow_symlinks: Descend into symlinked directories
            max_file_size_mb: Larger files are skipped as unreadable

        Execution:
            workers: Parallel extraction workers (None = auto-detect)
            timeout_seconds: Deadline for the whole run (None = no deadline)

        Duplication:
            min_duplicate_lines: Smallest fragment (normalized lines) reported

        Maintainability issues:
            max_complexity: Files with branch density above this are flagged
            max_function_lines: Functions longer than this are flagged
            max_nesting_depth: Branch nesting deeper than this is flagged
            min_lines_for_comment_check: Files this long with no comments are flagged

        Scoring:
            weights: Overall score weights
            recommendations: Recommendation rule thresholds
    """

    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_dirs: tuple[str, ...] = ("node_modules",)
    follow_symlinks: bool = False
    max_file_size_mb: float = 10.0

    workers: Optional[int] = None
    timeout_seconds: Optional[float] = None

    min_duplicate_lines: int = 4

    max_complexity: float = 70.0
    max_function_lines: int = 50
    max_nesting_depth: int = 4
    min_lines_for_comment_check: int = 20

    weights: ScoreWeights = field(default_factory=ScoreWeights)
    recommendations: RecommendationThresholds = field(default_factory=RecommendationThresholds)

    def __post_init__(self) -> None:
        """Normalize and validate configuration after initialization."""
        extensions = tuple(_normalize_extension(ext) for ext in self.extensions)
        if not extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one extension is required")
        for ext in extensions:
            if ext not in GRAMMAR_BY_EXTENSION:
                raise InvalidConfigError(
                    "extensions",
                    ext,
                    f"no parser for extension (supported: {', '.join(get_supported_extensions())})",
                )
        object.__setattr__(self, "extensions", extensions)
        object.__setattr__(self, "exclude_dirs", tuple(self.exclude_dirs))

        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise InvalidConfigError("timeout_seconds", self.timeout_seconds, "must be positive")
        if self.min_duplicate_lines < 1:
            raise InvalidConfigError("min_duplicate_lines", self.min_duplicate_lines, "must be at least 1")
        if not 0 < self.max_complexity <= 100:
            raise InvalidConfigError("max_complexity", self.max_complexity, "must be in (0, 100]")
        if self.max_function_lines < 1:
            raise InvalidConfigError("max_function_lines", self.max_function_lines, "must be at least 1")
        if self.max_nesting_depth < 1:
            raise InvalidConfigError("max_nesting_depth", self.max_nesting_depth, "must be at least 1")
        if self.min_lines_for_comment_check < 1:
            raise InvalidConfigError(
                "min_lines_for_comment_check", self.min_lines_for_comment_check, "must be at least 1"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if not ext:
        raise InvalidConfigError("extensions", ext, "empty extension")
    return ext if ext.startswith(".") else f".{ext}"


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (API keyword arguments or CLI flags).
            ``None`` values are ignored so unset CLI options keep lower
            priority sources.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigFileError: If a config file is missing or not valid TOML
        InvalidConfigError: If a value is out of range or unknown
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".codegauge.toml"
    if global_config.is_file():
        _merge(merged, _load_toml_file(global_config))

    project_config = Path.cwd() / "codegauge.toml"
    if project_config.is_file():
        _merge(merged, _load_toml_file(project_config))

    if config_file is not None:
        if not Path(config_file).is_file():
            raise ConfigFileError(Path(config_file), "file not found")
        _merge(merged, _load_toml_file(Path(config_file)))

    _merge(merged, _load_env_vars())
    _merge(merged, {k: v for k, v in overrides.items() if v is not None})

    return build_config(merged)


def build_config(values: dict[str, Any]) -> AnalysisConfig:
    """Build an AnalysisConfig from a flat dict with optional nested sections."""
    values = dict(values)
    weights = values.pop("weights", None)
    thresholds = values.pop("recommendations", None)

    if isinstance(weights, dict):
        weights = _build_section(ScoreWeights, "weights", weights)
    if isinstance(thresholds, dict):
        thresholds = _build_section(RecommendationThresholds, "recommendations", thresholds)
    if weights is not None:
        values["weights"] = weights
    if thresholds is not None:
        values["recommendations"] = thresholds

    for key in ("extensions", "exclude_dirs"):
        if key in values and isinstance(values[key], (list, str)):
            raw = values[key]
            values[key] = tuple(raw.split(",")) if isinstance(raw, str) else tuple(raw)

    unknown = set(values) - set(AnalysisConfig.__dataclass_fields__)
    if unknown:
        name = sorted(unknown)[0]
        raise InvalidConfigError(name, values[name], "unknown configuration key")

    return AnalysisConfig(**values)


def _build_section(cls: type, section: str, values: dict[str, Any]) -> Any:
    unknown = set(values) - set(cls.__dataclass_fields__)
    if unknown:
        name = sorted(unknown)[0]
        raise InvalidConfigError(f"{section}.{name}", values[name], "unknown configuration key")
    return cls(**values)


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge ``source`` into ``target``; nested sections merge key by key."""
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = {**target[key], **value}
        else:
            target[key] = value


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODEGAUGE_* environment variables.

    Supported environment variables (one per scalar field), e.g.:
        CODEGAUGE_WORKERS: int
        CODEGAUGE_TIMEOUT_SECONDS: float
        CODEGAUGE_EXTENSIONS: comma-separated list (".ts,.js")
        CODEGAUGE_FOLLOW_SYMLINKS: bool (true/false/1/0)

    Returns:
        Dict of field_name -> parsed value for every variable found.
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
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

    Returns None for types that cannot come from the environment (nested
    sections).

    Raises:
        ValueError: If the value can't be parsed to the expected type
    """
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none = [t for t in args if t is not type(None)]
        if non_none:
            type_hint = non_none[0]

    origin = getattr(type_hint, "__origin__", None)
    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return the parsed dict.

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))
