# src/spatialmin/core/config.py
"""
Configuration schema and loading for minifier runs.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from spatialmin.core.document import DEFAULT_INDENT, DEFAULT_OUTPUT_INFIX, derive_output_path
from spatialmin.core.precision import DEFAULT_PRECISION, MAX_PRECISION, MIN_PRECISION
from spatialmin.core.references import (
    DEFAULT_EXCLUDED_NAMES,
    DEFAULT_EXCLUDED_PREFIX,
    ID_FIELD,
    NAME_FIELD,
    PATH_SEPARATOR,
    ExclusionPolicy,
    ReferenceClassifier,
)

DEFAULT_INPUT_PATH = Path("pl_badwater.spatial.json")

ENVVAR_PREFIX = "SPATIALMIN"


class ReferenceSettings(BaseModel):
    """Exclusion policy and extra reference fields.

    The built-in field taxonomy always applies; the ``extra_*`` lists only
    add fields for exports that carry references the defaults miss.

    Example YAML:
        references:
          excluded_names: ["Static", "Terrain"]
          extra_single_reference_fields: ["PatrolArea"]
    """

    model_config = {"frozen": True}

    excluded_names: tuple[str, ...] = Field(
        default=tuple(sorted(DEFAULT_EXCLUDED_NAMES)),
        description="Identifiers that are never aliased (exact match)",
    )
    excluded_prefix: str | None = Field(
        default=DEFAULT_EXCLUDED_PREFIX,
        description="Namespace whose '<prefix>/...' identifiers are never aliased",
    )
    extra_single_reference_fields: tuple[str, ...] = Field(
        default=(),
        description="Additional fields holding one referenced id",
    )
    extra_array_reference_fields: tuple[str, ...] = Field(
        default=(),
        description="Additional fields holding an array of referenced ids",
    )

    @field_validator("excluded_prefix")
    @classmethod
    def validate_prefix(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v:
            raise ValueError("excluded_prefix must be non-empty (use null to disable)")
        if PATH_SEPARATOR in v:
            raise ValueError(f"excluded_prefix must not contain '{PATH_SEPARATOR}'")
        return v

    @field_validator("extra_single_reference_fields", "extra_array_reference_fields")
    @classmethod
    def validate_not_identity(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for name in v:
            if name in (NAME_FIELD, ID_FIELD):
                raise ValueError(f"'{name}' is an identity field and cannot be a reference field")
        return v

    def exclusion_policy(self) -> ExclusionPolicy:
        return ExclusionPolicy(names=frozenset(self.excluded_names), prefix=self.excluded_prefix)

    def classifier(self) -> ReferenceClassifier:
        return ReferenceClassifier.extended(
            single_reference_fields=self.extra_single_reference_fields,
            array_reference_fields=self.extra_array_reference_fields,
        )


class MinifierSettings(BaseModel):
    """Top-level settings for one minifier run."""

    model_config = {"frozen": True}

    input_path: Path = Field(
        default=DEFAULT_INPUT_PATH,
        description="Spatial JSON document to minify",
    )
    output_path: Path | None = Field(
        default=None,
        description="Destination; derived from input_path when unset",
    )
    output_infix: str = Field(
        default=DEFAULT_OUTPUT_INFIX,
        min_length=1,
        description="Inserted before the extension when deriving output_path",
    )
    rename_names: bool = Field(default=True, description="Alias 'name' fields")
    rename_ids: bool = Field(default=True, description="Alias 'id' fields and references to them")
    reduce_precision: bool = Field(default=True, description="Round decimal literals")
    precision: int = Field(
        default=DEFAULT_PRECISION,
        ge=MIN_PRECISION,
        le=MAX_PRECISION,
        description="Decimal places kept by precision reduction",
    )
    formatted: bool = Field(default=False, description="Indent output instead of compact JSON")
    indent: int = Field(default=DEFAULT_INDENT, ge=0, description="Indent width for formatted output")
    show_mappings: bool = Field(default=False, description="Print the alias table after the run")
    references: ReferenceSettings = Field(default_factory=ReferenceSettings)

    @property
    def renaming_enabled(self) -> bool:
        return self.rename_names or self.rename_ids

    def resolved_output_path(self) -> Path:
        if self.output_path is not None:
            return self.output_path
        return derive_output_path(self.input_path, self.output_infix)


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``overrides`` into a copy of ``base``."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> MinifierSettings:
    """Load settings from an optional YAML file, the environment and overrides.

    Precedence, highest first:
    1. ``overrides`` (command line flags)
    2. Environment variables (SPATIALMIN_*), nested keys as SPATIALMIN_REFERENCES__EXCLUDED_PREFIX
    3. Settings file
    4. Defaults from the Pydantic schema

    Args:
        config_path: Optional YAML settings file
        overrides: Already-parsed values that win over every other source

    Returns:
        Validated MinifierSettings instance

    Raises:
        ValidationError: If the merged configuration fails validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    if isinstance(raw_config.get("references"), dict):
        raw_config["references"] = {k.lower(): v for k, v in raw_config["references"].items()}

    if overrides:
        raw_config = _merge(raw_config, overrides)

    return MinifierSettings(**raw_config)
