"""
Option models and YAML config I/O for frameport.

Every adapter call takes a per-call options object. The option models
live here as Pydantic models so that each adapter gets typed, validated
settings instead of a loose dict.

Key models:
- CSVReadOptions / CSVWriteOptions: delimiter, enclosure, escape, header...
- FWFOptions + ColumnSpec: fixed-width slicing settings and column triples.
- HTMLOptions: header flag plus the ``class`` / ``id`` table attributes.
- SQLOptions: batch size, transaction mode, DB-API paramstyle.
- FrameportConfig: project-level defaults for all of the above plus
  named fixed-width layouts, stored as YAML.

Key functions:
- resolve_options(model_cls, options, overrides) -> validated model.
- check_colspecs(specs): reject repeated or overlapping fixed-width columns.
- load_config(path) -> FrameportConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Unknown option keys are rejected (``extra="forbid"``): a misspelled
``delimeter=";"`` fails loudly instead of silently writing commas.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, TypeVar

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from frameport.exceptions import OptionsError, SchemaError

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound="AdapterOptions")


class AdapterOptions(BaseModel):
    """Common base: options are immutable and reject unknown keys."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


def _single_char(value: str | None, field_name: str) -> str | None:
    if value is not None and len(value) != 1:
        raise ValueError(f"{field_name} must be a single character, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

class _DelimitedOptions(AdapterOptions):
    delimiter: str = Field(",", description="Field separator")
    enclosure: str = Field('"', description="Quote character for fields")
    escape: str | None = Field(
        None, description="Escape character; None means RFC-4180 doubled quotes only"
    )
    header: bool = Field(True, description="Whether the first record is a header")

    @field_validator("delimiter", "enclosure", "escape")
    @classmethod
    def _check_single_char(cls, value: str | None, info: ValidationInfo) -> str | None:
        return _single_char(value, info.field_name)


class CSVReadOptions(_DelimitedOptions):
    """Options for ``Frame.from_csv``."""

    trim: bool = Field(False, description="Strip whitespace around values and header names")
    encoding: str = Field("utf-8-sig", description="Source encoding (BOM tolerant)")


class CSVWriteOptions(_DelimitedOptions):
    """Options for ``Frame.to_csv``."""

    overwrite: bool = Field(False, description="Replace an existing destination file")
    encoding: str = Field("utf-8", description="Destination encoding")


# ---------------------------------------------------------------------------
# Fixed width
# ---------------------------------------------------------------------------

class ColumnSpec(AdapterOptions):
    """One fixed-width column: ``line[start:start + width]`` becomes ``name``."""

    name: str
    start: int = Field(..., ge=0)
    width: int = Field(..., ge=0)

    @property
    def end(self) -> int:
        return self.start + self.width


def check_colspecs(specs: list[ColumnSpec]) -> None:
    """Reject repeated names and offsets that go backwards or overlap.

    Gaps between columns are allowed.

    Raises:
        SchemaError: On the first offending spec.
    """
    seen: set[str] = set()
    prev_end = 0
    for spec in specs:
        if spec.name in seen:
            raise SchemaError(f"Duplicate column name in column specs: {spec.name!r}")
        seen.add(spec.name)
        if spec.start < prev_end:
            raise SchemaError(
                f"Column spec {spec.name!r} starts at {spec.start}, "
                f"overlapping the previous column which ends at {prev_end}"
            )
        prev_end = spec.end


class FWFOptions(AdapterOptions):
    """Options for ``Frame.from_fwf``."""

    trim: bool = Field(True, description="Strip whitespace around sliced values")
    encoding: str = Field("utf-8", description="Source encoding")


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

class HTMLOptions(AdapterOptions):
    """Options for ``Frame.to_html``.

    ``class`` and ``id`` are Python keywords/builtins, so the fields are
    named ``css_class`` and ``table_id`` and accept the short names as
    aliases (``frame.to_html(**{"class": "grid"})``).
    """

    header: bool = Field(True, description="Emit a header row of column names")
    css_class: str | None = Field(None, alias="class")
    table_id: str | None = Field(None, alias="id")


# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

class SQLOptions(AdapterOptions):
    """Options for ``Frame.to_sql``."""

    batch_size: int = Field(500, ge=1, description="Rows per executemany() call")
    transactional: bool = Field(
        True, description="Commit once after all batches instead of once per batch"
    )
    paramstyle: Literal["qmark", "numeric", "named", "format", "pyformat"] = Field(
        "qmark", description="DB-API paramstyle of the connection's driver"
    )
    quote_char: str = Field('"', description="Identifier quote character")

    @field_validator("quote_char")
    @classmethod
    def _check_quote_char(cls, value: str) -> str:
        return _single_char(value, "quote_char")


# ---------------------------------------------------------------------------
# Resolution helper
# ---------------------------------------------------------------------------

def resolve_options(
    model_cls: type[OptionsT],
    options: OptionsT | Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> OptionsT:
    """Build a validated options model from a model, a dict, and/or kwargs.

    Args:
        model_cls: The option model to produce (e.g., ``CSVReadOptions``).
        options: An existing model instance, a plain mapping, or ``None``.
        overrides: Keyword overrides applied on top of *options*.

    Returns:
        A validated, frozen instance of *model_cls*.

    Raises:
        OptionsError: If a key is unknown or a value fails validation.
    """
    if isinstance(options, model_cls) and not overrides:
        return options

    if options is None:
        data: dict[str, Any] = {}
    elif isinstance(options, model_cls):
        data = options.model_dump(exclude_unset=True)
    elif isinstance(options, Mapping):
        data = dict(options)
    else:
        raise OptionsError(
            f"Expected {model_cls.__name__} or a mapping, got {type(options).__name__}"
        )

    # Keys are merged by field name so ``class`` overrides ``css_class``.
    aliases = {f.alias: name for name, f in model_cls.model_fields.items() if f.alias}
    data = {aliases.get(key, key): value for key, value in data.items()}
    if overrides:
        data.update((aliases.get(key, key), value) for key, value in overrides.items())

    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise OptionsError(f"Invalid {model_cls.__name__}: {exc}") from exc


# ---------------------------------------------------------------------------
# Project config (YAML)
# ---------------------------------------------------------------------------

class FrameportConfig(BaseModel):
    """Project-level default options, stored as YAML.

    Sections are passed explicitly by the caller, e.g.
    ``Frame.from_csv(path, options=config.csv_read)``; nothing is global.
    """

    model_config = ConfigDict(extra="forbid")

    csv_read: CSVReadOptions = Field(default_factory=CSVReadOptions)
    csv_write: CSVWriteOptions = Field(default_factory=CSVWriteOptions)
    fwf: FWFOptions = Field(default_factory=FWFOptions)
    html: HTMLOptions = Field(default_factory=HTMLOptions)
    sql: SQLOptions = Field(default_factory=SQLOptions)
    layouts: dict[str, list[ColumnSpec]] = Field(
        default_factory=dict,
        description="Named fixed-width layouts: key = layout name, value = column specs",
    )

    @model_validator(mode="after")
    def _check_layouts(self) -> FrameportConfig:
        for name, specs in self.layouts.items():
            try:
                check_colspecs(specs)
            except SchemaError as exc:
                raise ValueError(f"Layout {name!r}: {exc}") from exc
        return self


def load_config(path: str | Path) -> FrameportConfig:
    """Load and validate a frameport YAML config.

    Raises:
        FileNotFoundError: If the config file does not exist.
        OptionsError: If the file is empty or fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise OptionsError(f"Config file is empty: {path}")
    try:
        config = FrameportConfig.model_validate(raw)
    except ValidationError as exc:
        raise OptionsError(f"Invalid config {path}: {exc}") from exc
    logger.info("Loaded config from %s", path)
    return config


def save_config(config: FrameportConfig, path: str | Path) -> None:
    """Serialize a FrameportConfig to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# frameport configuration\n")
        f.write("# Default adapter options and named fixed-width layouts.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
