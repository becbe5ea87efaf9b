"""
Fixed-width layout registry for frameport.

A fixed-width file is only readable together with its column specs.
Rather than hardcoding those triples next to every call site, they can
live in small YAML files, one layout per file:

    name: bank_statement
    description: Daily statement export
    columns:
      - {name: date, start: 0, width: 10}
      - {name: amount, start: 10, width: 12}
    options:
      trim: true

Why YAML instead of hardcoded:
- New layouts can be added by dropping a YAML file, no code changes.
- Offsets are easily editable when the producing system changes widths.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from frameport.adapters.fixed_width import normalize_colspecs
from frameport.config import ColumnSpec, FWFOptions
from frameport.exceptions import OptionsError

logger = logging.getLogger(__name__)


class FWFLayout(BaseModel):
    """A named fixed-width layout loaded from YAML."""

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str = ""
    columns: list[ColumnSpec] = Field(..., min_length=1)
    options: FWFOptions = Field(default_factory=FWFOptions)

    @model_validator(mode="after")
    def _check_columns(self) -> FWFLayout:
        """Reject duplicate names and overlapping offsets at load time."""
        normalize_colspecs(self.columns)
        return self


def load_layout(path: str | Path) -> FWFLayout:
    """Load a single layout YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        OptionsError: If the file is empty or fails validation, including
            column specs that repeat names or overlap.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise OptionsError(f"Layout file is empty: {path}")
    try:
        return FWFLayout.model_validate(raw)
    except ValidationError as exc:
        raise OptionsError(f"Invalid layout {path}: {exc}") from exc


def save_layout(layout: FWFLayout, path: str | Path) -> None:
    """Serialize a layout to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(
            layout.model_dump(mode="json"),
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved layout '%s' to %s", layout.name, path)


def load_all_layouts(layouts_dir: str | Path) -> dict[str, FWFLayout]:
    """Load every ``*.yaml`` layout in a directory.

    Files that fail to load are logged and skipped so one broken layout
    does not make the others unavailable.

    Args:
        layouts_dir: Directory to scan.

    Returns:
        Dict mapping layout name -> FWFLayout, in file-name order.
    """
    layouts: dict[str, FWFLayout] = {}
    for yaml_path in sorted(Path(layouts_dir).glob("*.yaml")):
        try:
            layout = load_layout(yaml_path)
        except Exception as e:
            logger.warning("Failed to load layout from %s: %s", yaml_path, e)
            continue
        if layout.name in layouts:
            logger.warning(
                "Duplicate layout name '%s' in %s -- keeping the first one",
                layout.name,
                yaml_path,
            )
            continue
        layouts[layout.name] = layout
        logger.debug("Loaded layout: %s from %s", layout.name, yaml_path)
    logger.info("Loaded %d layouts", len(layouts))
    return layouts
