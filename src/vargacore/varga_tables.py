"""
Loader for versioned varga lookup tables.

Tables live in YAML (see ``data/varga_tables.yaml``) rather than code, since
the classical sequences have no closed-form rule.
"""

from __future__ import annotations

import logging

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .core.errors import VargaConfigError, VargaInvariantError
from .start_sign import LookupTable

__all__ = ["TableDefinition", "TableSet", "expand_bands", "load_tables"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableDefinition:
    """One lookup-table scheme as read from the definitions file"""

    code: str
    name: str
    divisor: int
    rule: str
    strategy: LookupTable


@dataclass(frozen=True)
class TableSet:
    version: str
    source: str
    definitions: tuple[TableDefinition, ...]

    def get(self, code: str) -> TableDefinition | None:
        for definition in self.definitions:
            if definition.code == code:
                return definition
        return None


def expand_bands(bands: list[Any], divisor: int, label: str) -> tuple[int, ...]:
    """Expand ``[[parts, offset], ...]`` into one offset per part.

    Raises:
        VargaConfigError: If the bands are malformed or do not cover ``divisor`` parts
    """
    if not isinstance(bands, list) or not bands:
        raise VargaConfigError(f"{label}: bands must be a non-empty list")

    table: list[int] = []
    for band in bands:
        if not isinstance(band, (list, tuple)) or len(band) != 2:
            raise VargaConfigError(f"{label}: each band must be [parts, offset], got {band!r}")
        parts, offset = band
        if not isinstance(parts, int) or parts < 1:
            raise VargaConfigError(f"{label}: band width must be a positive int, got {parts!r}")
        if not isinstance(offset, int):
            raise VargaConfigError(f"{label}: band offset must be an int, got {offset!r}")
        table.extend([offset % 12] * parts)

    if len(table) != divisor:
        raise VargaConfigError(
            f"{label}: bands cover {len(table)} parts, expected {divisor}"
        )
    return tuple(table)


def _parse_definition(code: str, raw: dict[str, Any], version: str) -> TableDefinition:
    if not isinstance(raw, dict):
        raise VargaConfigError(f"{code}: table entry must be a mapping")
    try:
        divisor = raw["divisor"]
        odd = raw["odd"]
        even = raw["even"]
    except KeyError as e:
        raise VargaConfigError(f"{code}: missing key {e.args[0]!r}") from None

    if not isinstance(divisor, int) or divisor < 1:
        raise VargaConfigError(f"{code}: divisor must be a positive int, got {divisor!r}")

    try:
        strategy = LookupTable(
            odd_table=expand_bands(odd, divisor, f"{code}.odd"),
            even_table=expand_bands(even, divisor, f"{code}.even"),
            anchor=raw.get("anchor", "sign"),
            version=version,
        )
    except VargaInvariantError as e:
        raise VargaConfigError(f"{code}: {e}") from e

    return TableDefinition(
        code=code.upper(),
        name=str(raw.get("name", code)),
        divisor=divisor,
        rule=str(raw.get("rule", "")).strip(),
        strategy=strategy,
    )


def load_tables(path: str | Path) -> TableSet:
    """Load and validate lookup tables from a YAML file.

    Args:
        path: Path to the definitions file

    Returns:
        Validated TableSet

    Raises:
        VargaConfigError: If the file is missing, unparsable, or malformed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise VargaConfigError(f"Varga definitions not found: {path}") from None
    except yaml.YAMLError as e:
        raise VargaConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("tables"), dict):
        raise VargaConfigError(f"{path}: expected a mapping with a 'tables' section")

    version = str(data.get("version", "")).strip()
    if not version:
        raise VargaConfigError(f"{path}: missing table 'version'")

    definitions = tuple(
        _parse_definition(str(code), raw, version)
        for code, raw in data["tables"].items()
    )
    logger.debug(f"Loaded {len(definitions)} varga tables ({version}) from {path}")
    return TableSet(version=version, source=str(path), definitions=definitions)
