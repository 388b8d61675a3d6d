"""Build a filled plate from a YAML layout file.

A layout names the plate format, declares the records used on it and
lists what goes in each well::

    plate:
      wells: 96
      name: screen-01
    samples:
      hela: {name: HeLa H2B-GFP}
    treatments:
      neg: {ID: XWNeg9, refDB: bluegecko, type: dsRNA}
    reporters:
      h2b: {type: fusion protein, description: H2B-GFP}
    data:
      raw: {filepath: /data/screen-01.lif, format: LIF}
    wells:
      A1: {label: control, samples: [hela], treatments: [neg], reporters: [h2b]}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from labstuff.core.exceptions import ConfigurationError
from labstuff.core.plate import Plate
from labstuff.core.records import Data, Reporter, Sample, Treatment

_SECTIONS = {
    "samples": Sample,
    "treatments": Treatment,
    "reporters": Reporter,
    "data": Data,
}


def _require_yaml() -> Any:
    """Import and return the yaml module, or raise a helpful error."""
    try:
        import yaml

        return yaml
    except ImportError:
        raise ImportError(
            "pyyaml is required to read plate layouts. "
            "Install it with: pip install pyyaml"
        ) from None


def _build_section(layout: Mapping[str, Any], section: str) -> dict[str, Any]:
    entries = layout.get(section) or {}
    if not isinstance(entries, Mapping):
        raise ConfigurationError(
            f"Layout section '{section}' must be a mapping", option=section,
        )
    cls = _SECTIONS[section]
    records = {}
    for key, fields in entries.items():
        if fields is not None and not isinstance(fields, Mapping):
            raise ConfigurationError(
                f"Layout entry {section}.{key} must be a mapping of fields",
                option=section,
            )
        records[key] = cls.from_mapping(fields or {})
    return records


def _lookup(records: dict[str, Any], keys: Any, section: str, position: str) -> list[Any]:
    if not isinstance(keys, list):
        raise ConfigurationError(
            f"Well {position}: {section} must be a list of keys, got {keys!r}",
            option=section,
        )
    missing = [k for k in keys if not isinstance(k, (str, int)) or k not in records]
    if missing:
        raise ConfigurationError(
            f"Well {position}: unknown {section} {', '.join(map(str, missing))}",
            option=section,
        )
    return [records[k] for k in keys]


def layout_from_dict(layout: Mapping[str, Any]) -> Plate:
    """Build a plate from an already-parsed layout mapping.

    Raises:
        ConfigurationError: If the plate options are invalid, a well position
            doesn't exist on the plate or a well refers to an undeclared record.
    """
    if not isinstance(layout, Mapping) or "plate" not in layout:
        raise ConfigurationError("Layout is missing the 'plate' section", option="plate")

    plate_config = layout["plate"] or {}
    if not isinstance(plate_config, Mapping):
        raise ConfigurationError("Layout section 'plate' must be a mapping", option="plate")
    plate = Plate.from_config(plate_config)
    records = {section: _build_section(layout, section) for section in _SECTIONS}
    plate.add_data(*records["data"].values())

    wells = layout.get("wells") or {}
    if not isinstance(wells, Mapping):
        raise ConfigurationError("Layout section 'wells' must be a mapping", option="wells")

    for position, content in wells.items():
        well = plate.get_well(str(position))
        if well is None:
            raise ConfigurationError(
                f"Well {position} does not exist on a {plate.rows}x{plate.cols} plate",
                option="wells",
            )
        content = content or {}
        if not isinstance(content, Mapping):
            raise ConfigurationError(
                f"Well {position} must be a mapping, got {content!r}", option="wells",
            )
        well.label = content.get("label")
        for section in ("samples", "treatments", "reporters"):
            keys = content.get(section)
            if keys:
                setattr(well, section, _lookup(records[section], keys, section, position))
    return plate


def plate_from_layout(path: Path | str) -> Plate:
    """Build a plate from a YAML layout file.

    Args:
        path: Path to the layout file.

    Returns:
        The filled Plate.

    Raises:
        FileNotFoundError: If the layout file doesn't exist.
        ConfigurationError: If the layout is invalid.
    """
    yaml = _require_yaml()

    path = Path(path)
    with open(path) as f:
        try:
            layout = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid layout YAML in {path}: {e}") from e
    return layout_from_dict(layout)
