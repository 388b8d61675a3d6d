"""YAML persistence for plates and records.

A stored file holds one plate or one record together with every record it
references. Records shared between wells are written once and shared again
when the file is read back.

Requires pyyaml. Raises ImportError with clear install instructions
if pyyaml is not available.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any

from labstuff.core.exceptions import ConfigurationError, StoreError
from labstuff.core.plate import Plate
from labstuff.core.records import RECORD_TYPES, Record, RecordMixin

logger = logging.getLogger(__name__)

FORMAT_NAME = "labstuff"
FORMAT_VERSION = 1
SUFFIX = ".labstuff"

_SCALARS = (str, int, float, bool)
_CONTENTS = ("samples", "treatments", "reporters")


def _require_yaml() -> Any:
    """Import and return the yaml module, or raise a helpful error."""
    try:
        import yaml

        return yaml
    except ImportError:
        raise ImportError(
            "pyyaml is required to store labstuff objects. "
            "Install it with: pip install pyyaml"
        ) from None


class _RecordTable:
    """Assigns each distinct record object a stable index."""

    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []
        self._index: dict[int, int] = {}

    def ref(self, record: RecordMixin) -> int:
        key = id(record)
        if key not in self._index:
            self._index[key] = len(self.entries)
            self.entries.append(
                {"kind": type(record).__name__, "attributes": record.to_dict()}
            )
        return self._index[key]

    def encode(self, item: Any) -> dict[str, Any]:
        if isinstance(item, RecordMixin):
            return {"ref": self.ref(item)}
        if item is None or isinstance(item, _SCALARS):
            return {"value": item}
        raise StoreError(
            f"Can't store well content of type {type(item).__name__}"
        )


def _plate_to_dict(plate: Plate, table: _RecordTable) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": plate.id,
        "name": plate.name,
        "type": plate.type,
        "rows": plate.rows,
        "cols": plate.cols,
        "data": [table.ref(d) for d in plate.data],
        "wells": [],
    }
    if plate.extra:
        data["extra"] = dict(plate.extra)

    for well in plate.wells:
        entry: dict[str, Any] = {"position": well.position}
        if well.label is not None:
            entry["label"] = well.label
        for kind in _CONTENTS:
            items = getattr(well, kind)
            if items:
                entry[kind] = [table.encode(item) for item in items]
        data["wells"].append(entry)
    return data


def store(obj: Plate | Record, path: Path | str | None = None) -> Path:
    """Serialize a plate or a record to a YAML file.

    Args:
        obj: The plate or record to store.
        path: File to write. When omitted, a new temporary file with a
            ``.labstuff`` suffix is created and left in place.

    Returns:
        Path of the written file.

    Raises:
        StoreError: If the object (or something it holds) can't be stored.
    """
    yaml = _require_yaml()

    table = _RecordTable()
    if isinstance(obj, Plate):
        kind = "Plate"
        payload: Any = _plate_to_dict(obj, table)
    elif isinstance(obj, RecordMixin):
        kind = type(obj).__name__
        payload = {"ref": table.ref(obj)}
    else:
        raise StoreError(f"Can't store object of type {type(obj).__name__}")

    document = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "kind": kind,
        "records": table.entries,
        "object": payload,
    }

    try:
        text = yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
    except yaml.YAMLError as e:
        raise StoreError(f"Can't serialize {kind}: {e}") from e

    if path is None:
        with tempfile.NamedTemporaryFile("w", suffix=SUFFIX, delete=False) as f:
            path = Path(f.name)
    path = Path(path)

    try:
        with open(path, "w") as f:
            f.write(text)
    except OSError as e:
        raise StoreError(f"Can't write {kind} ({e.strerror or e})", str(path)) from e
    logger.info("Stored %s to %s", kind, path)
    return path


def _build_records(entries: Any, path: Path) -> list[Any]:
    if not isinstance(entries, list):
        raise StoreError("Records must be a list", str(path))
    records = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise StoreError(f"Invalid record entry {entry!r}", str(path))
        kind = entry.get("kind")
        cls = RECORD_TYPES.get(kind) if isinstance(kind, str) else None
        if cls is None:
            raise StoreError(f"Unknown record kind {entry.get('kind')!r}", str(path))
        attributes = entry.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise StoreError(f"Invalid attributes for {entry['kind']} record", str(path))
        records.append(cls.from_mapping(attributes))
    return records


def _record(ref: Any, records: list[Any], path: Path) -> Any:
    # bool is an int subclass but never a valid index here
    if not isinstance(ref, int) or isinstance(ref, bool) or not 0 <= ref < len(records):
        raise StoreError(f"Dangling record reference {ref!r}", str(path))
    return records[ref]


def _decode(item: Any, records: list[Any], path: Path) -> Any:
    if not isinstance(item, dict):
        raise StoreError(f"Invalid well content {item!r}", str(path))
    if "ref" in item:
        return _record(item["ref"], records, path)
    return item.get("value")


def _plate_from_dict(data: Any, records: list[Any], path: Path) -> Plate:
    if not isinstance(data, dict):
        raise StoreError("Plate entry must be a mapping", str(path))
    try:
        plate = Plate(
            rows=data.get("rows"),
            cols=data.get("cols"),
            name=data.get("name"),
            type=data.get("type"),
            id=data.get("id"),
        )
    except ConfigurationError as e:
        raise StoreError(f"Invalid plate ({e})", str(path)) from e
    extra = data.get("extra") or {}
    data_refs = data.get("data") or []
    wells = data.get("wells") or []
    if not isinstance(extra, dict):
        raise StoreError("Plate extra attributes must be a mapping", str(path))
    if not isinstance(data_refs, list) or not isinstance(wells, list):
        raise StoreError("Plate data and wells must be lists", str(path))

    plate.extra.update(extra)
    plate.add_data(*(_record(ref, records, path) for ref in data_refs))

    for entry in wells:
        if not isinstance(entry, dict):
            raise StoreError(f"Invalid well entry {entry!r}", str(path))
        well = plate.get_well(entry.get("position"))
        if well is None:
            raise StoreError(f"Unknown well position {entry.get('position')!r}", str(path))
        well.label = entry.get("label")
        for kind in _CONTENTS:
            if kind in entry:
                if not isinstance(entry[kind], list):
                    raise StoreError(
                        f"Well {entry['position']} {kind} must be a list", str(path)
                    )
                setattr(well, kind, [_decode(i, records, path) for i in entry[kind]])
    return plate


def retrieve(path: Path | str) -> Plate | Record:
    """Read back an object written by :func:`store`.

    Args:
        path: Path to the stored file.

    Returns:
        The stored plate or record.

    Raises:
        StoreError: If the file is missing or isn't a labstuff document.
    """
    yaml = _require_yaml()

    path = Path(path)
    if not path.is_file():
        raise StoreError("File not found", str(path))

    try:
        with open(path) as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StoreError(f"Invalid YAML ({e})", str(path)) from e

    if not isinstance(document, dict) or document.get("format") != FORMAT_NAME:
        raise StoreError("Not a labstuff file", str(path))
    if document.get("version") != FORMAT_VERSION:
        raise StoreError(
            f"Unsupported labstuff format version {document.get('version')!r}", str(path)
        )

    records = _build_records(document.get("records") or [], path)
    kind = document.get("kind")
    payload = document.get("object") or {}

    if kind == "Plate":
        return _plate_from_dict(payload, records, path)
    if isinstance(kind, str) and kind in RECORD_TYPES:
        if not isinstance(payload, dict):
            raise StoreError(f"{kind} entry must be a mapping", str(path))
        return _record(payload.get("ref"), records, path)
    raise StoreError(f"Unknown object kind {kind!r}", str(path))
