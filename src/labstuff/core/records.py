"""Attribute records attached to wells and plates.

Each record declares a fixed set of fields and keeps any other named
attribute in its ``extra`` mapping, so callers can tag a record with
arbitrary metadata without subclassing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Union

# Attribute names used by older layout files.
_ALIASES = {
    "ID": "id",
    "refDB": "ref_db",
    "EFOID": "efo_id",
    "EFOterm": "efo_term",
}


class RecordMixin:
    """Generic get/set access shared by all record types."""

    extra: dict[str, Any]

    @classmethod
    def declared_fields(cls) -> tuple[str, ...]:
        """Names of the declared (non-extra) fields, in declaration order."""
        return tuple(f.name for f in fields(cls) if f.name != "extra")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None = None):
        """Build a record, routing unknown keys into ``extra``."""
        record = cls()
        for key, value in (mapping or {}).items():
            record.set(key, value)
        return record

    def _resolve(self, name: str) -> str | None:
        name = _ALIASES.get(name, name)
        return name if name in self.declared_fields() else None

    def get(self, name: str, default: Any = None) -> Any:
        """Return a declared field or extra attribute by name."""
        attr = self._resolve(name)
        if attr is not None:
            value = getattr(self, attr)
            return default if value is None else value
        return self.extra.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Set a declared field or extra attribute by name."""
        attr = self._resolve(name)
        if attr is not None:
            setattr(self, attr, value)
        else:
            self.extra[name] = value

    def to_dict(self) -> dict[str, Any]:
        """Flatten declared fields that are set, followed by extras."""
        out = {
            name: getattr(self, name)
            for name in self.declared_fields()
            if getattr(self, name) is not None
        }
        out.update(self.extra)
        return out


@dataclass
class Treatment(RecordMixin):
    """A perturbation applied to a well's content, e.g. an siRNA or a drug.

    ``id`` is valid within ``ref_db`` (e.g. a siRNA ID or a ChEBI ID).
    ``efo_id``/``efo_term`` point at the Experimental Factor Ontology.
    """

    id: str | None = None
    ref_db: str | None = None
    type: str | None = None
    description: str | None = None
    efo_id: str | None = None
    efo_term: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Data(RecordMixin):
    """A data file associated with a plate.

    ``filepath`` includes the file name; ``origin`` describes how the
    data was generated.
    """

    id: str | None = None
    type: str | None = None
    filepath: str | None = None
    filename: str | None = None
    format: str | None = None
    origin: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Sample(RecordMixin):
    """The biological entity under study, e.g. a cell line."""

    id: str | None = None
    ref_db: str | None = None
    name: str | None = None
    description: str | None = None
    efo_id: str | None = None
    efo_term: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Reporter(RecordMixin):
    """A marker used to read out a well, e.g. a fluorescent fusion protein."""

    id: str | None = None
    ref_db: str | None = None
    type: str | None = None
    name: str | None = None
    description: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


Record = Union[Treatment, Data, Sample, Reporter]

RECORD_TYPES: dict[str, type] = {
    cls.__name__: cls for cls in (Treatment, Data, Sample, Reporter)
}
