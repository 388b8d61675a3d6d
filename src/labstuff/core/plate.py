"""Plate — a rectangular grid of wells.

A plate can be a cell array (spots on a microscopy slide), a multi-well
plate or even a single-sample slide or tube. Conventions:

- Rows run along the shortest dimension, e.g. an 8x12 plate has 8 rows.
- Rows are labelled with letters starting from A.
- Columns are numbered starting from 1.
- Well A1 is the top left corner of the plate.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from labstuff.core.exceptions import ConfigurationError, ValidationError
from labstuff.core.records import Data
from labstuff.core.well import ROW_LABELS, Well

logger = logging.getLogger(__name__)

# Known plate formats: number of wells -> (rows, cols).
PLATE_FORMATS: dict[int, tuple[int, int]] = {
    8: (2, 4),
    48: (6, 8),
    96: (8, 12),
    384: (16, 24),
}

_CONFIG_KEYS = frozenset({"rows", "cols", "wells", "name", "type", "id"})


def _resolve_shape(
    rows: int | None, cols: int | None, wells: int | None
) -> tuple[int, int]:
    if rows and cols:
        shape = (rows, cols)
    elif wells:
        if wells not in PLATE_FORMATS:
            raise ConfigurationError(
                f"Unknown plate format: {wells} wells. "
                "Specify the number of rows and columns",
                option="wells",
            )
        shape = PLATE_FORMATS[wells]
    else:
        raise ConfigurationError(
            "Number of wells required, or specify the number of rows and columns"
        )

    rows, cols = shape
    if not isinstance(rows, int) or not 1 <= rows <= len(ROW_LABELS):
        raise ConfigurationError(
            f"Invalid number of rows: {rows!r} (must be 1-{len(ROW_LABELS)})",
            option="rows",
        )
    if not isinstance(cols, int) or cols < 1:
        raise ConfigurationError(
            f"Invalid number of columns: {cols!r}", option="cols",
        )
    return rows, cols


class Plate:
    """A multi-sample plate made of rows x cols wells.

    Dimensions are fixed at construction. All wells are created up front in
    row-major order (A1, A2, ..., B1, ...).
    """

    def __init__(
        self,
        rows: int | None = None,
        cols: int | None = None,
        wells: int | None = None,
        name: str | None = None,
        type: str | None = None,
        id: str | None = None,
    ) -> None:
        self._rows, self._cols = _resolve_shape(rows, cols, wells)
        self.id = id
        self.name = name
        self.type = type
        self.extra: dict[str, Any] = {}
        self._data: list[Data] = []

        self._wells: list[Well] = []
        try:
            for r in range(self._rows):
                for c in range(1, self._cols + 1):
                    self._wells.append(Well(self, f"{ROW_LABELS[r]}{c}"))
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> Plate:
        """Build a plate from a mapping of constructor options.

        Raises:
            ConfigurationError: On unknown keys or invalid dimensions.
        """
        unknown = set(config) - _CONFIG_KEYS
        if unknown:
            raise ConfigurationError(
                f"Unknown plate option(s): {', '.join(sorted(unknown))}",
                option=sorted(unknown)[0],
            )
        return cls(**config)

    def __repr__(self) -> str:
        return f"Plate(name={self.name!r}, rows={self._rows}, cols={self._cols})"

    def __len__(self) -> int:
        return len(self._wells)

    def __iter__(self) -> Iterator[Well]:
        return iter(list(self._wells))

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> int:
        """Total number of wells."""
        return self._rows * self._cols

    def get(self, name: str, default: Any = None) -> Any:
        """Return a plate attribute or extra attribute by name."""
        if name in ("id", "name", "type", "rows", "cols"):
            value = getattr(self, name)
            return default if value is None else value
        return self.extra.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Set a plate attribute or extra attribute by name.

        Raises:
            ConfigurationError: When trying to change the plate dimensions.
        """
        if name in ("rows", "cols"):
            raise ConfigurationError(
                "Plate dimensions can't be changed after construction",
                option=name,
            )
        if name in ("id", "name", "type"):
            setattr(self, name, value)
        else:
            self.extra[name] = value

    # -- wells ----------------------------------------------------------

    @property
    def wells(self) -> list[Well]:
        """All wells on the plate, in row-major order."""
        return list(self._wells)

    @property
    def filled_wells(self) -> list[Well]:
        """Wells with at least one sample."""
        return [w for w in self._wells if w.is_filled]

    def get_well(self, position: str) -> Well | None:
        for well in self._wells:
            if well.position == position:
                return well
        return None

    def get_row(self, label: str) -> list[Well]:
        """Wells in the row with the given letter label."""
        return [w for w in self._wells if w.row == label]

    def get_col(self, index: int | str) -> list[Well]:
        """Wells in the column with the given index (int or numeric string)."""
        try:
            col = int(index)
        except (TypeError, ValueError):
            return []
        return [w for w in self._wells if w.col == col]

    def replace_well(self, well: Well) -> None:
        """Put ``well`` in the slot holding the same position.

        Raises:
            ValidationError: If no well on this plate has that position.
        """
        for i, current in enumerate(self._wells):
            if current.position == well.position:
                self._wells[i] = well
                return
        raise ValidationError(
            f"No well at position {well.position!r} on this plate",
            position=well.position,
        )

    # -- data -----------------------------------------------------------

    @property
    def data(self) -> list[Data]:
        """Plate-level data files."""
        return list(self._data)

    def add_data(self, *items: Data | None) -> list[Data]:
        """Attach data files to the plate, skipping None entries.

        Returns:
            The current list of attached data.
        """
        self._data.extend(item for item in items if item is not None)
        return list(self._data)

    # -- replicates -----------------------------------------------------

    def replicate(self, n: int) -> list[Plate]:
        """Produce ``n`` copies of this plate.

        Each replicate has the same dimensions, name and type, and every
        well is a duplicate of the source well at the same position.

        Raises:
            ValueError: If ``n`` is negative.
        """
        if n < 0:
            raise ValueError(f"Number of replicates must be >= 0, got {n}")

        plates = []
        for _ in range(n):
            plate = Plate(
                rows=self._rows, cols=self._cols, name=self.name, type=self.type,
            )
            for well in self._wells:
                well.duplicate(plate, well.position)
            plates.append(plate)
        logger.info("Created %d replicate(s) of plate %s", n, self.name)
        return plates
