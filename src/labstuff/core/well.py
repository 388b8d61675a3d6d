"""Well — one addressable slot on a plate."""

from __future__ import annotations

import logging
import re
import string
import weakref
from typing import TYPE_CHECKING, Any, Iterable

from labstuff.core.exceptions import ValidationError

if TYPE_CHECKING:
    from labstuff.core.plate import Plate

logger = logging.getLogger(__name__)

ROW_LABELS = string.ascii_uppercase

# Single row letter followed by a column number without leading zeros.
_POSITION_RE = re.compile(r"^([A-Z])([1-9][0-9]*)$")


def parse_position(position: str) -> tuple[str, int, int] | None:
    """Split a position such as ``"B12"`` into (row label, row index, column).

    Returns None when the string does not follow the letter + number scheme.
    """
    match = _POSITION_RE.match(position)
    if match is None:
        return None
    row = match.group(1)
    return row, ROW_LABELS.index(row) + 1, int(match.group(2))


class Well:
    """An element of a (multi-)sample plate.

    A well holds the samples it contains, the treatments they were subjected
    to and the reporters used to read them out. Each of these lists can be
    filled once; to rearrange a plate, build a new one.

    The well only keeps a weak reference to its plate, so ``plate`` returns
    None once the plate itself is gone.
    """

    def __init__(self, plate: Plate, position: str) -> None:
        from labstuff.core.plate import Plate

        if plate is None or not isinstance(plate, Plate):
            raise ValidationError("Plate required")
        if not position:
            raise ValidationError("Position in the plate required")

        parsed = parse_position(position)
        if (
            parsed is None
            or parsed[1] > plate.rows
            or parsed[2] > plate.cols
        ):
            raise ValidationError(
                f"Invalid well position {position!r} for a "
                f"{plate.rows}x{plate.cols} plate",
                position=position,
            )

        self._plate = weakref.ref(plate)
        self._position: str | None = position
        self.label: str | None = None
        self._samples: list[Any] = []
        self._treatments: list[Any] = []
        self._reporters: list[Any] = []

    def __repr__(self) -> str:
        return f"Well(position={self._position!r}, label={self.label!r})"

    @property
    def plate(self) -> Plate | None:
        """The plate this well belongs to, or None if it no longer exists."""
        return self._plate()

    @property
    def position(self) -> str | None:
        """Position on the plate, e.g. ``"A1"``. Can only be set once."""
        return self._position

    @position.setter
    def position(self, value: str) -> None:
        if self._position:
            logger.warning(
                "Well position already set to %s, ignoring %r",
                self._position, value,
            )
            return
        self._position = value

    @property
    def row(self) -> str:
        """Label of the row the well is in."""
        return self._position[0]

    @property
    def row_index(self) -> int:
        """1-based index of the row label, A => 1."""
        return ROW_LABELS.index(self.row) + 1

    @property
    def col(self) -> int:
        """1-based column index."""
        return int(self._position[1:])

    @property
    def is_filled(self) -> bool:
        return bool(self._samples)

    # -- write-once content ---------------------------------------------

    def _fill(self, kind: str, current: list[Any], items: Iterable[Any]) -> None:
        if current:
            logger.warning(
                "Well %s already has %s, won't change content",
                self._position, kind,
            )
            return
        current.extend(item for item in items if item is not None)

    @property
    def samples(self) -> list[Any]:
        """Samples present in the well."""
        return list(self._samples)

    @samples.setter
    def samples(self, items: Iterable[Any]) -> None:
        self._fill("samples", self._samples, items)

    @property
    def treatments(self) -> list[Any]:
        """Treatments the well content was subjected to, e.g. RNAi or drug."""
        return list(self._treatments)

    @treatments.setter
    def treatments(self, items: Iterable[Any]) -> None:
        self._fill("treatments", self._treatments, items)

    @property
    def reporters(self) -> list[Any]:
        """Reporters used in the well."""
        return list(self._reporters)

    @reporters.setter
    def reporters(self, items: Iterable[Any]) -> None:
        self._fill("reporters", self._reporters, items)

    def duplicate(self, plate: Plate, position: str) -> Well:
        """Copy this well into ``position`` on another plate.

        The new well takes the place of the well already at that position
        in the target plate.

        Args:
            plate: Target plate.
            position: Position on the target plate.

        Returns:
            The new Well.

        Raises:
            ValidationError: If the position is not valid on the target plate.
        """
        well = Well(plate, position)
        well.label = self.label
        well.samples = self._samples
        well.treatments = self._treatments
        well.reporters = self._reporters
        plate.replace_well(well)
        return well
