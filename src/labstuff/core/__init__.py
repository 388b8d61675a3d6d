"""labstuff core — plates, wells, records and their YAML store."""

from labstuff.core.exceptions import (
    ConfigurationError,
    LabstuffError,
    StoreError,
    ValidationError,
)
from labstuff.core.layout import layout_from_dict, plate_from_layout
from labstuff.core.plate import PLATE_FORMATS, Plate
from labstuff.core.records import Data, Reporter, Sample, Treatment
from labstuff.core.store import retrieve, store
from labstuff.core.well import Well

__all__ = [
    "Plate",
    "Well",
    "PLATE_FORMATS",
    "Treatment",
    "Data",
    "Sample",
    "Reporter",
    "store",
    "retrieve",
    "plate_from_layout",
    "layout_from_dict",
    "LabstuffError",
    "ConfigurationError",
    "ValidationError",
    "StoreError",
]
