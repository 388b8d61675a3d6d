"""labstuff — in-memory models of sample plates, wells and treatments."""

from labstuff.core import (
    PLATE_FORMATS,
    ConfigurationError,
    Data,
    LabstuffError,
    Plate,
    Reporter,
    Sample,
    StoreError,
    Treatment,
    ValidationError,
    Well,
    layout_from_dict,
    plate_from_layout,
    retrieve,
    store,
)

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
