"""Shared test fixtures for labstuff."""

import pytest

from labstuff.core import Plate, Reporter, Sample, Treatment


@pytest.fixture
def samples():
    return [
        Sample(name="HeLa H2B-GFP", description="HeLa cells stably expressing H2B-GFP"),
        Sample(name="HeLa CENPA-mCherry", description="HeLa cells stably expressing CENPA-mCherry"),
    ]


@pytest.fixture
def treatments():
    return {
        "neg": Treatment(type="dsRNA", id="XWNeg9", ref_db="bluegecko", description="Negative control"),
        "ncapd3": Treatment(type="dsRNA", id="s23530", ref_db="bluegecko", description="NCAPD3 knockdown"),
        "mcph1": Treatment(type="dsRNA", id="s36005", ref_db="bluegecko", description="MCPH1 knockdown"),
    }


@pytest.fixture
def reporters():
    return [
        Reporter(type="fusion protein", description="H2B-GFP"),
        Reporter(type="fusion protein", description="CENPA-mCherry"),
    ]


@pytest.fixture
def filled_plate(samples, treatments, reporters) -> Plate:
    """An 8-well plate with row A filled, as in a small RNAi experiment."""
    plate = Plate(rows=2, cols=4, name="8-well plate", type="multi-well plate")
    layout = {
        "A1": [treatments["neg"]],
        "A2": [treatments["neg"], treatments["ncapd3"]],
        "A3": [treatments["neg"], treatments["mcph1"]],
        "A4": [treatments["ncapd3"], treatments["mcph1"]],
    }
    for position, well_treatments in layout.items():
        well = plate.get_well(position)
        well.label = f"well {position}"
        well.samples = samples
        well.reporters = reporters
        well.treatments = well_treatments
    return plate
