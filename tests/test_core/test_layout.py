"""Tests for labstuff.core.layout."""

import pytest

from labstuff.core import Data, Sample, Treatment, layout_from_dict, plate_from_layout
from labstuff.core.exceptions import ConfigurationError

LAYOUT_YAML = """\
plate:
  wells: 8
  name: rnai-01
  type: multi-well plate
samples:
  hela: {name: HeLa H2B-GFP}
treatments:
  neg: {ID: XWNeg9, refDB: bluegecko, type: dsRNA, description: Negative control}
  ncapd3: {ID: s23530, refDB: bluegecko, type: dsRNA}
reporters:
  h2b: {type: fusion protein, description: H2B-GFP}
data:
  raw: {filepath: /data/rnai-01.lif, format: LIF}
wells:
  A1: {label: control, samples: [hela], treatments: [neg], reporters: [h2b]}
  A2: {samples: [hela], treatments: [neg, ncapd3]}
"""


@pytest.fixture
def layout_file(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text(LAYOUT_YAML)
    return path


class TestPlateFromLayout:
    def test_plate_options(self, layout_file):
        plate = plate_from_layout(layout_file)
        assert (plate.rows, plate.cols) == (2, 4)
        assert plate.name == "rnai-01"
        assert plate.type == "multi-well plate"

    def test_wells_filled(self, layout_file):
        plate = plate_from_layout(layout_file)
        assert [w.position for w in plate.filled_wells] == ["A1", "A2"]
        a1 = plate.get_well("A1")
        assert a1.label == "control"
        assert a1.samples == [Sample(name="HeLa H2B-GFP")]
        assert a1.treatments[0].id == "XWNeg9"
        assert a1.treatments[0].ref_db == "bluegecko"
        assert a1.reporters[0].description == "H2B-GFP"

    def test_records_are_shared(self, layout_file):
        plate = plate_from_layout(layout_file)
        assert plate.get_well("A1").samples[0] is plate.get_well("A2").samples[0]

    def test_data_attached(self, layout_file):
        plate = plate_from_layout(layout_file)
        assert plate.data == [Data(filepath="/data/rnai-01.lif", format="LIF")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            plate_from_layout(tmp_path / "nope.yaml")


class TestLayoutFromDict:
    def test_minimal(self):
        plate = layout_from_dict({"plate": {"rows": 3, "cols": 3}})
        assert plate.size == 9
        assert plate.filled_wells == []

    def test_missing_plate_section(self):
        with pytest.raises(ConfigurationError, match="plate"):
            layout_from_dict({"wells": {}})

    def test_unknown_position(self):
        with pytest.raises(ConfigurationError, match="does not exist"):
            layout_from_dict({"plate": {"wells": 8}, "wells": {"C1": {}}})

    def test_unknown_record(self):
        layout = {
            "plate": {"wells": 8},
            "treatments": {"neg": {"type": "dsRNA"}},
            "wells": {"A1": {"treatments": ["neg", "pos"]}},
        }
        with pytest.raises(ConfigurationError, match="pos"):
            layout_from_dict(layout)

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="samples"):
            layout_from_dict({"plate": {"wells": 8}, "samples": ["hela"]})

    def test_invalid_plate(self):
        with pytest.raises(ConfigurationError):
            layout_from_dict({"plate": {"wells": 7}})

    def test_extra_fields(self):
        layout = {
            "plate": {"wells": 8},
            "treatments": {"drug": {"type": "drug", "concentration": "1 uM"}},
            "wells": {"B4": {"treatments": ["drug"]}},
        }
        plate = layout_from_dict(layout)
        treatment = plate.get_well("B4").treatments[0]
        assert isinstance(treatment, Treatment)
        assert treatment.get("concentration") == "1 uM"


class TestMalformedLayouts:
    def test_well_entry_must_be_mapping(self):
        layout = {
            "plate": {"wells": 8},
            "samples": {"hela": {"name": "HeLa"}},
            "wells": {"A1": "hela"},
        }
        with pytest.raises(ConfigurationError, match="Well A1 must be a mapping"):
            layout_from_dict(layout)

    def test_record_keys_must_be_a_list(self):
        layout = {
            "plate": {"wells": 8},
            "samples": {"hela": {"name": "HeLa"}},
            "wells": {"A1": {"samples": "hela"}},
        }
        with pytest.raises(ConfigurationError, match="must be a list of keys"):
            layout_from_dict(layout)

    def test_wells_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="wells"):
            layout_from_dict({"plate": {"wells": 8}, "wells": ["A1"]})

    def test_plate_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="plate"):
            layout_from_dict({"plate": 96})

    def test_record_fields_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="samples.hela"):
            layout_from_dict({"plate": {"wells": 8}, "samples": {"hela": "HeLa"}})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("plate: {wells: 8\n")
        with pytest.raises(ConfigurationError, match="Invalid layout YAML"):
            plate_from_layout(path)
