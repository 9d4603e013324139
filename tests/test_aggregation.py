import pytest

from app.services.report.aggregation import (
    AreaRollup,
    explode_layers,
    explode_samples,
    is_high_risk,
    rollup_homogeneous_areas,
    sort_homogeneous_areas,
    summarize_quantities,
)
from tests.factories import make_asbestos, make_homogeneous_area, make_layer, make_observation


def test_three_layers_give_fraction_labels():
    sample = make_asbestos(sample_number="A-7")
    layers = [make_layer(sample.id, n) for n in (1, 2, 3)]

    rows = explode_layers(sample, layers)

    assert [r.label for r in rows] == ["A-7 (1/3)", "A-7 (2/3)", "A-7 (3/3)"]
    assert [r.layer_index for r in rows] == [1, 2, 3]
    assert all(r.layer_count == 3 for r in rows)


def test_single_layer_has_no_suffix():
    sample = make_asbestos(sample_number="A-8")
    rows = explode_layers(sample, [make_layer(sample.id, 1)])
    assert len(rows) == 1
    assert rows[0].label == "A-8"


def test_sample_without_layers_yields_one_row():
    sample = make_asbestos(sample_number="A-9")

    rows = explode_layers(sample, [])

    assert len(rows) == 1
    row = rows[0]
    assert row.layer is None
    assert row.layer_index == 0
    assert row.layer_count == 1
    assert row.label == "A-9"


def test_layer_fields_override_sample_fields():
    sample = make_asbestos(material_type="floor-tiles-9x9", asbestos_type="Chrysotile",
                           asbestos_percent=3, notes="sample note")
    layer = make_layer(sample.id, 1, material_type="carpet-mastic", asbestos_percent=8)

    row = explode_layers(sample, [layer])[0]

    assert row.material_type == "carpet-mastic"
    assert row.asbestos_percent == 8
    assert row.asbestos_type == "Chrysotile"
    assert row.notes == "sample note"


def test_explode_samples_keeps_supplied_order():
    first = make_asbestos("s1", sample_number="A-1")
    second = make_asbestos("s2", sample_number="A-2")
    layers = {"s2": [make_layer("s2", 2), make_layer("s2", 1)]}

    rows = explode_samples([first, second], layers)

    assert [r.label for r in rows] == ["A-1", "A-2 (1/2)", "A-2 (2/2)"]
    assert [r.layer.layer_number for r in rows[1:]] == [2, 1]


def test_rollup_counts_and_sums_by_area_code():
    samples = [
        make_asbestos("s1", homogeneous_area="HA-1", estimated_quantity="10 sf"),
        make_asbestos("s2", homogeneous_area="HA-1", estimated_quantity="5 sf"),
        make_asbestos("s3", homogeneous_area="", estimated_quantity="99 sf"),
        make_asbestos("s4", homogeneous_area=None, estimated_quantity="1 sf"),
    ]

    rollups = rollup_homogeneous_areas(samples)

    assert dict(rollups) == {"HA-1": AreaRollup(count=2, total=15.0)}


def test_rollup_ignores_non_positive_quantities_but_counts_sample():
    samples = [
        make_asbestos("s1", homogeneous_area="HA-2", estimated_quantity="-4 sf"),
        make_asbestos("s2", homogeneous_area="HA-2", estimated_quantity="0"),
        make_asbestos("s3", homogeneous_area="HA-2", estimated_quantity="unknown"),
        make_asbestos("s4", homogeneous_area="HA-2", estimated_quantity=None),
    ]

    rollups = rollup_homogeneous_areas(samples)

    assert rollups["HA-2"] == AreaRollup(count=4, total=0.0)


def test_rollup_mapping_is_read_only():
    rollups = rollup_homogeneous_areas([make_asbestos()])
    with pytest.raises(TypeError):
        rollups["HA-9"] = AreaRollup()


def test_sort_homogeneous_areas_by_code_missing_first():
    areas = [
        make_homogeneous_area("a", ha_id="HA-2"),
        make_homogeneous_area("b", ha_id=None),
        make_homogeneous_area("c", ha_id="HA-10"),
        make_homogeneous_area("d", ha_id="HA-1"),
    ]

    ordered = [a.id for a in sort_homogeneous_areas(areas)]

    # plain string comparison, so HA-10 sorts before HA-2
    assert ordered == ["b", "d", "c", "a"]


def test_rollup_handles_many_codes_in_one_pass():
    samples = [make_asbestos(f"s{i}", homogeneous_area=f"HA-{i % 50}", estimated_quantity="2 sf")
               for i in range(1000)]

    rollups = rollup_homogeneous_areas(samples)

    assert len(rollups) == 50
    assert rollups["HA-7"] == AreaRollup(count=20, total=40.0)


@pytest.mark.parametrize("level,expected", [
    ("high", True),
    ("critical", True),
    (" High ", True),
    ("CRITICAL", True),
    ("medium", False),
    (None, False),
])
def test_is_high_risk_normalizes_level(level, expected):
    assert is_high_risk(make_observation(risk_level=level)) is expected


def test_quantity_summary_keeps_units_apart():
    observations = [
        make_observation("o1", material_type="pipe-insulation", quantity="40 lf", risk_level="high"),
        make_observation("o2", material_type="floor-tiles-9x9", quantity="850 sf", risk_level="medium"),
        make_observation("o3", material_type="pipe-insulation", quantity="10 linear feet", risk_level="low"),
    ]

    summary = summarize_quantities(observations)

    assert dict(summary.hazardous) == {"LF": 40.0, "SqFt": 850.0}
    assert summary.hazardous_count == 2
    assert dict(summary.by_material["pipe-insulation"].total) == {"LF": 50.0}
    assert dict(summary.by_material["pipe-insulation"].hazardous) == {"LF": 40.0}


def test_quantity_summary_splits_hazardous_and_sampled():
    observations = [
        make_observation("o1", quantity="5 sf", risk_level="critical", sample_collected=False),
        make_observation("o2", quantity="7 sf", risk_level="low", sample_collected=True),
        make_observation("o3", quantity="-3 sf", risk_level="high", sample_collected=True),
        make_observation("o4", quantity="unknown", risk_level="high", sample_collected=True),
    ]

    summary = summarize_quantities(observations)

    assert dict(summary.hazardous) == {"SqFt": 5.0}
    assert dict(summary.sampled) == {"SqFt": 7.0}
    # counted as hazardous even without a usable quantity
    assert summary.hazardous_count == 3
    material = summary.by_material["pipe-insulation"]
    assert dict(material.total) == {"SqFt": 12.0}
    assert dict(material.sampled) == {"SqFt": 7.0}


def test_quantity_summary_empty():
    summary = summarize_quantities([make_observation(quantity=None)])

    assert dict(summary.hazardous) == {}
    assert dict(summary.sampled) == {}
    assert dict(summary.by_material) == {}
