"""
Unit-тесты Planning Builder: группировка по BL и порядок выгрузки.
"""

import pytest

from contracts.analysis_dto import ContainerRow
from contracts.planning_dto import DischargeRecord
from manifest_engine.planning.bl_grouping import PlanningBuilder, discharge_order_key


def make_row(num: str, bl: str = "BL1", **overrides) -> ContainerRow:
    data = {
        "num_conteneur": num,
        "num_bl": bl,
        "nom_navire": "MSC ANNA",
        "date_manifeste": "2024-03-01",
        "client_final": "ACME",
        "marchandise": "RICE",
    }
    data.update(overrides)
    return ContainerRow(**data)


def discharged(*numbers: str, date: str = None) -> dict:
    return {
        n: DischargeRecord(container_num=n, raw_line=f"{n} out", date=date)
        for n in numbers
    }


@pytest.fixture
def builder():
    return PlanningBuilder()


@pytest.mark.parametrize("number,key", [
    ("ABCU1234567", 7),
    ("ABCU1234560", 0),
    ("  ABCU1234563  ", 3),
    ("ABCU123456X", 10),
    ("", 10),
])
def test_discharge_order_key(number, key):
    assert discharge_order_key(number)[0] == key


def test_containers_ordered_by_last_digit_then_number(builder):
    rows = [
        make_row("ABCU1234567"),
        make_row("UNKNOWN"),
        make_row("ZZZU0000005"),
        make_row("ABCU1234560"),
        make_row("AAAU0000005"),
    ]

    group = builder.build(rows)[0]

    assert [line.data.num_conteneur for line in group.rows] == [
        "ABCU1234560", "AAAU0000005", "ZZZU0000005", "ABCU1234567", "UNKNOWN",
    ]


def test_groups_ordered_by_size_then_bl(builder):
    rows = [
        make_row("C1", "BL-B"),
        make_row("C2", "BL-C"),
        make_row("C3", "BL-C"),
        make_row("C4", "BL-A"),
    ]

    groups = builder.build(rows)

    assert [g.bl for g in groups] == ["BL-C", "BL-A", "BL-B"]
    assert [g.count for g in groups] == [2, 1, 1]


def test_rows_without_bl_go_to_sentinel_group(builder):
    groups = builder.build([make_row("C1", "")])
    assert groups[0].bl == "NO_BL"


def test_group_header_from_first_row(builder):
    rows = [make_row("C1", client_final=""), make_row("C2", client_final="OTHER")]

    group = builder.build(rows)[0]

    assert group.vessel_name == "MSC ANNA"
    assert group.arrival_date == "2024-03-01"
    assert group.client == "UNKNOWN CLIENT"


def test_commodity_histogram(builder):
    rows = [
        make_row("C1", marchandise="TILES"),
        make_row("C2", marchandise="RICE"),
        make_row("C3", marchandise="RICE"),
        make_row("C4", marchandise=" "),
    ]

    group = builder.build(rows)[0]

    assert [(c.name, c.count) for c in group.commodities] == [
        ("RICE", 2), ("TILES", 1), ("NOT DECLARED", 1),
    ]


def test_discharge_annotation(builder):
    rows = [make_row("TCNU1234567"), make_row("MSCU7654321")]

    group = builder.build(rows, discharged("TCNU1234567", date="01/03/2024"))[0]
    lines = {line.data.num_conteneur: line for line in group.rows}

    assert lines["TCNU1234567"].is_discharged is True
    assert lines["TCNU1234567"].discharge_date == "01/03/2024"
    assert lines["MSCU7654321"].is_discharged is False
    assert lines["MSCU7654321"].discharge_date is None
    assert group.discharged_count == 1
    assert group.is_fully_discharged is False


def test_fully_discharged_group(builder):
    rows = [make_row("TCNU1234567"), make_row("MSCU7654321")]

    group = builder.build(rows, discharged("TCNU1234567", "MSCU7654321"))[0]

    assert group.discharged_count == 2
    assert group.is_fully_discharged is True


def test_manifest_number_matched_by_canonical_id(builder):
    group = builder.build([make_row("tcnu 1234567")], discharged("TCNU1234567"))[0]
    assert group.rows[0].is_discharged is True


def test_rebuild_is_idempotent(builder):
    rows = [make_row("C1", "BL2"), make_row("C2", "BL1"), make_row("C3", "BL1")]
    assert builder.build(rows) == builder.build(rows)


def test_empty_rows(builder):
    assert builder.build([]) == []
