"""
Unit-тесты политики слияния строк одного физического контейнера.
"""

from contracts.analysis_dto import ContainerRow
from manifest_engine.stages.stage_3_aggregation import (
    ContainerAggregate,
    WaybillEntry,
    aggregate_rows,
    merge_row,
)


def make_row(**overrides) -> ContainerRow:
    """Создаёт ContainerRow с разумными дефолтами."""
    data = {
        "num_conteneur": "ABCU1234567",
        "num_bl": "BL1",
        "client_final": "ACME",
        "taille_conteneur": 20,
        "code_iso": "22G1",
    }
    data.update(overrides)
    return ContainerRow(**data)


def test_first_row_seeds_aggregate():
    agg = merge_row(ContainerAggregate(num_conteneur="ABCU1234567"), make_row(poids=1200))

    assert agg.size == 20
    assert agg.iso == "22G1"
    assert agg.waybills == {"BL1": WaybillEntry(client="ACME", weight=1200.0)}


def test_first_non_empty_scalar_wins():
    rows = [
        make_row(taille_conteneur=0, code_iso="", temperature=""),
        make_row(num_bl="BL2", taille_conteneur=40, code_iso="42G1", temperature="-18"),
        make_row(num_bl="BL3", taille_conteneur=20, code_iso="22G1", temperature="5"),
    ]

    agg = aggregate_rows(rows)["ABCU1234567"]

    assert agg.size == 40
    assert agg.iso == "42G1"
    assert agg.temperature == "-18"


def test_reefer_flag_is_monotonic_or():
    rows = [
        make_row(indicateur_reefer="0"),
        make_row(num_bl="BL2", indicateur_reefer="1"),
        make_row(num_bl="BL3", indicateur_reefer="0"),
    ]

    assert aggregate_rows(rows)["ABCU1234567"].reefer_flag is True


def test_same_waybill_overwrites_entry():
    rows = [
        make_row(client_final="OLD", poids=100),
        make_row(client_final="NEW", poids=250),
    ]

    agg = aggregate_rows(rows)["ABCU1234567"]

    assert agg.waybill_count == 1
    assert agg.waybills["BL1"] == WaybillEntry(client="NEW", weight=250.0)


def test_distinct_waybills_kept_in_first_seen_order():
    rows = [make_row(num_bl="BL2"), make_row(num_bl="BL1"), make_row(num_bl="BL2")]

    agg = aggregate_rows(rows)["ABCU1234567"]

    assert [b.num_bl for b in agg.bl_infos()] == ["BL2", "BL1"]


def test_explicit_class_replaces_heuristic_label():
    heuristic = make_row(classe_imdg="DETECTED (DGX)", imdg_detected=True)
    explicit = make_row(num_bl="BL2", classe_imdg="3", code_un="1263")

    agg = aggregate_rows([heuristic, explicit])["ABCU1234567"]

    assert agg.imdg_class == "3"
    assert agg.un_code == "1263"
    assert agg.imdg_detected is False


def test_heuristic_never_replaces_explicit_class():
    explicit = make_row(classe_imdg="8")
    heuristic = make_row(num_bl="BL2", classe_imdg="DETECTED (DGX)", imdg_detected=True)

    agg = aggregate_rows([explicit, heuristic])["ABCU1234567"]

    assert agg.imdg_class == "8"
    assert agg.imdg_detected is False


def test_heuristic_signal_survives_rows_without_imdg_data():
    plain = make_row(classe_imdg="", code_un="")
    heuristic = make_row(num_bl="BL2", classe_imdg="DETECTED (DGX)", imdg_detected=True)

    agg = aggregate_rows([plain, heuristic])["ABCU1234567"]

    assert agg.imdg_class == "DETECTED (DGX)"
    assert agg.imdg_detected is True


def test_merge_is_pure():
    seed = ContainerAggregate(num_conteneur="ABCU1234567")
    merged = merge_row(seed, make_row())

    assert seed.waybill_count == 0
    assert seed.size == 0
    assert merged is not seed


def test_identity_is_case_sensitive():
    rows = [make_row(num_conteneur="ABCU1234567"), make_row(num_conteneur="abcu1234567")]

    assert list(aggregate_rows(rows)) == ["ABCU1234567", "abcu1234567"]
