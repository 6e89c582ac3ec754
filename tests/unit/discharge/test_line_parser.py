"""
Unit-тесты разбора строк отчёта о выгрузке.
"""

import pytest

from manifest_engine.discharge.line_parser import (
    canonical_container_id,
    extract_container_id,
    extract_date,
    parse_line,
)


@pytest.mark.parametrize("text", [
    "TCNU 1234567",
    "TCNU-1234567",
    "TCNU1234567",
    "tcnu 1234567",
    "unloaded: TCNU-1234567 ok",
])
def test_container_id_canonical_form(text):
    assert extract_container_id(text) == "TCNU1234567"


@pytest.mark.parametrize("text", [
    "berth 2 idle",
    "TCNU123456",        # 6 цифр
    "TCNU12345678",      # 8 цифр
    "XTCNU1234567",      # 5 букв
    "TCNU  1234567",     # два разделителя
    "",
])
def test_no_container_id(text):
    assert extract_container_id(text) is None


def test_date_extraction():
    assert extract_date("Found TCNU1234567 on 01/03/2024 at berth 2") == "01/03/2024"
    assert extract_date("MSCU7654321 15-02-2024") == "15-02-2024"
    assert extract_date("MSCU7654321 2024-02-15") is None


def test_parse_line_keeps_trimmed_raw_line():
    parsed = parse_line("   Found TCNU1234567 on 01/03/2024 at berth 2  ")

    assert parsed.container_id == "TCNU1234567"
    assert parsed.raw_line == "Found TCNU1234567 on 01/03/2024 at berth 2"
    assert parsed.date == "01/03/2024"


def test_parse_line_without_container():
    assert parse_line("01/03/2024 shift report") is None


@pytest.mark.parametrize("number,expected", [
    ("TCNU1234567", "TCNU1234567"),
    (" tcnu-1234567 ", "TCNU1234567"),
    ("UNKNOWN", "UNKNOWN"),
    ("abc", "ABC"),
    ("", ""),
])
def test_canonical_container_id(number, expected):
    assert canonical_container_id(number) == expected


def test_non_ascii_digits_rejected():
    assert extract_container_id("ABCU١٢٣٤٥٦٧") is None
    assert parse_line("ABCU١٢٣٤٥٦٧ 01/03/2024") is None
    assert extract_date("TCNU1234567 ٠١/٠٣/٢٠٢٤") is None
