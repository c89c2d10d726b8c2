from decimal import Decimal

import pytest

from survey_points_validator.errors import MalformedRowError
from survey_points_validator.models import Axis
from survey_points_validator.services.survey_check import (
    check_record,
    parse_row,
    round_coordinate,
    validate_csv,
)


@pytest.mark.parametrize("value, expected", [
    ("4.1234560", "4.1234560"),
    ("4.12345675", "4.1234568"),
    ("-4.12345675", "-4.1234568"),
    ("-74.123456749", "-74.1234567"),
    ("4.1", "4.1000000"),
])
def test_round_coordinate(value, expected):
    assert round_coordinate(Decimal(value)) == Decimal(expected)
    assert str(round_coordinate(Decimal(value))) == expected


@pytest.mark.parametrize("value", ["4.12345675", "-74.00000004999", "0", "12.3456789012"])
def test_round_coordinate_is_idempotent(value):
    once = round_coordinate(Decimal(value))
    assert round_coordinate(once) == once


def test_parse_row():
    record = parse_row("101,4.1234567,4.1234560,-74.1234567,-74.1234560")
    assert record.id == 101
    assert record.element_lat == Decimal("4.1234567")
    assert record.tag_lat == Decimal("4.1234560")
    assert record.element_lon == Decimal("-74.1234567")
    assert record.tag_lon == Decimal("-74.1234560")


@pytest.mark.parametrize("line", [
    "101,4.1,4.1,-74.1",
    "101,4.1,4.1,-74.1,-74.1,9",
    "101,4.1,,-74.1,-74.1",
    "abc,4.1,4.1,-74.1,-74.1",
    "101,4.1,norte,-74.1,-74.1",
    "101,4.1,NaN,-74.1,-74.1",
    "101,90.0000001,4.1,-74.1,-74.1",
    "+101,4.1,4.1,-74.1,-74.1",
    "1_000,4.1,4.1,-74.1,-74.1",
    "-5,4.1,4.1,-74.1,-74.1",
])
def test_parse_row_rejects_malformed(line):
    with pytest.raises(MalformedRowError) as exc_info:
        parse_row(line, 7)
    assert exc_info.value.line_number == 7
    assert exc_info.value.line == line


def test_scenario_both_axes_greater():
    result = validate_csv("101,4.1234567,4.1234560,-74.1234567,-74.1234560\n")
    assert [(e.point_id, e.axis) for e in result.entries] == [(101, Axis.LATITUDE), (101, Axis.LONGITUDE)]
    assert result.entries[0].element_value == Decimal("4.1234567")
    assert result.entries[0].rounded_tag_value == Decimal("4.1234560")
    assert result.entries[1].rounded_tag_value == Decimal("-74.1234560")


def test_scenario_element_not_greater():
    result = validate_csv("102,4.0000000,4.0000001,-74.0,-74.0\n")
    assert result.entries == []
    assert result.processed == 1


def test_scenario_empty_input():
    result = validate_csv("")
    assert result.entries == []
    assert result.malformed == []
    assert result.processed == 0


def test_scenario_malformed_row_is_skipped():
    text = "\n".join([
        "201,4.5,4.4,-74.0,-74.0",
        "202,4.5,cuatro,-74.0,-74.0",
        "203,5.5,5.4,-75.0,-75.0",
    ])
    result = validate_csv(text)
    assert [e.point_id for e in result.entries] == [201, 203]
    assert len(result.malformed) == 1
    assert result.malformed[0].line_number == 2
    assert result.processed == 2


def test_out_of_range_tag_is_skipped():
    text = "\n".join([
        "201,4.5,4.4,-74.0,-74.0",
        "202,4.5,1E+25,-74.0,-74.0",
        "203,5.5,5.4,-75.0,-75.0",
        "204,5.5,5.4,-75.0,-180.5",
    ])
    result = validate_csv(text)
    assert [e.point_id for e in result.entries] == [201, 203]
    assert [err.line_number for err in result.malformed] == [2, 4]
    assert result.processed == 2


def test_tag_greater_than_element_not_flagged_by_default():
    result = validate_csv("301,4.0,4.5,-74.5,-74.0")
    assert result.entries == []


def test_inequality_mode_flags_any_difference():
    result = validate_csv("301,4.0,4.5,-74.5,-74.0", mode="inequality")
    assert [e.axis for e in result.entries] == [Axis.LATITUDE, Axis.LONGITUDE]


def test_rounded_tag_is_compared():
    # 4.12345674 rounds to 4.1234567, equal to the element value
    result = validate_csv("401,4.1234567,4.12345674,-74.0,-74.0", mode="inequality")
    assert result.entries == []


def test_order_preserved_and_blank_lines_ignored():
    text = "503,3.0,2.0,0,0\n\n501,1.0,0.0,1.0,0.0\n502,2.0,1.0,0,0\n"
    result = validate_csv(text)
    assert [(e.point_id, e.axis) for e in result.entries] == [
        (503, Axis.LATITUDE),
        (501, Axis.LATITUDE),
        (501, Axis.LONGITUDE),
        (502, Axis.LATITUDE),
    ]


def test_check_record_unknown_mode():
    record = parse_row("1,1,1,1,1")
    with pytest.raises(ValueError):
        check_record(record, mode="fuzzy")


def test_coordinate_limits_are_inclusive():
    record = parse_row("9,90,-90,180,-180")
    assert record.element_lat == Decimal(90)
    assert record.tag_lon == Decimal(-180)
