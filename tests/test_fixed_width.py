"""Tests for the fixed-width deposit account report parser."""

from datetime import date
from decimal import Decimal

import pytest

from itau_fetch.fixed_width import (
    FIELD_WIDTHS,
    parse_account_fields,
    parse_account_line,
    parse_account_statement,
    split_account_line,
)
from conftest import make_line


class TestSplitAccountLine:
    """Positional split of a single report line."""

    def test_segments_follow_layout(self):
        line = make_line(code="1234567", sub_code="0001", posted="15JAN24", kind="01",
                         credit="000000000000100", debit="000000000000000",
                         description="PAYMENT RECEIVED")
        assert split_account_line(line) == (
            "1234567", "0001", "15JAN24", "01",
            "000000000000100", "000000000000000", "PAYMENT RECEIVED",
        )

    @pytest.mark.parametrize("line", [
        make_line(description="PAYMENT RECEIVED"),
        make_line(code="", sub_code="", posted="", kind="", description="CONCEPTO"),
        "X" * sum(FIELD_WIDTHS),
        "ABCDEFGHIJ" * 9 + "  trailing  ",
    ])
    def test_segments_reassemble_to_line(self, line):
        segments = split_account_line(line)
        assert len(segments) == 7
        assert "".join(segments) == line

    def test_short_line_yields_empty_trailing_segments(self):
        segments = split_account_line("1234567000")
        assert segments == ("1234567", "000", "", "", "", "", "")


class TestParseAccountLine:
    """Turning segments into dates and decimal amounts."""

    def test_documented_example(self):
        raw = parse_account_fields(("1234567", "0001", "20240115", "01",
                                    "000000000000100", "000000000000000", "PAYMENT RECEIVED"))
        assert raw.date == date(2024, 1, 15)
        assert raw.amount == Decimal("100.00")
        assert raw.description == "PAYMENT RECEIVED"

    def test_amount_is_fifth_minus_sixth_field(self):
        raw = parse_account_line(make_line(credit="000000000000.10", debit="000000000250.30"))
        assert raw.credit == Decimal("0.10")
        assert raw.debit == Decimal("250.30")
        assert raw.amount == Decimal("-250.20")

    def test_amounts_are_exact_decimals(self):
        raw = parse_account_line(make_line(credit="000000000000.01"))
        assert raw.amount + raw.amount + raw.amount == Decimal("0.03")

    def test_non_numeric_amounts_read_as_zero(self):
        raw = parse_account_line(make_line(credit="CREDITOS", debit="DEBITOS", description="CONCEPTO"))
        assert raw.credit == Decimal(0)
        assert raw.debit == Decimal(0)
        assert raw.amount == Decimal(0)

    def test_unparseable_date_is_left_unset(self):
        raw = parse_account_line(make_line(posted="FECHA", description="CONCEPTO"))
        assert raw.date is None
        assert raw.date_text == "FECHA  "

    @pytest.mark.parametrize("text, expected", [
        ("15JAN24", date(2024, 1, 15)),
        ("15ENE24", date(2024, 1, 15)),
        ("03AGO23", date(2023, 8, 3)),
        ("15SET24", date(2024, 9, 15)),
        ("240115 ", date(2024, 1, 15)),
        ("20240115", date(2024, 1, 15)),
    ])
    def test_date_forms(self, text, expected):
        raw = parse_account_fields(("1234567", "0001", text, "01", "", "", "X"))
        assert raw.date == expected

    def test_segments_are_kept(self):
        line = make_line(kind="02", description="ANY")
        raw = parse_account_line(line)
        assert raw.code == "1234567"
        assert raw.sub_code == "0001"
        assert raw.kind == "02"
        assert "".join(raw.segments) == line

    def test_wrong_segment_count(self):
        with pytest.raises(ValueError):
            parse_account_fields(("1234567", "0001"))


class TestParseAccountStatement:
    """Whole report parsing."""

    def test_lines_in_report_order(self, account_report):
        lines = parse_account_statement(account_report)
        assert [line.description.strip() for line in lines] == [
            "CONCEPTO",
            "SALDO INICIAL",
            "PAYMENT   RECEIVED",
            "COMPRA  SUPERMERCADO",
            "PENDING DEBIT",
            "SALDO FINAL",
        ]

    def test_blank_lines_are_skipped(self):
        report = "\n" + make_line(description="A") + "\n\n   \n" + make_line(description="B") + "\n"
        assert len(parse_account_statement(report)) == 2

    def test_bytes_are_decoded_per_byte(self):
        line = make_line(credit="000000000000100", description="CAFÉ")
        raw = parse_account_statement(line.encode("latin-1"))[0]
        assert raw.description == "CAFÉ"
        assert raw.amount == Decimal("100")
