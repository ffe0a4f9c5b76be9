# -*- coding: utf-8 -*-
"""Tests for sales_cleaning/modules/sales/parse_lines.py."""

from sales_cleaning.modules.sales.parse_lines import parse_lines, split_fields

HEADER = "fecha,producto,franja,familia,unidades,precio_unitario"


class TestSplitFields:
    """Test comma splitting."""

    def test_values_are_trimmed(self):
        """Whitespace around each value is removed."""
        assert split_fields(" a , b ,c ") == ["a", "b", "c"]

    def test_no_quote_handling(self):
        """Quoted commas still split (known limitation)."""
        assert split_fields('"arroz, pollo",x') == ['"arroz', 'pollo"', "x"]


class TestParseLines:
    """Test header and row parsing."""

    def test_header_and_rows(self):
        """First line is the header, each later line a row."""
        text = f"{HEADER}\n2024-03-01,Paella,Comida,Principal,2,12.5"
        header, rows = parse_lines(text)
        assert header == [
            "fecha",
            "producto",
            "franja",
            "familia",
            "unidades",
            "precio_unitario",
        ]
        assert rows == [
            {
                "fecha": "2024-03-01",
                "producto": "Paella",
                "franja": "Comida",
                "familia": "Principal",
                "unidades": "2",
                "precio_unitario": "12.5",
            }
        ]

    def test_header_names_trimmed(self):
        """Header names are trimmed."""
        header, _ = parse_lines(" fecha , producto \n2024-01-01,x")
        assert header == ["fecha", "producto"]

    def test_short_line_maps_missing_to_none(self):
        """Fields missing from a short line are None."""
        _, rows = parse_lines(f"{HEADER}\n2024-03-01,paella")
        assert rows[0]["producto"] == "paella"
        assert rows[0]["franja"] is None
        assert rows[0]["precio_unitario"] is None

    def test_extra_values_ignored(self):
        """Values beyond the header are dropped."""
        _, rows = parse_lines("a,b\n1,2,3,4")
        assert rows == [{"a": "1", "b": "2"}]

    def test_trailing_blank_lines_produce_no_rows(self):
        """Whole-text trim removes trailing empty lines."""
        _, rows = parse_lines(f"{HEADER}\n2024-03-01,x,y,z,1,1\n\n\n   \n")
        assert len(rows) == 1

    def test_interior_blank_line_produces_row(self):
        """An empty line between data lines is still a row."""
        _, rows = parse_lines(f"{HEADER}\n\n2024-03-01,x,y,z,1,1")
        assert len(rows) == 2
        assert rows[0]["fecha"] == ""
        assert rows[0]["producto"] is None

    def test_crlf_line_endings(self):
        """Carriage returns are stripped with the value whitespace."""
        _, rows = parse_lines("a,b\r\n1,2\r\n3,4\r\n")
        assert rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_empty_text(self):
        """Empty text gives no header and no rows."""
        assert parse_lines("") == ([], [])
        assert parse_lines("   \n  ") == ([], [])

    def test_header_only(self):
        """Header-only text gives no rows."""
        header, rows = parse_lines(HEADER)
        assert len(header) == 6
        assert rows == []
