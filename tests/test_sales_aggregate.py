# -*- coding: utf-8 -*-
"""Tests for sales_cleaning/modules/sales/aggregate_sales.py."""

from datetime import date

import pytest

from sales_cleaning.modules.sales.aggregate_sales import (
    Aggregates,
    aggregate,
    records_to_dataframe,
    top_products,
)
from sales_cleaning.modules.sales.records import Family, SaleRecord, TimeSlot


def make_record(
    product, amount, time_slot=TimeSlot.LUNCH, family=Family.MAIN, units=1.0
):
    return SaleRecord(
        date=date(2024, 3, 1),
        product=product,
        time_slot=time_slot,
        family=family,
        units=units,
        unit_price=amount / units,
        amount=amount,
    )


class TestRecordsToDataframe:
    """Test DataFrame construction."""

    def test_columns_and_labels(self):
        """Enums are stored as their labels."""
        record = make_record("cafe", 1.5, TimeSlot.BREAKFAST, Family.DRINK)
        df = records_to_dataframe([record])
        assert list(df.columns) == [
            "producto",
            "franja",
            "familia",
            "unidades",
            "importe",
        ]
        assert df.iloc[0]["franja"] == "Desayuno"
        assert df.iloc[0]["familia"] == "Bebida"


class TestTopProducts:
    """Test product ranking."""

    def test_descending_with_stable_ties(self):
        """Ties keep first-appearance order; only the limit is kept."""
        by_product = {"a": 10.0, "b": 20.0, "c": 10.0, "d": 5.0, "e": 1.0, "f": 1.0}
        assert top_products(by_product) == [
            ("b", 20.0),
            ("a", 10.0),
            ("c", 10.0),
            ("d", 5.0),
            ("e", 1.0),
        ]

    def test_custom_limit(self):
        """The limit is configurable."""
        assert top_products({"a": 1.0, "b": 2.0}, limit=1) == [("b", 2.0)]


class TestAggregate:
    """Test totals and groupings."""

    def test_empty_set(self):
        """An empty set gives zero totals and empty mappings."""
        result = aggregate([])
        assert result == Aggregates()
        assert result.total_revenue == 0
        assert result.by_product == {}
        assert result.top_products == []

    def test_totals(self):
        """Revenue and units are summed."""
        records = [
            make_record("paella", 25.0, units=2.0),
            make_record("flan", 4.5, family=Family.DESSERT, units=3.0),
        ]
        result = aggregate(records)
        assert result.total_revenue == pytest.approx(29.5)
        assert result.total_units == pytest.approx(5.0)

    def test_groupings_in_first_seen_order(self):
        """Each grouping sums amounts per category in first-seen order."""
        records = [
            make_record("cafe", 1.5, TimeSlot.BREAKFAST, Family.DRINK),
            make_record("paella", 12.5, TimeSlot.LUNCH, Family.MAIN),
            make_record("cafe", 1.5, TimeSlot.LUNCH, Family.DRINK),
            make_record("flan", 4.0, TimeSlot.LUNCH, Family.DESSERT),
        ]
        result = aggregate(records)

        assert list(result.by_product.items()) == [
            ("cafe", pytest.approx(3.0)),
            ("paella", pytest.approx(12.5)),
            ("flan", pytest.approx(4.0)),
        ]
        assert list(result.by_time_slot) == [TimeSlot.BREAKFAST, TimeSlot.LUNCH]
        assert result.by_time_slot[TimeSlot.BREAKFAST] == pytest.approx(1.5)
        assert result.by_time_slot[TimeSlot.LUNCH] == pytest.approx(18.0)
        assert list(result.by_family) == [Family.DRINK, Family.MAIN, Family.DESSERT]
        assert result.by_family[Family.DRINK] == pytest.approx(3.0)

    def test_top_products_limit(self):
        """top_n bounds the ranking."""
        records = [make_record(f"p{i}", float(i + 1)) for i in range(8)]
        result = aggregate(records, top_n=3)
        assert [name for name, _ in result.top_products] == ["p7", "p6", "p5"]

    def test_values_are_plain_floats(self):
        """Results carry Python floats, not numpy scalars."""
        result = aggregate([make_record("paella", 25.0)])
        assert type(result.total_revenue) is float
        assert type(result.by_product["paella"]) is float
