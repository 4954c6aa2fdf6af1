"""
Tests for snapshot request validation.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from pricelist.schemas.snapshot import (
    MAX_PRICE_USD,
    MAX_RATE,
    PaginationParams,
    SnapshotCreate,
    SnapshotDuplicate,
)


def snapshot_body(**overrides):
    body = {
        "rate": 1500,
        "tables": [{"title": "Phones", "entries": [{"name": "X1", "priceUsd": 100}]}],
    }
    body.update(overrides)
    return body


class TestRate:
    """Exchange rate bounds."""

    @pytest.mark.parametrize("rate", [0, -5, 0.009])
    def test_rejects_rates_below_one_cent(self, rate):
        with pytest.raises(ValidationError) as exc_info:
            SnapshotCreate.model_validate(snapshot_body(rate=rate))
        assert exc_info.value.errors()[0]["loc"] == ("rate",)

    def test_accepts_minimum_rate(self):
        payload = SnapshotCreate.model_validate(snapshot_body(rate=0.01))
        assert float(payload.rate) == 0.01

    def test_rate_is_required(self):
        body = snapshot_body()
        del body["rate"]
        with pytest.raises(ValidationError):
            SnapshotCreate.model_validate(body)

    @pytest.mark.parametrize("rate", [1e15, 1e27, "1000000000.01"])
    def test_rejects_rates_above_maximum(self, rate):
        with pytest.raises(ValidationError) as exc_info:
            SnapshotCreate.model_validate(snapshot_body(rate=rate))
        assert exc_info.value.errors()[0]["loc"] == ("rate",)

    def test_accepts_maximum_rate(self):
        payload = SnapshotCreate.model_validate(snapshot_body(rate=MAX_RATE))
        assert payload.rate == MAX_RATE

    def test_duplicate_override_has_same_bounds(self):
        with pytest.raises(ValidationError):
            SnapshotDuplicate.model_validate({"rate": 1e15})


class TestShape:
    """Titles, entries and trimming."""

    def test_strings_are_trimmed(self):
        payload = SnapshotCreate.model_validate(
            snapshot_body(
                title="  Evening  ",
                tables=[{"title": " Phones ", "entries": [{"name": "  X1 ", "priceUsd": 1}]}],
            )
        )
        assert payload.title == "Evening"
        assert payload.tables[0].title == "Phones"
        assert payload.tables[0].entries[0].name == "X1"

    def test_title_is_optional(self):
        assert SnapshotCreate.model_validate(snapshot_body()).title is None

    def test_blank_title_is_rejected(self):
        with pytest.raises(ValidationError):
            SnapshotCreate.model_validate(snapshot_body(title="   "))

    def test_title_longer_than_255_is_rejected(self):
        with pytest.raises(ValidationError):
            SnapshotCreate.model_validate(snapshot_body(title="t" * 256))

    def test_table_title_is_required(self):
        with pytest.raises(ValidationError):
            SnapshotCreate.model_validate(
                snapshot_body(tables=[{"title": "", "entries": []}])
            )

    def test_empty_table_list_is_structurally_allowed(self):
        assert SnapshotCreate.model_validate(snapshot_body(tables=[])).tables == []

    def test_entry_name_may_be_empty(self):
        payload = SnapshotCreate.model_validate(
            snapshot_body(tables=[{"title": "T", "entries": [{"name": "", "priceUsd": 1}]}])
        )
        assert payload.tables[0].entries[0].name == ""

    def test_entry_name_longer_than_255_is_rejected(self):
        with pytest.raises(ValidationError):
            SnapshotCreate.model_validate(
                snapshot_body(tables=[{"title": "T", "entries": [{"name": "n" * 256, "priceUsd": 1}]}])
            )

    def test_client_order_is_ignored(self):
        payload = SnapshotCreate.model_validate(
            snapshot_body(tables=[{"title": "T", "order": 7, "entries": [{"name": "a", "priceUsd": 1, "order": 9}]}])
        )
        assert not hasattr(payload.tables[0], "order")
        assert not hasattr(payload.tables[0].entries[0], "order")

    def test_snake_case_field_names_are_accepted(self):
        payload = SnapshotCreate.model_validate(
            snapshot_body(tables=[{"title": "T", "entries": [{"name": "a", "price_usd": 3}]}])
        )
        assert payload.tables[0].entries[0].price_usd == Decimal("3.00")


class TestPrice:
    """Entry price normalization."""

    def test_currency_string_is_parsed(self):
        payload = SnapshotCreate.model_validate(
            snapshot_body(tables=[{"title": "T", "entries": [{"name": "a", "priceUsd": "1,250.50"}]}])
        )
        assert payload.tables[0].entries[0].price_usd == Decimal("1250.50")

    def test_price_is_held_at_two_decimals(self):
        payload = SnapshotCreate.model_validate(
            snapshot_body(tables=[{"title": "T", "entries": [{"name": "a", "priceUsd": 10.555}]}])
        )
        assert payload.tables[0].entries[0].price_usd == Decimal("10.56")

    @pytest.mark.parametrize("price", [-1, "-0.5", "abc", None])
    def test_invalid_prices_are_rejected(self, price):
        with pytest.raises(ValidationError):
            SnapshotCreate.model_validate(
                snapshot_body(tables=[{"title": "T", "entries": [{"name": "a", "priceUsd": price}]}])
            )

    @pytest.mark.parametrize("price", [1e27, 10**30, "1000000000.01"])
    def test_prices_above_maximum_are_rejected(self, price):
        with pytest.raises(ValidationError) as exc_info:
            SnapshotCreate.model_validate(
                snapshot_body(tables=[{"title": "T", "entries": [{"name": "a", "priceUsd": price}]}])
            )
        assert exc_info.value.errors()[0]["loc"] == ("tables", 0, "entries", 0, "priceUsd")

    def test_maximum_price_is_accepted(self):
        payload = SnapshotCreate.model_validate(
            snapshot_body(tables=[{"title": "T", "entries": [{"name": "a", "priceUsd": MAX_PRICE_USD}]}])
        )
        assert payload.tables[0].entries[0].price_usd == MAX_PRICE_USD


class TestErrorCollection:
    """All violations are reported together."""

    def test_every_invalid_field_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            SnapshotCreate.model_validate(
                {
                    "rate": 0,
                    "tables": [
                        {"title": "", "entries": [{"name": "a", "priceUsd": -1}]},
                    ],
                }
            )
        locations = {error["loc"] for error in exc_info.value.errors()}
        assert ("rate",) in locations
        assert ("tables", 0, "title") in locations
        assert ("tables", 0, "entries", 0, "priceUsd") in locations


class TestPagination:
    """Pagination defaults and bounds."""

    def test_defaults(self):
        params = PaginationParams()
        assert params.page == 1
        assert params.page_size == 10
        assert params.offset == 0

    def test_offset(self):
        assert PaginationParams(page=3, page_size=20).offset == 40

    def test_coerces_numeric_strings(self):
        params = PaginationParams.model_validate({"page": "2", "pageSize": "25"})
        assert (params.page, params.page_size) == (2, 25)

    @pytest.mark.parametrize("values", [{"page": 0}, {"pageSize": 0}, {"pageSize": 101}])
    def test_rejects_out_of_range(self, values):
        with pytest.raises(ValidationError):
            PaginationParams.model_validate(values)
