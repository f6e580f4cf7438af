"""Tests for piece record normalization and piece pool construction.

Tests cover:
- Field alias resolution (English, Portuguese, XML attribute prefixes)
- Numeric parsing with decimal commas and garbage values
- Defaults for missing thickness, id and quantity
- Expansion of demands into uniquely identified instances
- Input size limits
- Thickness partitioning order
"""

from __future__ import annotations

import logging

import pytest

from cutplan.domain import (
    DEFAULT_PIECE_ID,
    DEFAULT_THICKNESS,
    InputLimitError,
    PieceDemand,
    PieceInstance,
    PiecePoolBuilder,
    SheetConfig,
    expand_demand,
    normalize_record,
    partition_by_thickness,
)


# =============================================================================
# Value Object Tests
# =============================================================================


class TestSheetConfig:
    """Tests for SheetConfig."""

    def test_default_dimensions(self) -> None:
        """Default sheet is 2750x1850 mm."""
        sheet = SheetConfig()
        assert sheet.width == 2750.0
        assert sheet.height == 1850.0
        assert sheet.area == 2750.0 * 1850.0

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 100)])
    def test_non_positive_dimensions_rejected(self, width: float, height: float) -> None:
        """Sheet dimensions must be positive."""
        with pytest.raises(ValueError, match="must be positive"):
            SheetConfig(width=width, height=height)


class TestPieceInstance:
    """Tests for PieceInstance."""

    def test_fits_on_exact_size(self) -> None:
        """A piece exactly the size of the sheet fits."""
        sheet = SheetConfig(width=1000, height=500)
        assert PieceInstance("A_0", 1000, 500).fits_on(sheet)

    def test_does_not_fit_without_rotation(self) -> None:
        """A piece that would only fit rotated does not fit."""
        sheet = SheetConfig(width=1000, height=500)
        assert not PieceInstance("A_0", 500, 1000).fits_on(sheet)


# =============================================================================
# normalize_record Tests
# =============================================================================


class TestNormalizeRecord:
    """Tests for alias resolution in normalize_record."""

    def test_english_fields(self) -> None:
        """English field names are resolved."""
        demand = normalize_record(
            {"id": "A", "width": 600, "height": 400, "thickness": "15", "quantity": 3}
        )
        assert demand == PieceDemand(
            id="A", width=600.0, height=400.0, thickness="15", quantity=3
        )

    def test_portuguese_fields(self) -> None:
        """Portuguese field names are resolved."""
        demand = normalize_record(
            {"id": "B", "largura": "600", "altura": "400", "espessura": "15", "quantidade": "2"}
        )
        assert demand.width == 600.0
        assert demand.height == 400.0
        assert demand.thickness == "15"
        assert demand.quantity == 2

    def test_xml_attribute_prefixes(self) -> None:
        """Keys prefixed with @_ or @ resolve like bare keys."""
        demand = normalize_record({"@_largura": "300", "@altura": "200", "@_id": "X"})
        assert demand.width == 300.0
        assert demand.height == 200.0
        assert demand.id == "X"

    def test_keys_are_case_insensitive(self) -> None:
        """Field names match regardless of case."""
        demand = normalize_record({"WIDTH": 10, "Altura": 20, "QTY": 4})
        assert demand.width == 10.0
        assert demand.height == 20.0
        assert demand.quantity == 4

    def test_qty_alias(self) -> None:
        """qty is accepted as a quantity alias."""
        assert normalize_record({"width": 1, "height": 1, "qty": "5"}).quantity == 5

    def test_english_alias_takes_precedence(self) -> None:
        """When both aliases are present the English name wins."""
        demand = normalize_record({"width": 100, "largura": 200, "height": 50})
        assert demand.width == 100.0

    def test_empty_alias_falls_through(self) -> None:
        """An empty value does not shadow a later alias."""
        demand = normalize_record({"width": "", "largura": "250", "height": 50})
        assert demand.width == 250.0

    def test_defaults(self) -> None:
        """Missing thickness, id and quantity take their defaults."""
        demand = normalize_record({"width": 100, "height": 50})
        assert demand.thickness == DEFAULT_THICKNESS
        assert demand.id == DEFAULT_PIECE_ID
        assert demand.quantity == 1

    def test_custom_default_thickness(self) -> None:
        """The default thickness can be overridden."""
        demand = normalize_record({"width": 100, "height": 50}, default_thickness="25")
        assert demand.thickness == "25"

    def test_decimal_comma(self) -> None:
        """A decimal comma is accepted."""
        demand = normalize_record({"width": "600,5", "height": "400.25"})
        assert demand.width == 600.5
        assert demand.height == 400.25

    @pytest.mark.parametrize("value", ["abc", "nan", "inf", None, True, 10**400])
    def test_unparseable_dimension_becomes_zero(self, value: object) -> None:
        """Garbage and non-finite dimensions become 0."""
        demand = normalize_record({"width": value, "height": 100})
        assert demand.width == 0.0
        assert not demand.is_valid

    def test_fractional_quantity_truncated(self) -> None:
        """A fractional quantity is truncated toward zero."""
        assert normalize_record({"width": 1, "height": 1, "quantity": "2.7"}).quantity == 2

    def test_numeric_thickness_is_stringified(self) -> None:
        """Integral numeric thicknesses become plain strings."""
        assert normalize_record({"width": 1, "height": 1, "thickness": 18.0}).thickness == "18"
        assert normalize_record({"width": 1, "height": 1, "thickness": 15}).thickness == "15"


class TestPieceDemandValidity:
    """Tests for PieceDemand.is_valid."""

    @pytest.mark.parametrize(
        "width,height,quantity",
        [(0, 100, 1), (100, 0, 1), (-1, 100, 1), (100, 100, 0), (100, 100, -2)],
    )
    def test_invalid_demands(self, width: float, height: float, quantity: int) -> None:
        """Non-positive dimensions or quantity make a demand invalid."""
        assert not PieceDemand("A", width, height, quantity=quantity).is_valid

    def test_valid_demand(self) -> None:
        """Positive dimensions and quantity make a demand valid."""
        assert PieceDemand("A", 1, 1).is_valid


# =============================================================================
# Expansion Tests
# =============================================================================


class TestExpandDemand:
    """Tests for expand_demand."""

    def test_ids_are_indexed(self) -> None:
        """Instances are named <id>_<index> starting at zero."""
        instances = expand_demand(PieceDemand("LAT", 600, 720, "18", 3))
        assert [i.id for i in instances] == ["LAT_0", "LAT_1", "LAT_2"]
        assert all(i.width == 600 and i.height == 720 for i in instances)
        assert all(i.thickness == "18" for i in instances)

    def test_invalid_demand_expands_to_nothing(self) -> None:
        """An invalid demand produces no instances."""
        assert expand_demand(PieceDemand("Z", 0, 720, "18", 3)) == []


class TestPiecePoolBuilder:
    """Tests for PiecePoolBuilder."""

    def test_build_expands_quantities(self) -> None:
        """Total instances equal the sum of valid quantities."""
        builder = PiecePoolBuilder()
        instances = builder.build(
            [
                {"id": "A", "width": 100, "height": 100, "quantity": 2},
                {"id": "B", "width": 200, "height": 100, "quantity": 3},
            ]
        )
        assert len(instances) == 5
        assert [i.id for i in instances] == ["A_0", "A_1", "B_0", "B_1", "B_2"]

    def test_invalid_records_skipped_with_debug_log(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Invalid records are dropped and logged at DEBUG."""
        builder = PiecePoolBuilder()
        with caplog.at_level(logging.DEBUG, logger="cutplan.domain.piece_pool"):
            instances = builder.build(
                [
                    {"id": "ZERO", "width": 0, "height": 100},
                    {"id": "OK", "width": 100, "height": 100},
                    {"id": "NONE", "width": 100, "height": 100, "quantity": 0},
                ]
            )
        assert [i.id for i in instances] == ["OK_0"]
        assert "Skipping piece record 0" in caplog.text
        assert "Skipping piece record 2" in caplog.text

    def test_limit_exceeded_raises(self) -> None:
        """Exceeding max_instances raises before expansion."""
        builder = PiecePoolBuilder(max_instances=10)
        with pytest.raises(InputLimitError) as exc_info:
            builder.build([{"width": 1, "height": 1, "quantity": 11}])
        assert exc_info.value.count == 11
        assert exc_info.value.limit == 10

    def test_limit_reached_exactly_is_allowed(self) -> None:
        """A pool exactly at the limit is accepted."""
        builder = PiecePoolBuilder(max_instances=10)
        assert len(builder.build([{"width": 1, "height": 1, "quantity": 10}])) == 10

    def test_no_limit(self) -> None:
        """max_instances=None disables the limit."""
        builder = PiecePoolBuilder(max_instances=None)
        assert len(builder.build([{"width": 1, "height": 1, "quantity": 1000}])) == 1000


class TestPartitionByThickness:
    """Tests for partition_by_thickness."""

    def test_first_appearance_order(self) -> None:
        """Groups are ordered by the first appearance of each thickness."""
        instances = [
            PieceInstance("A_0", 1, 1, "15"),
            PieceInstance("B_0", 1, 1, "18"),
            PieceInstance("C_0", 1, 1, "15"),
            PieceInstance("D_0", 1, 1, "3"),
        ]
        groups = partition_by_thickness(instances)
        assert list(groups) == ["15", "18", "3"]
        assert [i.id for i in groups["15"]] == ["A_0", "C_0"]

    def test_empty_input(self) -> None:
        """No instances yield no groups."""
        assert partition_by_thickness([]) == {}
