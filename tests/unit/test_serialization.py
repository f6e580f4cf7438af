"""Tests for report wire-format serialization."""

from __future__ import annotations

import json

import pytest

from cutplan.domain import SheetConfig
from cutplan.infrastructure.bin_packing import (
    CutOptimizationService,
    OptimizationReport,
    PlacedPiece,
)
from cutplan.infrastructure.serialization import (
    piece_to_dict,
    report_from_dict,
    report_to_dict,
)


class TestReportToDict:
    """Tests for report_to_dict."""

    def test_empty_report(self) -> None:
        """An empty report serializes to zero sheets and no layouts."""
        assert report_to_dict(OptimizationReport()) == {
            "totalSheets": 0,
            "wastePercentage": 0,
            "layouts": [],
        }

    def test_wire_shape(self, service: CutOptimizationService) -> None:
        """Keys are camelCase and pieces carry their area."""
        report = service.optimize(
            [{"id": "A", "width": 1000, "height": 500, "thickness": "18", "quantity": 3}]
        )
        data = report_to_dict(report)

        assert data["totalSheets"] == 1
        assert data["wastePercentage"] == 70.52
        layout = data["layouts"][0]
        assert layout["sheetIndex"] == 1
        assert layout["thickness"] == "18"
        assert layout["pieces"][1] == {
            "id": "A_1",
            "width": 1000,
            "height": 500,
            "area": 500000,
            "x": 1000,
            "y": 0,
        }

    def test_integral_floats_emitted_as_ints(self) -> None:
        """1000.0 serializes as 1000 while fractions are kept."""
        data = piece_to_dict(PlacedPiece("A", 1000.0, 500.5, 0.0, 12.25))
        assert json.dumps(data) == (
            '{"id": "A", "width": 1000, "height": 500.5, "area": 500500, "x": 0, "y": 12.25}'
        )


class TestReportFromDict:
    """Tests for report_from_dict."""

    def test_rebuilds_report(self, service: CutOptimizationService) -> None:
        """A stored report is rebuilt with the same layouts."""
        report = service.optimize(
            [
                {"id": "A", "width": 600, "height": 720, "quantity": 2},
                {"id": "B", "width": 600, "height": 720, "thickness": "3"},
            ]
        )
        assert report_from_dict(report_to_dict(report)) == report

    def test_custom_sheet(self) -> None:
        """The supplied sheet size is attached to every layout."""
        sheet = SheetConfig(1000, 1000)
        data = {
            "totalSheets": 1,
            "wastePercentage": 75,
            "layouts": [
                {
                    "sheetIndex": 1,
                    "thickness": "18",
                    "pieces": [
                        {"id": "A", "width": 500, "height": 500, "area": 250000, "x": 0, "y": 0}
                    ],
                }
            ],
        }
        report = report_from_dict(data, sheet)
        assert report.layouts[0].sheet_config == sheet
        assert report.layouts[0].waste_percentage == 75.0

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"layouts": [{"sheetIndex": 1, "thickness": "18"}]},
            {"layouts": [{"sheetIndex": 1, "thickness": "18", "pieces": [{"id": "A"}]}]},
            {"layouts": None},
        ],
    )
    def test_malformed_data(self, data: dict) -> None:
        """Missing keys raise ValueError."""
        with pytest.raises(ValueError, match="Malformed report data"):
            report_from_dict(data)
