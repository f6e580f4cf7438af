"""Pytest configuration and shared fixtures for cut optimizer tests."""

from __future__ import annotations

from typing import Any

import pytest

from cutplan.domain import SheetConfig
from cutplan.infrastructure.bin_packing import (
    CutOptimizationService,
    OptimizerConfig,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def default_config() -> OptimizerConfig:
    """Optimizer configuration with the standard 2750x1850 sheet."""
    return OptimizerConfig()


@pytest.fixture
def service(default_config: OptimizerConfig) -> CutOptimizationService:
    """Optimization service using the standard sheet."""
    return CutOptimizationService(default_config)


@pytest.fixture
def small_sheet_service() -> CutOptimizationService:
    """Optimization service using a 1000x1000 sheet."""
    return CutOptimizationService(
        OptimizerConfig(sheet_size=SheetConfig(width=1000.0, height=1000.0))
    )


@pytest.fixture
def kitchen_records() -> list[dict[str, Any]]:
    """Piece records for a small kitchen module in mixed field naming."""
    return [
        {"id": "LAT", "largura": "600", "altura": "720", "espessura": "18", "quantidade": "2"},
        {"id": "BASE", "width": 564, "height": 600, "thickness": "18", "quantity": 1},
        {"id": "FUNDO", "largura": "600", "altura": "720", "espessura": "3"},
        {"@_id": "PRAT", "@_largura": "564", "@_altura": "550", "@_qty": "2"},
    ]


@pytest.fixture
def project_xml() -> str:
    """A small project document as exported by design tools."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<Projeto nome="Cozinha">
  <Pecas>
    <Peca id="LAT" largura="600" altura="720" espessura="18" quantidade="2"/>
    <Peca id="BASE" largura="564" altura="600" espessura="18" quantidade="1"/>
    <Peca id="FUNDO" largura="600" altura="720" espessura="3" quantidade="1"/>
  </Pecas>
</Projeto>
"""
