"""Piece pool construction from loosely-typed piece records.

Piece records arrive from several producers (project XML exports, JSON
uploads, API clients) that disagree on field naming. This module resolves
each field against a fixed list of accepted aliases, producing a typed
PieceDemand, then expands demands into one PieceInstance per physical piece.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from cutplan.domain.exceptions import InputLimitError
from cutplan.domain.value_objects import (
    DEFAULT_PIECE_ID,
    DEFAULT_THICKNESS,
    PieceDemand,
    PieceInstance,
)

logger = logging.getLogger(__name__)

# Accepted field names, matched case-insensitively after stripping an XML
# attribute prefix ("@_" or "@"). Earlier aliases take precedence.
WIDTH_ALIASES: tuple[str, ...] = ("width", "largura")
HEIGHT_ALIASES: tuple[str, ...] = ("height", "altura")
THICKNESS_ALIASES: tuple[str, ...] = ("thickness", "espessura")
QUANTITY_ALIASES: tuple[str, ...] = ("quantity", "quantidade", "qty")
ID_ALIASES: tuple[str, ...] = ("id",)


def _normalize_key(key: object) -> str:
    name = str(key).strip().lower()
    if name.startswith("@_"):
        return name[2:]
    if name.startswith("@"):
        return name[1:]
    return name


def _resolve(fields: Mapping[str, Any], aliases: tuple[str, ...]) -> Any:
    """Return the first non-empty value among the aliases, or None."""
    for alias in aliases:
        value = fields.get(alias)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _to_number(value: Any) -> float | None:
    """Parse a number, accepting a decimal comma. None if unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        text = str(value).strip().replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def _to_thickness(value: Any, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def normalize_record(
    record: Mapping[str, Any],
    default_thickness: str = DEFAULT_THICKNESS,
) -> PieceDemand:
    """Convert a raw piece record into a PieceDemand.

    Missing or unparseable dimensions become 0 so the demand is reported
    as invalid rather than raising. Missing quantity defaults to 1; a
    fractional quantity is truncated.

    Args:
        record: Mapping with any of the accepted field aliases.
        default_thickness: Thickness used when the record has none.

    Returns:
        The normalized demand. Check ``is_valid`` before expanding it.

    Example:
        >>> normalize_record({"@_largura": "600", "altura": 400, "QTY": "2"})
        PieceDemand(id='P', width=600.0, height=400.0, thickness='18', quantity=2)
    """
    fields: dict[str, Any] = {}
    for key, value in record.items():
        fields.setdefault(_normalize_key(key), value)

    width = _to_number(_resolve(fields, WIDTH_ALIASES)) or 0.0
    height = _to_number(_resolve(fields, HEIGHT_ALIASES)) or 0.0

    raw_quantity = _to_number(_resolve(fields, QUANTITY_ALIASES))
    quantity = 1 if raw_quantity is None else int(raw_quantity)

    raw_id = _resolve(fields, ID_ALIASES)
    piece_id = DEFAULT_PIECE_ID if raw_id is None else str(raw_id).strip()

    return PieceDemand(
        id=piece_id,
        width=width,
        height=height,
        thickness=_to_thickness(_resolve(fields, THICKNESS_ALIASES), default_thickness),
        quantity=quantity,
    )


def expand_demand(demand: PieceDemand) -> list[PieceInstance]:
    """Expand a demand into one instance per physical piece.

    Invalid demands (non-positive dimensions or quantity) expand to nothing.
    """
    if not demand.is_valid:
        return []
    return [
        PieceInstance(
            id=f"{demand.id}_{i}",
            width=demand.width,
            height=demand.height,
            thickness=demand.thickness,
        )
        for i in range(demand.quantity)
    ]


class PiecePoolBuilder:
    """Builds the flat list of piece instances for a packing run.

    Attributes:
        default_thickness: Thickness for records that carry none.
        max_instances: Upper bound on expanded pieces, or None for no limit.
    """

    def __init__(
        self,
        default_thickness: str = DEFAULT_THICKNESS,
        max_instances: int | None = None,
    ) -> None:
        self.default_thickness = default_thickness
        self.max_instances = max_instances

    def normalize(self, records: Iterable[Mapping[str, Any]]) -> list[PieceDemand]:
        """Normalize records, dropping the ones that describe no piece."""
        demands: list[PieceDemand] = []
        for position, record in enumerate(records):
            demand = normalize_record(record, self.default_thickness)
            if not demand.is_valid:
                logger.debug(
                    "Skipping piece record %d (%s): %sx%s x%d",
                    position,
                    demand.id,
                    demand.width,
                    demand.height,
                    demand.quantity,
                )
                continue
            demands.append(demand)
        return demands

    def build(self, records: Iterable[Mapping[str, Any]]) -> list[PieceInstance]:
        """Normalize records and expand them into piece instances.

        Raises:
            InputLimitError: If the expanded pool exceeds max_instances.
        """
        demands = self.normalize(records)

        total = sum(demand.quantity for demand in demands)
        if self.max_instances is not None and total > self.max_instances:
            raise InputLimitError(total, self.max_instances)

        instances: list[PieceInstance] = []
        for demand in demands:
            instances.extend(expand_demand(demand))

        logger.debug(
            "Built piece pool: %d demands -> %d instances", len(demands), len(instances)
        )
        return instances


def partition_by_thickness(
    instances: Iterable[PieceInstance],
) -> dict[str, list[PieceInstance]]:
    """Group instances by thickness, keeping first-appearance key order.

    A sheet holds a single material thickness, so each group is packed
    independently. Groups are never empty.
    """
    groups: dict[str, list[PieceInstance]] = {}
    for instance in instances:
        if instance.thickness not in groups:
            groups[instance.thickness] = []
        groups[instance.thickness].append(instance)
    return groups
