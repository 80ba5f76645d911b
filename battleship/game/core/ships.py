"""Ship shapes, rotations, and placed ship state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import TypeAlias

from battleship.game.core.models import Coord

PATTERN_SIZE = 3


class ShipKind(StrEnum):
    """The four ship shapes, named after the letter they draw."""

    FIGHTER = "X"
    CARRIER = "H"
    DESTROYER = "V"
    SCOUT = "I"


class Rotation(IntEnum):
    """Clockwise rotation in degrees."""

    R0 = 0
    R90 = 90
    R180 = 180
    R270 = 270


SHIP_PATTERNS: dict[ShipKind, tuple[str, str, str]] = {
    ShipKind.FIGHTER: (
        "*.*",
        ".*.",
        "*.*",
    ),
    ShipKind.CARRIER: (
        "*.*",
        "***",
        "*.*",
    ),
    ShipKind.DESTROYER: (
        "*.*",
        "*.*",
        ".*.",
    ),
    ShipKind.SCOUT: (
        ".*.",
        ".*.",
        ".*.",
    ),
}


Offsets: TypeAlias = tuple[tuple[int, int], ...]


def pattern_offsets(pattern: tuple[str, ...]) -> Offsets:
    """Return sorted ``(dr, dc)`` offsets of ``*`` marks in a pattern."""
    return tuple(
        (dr, dc)
        for dr, line in enumerate(pattern)
        for dc, mark in enumerate(line)
        if mark == "*"
    )


def rotate_offsets(offsets: Offsets, rotation: Rotation) -> Offsets:
    """Rotate offsets clockwise inside the pattern box, keeping them in the box."""
    last = PATTERN_SIZE - 1
    rotated = list(offsets)
    for _ in range(rotation.value // 90):
        rotated = [(dc, last - dr) for dr, dc in rotated]
    return tuple(sorted(rotated))


@dataclass(frozen=True, slots=True)
class ShipTemplate:
    """Immutable ship shape with its distinct rotations."""

    kind: ShipKind
    offsets: Offsets
    rotations: tuple[Rotation, ...] = field(init=False)

    def __post_init__(self) -> None:
        seen: set[Offsets] = set()
        distinct: list[Rotation] = []
        for rotation in Rotation:
            shape = rotate_offsets(self.offsets, rotation)
            if shape in seen:
                continue
            seen.add(shape)
            distinct.append(rotation)
        object.__setattr__(self, "rotations", tuple(distinct))

    @property
    def size(self) -> int:
        return len(self.offsets)

    def cells(self, anchor: Coord, rotation: Rotation = Rotation.R0) -> tuple[Coord, ...]:
        """Absolute cells for the pattern box anchored at its top-left corner."""
        if rotation not in self.rotations:
            # Symmetric shapes: fold the angle onto the equivalent distinct one.
            rotation = self._canonical(rotation)
        return tuple(
            Coord(anchor.row + dr, anchor.col + dc)
            for dr, dc in rotate_offsets(self.offsets, rotation)
        )

    def _canonical(self, rotation: Rotation) -> Rotation:
        shape = rotate_offsets(self.offsets, rotation)
        for candidate in self.rotations:
            if rotate_offsets(self.offsets, candidate) == shape:
                return candidate
        raise ValueError(f"Unsupported rotation {rotation.value} for {self.kind.name}.")


TEMPLATES: dict[ShipKind, ShipTemplate] = {
    kind: ShipTemplate(kind=kind, offsets=pattern_offsets(pattern))
    for kind, pattern in SHIP_PATTERNS.items()
}

# Placement order for every board.
DEFAULT_FLEET: tuple[ShipKind, ...] = (
    ShipKind.FIGHTER,
    ShipKind.DESTROYER,
    ShipKind.CARRIER,
    ShipKind.SCOUT,
)


@dataclass(slots=True)
class PlacedShip:
    """Template bound to an anchor and rotation, tracking hits taken."""

    ship_id: int
    kind: ShipKind
    anchor: Coord
    rotation: Rotation
    cells: tuple[Coord, ...]
    hits: int = 0

    @classmethod
    def from_template(
        cls, ship_id: int, template: ShipTemplate, anchor: Coord, rotation: Rotation
    ) -> PlacedShip:
        return cls(
            ship_id=ship_id,
            kind=template.kind,
            anchor=anchor,
            rotation=rotation,
            cells=template.cells(anchor, rotation),
        )

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def sunk(self) -> bool:
        return self.hits == len(self.cells)
