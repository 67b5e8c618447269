# MIT License (see LICENSE)
"""
Geometry of the triangular stacking lattice inside a bucket.

Spheres of radius r are stacked in horizontal layers. Layer 0 rests at the
bucket's vertical offset; each layer above sits 2r * 0.866 higher (≈ sin 60°),
so a sphere nests in the notch between two below it.

Layer widths:
    usable  = width * usable_width_proportion - 2r
    slots_0 = floor(usable / 2r)           (at least 1)
    slots_n = slots_{n-1} - 1               (pyramid narrowing)

Each layer is shifted right by r relative to the one below. Once narrowing
reaches the apex (one slot), every layer above keeps a single slot at the
apex x, so an overfull bucket grows a one-wide column on top of the pyramid
rather than running out of slots.

All functions here are pure: they compute slot coordinates and never look
at particles. Slot coordinates are computed the same way on every call, so
exact equality between a stored destination and a recomputed slot is reliable.
"""
from __future__ import annotations
from dataclasses import dataclass
from itertools import count
from typing import Iterable, Iterator
import math

from .constants import LAYER_SPACING_FACTOR, SUPPORT_DISTANCE_FACTOR
from .types import Dimension2, Vector2
from .util import round_symmetric


@dataclass(frozen=True)
class StackingLattice:
    """
    Slot positions for a bucket of the given geometry.

    Attributes:
        position: Center of the bucket's opening.
        size: Bucket extent; only the width affects slot placement.
        sphere_radius: Radius shared by every sphere.
        usable_width_proportion: Fraction of the width available to sphere centers.
        vertical_offset: Displacement from position.y to layer 0.
    """
    position: Vector2
    size: Dimension2
    sphere_radius: float
    usable_width_proportion: float
    vertical_offset: float

    @property
    def layer_spacing(self) -> float:
        return self.sphere_radius * 2 * LAYER_SPACING_FACTOR

    @property
    def usable_width(self) -> float:
        return self.size.width * self.usable_width_proportion - 2 * self.sphere_radius

    @property
    def base_slot_count(self) -> int:
        """Number of slots on layer 0 (never less than 1)."""
        return max(1, math.floor(self.usable_width / (self.sphere_radius * 2)))

    @property
    def bottom_y(self) -> float:
        return self.position.y + self.vertical_offset

    def y_for_layer(self, layer: int) -> float:
        return self.position.y + self.vertical_offset + layer * self.sphere_radius * 2 * LAYER_SPACING_FACTOR

    def layer_for_y(self, y: float) -> int:
        """Nearest layer index for a y coordinate, rounding halves away from zero."""
        return abs(round_symmetric((y - self.bottom_y) / self.layer_spacing))

    def slot_count(self, layer: int) -> int:
        return max(self.base_slot_count - layer, 1)

    def slots(self, layer: int) -> list[Vector2]:
        """Slot centers of one layer, left to right."""
        r = self.sphere_radius
        # Shift stops growing at the apex; layers above it stay in one column.
        shift = min(layer, self.base_slot_count - 1)
        offset_from_edge = (self.size.width - self.usable_width) / 2 + r + shift * r
        left = self.position.x - self.size.width / 2 + offset_from_edge
        y = self.y_for_layer(layer)
        return [Vector2(left + i * 2 * r, y) for i in range(self.slot_count(layer))]

    def iter_slots(self, max_layer: int | None = None) -> Iterator[tuple[int, Vector2]]:
        """
        Yield (layer, slot) bottom-up, left to right.

        Unbounded when max_layer is None; callers must stop consuming.
        """
        layers = count() if max_layer is None else range(max_layer + 1)
        for layer in layers:
            for slot in self.slots(layer):
                yield layer, slot

    def supports(self, below: Vector2, slot: Vector2) -> bool:
        """Whether a sphere centered at `below` helps hold up a sphere at `slot`."""
        return below.y < slot.y and below.distance(slot) < self.sphere_radius * SUPPORT_DISTANCE_FACTOR

    def count_supporters(self, slot: Vector2, occupied: Iterable[Vector2]) -> int:
        return sum(1 for p in occupied if self.supports(p, slot))
