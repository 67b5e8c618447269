# MIT License (see LICENSE)
"""
Spherical particles that can be placed into a bucket.

The bucket only relies on the SphericalParticle protocol:
- destination_property: where the particle is going (stacking uses this).
- position_property: where the particle currently is.
- user_controlled_property: True while a user holds the particle.

Particle is a ready-made implementation with a simple constant-speed
motion toward its destination, for hosts that do not bring their own.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol

from .properties import Property
from .types import Vector2


class SphericalParticle(Protocol):
    """Capabilities a bucket requires of the particles it holds."""
    position_property: Property[Vector2]
    destination_property: Property[Vector2]
    user_controlled_property: Property[bool]


@dataclass(eq=False)
class Particle:
    """
    A spherical particle with observable position, destination and grab state.

    Equality is identity, so particles can key dictionaries and be
    compared for membership even when they share coordinates.

    Attributes:
        radius: Sphere radius in model units.
        speed: Motion speed toward the destination in model units per second.
        position_property: Current location.
        destination_property: Target location; equals position when at rest.
        user_controlled_property: True while the user is dragging the particle.

    Note:
        The destination starts at the initial position, so a new particle
        is at rest.
    """
    radius: float = 10.0
    speed: float = 300.0
    position_property: Property[Vector2] = field(default_factory=lambda: Property(Vector2.ZERO))
    destination_property: Property[Vector2] = field(init=False)
    user_controlled_property: Property[bool] = field(default_factory=lambda: Property(False))

    def __post_init__(self) -> None:
        self.destination_property = Property(self.position_property.value)

    @classmethod
    def at(cls, x: float, y: float, radius: float = 10.0) -> Particle:
        """Create a particle at rest at (x, y)."""
        return cls(radius=radius, position_property=Property(Vector2(x, y)))

    @property
    def position(self) -> Vector2:
        return self.position_property.value

    @position.setter
    def position(self, value: Vector2) -> None:
        self.position_property.value = value

    @property
    def destination(self) -> Vector2:
        return self.destination_property.value

    @destination.setter
    def destination(self, value: Vector2) -> None:
        self.destination_property.value = value

    @property
    def user_controlled(self) -> bool:
        return self.user_controlled_property.value

    @user_controlled.setter
    def user_controlled(self, value: bool) -> None:
        self.user_controlled_property.value = value

    @property
    def at_destination(self) -> bool:
        return self.position == self.destination

    def move_immediately_to_destination(self) -> None:
        self.position = self.destination

    def step(self, dt: float) -> None:
        """
        Advance position toward destination by speed * dt.

        Snaps onto the destination once it is within one step, so a
        resting particle's position compares exactly equal to it.
        Particles held by the user are not moved.
        """
        if self.user_controlled or self.at_destination:
            return
        offset = self.destination.minus(self.position)
        remaining = offset.magnitude
        travel = self.speed * dt
        if travel >= remaining:
            self.position = self.destination
        else:
            self.position = self.position.plus(offset.times(travel / remaining))
