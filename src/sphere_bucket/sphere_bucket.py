# MIT License (see LICENSE)
"""
A bucket that stores spherical particles in a triangular stack.

SphereBucket manages the addition and removal of same-radius spheres:
- Adding places a sphere in an open lattice slot (first in stacking order,
  or nearest supported slot to where the sphere is coming from).
- Removing frees the slot and relays out the rest so nothing is left
  hanging over a gap ("dangling").
- Grabbing a sphere (its user_controlled flag becoming True) removes it
  from the bucket via a listener installed when it was added.

Occupancy is keyed on each particle's destination, not its position, so a
sphere still animating into the bucket already owns its slot. Slots are
compared by exact equality.

Structure:
    bucket = SphereBucket(position=Vector2(0, 0), size=Dimension2(200, 50))
    bucket.add_particle_first_open(particle, animate=False)
    bucket.extract_closest_particle(Vector2(5, 0))   # user grabs a ball
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .bucket import Bucket
from .constants import (
    DEFAULT_SPHERE_RADIUS,
    DEFAULT_VERTICAL_OFFSET_FACTOR,
    REQUIRED_SUPPORT_COUNT,
)
from .particle import SphericalParticle
from .properties import ListenerHandle
from .stacking import StackingLattice
from .types import Vector2
from .util import check

logger = logging.getLogger(__name__)


@dataclass
class SphereBucket(Bucket):
    """
    Bucket holding a non-floating pyramid of equal spheres.

    Attributes:
        sphere_radius: Expected radius of every sphere placed in the bucket.
        usable_width_proportion: Fraction of the bucket width, in (0, 1],
                                 available to sphere centers.
        vertical_particle_offset: Offset from position.y to the bottom layer.
                                  Defaults to -0.4 * sphere_radius when None.

    Note:
        All spheres are assumed to share sphere_radius; mixed radii are
        not supported.
    """
    sphere_radius: float = DEFAULT_SPHERE_RADIUS
    usable_width_proportion: float = 1.0
    vertical_particle_offset: float | None = None

    # Internal state
    _particles: list[SphericalParticle] = field(default_factory=list, init=False, repr=False)
    _removal_handles: dict[int, ListenerHandle] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration and resolve the default vertical offset."""
        if self.sphere_radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {self.sphere_radius}")
        if not 0 < self.usable_width_proportion <= 1:
            raise ValueError(
                f"Usable width proportion must be in (0, 1], got {self.usable_width_proportion}"
            )
        if self.vertical_particle_offset is None:
            self.vertical_particle_offset = self.sphere_radius * DEFAULT_VERTICAL_OFFSET_FACTOR

    def __len__(self) -> int:
        return len(self._particles)

    @property
    def lattice(self) -> StackingLattice:
        """Slot geometry for the bucket's current position and size."""
        return StackingLattice(
            position=self.position,
            size=self.size,
            sphere_radius=self.sphere_radius,
            usable_width_proportion=self.usable_width_proportion,
            vertical_offset=self.vertical_particle_offset,
        )

    @property
    def particles(self) -> tuple[SphericalParticle, ...]:
        """Snapshot of contained particles in insertion order."""
        return tuple(self._particles)

    def get_particle_list(self) -> list[SphericalParticle]:
        return list(self._particles)

    @property
    def removal_listener_count(self) -> int:
        """Number of user-controlled listeners this bucket has installed."""
        return len(self._removal_handles)

    # -------------------------------------------------------------------------
    # Adding and removing
    # -------------------------------------------------------------------------

    def add_particle_first_open(self, particle: SphericalParticle, animate: bool) -> None:
        """
        Add a particle at the first open slot in stacking order.

        Args:
            particle: The particle to add.
            animate: If False the particle's position jumps to the slot too;
                     if True only the destination is set and the caller
                     animates position toward it.
        """
        if not self._accepts(particle):
            return
        particle.destination_property.set(self.get_first_open_position())
        self._add(particle, animate)

    def add_particle_nearest_open(self, particle: SphericalParticle, animate: bool) -> None:
        """
        Add a particle at the supported open slot nearest its current destination.

        Args:
            particle: The particle to add; its destination is where it is coming from.
            animate: Same as for add_particle_first_open.
        """
        if not self._accepts(particle):
            return
        particle.destination_property.set(
            self.get_nearest_open_position(particle.destination_property.get())
        )
        self._add(particle, animate)

    def add_particle(self, particle: SphericalParticle, animate: bool = False) -> None:
        """Container entry point; places the particle at the nearest open slot."""
        self.add_particle_nearest_open(particle, animate)

    def _accepts(self, particle: SphericalParticle) -> bool:
        """False for a particle that is already a member; adding it again is a no-op."""
        already_contained = self.contains_particle(particle)
        check(not already_contained, "particle is already in this bucket")
        return not already_contained

    def _add(self, particle: SphericalParticle, animate: bool) -> None:
        """Register a particle whose destination has been set."""
        if not animate:
            particle.position_property.set(particle.destination_property.get())
        self._particles.append(particle)

        def on_user_controlled(user_controlled: bool, _old: bool) -> None:
            # The user grabbed the particle; removal also unlinks this listener.
            if user_controlled:
                self.remove_particle(particle)

        handle = particle.user_controlled_property.lazy_link(on_user_controlled)
        self._removal_handles[id(particle)] = handle
        logger.debug("Added particle at %s (%d in bucket)", particle.destination_property.get(), len(self))

    def remove_particle(self, particle: SphericalParticle, skip_layout: bool = False) -> None:
        """
        Remove a particle and let any unsupported particles fall.

        Args:
            particle: A particle currently in the bucket.
            skip_layout: If True, the remaining particles are not relaid out.

        Note:
            Removing a particle that is not in the bucket is a programming
            error. It raises AssertionError while assertions are enabled and
            is ignored otherwise.
        """
        contained = self.contains_particle(particle)
        check(contained, "attempt made to remove particle that is not in bucket")
        if not contained:
            return

        self._particles = [p for p in self._particles if p is not particle]
        handle = self._removal_handles.pop(id(particle), None)
        if handle is not None:
            particle.user_controlled_property.unlink(handle)
        logger.debug("Removed particle from %s (%d left)", particle.destination_property.get(), len(self))

        if not skip_layout:
            self.relayout()

    def contains_particle(self, particle: SphericalParticle) -> bool:
        return any(p is particle for p in self._particles)

    def includes(self, particle: SphericalParticle) -> bool:
        return self.contains_particle(particle)

    def extract_closest_particle(self, location: Vector2) -> SphericalParticle | None:
        """
        Hand the particle nearest to location over to the user.

        The closest particle by current position is flagged user-controlled,
        which fires the removal listener installed on add. Ties go to the
        earliest added particle.

        Returns:
            The extracted particle, or None if the bucket is empty.
        """
        closest: SphericalParticle | None = None
        closest_distance = 0.0
        for particle in self._particles:
            d = particle.position_property.get().distance(location)
            if closest is None or d < closest_distance:
                closest = particle
                closest_distance = d

        if closest is not None:
            closest.user_controlled_property.set(True)
            # Already flagged before extraction: no transition fired the listener.
            if self.contains_particle(closest):
                self.remove_particle(closest)
        return closest

    def reset(self) -> None:
        """Drop every particle and its removal listener without relayout."""
        for particle in self._particles:
            handle = self._removal_handles.pop(id(particle), None)
            if handle is not None:
                particle.user_controlled_property.unlink(handle)
        self._particles.clear()
        self._removal_handles.clear()

    # -------------------------------------------------------------------------
    # Stacking
    # -------------------------------------------------------------------------

    def is_position_open(self, position: Vector2) -> bool:
        """True if no particle's destination is exactly this point."""
        return all(p.destination_property.get() != position for p in self._particles)

    def get_first_open_position(self) -> Vector2:
        """
        First open slot reading layers bottom-up and left to right.

        Support is not checked; filling in this order keeps every layer
        supported by construction.
        """
        for _layer, slot in self.lattice.iter_slots():
            if self.is_position_open(slot):
                return slot
        raise AssertionError("unreachable: the lattice is unbounded")

    def get_layer_for_y_position(self, y: float) -> int:
        return self.lattice.layer_for_y(y)

    def get_y_position_for_layer(self, layer: int) -> float:
        return self.lattice.y_for_layer(layer)

    def count_supporting_particles(self, position: Vector2) -> int:
        """Number of particles strictly below position and within 3 radii of it."""
        return self.lattice.count_supporters(
            position, (p.destination_property.get() for p in self._particles)
        )

    def _find_nearest_open_position(self, position: Vector2) -> Vector2 | None:
        lattice = self.lattice
        highest_occupied_layer = max(
            (lattice.layer_for_y(p.destination_property.get().y) for p in self._particles),
            default=0,
        )

        closest: Vector2 | None = None
        closest_distance = 0.0
        for layer, slot in lattice.iter_slots(highest_occupied_layer + 1):
            if not self.is_position_open(slot):
                continue
            if layer > 0 and self.count_supporting_particles(slot) < REQUIRED_SUPPORT_COUNT:
                continue
            d = slot.distance(position)
            # Strict comparison keeps the first slot found on ties.
            if closest is None or d < closest_distance:
                closest = slot
                closest_distance = d
        return closest

    def get_nearest_open_position(self, position: Vector2) -> Vector2:
        """
        Nearest open slot where a sphere would be supported.

        Candidates are open slots up to one layer above the highest occupied
        layer. Bottom-layer slots always qualify; higher ones need two
        supporters. Falls back to Vector2.ZERO when nothing qualifies.
        """
        nearest = self._find_nearest_open_position(position)
        return Vector2.ZERO if nearest is None else nearest

    def is_dangling(self, particle: SphericalParticle) -> bool:
        """True if the particle hangs above a gap instead of resting on the stack."""
        destination = particle.destination_property.get()
        on_bottom_layer = destination.y == self.lattice.bottom_y
        return not on_bottom_layer and self.count_supporting_particles(destination) < REQUIRED_SUPPORT_COUNT

    def relayout(self) -> None:
        """
        Let dangling particles fall until the stack is stable.

        Repeatedly takes the first dangling particle in insertion order and
        moves it to the nearest supported open slot, evaluated against the
        current occupancy, since one move can leave others dangling.
        A particle with no supported slot to go to (a column above a full
        pyramid) stays where it is until another particle moves.
        """
        unplaceable: set[int] = set()
        while True:
            dangling = next(
                (p for p in self._particles if id(p) not in unplaceable and self.is_dangling(p)),
                None,
            )
            if dangling is None:
                return
            origin = dangling.destination_property.get()
            target = self._find_nearest_open_position(origin)
            if target is None:
                logger.debug("No supported slot for dangling particle at %s", origin)
                unplaceable.add(id(dangling))
                continue
            logger.debug("Relayout moved particle from %s to %s", origin, target)
            dangling.destination_property.set(target)
            # Occupancy changed, so previously stuck particles may have a slot now.
            unplaceable.clear()
