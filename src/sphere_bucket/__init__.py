# MIT License (see LICENSE)
"""
sphere_bucket - Buckets that stack spherical particles for simulations.

This package models a bucket into which equal-radius spheres are dropped.
Spheres settle into a triangular pyramid, and when one is taken out the
others fall so that none is left hanging over a gap.

Main entry points:
    - SphereBucket: The container; add, remove, extract and relayout spheres.
    - Particle: A ready-made sphere with observable position/destination.
    - Vector2, Dimension2: Immutable geometry value types.
    - Property: Observable value with handle-based subscriptions.

Submodules:
    - stacking: Pure lattice geometry (slots, layers, support).
    - invariants: Auditing helpers for overlaps and dangling spheres.
    - container: The ParticleContainer protocol.

Example:
    from sphere_bucket import SphereBucket, Particle, Vector2, Dimension2

    bucket = SphereBucket(position=Vector2(0, 0), size=Dimension2(120, 40), sphere_radius=10)
    ball = Particle.at(0, 100)
    bucket.add_particle_first_open(ball, animate=False)
    bucket.extract_closest_particle(ball.position)
"""
from .bucket import Bucket
from .container import ParticleContainer
from .particle import Particle, SphericalParticle
from .properties import ListenerHandle, Property
from .sphere_bucket import SphereBucket
from .stacking import StackingLattice
from .types import Dimension2, Vector2

__all__ = [
    # Containers
    "Bucket",
    "SphereBucket",
    "ParticleContainer",
    # Particles
    "Particle",
    "SphericalParticle",
    # Observables
    "Property",
    "ListenerHandle",
    # Geometry
    "StackingLattice",
    "Vector2",
    "Dimension2",
]
