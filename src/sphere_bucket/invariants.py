# MIT License (see LICENSE)
"""
Utilities for auditing the stacking invariants of a bucket.

Used for verifying layout correctness and debugging stacking issues.
After any add or remove completes, a bucket should report no occupancy
conflicts and, outside the single-column case above a full pyramid,
no dangling particles.
"""
from __future__ import annotations
from collections import Counter
from itertools import combinations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .particle import SphericalParticle
    from .sphere_bucket import SphereBucket


def occupancy_conflicts(bucket: SphereBucket) -> list[tuple[SphericalParticle, SphericalParticle]]:
    """
    Find pairs of particles that claim the same slot.

    Args:
        bucket: The bucket to audit.

    Returns:
        Pairs (a, b), in insertion order, whose destinations are exactly equal.
    """
    return [
        (a, b)
        for a, b in combinations(bucket.particles, 2)
        if a.destination_property.get() == b.destination_property.get()
    ]


def dangling_particles(bucket: SphereBucket) -> list[SphericalParticle]:
    """Particles that are neither on the bottom layer nor held up by two below."""
    return [p for p in bucket.particles if bucket.is_dangling(p)]


def layer_counts(bucket: SphereBucket) -> dict[int, int]:
    """
    Count particles per stacking layer.

    Returns:
        Mapping layer index -> number of particles whose destination
        rounds to that layer, sorted by layer.
    """
    counts = Counter(
        bucket.get_layer_for_y_position(p.destination_property.get().y) for p in bucket.particles
    )
    return dict(sorted(counts.items()))
