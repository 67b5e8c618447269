# MIT License (see LICENSE)
"""
Numeric constants for the sphere stacking lattice and bucket geometry.

Lengths are expressed in model units and scale with the sphere radius
where noted.
"""
from __future__ import annotations

# Vertical spacing between stacking layers, as a multiple of the sphere diameter.
# ≈ sin(60°), which gives a tightly packed triangular (hexagonal) lattice.
LAYER_SPACING_FACTOR: float = 0.866

# A particle supports a slot above it when its center lies closer than
# SUPPORT_DISTANCE_FACTOR * radius. Adjacent lattice neighbours sit at 2r.
SUPPORT_DISTANCE_FACTOR: float = 3.0

# Number of supporting particles a slot above the bottom layer needs.
REQUIRED_SUPPORT_COUNT: int = 2

# Empirically determined offset from the bucket opening to the bottom layer,
# as a multiple of the sphere radius. Negative values nest spheres inside.
DEFAULT_VERTICAL_OFFSET_FACTOR: float = -0.4

DEFAULT_SPHERE_RADIUS: float = 10.0

# Default bucket footprint (width, height).
DEFAULT_BUCKET_SIZE: tuple[float, float] = (200.0, 50.0)

# Proportion of the total bucket height occupied by the ellipse of the hole.
HOLE_ELLIPSE_HEIGHT_PROPORTION: float = 0.25

# Environment variable that switches contract checks off when set to "0".
ASSERTIONS_ENV_VAR: str = "SPHERE_BUCKET_ASSERTIONS"
