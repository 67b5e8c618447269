# MIT License (see LICENSE)
"""
Base model of a bucket: a container into which model objects are placed.

The bucket's position is the center of its opening (the "hole"), in model
coordinates. The hole is an ellipse as wide as the bucket, occupying
HOLE_ELLIPSE_HEIGHT_PROPORTION of its height. Subclasses add the policy for
how objects are added to and removed from the bucket; see SphereBucket.

Colours and caption are carried for a view to use; this package draws nothing.
"""
from __future__ import annotations
from dataclasses import dataclass, field

from .constants import DEFAULT_BUCKET_SIZE, HOLE_ELLIPSE_HEIGHT_PROPORTION
from .types import Dimension2, Vector2


@dataclass
class Bucket:
    """
    Shape and descriptive metadata shared by all buckets.

    Attributes:
        position: Center of the bucket's opening in model coordinates.
        size: Width and height of the bucket.
        base_color: Colour a view should use for the bucket body.
        caption_text: Label shown on the bucket.
        caption_color: Colour of the caption.
        invert_y: True when the model uses screen-style y-down coordinates,
                  so the bucket body hangs above the hole instead of below.
    """
    position: Vector2 = Vector2.ZERO
    size: Dimension2 = field(default_factory=lambda: Dimension2(*DEFAULT_BUCKET_SIZE))
    base_color: str = "#ff0000"
    caption_text: str = ""
    caption_color: str = "white"
    invert_y: bool = False

    @property
    def hole_radius_x(self) -> float:
        return self.size.width / 2

    @property
    def hole_radius_y(self) -> float:
        return self.size.height * HOLE_ELLIPSE_HEIGHT_PROPORTION / 2

    @property
    def container_height(self) -> float:
        """Height of the body below (or above, if invert_y) the hole."""
        return self.size.height * (1 - HOLE_ELLIPSE_HEIGHT_PROPORTION / 2)

    def hole_contains(self, point: Vector2) -> bool:
        """Whether a model point falls inside the ellipse of the opening."""
        dx = (point.x - self.position.x) / self.hole_radius_x
        dy = (point.y - self.position.y) / self.hole_radius_y
        return dx * dx + dy * dy <= 1.0
