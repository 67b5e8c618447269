# MIT License (see LICENSE)
"""Structural interface shared by particle containers."""
from __future__ import annotations
from typing import Protocol, TypeVar

T = TypeVar("T")


class ParticleContainer(Protocol[T]):
    """
    Protocol for any container that holds particles.

    skip_layout lets a caller defer updates to the positions of the
    other particles, e.g. when removing several at once.
    """

    def add_particle(self, particle: T, animate: bool = False) -> None:
        ...

    def remove_particle(self, particle: T, skip_layout: bool = False) -> None:
        ...

    def includes(self, particle: T) -> bool:
        ...
