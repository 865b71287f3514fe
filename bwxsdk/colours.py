"""RGB colours: random generation and mixing."""

from __future__ import annotations

import random
from dataclasses import dataclass

_COLOUR_SPACE = 256**3


@dataclass(frozen=True)
class Colour:
    """An RGB colour with 8-bit channels."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} channel out of range 0..255: {value}")


MAGENTA = Colour(255, 0, 255)


def random_colour(rng: random.Random | None = None) -> Colour:
    """Return a colour with each channel drawn uniformly from 0..255."""
    source = rng if rng is not None else random
    return Colour(source.randint(0, 255), source.randint(0, 255), source.randint(0, 255))


def random_colours(
    count: int,
    unique: bool = True,
    first: Colour = MAGENTA,
    rng: random.Random | None = None,
) -> list[Colour]:
    """Return ``count`` colours, starting with ``first``, the rest random.

    With ``unique`` set, no colour appears twice in the result.
    """
    if count <= 0:
        return []
    if unique and count > _COLOUR_SPACE:
        raise ValueError(f"cannot produce {count} unique colours")
    colours = [first]
    seen = {first}
    while len(colours) < count:
        colour = random_colour(rng)
        if unique:
            if colour in seen:
                continue
            seen.add(colour)
        colours.append(colour)
    return colours


def mix_colours(col1: Colour, col2: Colour, factor: float) -> Colour:
    """Blend two colours: ``factor`` 0 gives ``col1``, 1 gives ``col2``.

    Channel values are truncated towards zero.
    """

    def blend(a: int, b: int) -> int:
        return int(b * factor + a * (1 - factor))

    return Colour(
        blend(col1.red, col2.red),
        blend(col1.green, col2.green),
        blend(col1.blue, col2.blue),
    )