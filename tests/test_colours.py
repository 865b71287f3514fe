import random

import pytest

from bwxsdk.colours import Colour, mix_colours, random_colour, random_colours


def test_colour_rejects_out_of_range_channel():
    with pytest.raises(ValueError):
        Colour(256, 0, 0)
    with pytest.raises(ValueError):
        Colour(0, -1, 0)


def test_random_colour_channels_in_range():
    rng = random.Random(7)
    for _ in range(200):
        c = random_colour(rng)
        assert all(0 <= v <= 255 for v in (c.red, c.green, c.blue))


def test_random_colour_reproducible_with_seed():
    first = random_colour(random.Random(42))
    second = random_colour(random.Random(42))
    assert (first.red, first.green, first.blue) == (second.red, second.green, second.blue)
    assert all(0 <= v <= 255 for v in (first.red, first.green, first.blue))
    sequence_a = random_colours(10, rng=random.Random(42))
    sequence_b = random_colours(10, rng=random.Random(42))
    assert sequence_a == sequence_b
    assert len(sequence_a) == 10


def test_random_colours_starts_with_magenta_by_default():
    colours = random_colours(5, rng=random.Random(1))
    assert colours[0] == Colour(255, 0, 255)
    assert len(colours) == 5


def test_random_colours_custom_first():
    first = Colour(1, 2, 3)
    colours = random_colours(3, first=first, rng=random.Random(3))
    assert colours[0] == first


def test_random_colours_unique():
    colours = random_colours(300, unique=True, rng=random.Random(9))
    assert len(set(colours)) == len(colours) == 300


def test_random_colours_non_unique_length():
    colours = random_colours(50, unique=False, rng=random.Random(9))
    assert len(colours) == 50


@pytest.mark.parametrize("count", [0, -3])
def test_random_colours_non_positive_count(count):
    assert random_colours(count) == []


def test_random_colours_too_many_unique():
    with pytest.raises(ValueError):
        random_colours(256**3 + 1, unique=True)


def test_mix_endpoints():
    a = Colour(10, 20, 30)
    b = Colour(200, 100, 50)
    assert mix_colours(a, b, 0.0) == a
    assert mix_colours(a, b, 1.0) == b


def test_mix_halfway():
    assert mix_colours(Colour(0, 0, 0), Colour(200, 100, 50), 0.5) == Colour(100, 50, 25)


def test_mix_same_colour_is_identity():
    c = Colour(33, 66, 99)
    assert mix_colours(c, c, 0.3) == c


def test_mix_stays_between_inputs():
    a = Colour(0, 255, 100)
    b = Colour(255, 0, 100)
    m = mix_colours(a, b, 0.25)
    assert 0 <= m.red <= 255 and 0 <= m.green <= 255
    assert m.red < m.green