import pytest

from spacesim.noise import OpenSimplexNoise

POINTS = [(x * 0.37, y * 0.53) for x in range(-10, 10) for y in range(-10, 10)]


def test_same_seed_gives_same_values():
    a = OpenSimplexNoise(42)
    b = OpenSimplexNoise(42)
    assert [a.eval_2d(x, y) for x, y in POINTS] == [b.eval_2d(x, y) for x, y in POINTS]


def test_missing_seed_is_seed_zero():
    a = OpenSimplexNoise()
    b = OpenSimplexNoise(0)
    assert [a.eval_2d(x, y) for x, y in POINTS] == [b.eval_2d(x, y) for x, y in POINTS]


def test_different_seeds_give_different_fields():
    a = OpenSimplexNoise(1)
    b = OpenSimplexNoise(2)
    assert [a.eval_2d(x, y) for x, y in POINTS] != [b.eval_2d(x, y) for x, y in POINTS]


@pytest.mark.parametrize("seed", [0, 7, -5, 2**63 - 1, 2**64 - 1])
def test_values_are_bounded(seed):
    noise = OpenSimplexNoise(seed)
    values = [noise.eval_2d(x, y) for x, y in POINTS]
    assert all(-1.0 <= v <= 1.0 for v in values)


def test_field_is_not_constant():
    noise = OpenSimplexNoise(3)
    values = {noise.eval_2d(x, y) for x, y in POINTS}
    assert len(values) > 10


def test_field_is_continuous():
    noise = OpenSimplexNoise(9)
    for x, y in POINTS:
        assert abs(noise.eval_2d(x, y) - noise.eval_2d(x + 1e-6, y)) < 1e-3