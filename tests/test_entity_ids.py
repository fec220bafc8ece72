import pytest

from spacesim.entity_ids import (
    decode_entity,
    encode_entity,
    proper_decode_entity,
    proper_encode_entity,
)


@pytest.mark.parametrize("index, generation", [(0, 0), (5, 1), (999_999, 7), (12, 4000)])
def test_encode_decode_round_trip(index, generation):
    assert decode_entity(encode_entity(index, generation)) == (index, generation)


@pytest.mark.parametrize("index, generation", [(0, 0), (1, 2), (2**32 - 1, 2**32 - 1), (123456, 3)])
def test_proper_round_trip(index, generation):
    assert proper_decode_entity(proper_encode_entity(index, generation)) == (index, generation)


def test_encode_is_readable():
    assert encode_entity(5, 2) == 2_000_005


def test_proper_encode_layout():
    assert proper_encode_entity(1, 0) == 1 << 32
    assert proper_encode_entity(0, 1) == 1


def test_large_index_collides():
    assert encode_entity(1_000_000, 0) == encode_entity(0, 1)
    assert decode_entity(encode_entity(1_000_000, 0)) == (0, 1)


def test_decode_negative_wraps_like_unsigned():
    assert decode_entity(-1) == (0xFFFFFFFF, 0)