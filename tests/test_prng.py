"""Tests for the SplitMix64 bit generator."""

from recordgen.hashing import MASK64
from recordgen.prng import BitGenerator, SplitMix64


def test_reference_sequence_seed_zero() -> None:
    rng = SplitMix64(0)
    assert rng.next_uint64() == 0xE220A8397B1DCDAF
    assert rng.next_uint64() == 0x6E789E6AA1B965F4
    assert rng.next_uint64() == 0x06C45D188009454F


def test_reseeding_reproduces_sequence() -> None:
    r1, r2 = SplitMix64(99), SplitMix64(99)
    assert [r1.next_uint64() for _ in range(50)] == [r2.next_uint64() for _ in range(50)]


def test_instances_do_not_share_state() -> None:
    r1, r2 = SplitMix64(7), SplitMix64(7)
    first = r1.next_uint64()
    r1.next_uint64()
    assert r2.next_uint64() == first


def test_seed_reduced_mod_2_64() -> None:
    assert SplitMix64(MASK64 + 6).next_uint64() == SplitMix64(5).next_uint64()


def test_outputs_in_range() -> None:
    rng = SplitMix64(2024)
    for _ in range(1000):
        u = rng.next_uint64()
        assert 0 <= u <= MASK64
        f = rng.next_float()
        assert 0.0 <= f < 1.0
        n = rng.next_int(7)
        assert 0 <= n < 7


def test_next_int_covers_range() -> None:
    rng = SplitMix64(1)
    seen = {rng.next_int(5) for _ in range(500)}
    assert seen == {0, 1, 2, 3, 4}


def test_custom_bit_generator_gets_float_and_int() -> None:
    class Constant(BitGenerator):
        def next_uint64(self) -> int:
            return 1 << 63

    rng = Constant()
    assert rng.next_float() == 0.5
    assert rng.next_int(10) == 5
