"""Determinism tests: order independence, concurrency, range iteration, reference outputs."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from recordgen.config import default_generator_config
from recordgen.generator import IdempotentGenerator, RecordRange, variant_for_index
from recordgen.prng import SplitMix64


def test_order_independence(generator) -> None:
    forward = {i: generator.record_by_index(i) for i in (2, 5, 9)}
    shuffled = {i: generator.record_by_index(i) for i in (9, 2, 5)}
    assert forward == shuffled


def test_history_does_not_matter(gen_config) -> None:
    fresh = IdempotentGenerator(gen_config)
    busy = IdempotentGenerator(gen_config)
    for i in range(500):
        busy.record_by_index(i)
    assert busy.record_by_index(12_345) == fresh.record_by_index(12_345)


def test_concurrent_generation_matches_sequential(generator) -> None:
    indices = list(range(400))
    sequential = [generator.record_by_index(i) for i in indices]
    with ThreadPoolExecutor(max_workers=8) as pool:
        concurrent = list(pool.map(generator.record_by_index, reversed(indices)))
    assert list(reversed(concurrent)) == sequential


def test_iterate_equals_record_by_index(generator) -> None:
    records = generator.iterate(100, 25)
    assert isinstance(records, RecordRange)
    assert len(records) == 25
    assert list(records) == [generator.record_by_index(i) for i in range(100, 125)]


def test_iterate_is_restartable_and_indexable(generator) -> None:
    records = generator.iterate(10, 5)
    assert list(records) == list(records)
    assert records[0] == generator.record_by_index(10)
    assert records[-1] == generator.record_by_index(14)
    assert records[1:3] == [generator.record_by_index(11), generator.record_by_index(12)]
    with pytest.raises(IndexError):
        records[5]


def test_iterate_is_lazy(gen_config) -> None:
    calls: list[int] = []

    class Counting(IdempotentGenerator):
        def record_by_index(self, index: int):
            calls.append(index)
            return super().record_by_index(index)

    gen = Counting(gen_config)
    it = iter(gen.iterate(0, 10**12))
    next(it)
    next(it)
    assert calls == [0, 1]


def test_empty_range(generator) -> None:
    assert list(generator.iterate(7, 0)) == []


def test_range_validation(generator) -> None:
    with pytest.raises(ValueError):
        generator.iterate(0, -1)
    with pytest.raises(ValueError):
        generator.iterate(2**64 - 1, 2)
    assert len(generator.iterate(2**64 - 1, 1)) == 1


def test_index_validation(generator) -> None:
    with pytest.raises(ValueError):
        generator.record_by_index(-1)
    with pytest.raises(ValueError):
        generator.record_by_index(2**64)
    with pytest.raises(ValueError):
        generator.profile_by_id(-5)
    with pytest.raises(TypeError):
        generator.record_by_index("3")  # type: ignore[arg-type]


def test_variant_policy() -> None:
    assert {variant_for_index(i, 1) for i in range(100)} == {0}
    assert {variant_for_index(i, 0) for i in range(100)} == {0}
    assert {variant_for_index(i, 10) for i in range(1000)} == set(range(10))


def test_injected_rng_factory_is_used(gen_config) -> None:
    seeds: list[int] = []

    def factory(seed: int) -> SplitMix64:
        seeds.append(seed)
        return SplitMix64(seed)

    custom = IdempotentGenerator(gen_config, rng_factory=factory)
    default = IdempotentGenerator(gen_config)
    assert custom.record_by_index(42) == default.record_by_index(42)
    # bucket, profile (+ one per email), distortion, non-profile fields, amount
    assert len(seeds) >= 6


# Reference outputs for the default config; any change to seeds or draw order shows up here.
GOLDEN_RECORDS = {
    1: (
        806074584996, 0, "Мария", "Смирнов", "мария.смирнов2578@yahoo.com", "+7913513530",
        "мсмирнов8924", "partner-az", "Москва", "web", 27.86, "2024-05-07T10:10:33.681Z",
    ),
    2: (
        26977353223, 0, "Мария", "Иванов", "мария.иванов1319@outlook.com", "+7303637391",
        "миванов6220", "store-001", "Санкт-Петербург", "offline", 21.74,
        "2025-11-23T22:29:09.048Z",
    ),
    12345: (
        660658674764, 0, "Мария", "Сидоров", "мария.сидоров0458@mail.ru", "+48056961905",
        "мсидоров5026", "partner-az", "Казань", "callcenter", 23.56,
        "2024-09-11T23:18:12.145Z",
    ),
    2**64 - 1: (
        723145373757, 0, "Sergey", "Smirnov", "сергей.смирнов9851@mail.ru", "+48393975326",
        "ссмирнов2726", "store-002", "Алматы", "mobile", 34.49, "2024-11-07T21:02:22.739Z",
    ),
}


@pytest.mark.parametrize("index", sorted(GOLDEN_RECORDS))
def test_default_config_golden_records(index: int) -> None:
    rec = IdempotentGenerator(default_generator_config()).record_by_index(index)
    assert (
        rec.profile_id,
        rec.variant_index,
        rec.first_name,
        rec.last_name,
        rec.email,
        rec.phone,
        rec.login,
        rec.point_of_sale,
        rec.city,
        rec.channel,
        rec.amount,
        rec.timestamp,
    ) == GOLDEN_RECORDS[index]


@pytest.mark.parametrize(
    "profile_id, expected",
    [
        (
            0,
            {
                "profile_id": 0,
                "first_name": "Алексей",
                "last_name": "Семенов",
                "phones": ["+7413192349"],
                "emails": [
                    "алексей.семенов9249@yandex.ru",
                    "алексей.семенов4842@yahoo.com",
                    "алексей.семенов8980@mail.ru",
                    "алексей.семенов2836@mail.ru",
                    "алексей.семенов7574@gmail.com",
                ],
                "logins": ["асеменов5877"],
                "locale": "ru",
            },
        ),
        (
            806074584996,
            {
                "profile_id": 806074584996,
                "first_name": "Мария",
                "last_name": "Смирнов",
                "phones": ["+7913513530", "+7077296178"],
                "emails": [
                    "мария.смирнов2578@yahoo.com",
                    "мария.смирнов1767@yahoo.com",
                    "мария.смирнов3103@gmail.com",
                ],
                "logins": ["мсмирнов8924"],
                "locale": "ru",
            },
        ),
    ],
)
def test_default_config_golden_profiles(profile_id: int, expected: dict) -> None:
    gen = IdempotentGenerator(default_generator_config())
    assert gen.profile_by_id(profile_id).to_dict() == expected
