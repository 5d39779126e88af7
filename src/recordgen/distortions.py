"""Probabilistic field noise: name swap, transliteration, typos, pool variant choice."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from recordgen.hashing import MASK64
from recordgen.prng import BitGenerator, RngFactory, SplitMix64
from recordgen.sampling import flat_pick
from recordgen.schemas import DistortionRates, GeneratorConfig, Profile

ALPHABET = "abcdefghijklmnopqrstuvwxyz"

FALLBACK_EMAIL = "default@example.com"
FALLBACK_PHONE = "+7000000000"
FALLBACK_LOGIN = "defaultuser"

_UPPER = {
    "А": "A", "Б": "B", "В": "V", "Г": "G", "Д": "D", "Е": "E", "Ё": "E", "Ж": "Zh",
    "З": "Z", "И": "I", "Й": "Y", "К": "K", "Л": "L", "М": "M", "Н": "N", "О": "O",
    "П": "P", "Р": "R", "С": "S", "Т": "T", "У": "U", "Ф": "F", "Х": "Kh", "Ц": "Ts",
    "Ч": "Ch", "Ш": "Sh", "Щ": "Sch", "Ъ": "", "Ы": "Y", "Ь": "", "Э": "E", "Ю": "Yu",
    "Я": "Ya",
}  # fmt: skip

CYRILLIC_TO_LATIN = MappingProxyType(
    {**_UPPER, **{k.lower(): v.lower() for k, v in _UPPER.items()}}
)

BASE_TYPO_OPS = ("delete", "insert", "replace")
TYPO_OPS_WITH_SWAP = ("swap", "delete", "insert", "replace")


@dataclass(frozen=True)
class DistortedFields:
    first_name: str
    last_name: str
    email: str
    phone: str
    login: str


def transliterate(s: str) -> str:
    """Cyrillic -> Latin approximation; unmapped characters pass through."""
    return "".join(CYRILLIC_TO_LATIN.get(ch, ch) for ch in s)


def random_typo(rng: BitGenerator, s: str, ops: tuple[str, ...] = BASE_TYPO_OPS) -> str:
    """Apply one single-character edit. Strings of length <= 2 are returned untouched."""
    if len(s) <= 2:
        return s
    op = ops[rng.next_int(len(ops))]
    if op == "swap":
        i = rng.next_int(len(s) - 1)
        return s[:i] + s[i + 1] + s[i] + s[i + 2 :]
    if op == "delete":
        i = min(rng.next_int(len(s)), len(s) - 1)
        return s[:i] + s[i + 1 :]
    if op == "insert":
        i = min(rng.next_int(len(s) + 1), len(s))
        return s[:i] + ALPHABET[rng.next_int(len(ALPHABET))] + s[i:]
    if op == "replace":
        i = min(rng.next_int(len(s)), len(s) - 1)
        return s[:i] + ALPHABET[rng.next_int(len(ALPHABET))] + s[i + 1 :]
    raise ValueError(f"unknown typo operation {op!r}")


def _maybe(rng: BitGenerator, rate: float) -> bool:
    return rng.next_float() < rate


def _pick_or(rng: BitGenerator, pool: tuple[str, ...], fallback: str) -> str:
    return flat_pick(rng, pool) if pool else fallback


def typo_ops(rates: DistortionRates) -> tuple[str, ...]:
    return TYPO_OPS_WITH_SWAP if rates.typo_swap else BASE_TYPO_OPS


def distort_fields(
    profile: Profile,
    variant_index: int,
    config: GeneratorConfig,
    record_seed: int,
    rng_factory: RngFactory = SplitMix64,
) -> DistortedFields:
    """
    Distort a profile's names and choose one email/phone/login variant.

    Gates run in fixed order against the configured rates: swap, transliterate,
    typo on first name, typo on last name. Empty pools yield fixed sentinels.
    """
    rng = rng_factory((record_seed + variant_index) & MASK64)
    rates = config.distortions
    first_name, last_name = profile.first_name, profile.last_name

    if _maybe(rng, rates.swap_first_last):
        first_name, last_name = last_name, first_name
    if _maybe(rng, rates.transliterate):
        first_name = transliterate(first_name)
        last_name = transliterate(last_name)
    ops = typo_ops(rates)
    if _maybe(rng, rates.typo):
        first_name = random_typo(rng, first_name, ops)
    if _maybe(rng, rates.typo):
        last_name = random_typo(rng, last_name, ops)

    return DistortedFields(
        first_name=first_name,
        last_name=last_name,
        email=_pick_or(rng, profile.emails, FALLBACK_EMAIL),
        phone=_pick_or(rng, profile.phones, FALLBACK_PHONE),
        login=_pick_or(rng, profile.logins, FALLBACK_LOGIN),
    )
