"""Profile synthesis: profile id -> name, locale and phone/email/login pools."""

from __future__ import annotations

import re

from recordgen.hashing import MASK64, tagged_hash
from recordgen.prng import BitGenerator, RngFactory, SplitMix64
from recordgen.sampling import flat_pick, weighted_pick
from recordgen.schemas import GeneratorConfig, Profile

EMAIL_DOMAINS = ("gmail.com", "mail.ru", "yahoo.com", "outlook.com", "yandex.ru")
PRIMARY_PHONE_PREFIX = "+7"
SECONDARY_PHONE_PREFIX = "+48"
SECONDARY_PHONE_RATE = 0.5

MAX_PHONES = 3
MAX_EMAILS = 5
MAX_LOGINS = 2

_EMAIL_LOCAL_DISALLOWED = re.compile(r"[^a-zа-яё.\-]")


def email_local_part(first_name: str, last_name: str) -> str:
    """Lower-cased "first.last" keeping only Latin/Cyrillic letters, dots and dashes."""
    return _EMAIL_LOCAL_DISALLOWED.sub("", f"{first_name}.{last_name}".lower())


def _phone(rng: BitGenerator) -> str:
    national = f"{rng.next_uint64() % 1_000_000_000:09d}"
    secondary = rng.next_float() < SECONDARY_PHONE_RATE
    prefix = SECONDARY_PHONE_PREFIX if secondary else PRIMARY_PHONE_PREFIX
    return prefix + national


def _email(rng: BitGenerator, local: str) -> str:
    salt = f"{rng.next_uint64() % 10_000:04d}"
    return f"{local}{salt}@{flat_pick(rng, EMAIL_DOMAINS)}"


def _login(rng: BitGenerator, first_name: str, last_name: str) -> str:
    num = f"{rng.next_uint64() % 10_000:04d}"
    initial = first_name[0] if first_name else "u"
    return (initial + last_name + num).lower()


def build_profile(
    profile_id: int, config: GeneratorConfig, rng_factory: RngFactory = SplitMix64
) -> Profile:
    """
    Build the profile for `profile_id`. Draw order is fixed:
    names, locale, pool sizes, phones, logins. Each email has its own generator
    seeded from the email tag + position, so changing the email count never
    changes the emails already produced.
    """
    rng = rng_factory(tagged_hash("profile", profile_id))
    pools = config.pools

    first_name = weighted_pick(rng, pools.first_names.values, pools.first_names.weights)
    last_name = weighted_pick(rng, pools.last_names.values, pools.last_names.weights)
    locale = (
        config.locale.secondary
        if rng.next_float() < config.locale.secondary_rate
        else config.locale.primary
    )

    phones_count = 1 + rng.next_int(MAX_PHONES)
    emails_count = 1 + rng.next_int(MAX_EMAILS)
    logins_count = 1 + rng.next_int(MAX_LOGINS)

    phones = tuple(_phone(rng) for _ in range(phones_count))

    mail_seed = tagged_hash("email", profile_id)
    local = email_local_part(first_name, last_name)
    emails = tuple(
        _email(rng_factory((mail_seed + i) & MASK64), local) for i in range(emails_count)
    )

    logins = tuple(_login(rng, first_name, last_name) for _ in range(logins_count))

    return Profile(
        profile_id=profile_id,
        first_name=first_name,
        last_name=last_name,
        phones=phones,
        emails=emails,
        logins=logins,
        locale=locale,
    )
