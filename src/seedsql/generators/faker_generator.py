"""Faker-based value catalog."""

import json
from collections.abc import Mapping

from faker import Faker

from seedsql.exceptions import GenerationInvariantError

fake = Faker("en_US")

EMAIL_DOMAINS = (
    "@outlook.com",
    "@gmail.com",
    "@pitt.edu",
    "@yahoo.com",
    "@proton.mail",
    "@pm.me",
    "@paranoid.email",
)

INDUSTRIES = (
    "Accounting",
    "Airlines/Aviation",
    "Apparel & Fashion",
    "Automotive",
    "Banking",
    "Biotechnology",
    "Computer Software",
    "Construction",
    "Consumer Electronics",
    "Education Management",
    "Food Production",
    "Health Care",
    "Hospitality",
    "Insurance",
    "Logistics and Supply Chain",
    "Mining & Metals",
    "Pharmaceuticals",
    "Real Estate",
    "Retail",
    "Telecommunications",
)

# Row entries consulted (in this order) to derive an email local part
EMAIL_NAME_KEYS = ("name", "full name", "full_name")


def _plain(value: str) -> str:
    """Strip apostrophes so later SQL quoting stays simple."""
    return value.replace("'", "")


def _date() -> str:
    # Day capped at 28 so every month is valid
    year = fake.random_int(min=1900, max=2020)
    month = fake.random_int(min=1, max=12)
    day = fake.random_int(min=1, max=28)
    return f"{year:04d}-{month:02d}-{day:02d}"


def _time() -> str:
    hour = fake.random_int(min=0, max=23)
    minute = fake.random_int(min=0, max=59)
    second = fake.random_int(min=0, max=59)
    return f"{hour:02d}:{minute:02d}:{second:02d}"


class FakerGenerator:
    """Generate one literal string per catalog type tag using Faker."""

    # Type tag → generator for tags that need neither size nor row context
    TYPE_GENERATORS = {
        "INTEGER": lambda: str(fake.random_int(min=0, max=65535)),
        "SMALLINT": lambda: str(fake.random_int(min=0, max=32767)),
        "BIGINT": lambda: str(fake.random_int(min=0, max=9_223_372_036_854_775_807)),
        "SERIAL": lambda: str(fake.random_int(min=1, max=2_147_483_647)),
        "BIT": lambda: str(fake.random_int(min=0, max=1)),
        "BOOLEAN": lambda: "TRUE" if fake.boolean() else "FALSE",
        "REAL": lambda: f"{fake.pyfloat(left_digits=4, right_digits=2, positive=True):.2f}",
        "FLOAT4": lambda: f"{fake.pyfloat(left_digits=4, right_digits=2, positive=True):.2f}",
        "FLOAT8": lambda: f"{fake.pyfloat(left_digits=6, right_digits=4, positive=True):.4f}",
        "DATE": _date,
        "TIME": _time,
        "TIMESTAMP": lambda: f"{_date()} {_time()}",
        "INTERVAL": lambda: f"{fake.random_int(min=1, max=365)} days",
        "SSN": lambda: str(fake.random_int(min=100_000_000, max=999_999_999)),
        "UUID": lambda: str(fake.uuid4()),
        "INET": lambda: fake.ipv4(),
        "CIDR": lambda: fake.ipv4(network=True),
        "MACADDR": lambda: fake.mac_address(),
        "BYTEA": lambda: "\\x" + fake.binary(length=4).hex(),
        "JSON": lambda: json.dumps({fake.word(): fake.word()}),
        "JSONB": lambda: json.dumps({fake.word(): fake.random_int(min=0, max=999)}),
        "XML": lambda: f"<value>{fake.word()}</value>",
        "TEXT": lambda: _plain(fake.sentence(nb_words=6)),
        "GROUP": lambda: fake.random_element(("Member", "Mod")),
        "NAME": lambda: _plain(fake.name()),
        "PHONE": lambda: _plain(fake.phone_number()),
        "STATE": lambda: fake.state_abbr(),
        "STATE_US": lambda: _plain(fake.state()),
        "CITY_US": lambda: _plain(fake.city()),
        "CITY_SHORT": lambda: _plain(fake.city_prefix()),
        "STREET_NAME_US": lambda: _plain(fake.street_name()),
        "STREET_ADDRESS": lambda: _plain(fake.street_address()),
        "ZIP_US": lambda: fake.zipcode(),
        "COUNTRY": lambda: _plain(fake.country()),
        "COMPANYNAME": lambda: _plain(fake.company()),
        "INDUSTRY": lambda: fake.random_element(INDUSTRIES),
        "PROFESSION": lambda: _plain(fake.job()),
    }

    def generate(
        self,
        type_tag: str,
        size: tuple[int, ...] | None = None,
        row: Mapping[str, str] | None = None,
    ) -> str:
        """
        Generate a literal for a catalog type tag.

        Args:
            type_tag: Canonical catalog tag (see ``generators.types``)
            size: Optional size parameters, e.g. ``(10, 2)``
            row: Values already generated for the current row (used by EMAIL)

        Returns:
            Generated literal as a string

        Raises:
            GenerationInvariantError: If the tag is not in the catalog
        """
        if type_tag in self.TYPE_GENERATORS:
            return self.TYPE_GENERATORS[type_tag]()

        if type_tag == "CHAR":
            return self._char(size, fixed=True)
        if type_tag == "VARCHAR":
            return self._char(size, fixed=False)
        if type_tag in ("DECIMAL", "NUMERIC"):
            return self._decimal(size)
        if type_tag == "MONEY":
            return self._money(size)
        if type_tag == "PASSWORD":
            return self._password(size)
        if type_tag == "USERNAME":
            return self._username(size)
        if type_tag == "EMAIL":
            return self._email(row or {})

        raise GenerationInvariantError(f"unknown type tag '{type_tag}' in data generation")

    def _char(self, size: tuple[int, ...] | None, fixed: bool) -> str:
        limit = size[0] if size else fake.random_int(min=3, max=11)
        if fixed or limit <= 1:
            length = limit
        else:
            length = fake.random_int(min=1, max=limit)
        return "".join(fake.random_letters(length=length))

    def _decimal(self, size: tuple[int, ...] | None) -> str:
        """Build ``{int}.{frac}`` with at most size[0] / size[1] digits (``{int}`` at scale 0)."""
        if size:
            int_digits, frac_digits = size[0], size[1]
        else:
            int_digits = fake.random_int(min=3, max=11)
            frac_digits = fake.random_int(min=3, max=11)
        whole = fake.random_int(min=0, max=10**int_digits - 1)
        if frac_digits == 0:
            return str(whole)
        frac = fake.random_int(min=0, max=10**frac_digits - 1)
        return f"{whole}.{frac}"

    def _money(self, size: tuple[int, ...] | None) -> str:
        int_digits = size[0] if size else fake.random_int(min=3, max=11)
        dollars = fake.random_int(min=0, max=10**int_digits - 1)
        cents = fake.random_int(min=0, max=99)
        return f"{dollars}.{cents}"

    def _password(self, size: tuple[int, ...] | None) -> str:
        upper = max(size[0], 1) if size else fake.random_int(min=8, max=11)
        length = fake.random_int(min=min(8, upper), max=upper)
        if length < 4:
            # Too short to require every character class
            return fake.password(
                length=length,
                special_chars=False,
                digits=False,
                upper_case=False,
                lower_case=True,
            )
        return fake.password(length=length)

    def _username(self, size: tuple[int, ...] | None) -> str:
        username = _plain(f"{fake.first_name()}{fake.last_name()}")
        if size and len(username) > size[0]:
            username = username[: size[0]]
        return username

    def _email(self, row: Mapping[str, str]) -> str:
        local = None
        for key in EMAIL_NAME_KEYS:
            if key in row:
                local = row[key]
                break
        if local is None:
            local = _plain(fake.name())
        local = local.replace(" ", "").replace(",", "")
        return f"{local}{fake.random_element(EMAIL_DOMAINS)}"
