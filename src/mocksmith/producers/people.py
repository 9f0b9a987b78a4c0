"""People and contact producers, backed by Faker."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import (
    DIGITS,
    LOWERCASE,
    SYMBOLS,
    UPPERCASE,
    case_params,
    faker,
    rng,
)

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder

PHONE_FORMATS = ["international", "national", "local"]

COUNTRY_DIALING_CODES = {
    "US": "1",
    "CA": "1",
    "GB": "44",
    "DE": "49",
    "FR": "33",
    "NG": "234",
    "IN": "91",
    "AU": "61",
    "JP": "81",
    "BR": "55",
}


def generate_firstname(params: Mapping[str, Any]) -> str:
    return faker(params).first_name()


def generate_lastname(params: Mapping[str, Any]) -> str:
    return faker(params).last_name()


def generate_fullname(params: Mapping[str, Any]) -> str:
    return faker(params).name()


def generate_email(params: Mapping[str, Any]) -> str:
    fake = faker(params)
    domain = params.get("domain")
    if domain:
        return f"{fake.user_name()}@{domain.lstrip('@')}"
    return fake.email()


def generate_phone(params: Mapping[str, Any]) -> str:
    rand = rng(params)
    area = rand.randint(200, 999)
    exchange = rand.randint(200, 999)
    line = rand.randint(0, 9999)
    fmt = params.get("format", "national")
    if fmt == "local":
        return f"{exchange}-{line:04d}"
    if fmt == "international":
        code = COUNTRY_DIALING_CODES.get(str(params.get("country", "US")).upper(), "1")
        return f"+{code} {area} {exchange} {line:04d}"
    return f"({area}) {exchange}-{line:04d}"


def generate_username(params: Mapping[str, Any]) -> str:
    return faker(params).user_name()


def generate_password(params: Mapping[str, Any]) -> str:
    """
    Random password drawn from the enabled character classes.

    When the length allows it, one character of every enabled class is
    included before the remainder is filled from their union and shuffled.
    """
    rand = rng(params)
    length = params["length"]

    classes = [LOWERCASE]
    if params.get("include_uppercase", True):
        classes.append(UPPERCASE)
    if params.get("include_numbers", True):
        classes.append(DIGITS)
    if params.get("include_symbols", True):
        classes.append(SYMBOLS)
    pool = "".join(classes)

    chars = []
    if length >= len(classes):
        chars = [rand.choice(charset) for charset in classes]
    chars.extend(rand.choice(pool) for _ in range(length - len(chars)))
    rand.shuffle(chars)
    return "".join(chars)


def generate_address(params: Mapping[str, Any]) -> str:
    return faker(params).address().replace("\n", ", ")


def generate_company(params: Mapping[str, Any]) -> str:
    return faker(params).company()


def generate_job_title(params: Mapping[str, Any]) -> str:
    return faker(params).job()


def register(builder: EngineBuilder) -> None:
    builder.add(
        GeneratorInfo("base", "firstname", "Random first name", "John", case_params(capitalize=True)),
        generate_firstname,
    )
    builder.add(
        GeneratorInfo("base", "lastname", "Random last name", "Doe", case_params(capitalize=True)),
        generate_lastname,
    )
    builder.add(
        GeneratorInfo("base", "fullname", "Random full name", "John Doe", case_params()),
        generate_fullname,
    )
    builder.add(
        GeneratorInfo(
            "base", "email", "Random email address", "john.doe@example.com",
            [
                ParameterDef("domain", ParamType.STRING, "Domain to use instead of a random one",
                             example="example.com"),
                *case_params(lowercase=True),
            ],
        ),
        generate_email,
    )
    builder.add(
        GeneratorInfo(
            "base", "phone", "Random phone number", "(555) 123-4567",
            [
                ParameterDef("format", ParamType.SELECT, "Phone number format",
                             default="national", options=PHONE_FORMATS),
                ParameterDef("country", ParamType.STRING, "Country code for international numbers",
                             default="US"),
            ],
        ),
        generate_phone,
    )
    builder.add(
        GeneratorInfo("base", "username", "Random username", "jdoe42", case_params()),
        generate_username,
    )
    builder.add(
        GeneratorInfo(
            "base", "password", "Random password", "aB3$xY9#mN2!",
            [
                ParameterDef("length", ParamType.INT, "Password length", default=12, min=4, max=128),
                ParameterDef("include_symbols", ParamType.BOOL, "Include special characters", default=True),
                ParameterDef("include_numbers", ParamType.BOOL, "Include digits", default=True),
                ParameterDef("include_uppercase", ParamType.BOOL, "Include uppercase letters", default=True),
            ],
        ),
        generate_password,
    )
    builder.add(
        GeneratorInfo("base", "address", "Random postal address on one line",
                      "123 Main St, Springfield, IL 62701", case_params()),
        generate_address,
    )
    builder.add(
        GeneratorInfo("base", "company", "Random company name", "Acme Corp", case_params()),
        generate_company,
    )
    builder.add(
        GeneratorInfo("base", "job_title", "Random job title", "Software Engineer", case_params()),
        generate_job_title,
    )
