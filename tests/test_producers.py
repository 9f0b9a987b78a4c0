"""Tests for the producer catalog."""

import base64
import ipaddress
import json
import re
import uuid
from datetime import datetime, timezone

import pytest

from mocksmith.config import EngineConfig
from mocksmith.engine import build_engine
from mocksmith.errors import NotFoundError, ValidationError
from mocksmith.producers.common import SYMBOLS
from mocksmith.producers.numeric import uniform_float
from mocksmith.producers.vocabularies import AIRPORT_CODES, BLOOD_TYPES

REFERENCE = datetime(2024, 6, 1, tzinfo=timezone.utc)
SAMPLES = 10_000


@pytest.fixture
def engine():
    return build_engine(EngineConfig(seed=2024, reference_time=REFERENCE))


def sample(engine, industry, name, params=None, count=200):
    return [engine.generate(industry, name, params) for _ in range(count)]


class TestNumeric:
    """Range containment for numeric producers."""

    def test_number_closed_interval(self, engine):
        values = sample(engine, "base", "number", {"min": -3, "max": 3}, SAMPLES)
        assert min(values) == -3 and max(values) == 3

    def test_float_half_open(self, engine):
        values = sample(engine, "base", "float", {"min": 1.5, "max": 2.5, "precision": 3}, SAMPLES)
        assert all(1.5 <= v < 2.5 for v in values)

    def test_price_half_open(self, engine):
        values = sample(engine, "base", "price", {"min": 1, "max": 2}, SAMPLES)
        assert all(1 <= v < 2 for v in values)

    def test_float_precision(self, engine):
        for value in sample(engine, "base", "float", {"min": 0, "max": 100, "precision": 1}):
            if value < 99.95:
                assert round(value, 1) == value

    def test_float_degenerate_range(self, engine):
        assert engine.generate("base", "float", {"min": 4, "max": 4}) == 4.0

    def test_float_never_reaches_upper_bound(self):
        class TopOfRange:
            def random(self):
                return 1.0

        value = uniform_float({"_rand": TopOfRange()}, 0.5, 0.75, 0)
        assert 0.5 <= value < 0.75

    def test_decimal_text(self, engine):
        for value in sample(engine, "base", "decimal", {"min": 0, "max": 10, "precision": 3}):
            assert re.fullmatch(r"\d+\.\d{3}", value)

    def test_boolean(self, engine):
        assert set(sample(engine, "base", "boolean")) == {True, False}

    def test_random_int_defaults(self, engine):
        assert all(0 <= v <= 100 for v in sample(engine, "base", "random_int"))


class TestStructural:
    """Enum, null, aggregates and counters."""

    def test_enum_soundness_and_coverage(self, engine):
        options = [f"v{i}" for i in range(10)]
        values = sample(engine, "base", "enum", {"values": options}, SAMPLES)
        assert set(values) == set(options)

    def test_enum_from_comma_string(self, engine):
        assert engine.generate("base", "enum", {"values": "only"}) == "only"

    def test_null(self, engine):
        assert engine.generate("base", "null") is None

    def test_embedded_document_without_fields(self, engine):
        assert engine.generate("base", "embedded_document") == {}

    def test_embedded_document_from_dicts(self, engine):
        doc = engine.generate("base", "embedded_document", {"fields": [
            {"name": "city", "generator": "enum", "params": {"values": ["Lagos"]}},
            {"name": "zip", "generator": "number", "params": {"min": 1, "max": 1}},
        ]})
        assert doc == {"city": "Lagos", "zip": 1}

    def test_array_of_strings(self, engine):
        params = {"min_count": 2, "max_count": 3, "nested_generator": "aviation/airport_code"}
        for value in sample(engine, "base", "array_of_strings", params, 50):
            assert 2 <= len(value) <= 3
            assert all(code in AIRPORT_CODES for code in value)

    def test_array_of_strings_stringifies(self, engine):
        value = engine.generate("base", "array_of_strings",
                                {"min_count": 2, "max_count": 2, "nested_generator": "boolean"})
        assert all(v in ("true", "false") for v in value)

    def test_array_of_strings_unknown_nested(self, engine):
        with pytest.raises(NotFoundError):
            engine.generate("base", "array_of_strings", {"nested_generator": "nope"})

    def test_array_of_strings_inverted(self, engine):
        with pytest.raises(ValidationError):
            engine.generate("base", "array_of_strings", {"min_count": 4, "max_count": 2})

    def test_autoincrement(self, engine):
        assert sample(engine, "base", "autoincrement", {"sequence": "a"}, 3) == [1, 2, 3]
        params = {"sequence": "b", "start": 10, "step": 5}
        assert sample(engine, "base", "autoincrement", params, 3) == [10, 15, 20]
        assert engine.generate("base", "autoincrement", {"sequence": "a"}) == 4
        engine.reseed(1)
        assert engine.generate("base", "autoincrement", {"sequence": "a"}) == 1


class TestIdentifiers:
    """Identifier formats."""

    def test_uuid_v4(self, engine):
        for value in sample(engine, "base", "uuid"):
            assert uuid.UUID(value).version == 4

    def test_uuid_v1(self, engine):
        value = engine.generate("base", "uuid", {"version": "1"})
        assert uuid.UUID(value).version == 1

    def test_objectid(self, engine):
        value = engine.generate("base", "mongodb_objectid")
        assert re.fullmatch(r"[0-9a-f]{24}", value)
        seconds = int(value[:8], 16)
        assert REFERENCE.timestamp() - 366 * 86400 <= seconds <= REFERENCE.timestamp()

    def test_min_max_keys(self, engine):
        assert engine.generate("base", "mongodb_minkey") == {"$minKey": 1}
        assert engine.generate("base", "mongodb_maxkey") == {"$maxKey": 1}


class TestPeople:
    """People and contact producers."""

    def test_email_domain(self, engine):
        value = engine.generate("base", "email", {"domain": "Example.com"})
        assert value.endswith("@example.com")

    def test_names_capitalized(self, engine):
        for value in sample(engine, "base", "firstname", count=50):
            assert value[0].isupper()

    def test_phone_formats(self, engine):
        assert re.fullmatch(r"\(\d{3}\) \d{3}-\d{4}", engine.generate("base", "phone"))
        assert re.fullmatch(r"\d{3}-\d{4}", engine.generate("base", "phone", {"format": "local"}))
        intl = engine.generate("base", "phone", {"format": "international", "country": "NG"})
        assert re.fullmatch(r"\+234 \d{3} \d{3} \d{4}", intl)

    def test_phone_bad_format(self, engine):
        with pytest.raises(ValidationError):
            engine.generate("base", "phone", {"format": "galactic"})

    def test_password_classes(self, engine):
        for value in sample(engine, "base", "password", {"length": 8}, 500):
            assert len(value) == 8
            assert any(c.islower() for c in value)
            assert any(c.isupper() for c in value)
            assert any(c.isdigit() for c in value)
            assert any(c in SYMBOLS for c in value)

    def test_password_without_symbols(self, engine):
        params = {"length": 30, "include_symbols": False, "include_numbers": "false"}
        for value in sample(engine, "base", "password", params, 100):
            assert value.isalpha()

    def test_password_length_bounds(self, engine):
        with pytest.raises(ValidationError):
            engine.generate("base", "password", {"length": 3})

    def test_address_single_line(self, engine):
        assert "\n" not in engine.generate("base", "address")


class TestTemporal:
    """Date and time producers."""

    def test_date_window(self, engine):
        params = {"start_date": "2024-01-01", "end_date": "2024-01-31"}
        for value in sample(engine, "base", "date", params):
            assert "2024-01-01" <= value <= "2024-01-31"

    def test_date_default_window(self, engine):
        for value in sample(engine, "base", "date"):
            assert "2023-06-01" <= value <= "2024-06-01"

    def test_datetime_rfc3339(self, engine):
        value = engine.generate("base", "datetime")
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", value)

    def test_datetime_custom_format(self, engine):
        value = engine.generate("base", "datetime", {"format": "%Y/%m/%d %H:%M"})
        assert re.fullmatch(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}", value)

    def test_inverted_window(self, engine):
        with pytest.raises(ValidationError):
            engine.generate("base", "date", {"start_date": "2024-02-01", "end_date": "2024-01-01"})

    def test_bad_date(self, engine):
        with pytest.raises(ValidationError):
            engine.generate("base", "date", {"start_date": "yesterday"})

    def test_time_and_timestamp(self, engine):
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", engine.generate("base", "time"))
        stamp = engine.generate("base", "timestamp")
        assert REFERENCE.timestamp() - 366 * 86400 <= stamp <= REFERENCE.timestamp()


class TestText:
    """Text producers."""

    def test_text_length_and_charset(self, engine):
        for value in sample(engine, "base", "text", {"min": 5, "max": 8, "charset": "ab"}):
            assert 5 <= len(value) <= 8
            assert set(value) <= {"a", "b"}

    def test_sentence_word_count(self, engine):
        value = engine.generate("base", "sentence", {"word_count": 6})
        assert len(value.split()) == 6

    def test_paragraph_sentences(self, engine):
        value = engine.generate("base", "paragraph", {"sentence_count": 4, "word_count": 3})
        assert value.count(".") == 4

    def test_char(self, engine):
        assert all(len(c) == 1 and c.isalpha() for c in sample(engine, "base", "char"))


class TestNetwork:
    """Network producers."""

    def test_addresses(self, engine):
        ipaddress.IPv4Address(engine.generate("base", "ip"))
        ipaddress.IPv6Address(engine.generate("base", "ipv6"))
        assert re.fullmatch(r"([0-9a-f]{2}:){5}[0-9a-f]{2}", engine.generate("base", "mac_address"))

    def test_cidr_is_network(self, engine):
        for value in sample(engine, "base", "cidr", {"min_prefix": 16, "max_prefix": 24}):
            network = ipaddress.IPv4Network(value)
            assert 16 <= network.prefixlen <= 24

    def test_cidr_inverted(self, engine):
        with pytest.raises(ValidationError):
            engine.generate("base", "cidr", {"min_prefix": 24, "max_prefix": 16})

    def test_inet(self, engine):
        ipaddress.IPv4Interface(engine.generate("base", "inet"))


class TestDatabaseFlavors:
    """MongoDB, PostgreSQL, MySQL and SQLite encodings."""

    def test_mongo_decimal128(self, engine):
        value = engine.generate("base", "mongodb_decimal128", {"min": 0, "max": 10, "precision": 3})
        assert re.fullmatch(r"\d+\.\d{3}", value["$numberDecimal"])

    @pytest.mark.parametrize("subtype,code,size", [("uuid", "04", 16), ("md5", "05", 16), ("generic", "00", 7)])
    def test_mongo_binary(self, engine, subtype, code, size):
        value = engine.generate("base", "mongodb_binary", {"subtype": subtype, "size": 7})
        assert value["$binary"]["subType"] == code
        assert len(base64.b64decode(value["$binary"]["base64"])) == size

    def test_mongo_timestamp(self, engine):
        value = engine.generate("base", "mongodb_timestamp")["$timestamp"]
        assert value["i"] >= 1 and value["t"] > 0

    def test_postgres_box_corners(self, engine):
        value = engine.generate("base", "postgres_box")
        x1, y1, x2, y2 = map(float, re.findall(r"-?\d+\.\d+", value))
        assert x1 >= x2 and y1 >= y2

    def test_postgres_path(self, engine):
        assert engine.generate("base", "postgres_path", {"closed": True}).startswith("(")
        assert engine.generate("base", "postgres_path").startswith("[")

    @pytest.mark.parametrize("kind", ["int4range", "numrange", "daterange", "tsrange", "tstzrange"])
    def test_postgres_range_half_open(self, engine, kind):
        value = engine.generate("base", "postgres_range", {"kind": kind, "min": 1, "max": 50})
        assert value.startswith("[") and value.endswith(")")

    def test_postgres_int_range_order(self, engine):
        for value in sample(engine, "base", "postgres_range", {"min": 1, "max": 5}):
            lo, hi = map(int, value[1:-1].split(","))
            assert lo < hi

    def test_postgres_bit_and_bytea(self, engine):
        assert re.fullmatch(r"[01]{12}", engine.generate("base", "postgres_bit", {"length": 12}))
        assert re.fullmatch(r"\\x[0-9a-f]{8}", engine.generate("base", "postgres_bytea", {"size": 4}))

    def test_postgres_tsvector_sorted(self, engine):
        value = engine.generate("base", "postgres_tsvector", {"word_count": 5})
        words = [part.split(":")[0].strip("'") for part in value.split()]
        assert words == sorted(words)

    @pytest.mark.parametrize("name,low,high", [
        ("mysql_tinyint", -128, 127),
        ("mysql_smallint", -32768, 32767),
        ("mysql_mediumint", -8388608, 8388607),
    ])
    def test_mysql_integer_widths(self, engine, name, low, high):
        assert all(low <= v <= high for v in sample(engine, "base", name, count=500))

    def test_mysql_unsigned(self, engine):
        values = sample(engine, "base", "mysql_tinyint", {"unsigned": True}, 500)
        assert all(0 <= v <= 255 for v in values)

    def test_mysql_polygon_closed(self, engine):
        value = engine.generate("base", "mysql_polygon")
        ring = value[len("POLYGON(("):-2].split(", ")
        assert ring[0] == ring[-1]

    def test_mysql_set_subset_in_order(self, engine):
        options = ["a", "b", "c", "d"]
        for value in sample(engine, "base", "mysql_set", {"values": options}):
            chosen = value.split(",")
            assert chosen and chosen == [o for o in options if o in chosen]

    def test_mysql_decimal(self, engine):
        assert re.fullmatch(r"-?\d+\.\d{2}", engine.generate("base", "mysql_decimal", {"precision": 6}))
        with pytest.raises(ValidationError):
            engine.generate("base", "mysql_decimal", {"precision": 2, "scale": 3})

    def test_mysql_year(self, engine):
        assert all(1901 <= v <= 2155 for v in sample(engine, "base", "mysql_year"))

    def test_sqlite(self, engine):
        assert re.fullmatch(r"[0-9A-F]{32}", engine.generate("base", "sqlite_blob"))
        assert set(sample(engine, "base", "sqlite_boolean")) == {0, 1}
        value = engine.generate("base", "sqlite_datetime")
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", value)


class TestIndustries:
    """Aviation and health producers."""

    def test_flight_schedule_json(self, engine):
        data = json.loads(engine.generate("aviation", "flight_schedule"))
        assert sorted(data) == ["arrival_date", "arrival_time", "departure_date", "departure_time"]

    def test_flight_schedule_text(self, engine):
        value = engine.generate("aviation", "flight_schedule", {"format": "text"})
        assert value.startswith("Departure: ")

    def test_flight_info_distinct_airports(self, engine):
        for _ in range(50):
            data = json.loads(engine.generate("aviation", "flight_info"))
            assert data["origin"] != data["destination"]

    def test_scalar_accepts_format(self, engine):
        assert engine.generate("health", "blood_type", {"format": "text"}) in BLOOD_TYPES

    def test_medical_record(self, engine):
        data = json.loads(engine.generate("health", "medical_record"))
        assert re.fullmatch(r"P\d{8}", data["patient_id"])
        assert len(set(data["conditions"])) == len(data["conditions"])
        assert data["last_updated"].endswith("Z")

    def test_vital_sign_ranges(self, engine):
        data = json.loads(engine.generate("health", "vital_sign"))
        assert 90 <= data["blood_pressure"]["systolic"] <= 120
        assert 97.0 <= data["temperature"]["value"] <= 99.0

    def test_lab_result_text(self, engine):
        assert "Glucose" in engine.generate("health", "lab_result", {"format": "text"})
