"""Network producers."""

from __future__ import annotations

import ipaddress
from typing import TYPE_CHECKING, Any, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import bounds, case_params, faker, rng

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def random_ipv4(params: Mapping[str, Any]) -> ipaddress.IPv4Address:
    return ipaddress.IPv4Address(rng(params).getrandbits(32))


def generate_ip(params: Mapping[str, Any]) -> str:
    return str(random_ipv4(params))


def generate_ipv6(params: Mapping[str, Any]) -> str:
    return str(ipaddress.IPv6Address(rng(params).getrandbits(128)))


def generate_domain(params: Mapping[str, Any]) -> str:
    return faker(params).domain_name()


def generate_url(params: Mapping[str, Any]) -> str:
    return faker(params).url()


def generate_mac_address(params: Mapping[str, Any]) -> str:
    value = rng(params).getrandbits(48)
    return ":".join(f"{(value >> shift) & 0xFF:02x}" for shift in range(40, -8, -8))


def random_network(params: Mapping[str, Any], prefix: int) -> ipaddress.IPv4Network:
    return ipaddress.IPv4Network((int(random_ipv4(params)), prefix), strict=False)


def generate_cidr(params: Mapping[str, Any]) -> str:
    low, high = bounds(params, "min_prefix", "max_prefix")
    prefix = rng(params).randint(low, high)
    return str(random_network(params, prefix))


def generate_inet(params: Mapping[str, Any]) -> str:
    """Host address with its network mask, e.g. ``192.168.1.5/24``."""
    prefix = rng(params).randint(8, 32)
    address = random_ipv4(params)
    return f"{address}/{prefix}"


def register(builder: EngineBuilder) -> None:
    builder.add(GeneratorInfo("base", "ip", "Random IPv4 address", "192.168.1.1"), generate_ip)
    builder.add(GeneratorInfo("base", "ipv6", "Random IPv6 address", "2001:db8::1"), generate_ipv6)
    builder.add(
        GeneratorInfo("base", "domain", "Random domain name", "example.com", case_params()),
        generate_domain,
    )
    builder.add(
        GeneratorInfo("base", "url", "Random URL", "https://www.example.com/", case_params()),
        generate_url,
    )
    builder.add(
        GeneratorInfo("base", "mac_address", "Random MAC address", "00:1b:44:11:3a:b7",
                      case_params(affixes=False)),
        generate_mac_address,
    )
    builder.add(
        GeneratorInfo(
            "base", "cidr", "Random IPv4 network in CIDR notation", "10.20.0.0/16",
            [
                ParameterDef("min_prefix", ParamType.INT, "Smallest prefix length", default=8, min=0, max=32),
                ParameterDef("max_prefix", ParamType.INT, "Largest prefix length", default=30, min=0, max=32),
            ],
        ),
        generate_cidr,
    )
    builder.add(
        GeneratorInfo("base", "inet", "Random host address with netmask", "192.168.1.5/24"),
        generate_inet,
    )
