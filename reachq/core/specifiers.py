"""Specifiers — resolved set-membership objects produced by parsing expressions.

Invariants:
    - Every specifier is a frozen dataclass: shared freely, never mutated
    - specifier_type is a stable tag used in serialized output
    - Specifiers describe sets; they never consult a topology (the engine does that)

Design Decisions:
    - Plain dataclasses + union aliases over a class hierarchy: isinstance checks
      and structural equality come for free (ADR: ExMA Functional Core)
    - Regex matching is case-insensitive full-match, as node names are case-insensitive
"""

import re
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv4Network
from typing import Any, Callable, ClassVar, TypeVar

from reachq.core.domain_types import LocationType
from reachq.core.errors import InvalidSpecifierError


def _full_match(pattern: str, value: str) -> bool:
    return re.fullmatch(pattern, value, re.IGNORECASE) is not None


# ─── Node Specifiers ─────────────────────────────────────────────

@dataclass(frozen=True)
class AllNodes:
    """Every node in the network."""
    specifier_type: ClassVar[str] = "allNodes"

    def matches(self, node: str) -> bool:
        return True


@dataclass(frozen=True)
class NameRegexNodes:
    """Nodes whose name fully matches a regex."""
    pattern: str
    specifier_type: ClassVar[str] = "nameRegexNodes"

    def matches(self, node: str) -> bool:
        return _full_match(self.pattern, node)


NodeSpecifier = AllNodes | NameRegexNodes


# ─── Location Specifiers ─────────────────────────────────────────

@dataclass(frozen=True)
class AllLocations:
    """Every interface location in the network."""
    specifier_type: ClassVar[str] = "allLocations"

    def matches(self, node: str, interface: str) -> bool:
        return True


@dataclass(frozen=True)
class InterfaceLocations:
    """Interfaces selected by node regex and optional interface regex.

    interface_pattern None selects every interface on the matching nodes.
    """
    node_pattern: str
    interface_pattern: str | None = None
    location_type: LocationType = LocationType.INTERFACE
    specifier_type: ClassVar[str] = "interfaceLocations"

    def matches(self, node: str, interface: str) -> bool:
        if not _full_match(self.node_pattern, node):
            return False
        return self.interface_pattern is None or _full_match(
            self.interface_pattern, interface,
        )


LocationSpecifier = AllLocations | InterfaceLocations


# ─── IP Space Specifiers ─────────────────────────────────────────

@dataclass(frozen=True)
class UniverseIpSpace:
    """The entire IPv4 address space."""
    specifier_type: ClassVar[str] = "universeIpSpace"


@dataclass(frozen=True)
class ConstantIpSpace:
    """Explicit prefixes: an address is in the space if included and not excluded."""
    includes: tuple[IPv4Network, ...]
    excludes: tuple[IPv4Network, ...] = ()
    specifier_type: ClassVar[str] = "constantIpSpace"

    def contains(self, ip: IPv4Address) -> bool:
        return (
            any(ip in net for net in self.includes)
            and not any(ip in net for net in self.excludes)
        )


@dataclass(frozen=True)
class InferFromLocationIpSpace:
    """Addresses consistent with the given locations (e.g. interface subnets)."""
    locations: LocationSpecifier
    specifier_type: ClassVar[str] = "inferFromLocationIpSpace"


@dataclass(frozen=True)
class LocationIpSpace:
    """Addresses owned by the given locations, from an explicit ofLocation(...)."""
    locations: LocationSpecifier
    specifier_type: ClassVar[str] = "locationIpSpace"


IpSpaceSpecifier = (
    UniverseIpSpace | ConstantIpSpace | InferFromLocationIpSpace | LocationIpSpace
)


# ─── Resolution helper ───────────────────────────────────────────

T = TypeVar("T")


def resolve_expression(
    field: str, expression: str | None, resolve: Callable[[Any], T],
) -> T:
    """Run a resolver; a ValueError becomes InvalidSpecifierError naming the field."""
    try:
        return resolve(expression)
    except ValueError as exc:
        raise InvalidSpecifierError(field, expression, str(exc)) from exc
