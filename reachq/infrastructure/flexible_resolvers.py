"""Flexible Resolvers — default expression grammar for nodes, locations, IP spaces.

Invariants:
    - Stateless: one instance is shared by every request, no locking needed
    - Unparsable input raises ValueError (core turns it into InvalidSpecifierError)
    - "*" is reserved for "everything" in node and location expressions
    - Absent/blank IP expressions are the ONLY place the two IP strategies differ

Grammar:
    node      := "*" | <regex over node names>
    location  := "*" | "enter(" iface ")" | iface
    iface     := <node regex> [ "[" <interface regex> "]" ]
    ip space  := "ofLocation(" location ")" | entries [ "\\" entries ]
    entries   := entry { "," entry }      entry := ip | prefix | ip "-" ip

Design Decisions:
    - Regexes compiled once at parse time so bad patterns fail at resolution,
      not inside the engine
    - IPv4 only: the engine's header space is IPv4
"""

import re
from ipaddress import (
    AddressValueError, IPv4Address, IPv4Network, NetmaskValueError,
    collapse_addresses, summarize_address_range,
)

from reachq.core.domain_types import ALL_EXPRESSION, LocationType
from reachq.core.resolver_protocols import (
    LocationSpecifierResolver, SpecifierResolvers,
)
from reachq.core.specifiers import (
    AllLocations, AllNodes, ConstantIpSpace, InferFromLocationIpSpace,
    InterfaceLocations, IpSpaceSpecifier, LocationIpSpace, LocationSpecifier,
    NameRegexNodes, NodeSpecifier, UniverseIpSpace,
)

_ENTER = re.compile(r"^enter\((?P<inner>.*)\)$", re.IGNORECASE)
_OF_LOCATION = re.compile(r"^ofLocation\((?P<inner>.*)\)$", re.IGNORECASE)
_INTERFACE = re.compile(r"^(?P<node>[^\[\]]+?)\s*(?:\[(?P<iface>.*)\])?$")


def _check_regex(pattern: str) -> str:
    try:
        re.compile(pattern)
    except (re.error, OverflowError, RecursionError) as exc:
        raise ValueError(f"invalid regex '{pattern}': {exc}") from None
    return pattern


def _require_text(expression: str, what: str) -> str:
    text = expression.strip()
    if not text:
        raise ValueError(f"empty {what} expression")
    return text


class FlexibleNodeResolver:
    """Node expressions: "*" or a full-match node name regex."""

    def resolve(self, expression: str) -> NodeSpecifier:
        text = _require_text(expression, "node")
        if text == ALL_EXPRESSION:
            return AllNodes()
        return NameRegexNodes(_check_regex(text))


class FlexibleLocationResolver:
    """Location expressions: "*", node[iface], optionally wrapped in enter(...)."""

    def resolve(self, expression: str) -> LocationSpecifier:
        text = _require_text(expression, "location")
        if text == ALL_EXPRESSION:
            return AllLocations()
        location_type = LocationType.INTERFACE
        enter = _ENTER.match(text)
        if enter:
            text = _require_text(enter.group("inner"), "location")
            location_type = LocationType.INTERFACE_LINK
        match = _INTERFACE.match(text)
        if not match:
            raise ValueError(f"cannot parse location '{text}'")
        node = match.group("node").strip()
        if node == ALL_EXPRESSION:
            node = ".*"
        iface = match.group("iface")
        if iface is not None:
            iface = _check_regex(_require_text(iface, "interface"))
        return InterfaceLocations(
            node_pattern=_check_regex(node),
            interface_pattern=iface,
            location_type=location_type,
        )


def _parse_entry(entry: str) -> list[IPv4Network]:
    try:
        if "-" in entry:
            first, last = (IPv4Address(p.strip()) for p in entry.split("-", 1))
            if first > last:
                raise ValueError(f"range '{entry}' has start greater than end")
            return list(summarize_address_range(first, last))
        return [IPv4Network(entry, strict=False)]
    except (AddressValueError, NetmaskValueError) as exc:
        raise ValueError(f"invalid address '{entry}': {exc}") from None


def _parse_entries(text: str) -> tuple[IPv4Network, ...]:
    networks: list[IPv4Network] = []
    for entry in text.split(","):
        networks.extend(_parse_entry(_require_text(entry, "address")))
    return tuple(collapse_addresses(networks))


def parse_ip_space(
    expression: str, locations: LocationSpecifierResolver,
) -> IpSpaceSpecifier:
    """Parse an explicit IP-space expression. Both strategies share this grammar."""
    text = _require_text(expression, "ip space")
    of_location = _OF_LOCATION.match(text)
    if of_location:
        return LocationIpSpace(locations.resolve(of_location.group("inner")))
    include, sep, exclude = text.partition("\\")
    return ConstantIpSpace(
        includes=_parse_entries(include),
        excludes=_parse_entries(exclude) if sep else (),
    )


def _is_absent(expression: str | None) -> bool:
    return expression is None or not expression.strip()


class UniverseIpSpaceStrategy:
    """Absent expression → the whole address space."""

    def __init__(self, locations: LocationSpecifierResolver):
        self._locations = locations

    def build(
        self, expression: str | None, locations: LocationSpecifier | None = None,
    ) -> IpSpaceSpecifier:
        if _is_absent(expression):
            return UniverseIpSpace()
        return parse_ip_space(expression, self._locations)


class InferFromLocationIpSpaceStrategy:
    """Absent expression → addresses consistent with the given locations."""

    def __init__(self, locations: LocationSpecifierResolver):
        self._locations = locations

    def build(
        self, expression: str | None, locations: LocationSpecifier | None = None,
    ) -> IpSpaceSpecifier:
        if _is_absent(expression):
            return InferFromLocationIpSpace(locations or AllLocations())
        return parse_ip_space(expression, self._locations)


def build_default_resolvers() -> SpecifierResolvers:
    """Build the process-wide resolver bundle. Called once at startup."""
    locations = FlexibleLocationResolver()
    return SpecifierResolvers(
        locations=locations,
        nodes=FlexibleNodeResolver(),
        source_ips=InferFromLocationIpSpaceStrategy(locations),
        destination_ips=UniverseIpSpaceStrategy(locations),
    )
