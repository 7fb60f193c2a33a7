"""Flexible Resolvers — tests for the default node/location/IP grammar.

Tests cover:
    - "*" is reserved for everything; anything else is a regex
    - location forms: node, node[iface], enter(...)
    - IP forms: addresses, prefixes, ranges, exclusions, ofLocation(...)
    - the two IP strategies differ only on absent/blank input
    - malformed input raises ValueError
    - build_default_resolvers wires the asymmetric strategies
"""

from ipaddress import IPv4Network

import pytest

from reachq.core.domain_types import LocationType
from reachq.core.specifiers import (
    AllLocations, AllNodes, ConstantIpSpace, InferFromLocationIpSpace,
    InterfaceLocations, LocationIpSpace, NameRegexNodes, UniverseIpSpace,
)
from reachq.infrastructure.flexible_resolvers import (
    FlexibleLocationResolver, FlexibleNodeResolver,
    InferFromLocationIpSpaceStrategy, UniverseIpSpaceStrategy,
    build_default_resolvers, parse_ip_space,
)


# ─── nodes ───────────────────────────────────────────────────────

def test_node_star_is_all_nodes():
    assert FlexibleNodeResolver().resolve(" * ") == AllNodes()


def test_node_expression_is_regex():
    assert FlexibleNodeResolver().resolve("as[12]border.*") == NameRegexNodes("as[12]border.*")


@pytest.mark.parametrize("expression", [
    "", "   ", "leaf(", "**", "a{4294967296}", "(" * 2000 + "a" + ")" * 2000,
])
def test_bad_node_expression_raises(expression):
    with pytest.raises(ValueError):
        FlexibleNodeResolver().resolve(expression)


# ─── locations ───────────────────────────────────────────────────

def test_location_star_is_all_locations():
    assert FlexibleLocationResolver().resolve("*") == AllLocations()


def test_location_node_only():
    assert FlexibleLocationResolver().resolve("leaf1") == InterfaceLocations("leaf1")


def test_location_node_and_interface():
    assert FlexibleLocationResolver().resolve("leaf1[Ethernet1/.*]") == InterfaceLocations(
        "leaf1", "Ethernet1/.*",
    )


def test_location_star_node_with_interface():
    spec = FlexibleLocationResolver().resolve("*[Loopback0]")
    assert spec == InterfaceLocations(".*", "Loopback0")


def test_location_enter_selects_interface_link():
    spec = FlexibleLocationResolver().resolve("enter(leaf1[eth0])")
    assert spec == InterfaceLocations("leaf1", "eth0", LocationType.INTERFACE_LINK)


@pytest.mark.parametrize("expression", ["", "enter()", "leaf1[]", "leaf1[eth(]", "[eth0]"])
def test_bad_location_expression_raises(expression):
    with pytest.raises(ValueError):
        FlexibleLocationResolver().resolve(expression)


# ─── ip spaces ───────────────────────────────────────────────────

def test_ip_entries_collapse():
    space = parse_ip_space("10.0.0.0/25, 10.0.0.128/25, 1.1.1.1", FlexibleLocationResolver())
    assert space == ConstantIpSpace((
        IPv4Network("1.1.1.1/32"), IPv4Network("10.0.0.0/24"),
    ))


def test_ip_range_is_summarized():
    space = parse_ip_space("10.0.0.0-10.0.0.3", FlexibleLocationResolver())
    assert space == ConstantIpSpace((IPv4Network("10.0.0.0/30"),))


def test_ip_exclusions():
    space = parse_ip_space("10.0.0.0/24 \\ 10.0.0.5", FlexibleLocationResolver())
    assert space == ConstantIpSpace(
        includes=(IPv4Network("10.0.0.0/24"),),
        excludes=(IPv4Network("10.0.0.5/32"),),
    )


def test_host_bits_are_tolerated():
    space = parse_ip_space("10.0.0.7/24", FlexibleLocationResolver())
    assert space == ConstantIpSpace((IPv4Network("10.0.0.0/24"),))


def test_of_location_expression():
    space = parse_ip_space("ofLocation(leaf1[eth0])", FlexibleLocationResolver())
    assert space == LocationIpSpace(InterfaceLocations("leaf1", "eth0"))


@pytest.mark.parametrize("expression", [
    "", "10.0.0.300", "10.0.0.0/40", "10.0.0.9-10.0.0.1", "1.1.1.1,", "1.1.1.1 \\",
])
def test_bad_ip_expression_raises(expression):
    with pytest.raises(ValueError):
        parse_ip_space(expression, FlexibleLocationResolver())


# ─── strategies ──────────────────────────────────────────────────

@pytest.mark.parametrize("absent", [None, "", "  "])
def test_universe_strategy_absent_is_universe(absent):
    strategy = UniverseIpSpaceStrategy(FlexibleLocationResolver())
    assert strategy.build(absent, InterfaceLocations("leaf1")) == UniverseIpSpace()


@pytest.mark.parametrize("absent", [None, "", "  "])
def test_infer_strategy_absent_is_inferred_from_locations(absent):
    strategy = InferFromLocationIpSpaceStrategy(FlexibleLocationResolver())
    locations = InterfaceLocations("leaf1")
    assert strategy.build(absent, locations) == InferFromLocationIpSpace(locations)


def test_infer_strategy_without_locations_uses_all_locations():
    strategy = InferFromLocationIpSpaceStrategy(FlexibleLocationResolver())
    assert strategy.build(None) == InferFromLocationIpSpace(AllLocations())


def test_strategies_agree_on_explicit_expressions():
    locations = FlexibleLocationResolver()
    universe = UniverseIpSpaceStrategy(locations)
    infer = InferFromLocationIpSpaceStrategy(locations)
    assert universe.build("192.168.1.0/24") == infer.build("192.168.1.0/24")


def test_default_bundle_wiring():
    bundle = build_default_resolvers()
    assert isinstance(bundle.nodes, FlexibleNodeResolver)
    assert isinstance(bundle.locations, FlexibleLocationResolver)
    assert isinstance(bundle.source_ips, InferFromLocationIpSpaceStrategy)
    assert isinstance(bundle.destination_ips, UniverseIpSpaceStrategy)
