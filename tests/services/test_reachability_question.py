"""Reachability Question — end-to-end translation with injected resolvers.

Tests cover:
    - all-defaults query → success dispositions, unconstrained headers,
      all-locations/all-nodes path, no waypoints, asymmetric IP spaces
    - transit "nodeA" resolves to exactly NameRegexNodes("nodeA")
    - the source IP space infers from the resolved start locations
    - first resolution failure aborts with InvalidSpecifierError
    - absent waypoints never hit the node resolver
    - one structured log record per resolved query
"""

import logging
from ipaddress import IPv4Network

import pytest

from reachq.core.domain_types import DEFAULT_MAX_TRACES, FlowDisposition as D
from reachq.core.errors import InvalidSpecifierError
from reachq.core.header_space import HeaderSpace, IntRange
from reachq.core.specifiers import (
    AllLocations, AllNodes, ConstantIpSpace, InferFromLocationIpSpace,
    InterfaceLocations, NameRegexNodes, UniverseIpSpace,
)
from reachq.schemas.query import (
    PacketHeaderConstraints, PathConstraintsInput, ReachabilityQuery,
)
from reachq.services.reachability_question import build_reachability_parameters
from tests.fake_resolvers import make_fake_resolvers


def test_all_defaults_query(resolvers):
    params = build_reachability_parameters(ReachabilityQuery(), resolvers)
    assert params.actions == (D.ACCEPTED, D.DELIVERED_TO_SUBNET, D.EXITS_NETWORK)
    assert params.header_space == HeaderSpace()
    assert params.ignore_filters is False
    assert params.max_traces == DEFAULT_MAX_TRACES
    assert params.source_locations == AllLocations()
    assert params.final_nodes == AllNodes()
    assert params.required_transit_nodes is None
    assert params.forbidden_transit_nodes is None
    assert params.source_ip_space == InferFromLocationIpSpace(AllLocations())
    assert params.destination_ip_space == UniverseIpSpace()
    assert params.specialize is True


def test_transit_node_a(resolvers):
    query = ReachabilityQuery(
        path_constraints=PathConstraintsInput(transit_locations="nodeA"),
    )
    params = build_reachability_parameters(query, resolvers)
    assert params.required_transit_nodes == NameRegexNodes("nodeA")
    assert params.forbidden_transit_nodes is None


def test_source_ip_space_follows_start_location(resolvers):
    query = ReachabilityQuery(
        path_constraints=PathConstraintsInput(start_location="enter(leaf1[eth0])"),
    )
    params = build_reachability_parameters(query, resolvers)
    assert params.source_ip_space == InferFromLocationIpSpace(params.source_locations)
    assert isinstance(params.source_locations, InterfaceLocations)


def test_full_query(resolvers):
    query = ReachabilityQuery(
        actions="dropped_acl",
        headers=PacketHeaderConstraints(
            dst_ips="10.1.0.0/16", src_ips="192.168.0.0/24", dst_ports="22",
        ),
        ignore_filters=True,
        max_traces=5,
        path_constraints=PathConstraintsInput(
            start_location="leaf1", end_location="leaf2", forbidden_locations="core.*",
        ),
    )
    params = build_reachability_parameters(query, resolvers)
    assert params.actions == (D.DENIED_IN, D.DENIED_OUT)
    assert params.header_space.dst_ports == (IntRange(22, 22),)
    assert params.source_ip_space == ConstantIpSpace((IPv4Network("192.168.0.0/24"),))
    assert params.destination_ip_space == ConstantIpSpace((IPv4Network("10.1.0.0/16"),))
    assert params.final_nodes == NameRegexNodes("leaf2")
    assert params.forbidden_transit_nodes == NameRegexNodes("core.*")
    assert params.ignore_filters is True
    assert params.max_traces == 5


def test_absent_waypoints_never_resolved():
    bundle, calls = make_fake_resolvers()
    build_reachability_parameters(ReachabilityQuery(), bundle)
    assert ("node", None) not in calls
    assert [c for c in calls if c[0] == "node"] == [("node", "*")]
    assert ("source_ips", None) in calls
    assert ("destination_ips", None) in calls


def test_invalid_specifier_aborts(resolvers):
    query = ReachabilityQuery(
        path_constraints=PathConstraintsInput(end_location="leaf("),
    )
    with pytest.raises(InvalidSpecifierError) as exc_info:
        build_reachability_parameters(query, resolvers)
    assert exc_info.value.field == "pathConstraints.endLocation"
    assert exc_info.value.expression == "leaf("


def test_logs_one_record_per_query(resolvers, caplog):
    with caplog.at_level(logging.INFO, logger="reachq.services.reachability_question"):
        build_reachability_parameters(ReachabilityQuery(), resolvers)
    records = [r for r in caplog.records if r.name == "reachq.services.reachability_question"]
    assert len(records) == 1
    assert records[0].question == "specifiersReachability"
    assert records[0].action_count == 3
