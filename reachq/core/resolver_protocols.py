"""Boundary Protocols — contracts between the core and expression resolvers.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Resolvers raise ValueError on unparsable input; core attaches field context
    - SpecifierResolvers is built once per process and only read afterwards

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Explicit bundle passed as an argument instead of a name-based global registry:
      tests inject fakes, nothing is loaded behind the caller's back
    - *Like protocols let core read pydantic request models without importing schemas/
"""

from dataclasses import dataclass
from typing import Protocol, Sequence

from reachq.core.specifiers import (
    IpSpaceSpecifier, LocationSpecifier, NodeSpecifier,
)


class NodeSpecifierResolver(Protocol):
    """Resolves a node expression into a NodeSpecifier."""
    def resolve(self, expression: str) -> NodeSpecifier: ...


class LocationSpecifierResolver(Protocol):
    """Resolves a location expression into a LocationSpecifier."""
    def resolve(self, expression: str) -> LocationSpecifier: ...


class IpSpaceStrategy(Protocol):
    """Builds an IP-space specifier; decides what an absent expression means."""
    def build(
        self, expression: str | None, locations: LocationSpecifier | None = None,
    ) -> IpSpaceSpecifier: ...


@dataclass(frozen=True)
class SpecifierResolvers:
    """Every resolver/strategy one query translation needs."""
    locations: LocationSpecifierResolver
    nodes: NodeSpecifierResolver
    source_ips: IpSpaceStrategy
    destination_ips: IpSpaceStrategy


class TcpFlagsLike(Protocol):
    """Per-flag match condition: True/False must match, None is don't-care."""
    cwr: bool | None
    ece: bool | None
    urg: bool | None
    ack: bool | None
    psh: bool | None
    rst: bool | None
    syn: bool | None
    fin: bool | None


class HeaderConstraintsLike(Protocol):
    """Structural contract for packet header constraints."""
    applications: str | None
    dscps: str | None
    dst_ips: str | None
    dst_ports: str | None
    ecns: str | None
    fragment_offsets: str | None
    icmp_codes: str | None
    icmp_types: str | None
    ip_protocols: str | None
    packet_lengths: str | None
    src_ips: str | None
    src_ports: str | None
    tcp_flags: Sequence[TcpFlagsLike] | None


class PathConstraintsInputLike(Protocol):
    """Structural contract for raw path constraints."""
    start_location: str
    end_location: str
    transit_locations: str | None
    forbidden_locations: str | None
