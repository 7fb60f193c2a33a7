"""IP-Space Strategy Selection — asymmetric source vs. destination address spaces.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Destination goes through the universe strategy: absent → every address
    - Source goes through the infer-from-location strategy: absent → addresses
      consistent with the resolved start locations, never the full universe
    - Strategies are injected; this module only decides which one gets which input

Design Decisions:
    - Source/destination kept as two functions: the asymmetry is the contract,
      so it should be impossible to call one strategy with the other's inputs
"""

from reachq.core.resolver_protocols import HeaderConstraintsLike, IpSpaceStrategy
from reachq.core.specifiers import (
    IpSpaceSpecifier, LocationSpecifier, resolve_expression,
)


def resolve_source_ip_space(
    headers: HeaderConstraintsLike,
    start_locations: LocationSpecifier,
    strategy: IpSpaceStrategy,
) -> IpSpaceSpecifier:
    """Source addresses: srcIps, or inferred from where the flow starts."""
    return resolve_expression(
        "headers.srcIps", headers.src_ips,
        lambda e: strategy.build(e, start_locations),
    )


def resolve_destination_ip_space(
    headers: HeaderConstraintsLike, strategy: IpSpaceStrategy,
) -> IpSpaceSpecifier:
    """Destination addresses: dstIps, or the whole address universe."""
    return resolve_expression("headers.dstIps", headers.dst_ips, strategy.build)


def resolve_ip_spaces(
    headers: HeaderConstraintsLike,
    start_locations: LocationSpecifier,
    source_strategy: IpSpaceStrategy,
    destination_strategy: IpSpaceStrategy,
) -> tuple[IpSpaceSpecifier, IpSpaceSpecifier]:
    """Return (source, destination) IP-space specifiers."""
    return (
        resolve_source_ip_space(headers, start_locations, source_strategy),
        resolve_destination_ip_space(headers, destination_strategy),
    )
