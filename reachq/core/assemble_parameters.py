"""Parameter Assembly — compose resolved pieces into ResolvedParameters.

Invariants:
    - Pure field copying: no resolution, no validation happens here
    - specialize is always True for specifier-based reachability
    - max_traces is passed through unchecked (engine-side validation)
"""

from dataclasses import dataclass

from reachq.core.domain_types import FlowDisposition
from reachq.core.header_space import HeaderSpace
from reachq.core.resolve_path_constraints import PathConstraints
from reachq.core.specifiers import (
    IpSpaceSpecifier, LocationSpecifier, NodeSpecifier,
)


@dataclass(frozen=True)
class ResolvedParameters:
    """Engine-facing reachability parameters. Read-only after handoff."""
    actions: tuple[FlowDisposition, ...]
    header_space: HeaderSpace
    source_locations: LocationSpecifier
    source_ip_space: IpSpaceSpecifier
    destination_ip_space: IpSpaceSpecifier
    final_nodes: NodeSpecifier
    required_transit_nodes: NodeSpecifier | None
    forbidden_transit_nodes: NodeSpecifier | None
    ignore_filters: bool
    max_traces: int
    specialize: bool = True


def assemble_parameters(
    actions: tuple[FlowDisposition, ...],
    header_space: HeaderSpace,
    path: PathConstraints,
    source_ip_space: IpSpaceSpecifier,
    destination_ip_space: IpSpaceSpecifier,
    ignore_filters: bool,
    max_traces: int,
) -> ResolvedParameters:
    return ResolvedParameters(
        actions=actions,
        header_space=header_space,
        source_locations=path.start_location,
        source_ip_space=source_ip_space,
        destination_ip_space=destination_ip_space,
        final_nodes=path.end_location,
        required_transit_nodes=path.transit_locations,
        forbidden_transit_nodes=path.forbidden_locations,
        ignore_filters=ignore_filters,
        max_traces=max_traces,
        specialize=True,
    )
