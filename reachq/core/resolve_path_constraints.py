"""Path Constraint Resolution — raw start/end/through/avoid → PathConstraints.

Invariants:
    - All functions are PURE: no IO, no side effects
    - start/end are always resolved (their defaults mean "everything")
    - A blank start/end (empty or whitespace) means "everything" like its default
    - through/avoid are resolved ONLY when explicitly supplied; None stays None
    - An explicitly supplied blank through/avoid is an error, not absence

Design Decisions:
    - Explicit None checks for waypoints: resolving a missing waypoint as "all nodes"
      would require transit through (or forbid) every node, which no user means
"""

from dataclasses import dataclass

from reachq.core.domain_types import ALL_EXPRESSION
from reachq.core.resolver_protocols import (
    LocationSpecifierResolver, NodeSpecifierResolver, PathConstraintsInputLike,
)
from reachq.core.specifiers import (
    LocationSpecifier, NodeSpecifier, resolve_expression,
)


@dataclass(frozen=True)
class PathConstraints:
    """Resolved path constraints. None on a waypoint means unconstrained."""
    start_location: LocationSpecifier
    end_location: NodeSpecifier
    transit_locations: NodeSpecifier | None = None
    forbidden_locations: NodeSpecifier | None = None


def _or_everything(expression: str | None) -> str:
    return (expression or "").strip() or ALL_EXPRESSION


def _optional_nodes(
    field: str, expression: str | None, nodes: NodeSpecifierResolver,
) -> NodeSpecifier | None:
    if expression is None:
        return None
    return resolve_expression(field, expression, nodes.resolve)


def resolve_path_constraints(
    path: PathConstraintsInputLike,
    locations: LocationSpecifierResolver,
    nodes: NodeSpecifierResolver,
) -> PathConstraints:
    """Resolve every path constraint expression against the injected resolvers."""
    start = resolve_expression(
        "pathConstraints.startLocation",
        _or_everything(path.start_location),
        locations.resolve,
    )
    end = resolve_expression(
        "pathConstraints.endLocation",
        _or_everything(path.end_location),
        nodes.resolve,
    )
    return PathConstraints(
        start_location=start,
        end_location=end,
        transit_locations=_optional_nodes(
            "pathConstraints.transitLocations", path.transit_locations, nodes,
        ),
        forbidden_locations=_optional_nodes(
            "pathConstraints.forbiddenLocations", path.forbidden_locations, nodes,
        ),
    )
