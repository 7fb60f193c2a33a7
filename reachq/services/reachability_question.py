"""Reachability Question — runs the full query → ResolvedParameters translation.

Invariants:
    - Resolvers are passed in, never looked up globally
    - Dispositions, headers and path constraints resolve independently; IP spaces
      resolve after the path because the source side needs the start locations
    - First InvalidSpecifierError aborts the translation; nothing partial escapes

Design Decisions:
    - Imperative shell around pure core functions: this is the only place in the
      translation that logs (ADR: ExMA impureim sandwich)
"""

import logging

from reachq.core.assemble_parameters import ResolvedParameters, assemble_parameters
from reachq.core.resolve_dispositions import resolve_dispositions
from reachq.core.resolve_headers import resolve_header_space
from reachq.core.resolve_ip_spaces import resolve_ip_spaces
from reachq.core.resolve_path_constraints import resolve_path_constraints
from reachq.core.resolver_protocols import SpecifierResolvers
from reachq.schemas.query import ReachabilityQuery

logger = logging.getLogger(__name__)


def build_reachability_parameters(
    query: ReachabilityQuery, resolvers: SpecifierResolvers,
) -> ResolvedParameters:
    """Translate one query into engine-ready parameters."""
    actions = resolve_dispositions(query.actions)
    header_space = resolve_header_space(query.headers)
    path = resolve_path_constraints(
        query.path_constraints, resolvers.locations, resolvers.nodes,
    )
    source_ip_space, destination_ip_space = resolve_ip_spaces(
        query.headers, path.start_location,
        resolvers.source_ips, resolvers.destination_ips,
    )
    params = assemble_parameters(
        actions=actions,
        header_space=header_space,
        path=path,
        source_ip_space=source_ip_space,
        destination_ip_space=destination_ip_space,
        ignore_filters=query.ignore_filters,
        max_traces=query.max_traces,
    )
    logger.info(
        "Resolved reachability parameters",
        extra={
            "question": query.name,
            "action_count": len(actions),
            "max_traces": params.max_traces,
        },
    )
    return params
