"""Reachability Routes — translate a reachability query into engine parameters.

Invariants:
    - POST /api/v1/reachability/parameters never returns partial parameters:
      any InvalidSpecifierError becomes a 400 through the global handler
    - GET /api/v1/reachability/defaults returns the all-defaults query

Design Decisions:
    - Thin route: translation lives in services/reachability_question
"""

import logging

from fastapi import APIRouter, Depends

from reachq.api.dependencies import get_resolvers
from reachq.core.resolver_protocols import SpecifierResolvers
from reachq.schemas.parameters import ResolvedParametersResponse
from reachq.schemas.query import ReachabilityQuery
from reachq.services.reachability_question import build_reachability_parameters

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/reachability", tags=["reachability"])


@router.post("/parameters", response_model=ResolvedParametersResponse)
async def resolve_parameters(
    query: ReachabilityQuery,
    resolvers: SpecifierResolvers = Depends(get_resolvers),
):
    """Resolve every specifier in the query and return engine parameters."""
    params = build_reachability_parameters(query, resolvers)
    return ResolvedParametersResponse.from_parameters(params)


@router.get("/defaults", response_model=ReachabilityQuery)
async def get_default_query():
    """The query every omitted field falls back to."""
    return ReachabilityQuery()
