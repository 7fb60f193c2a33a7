"""Route Dependencies — hands the process-wide resolver bundle to handlers.

Invariants:
    - The bundle is built once in the lifespan and stored on app.state
    - Handlers receive it via Depends(get_resolvers); tests override this function
"""

from fastapi import Request

from reachq.core.errors import ResolversNotLoadedError
from reachq.core.resolver_protocols import SpecifierResolvers


def get_resolvers(request: Request) -> SpecifierResolvers:
    resolvers = getattr(request.app.state, "resolvers", None)
    if resolvers is None:
        raise ResolversNotLoadedError()
    return resolvers
