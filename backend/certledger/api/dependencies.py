"""Route Dependencies: access to the world-state manager set up by the lifespan."""

from fastapi import Request

from certledger.infrastructure.world_state import WorldStateManager


def get_world_state(request: Request) -> WorldStateManager:
    """FastAPI dependency for the world-state manager."""
    manager = getattr(request.app.state, "world_state", None)
    if manager is None:
        raise RuntimeError("World state not initialized")
    return manager
