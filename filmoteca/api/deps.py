# filmoteca/api/deps.py

from fastapi import Request

from filmoteca.core.state import CollectionState


def get_state(request: Request) -> CollectionState:
    """The collection owned by the running app (set up in the lifespan)."""
    return request.app.state.collection
