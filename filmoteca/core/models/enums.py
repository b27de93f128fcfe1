# filmoteca/core/models/enums.py
from enum import Enum


class Action(str, Enum):
    INIT             = "init"
    LIST             = "list"
    ADD              = "add"
    UPDATE           = "update"
    DELETE           = "delete"
    CLEAR            = "clear"
    LIST_BY_DIRECTOR = "list_by_director"
    LIST_BY_GENRE    = "list_by_genre"
    EXIT             = "exit"


class AddOutcome(Enum):
    ADDED     = "added"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
