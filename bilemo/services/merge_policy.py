"""
Merge policy used by every PUT endpoint.

Only the fields the client actually sent are applied.  A field sent as
null, false, 0 or "" is applied as sent; a field left out keeps its stored
value.
"""

from typing import Any, Dict, Iterable, Type

from pydantic import BaseModel


def sent_fields(payload: BaseModel, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """Return the fields present in the request body."""
    return payload.model_dump(exclude_unset=True, exclude=set(exclude))


def merge_fields(entity, payload: BaseModel, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Copy the sent fields of payload onto entity.  Returns the applied
    changes.
    """
    changes = sent_fields(payload, exclude)
    for field, value in changes.items():
        setattr(entity, field, value)
    return changes


def entity_state(entity, schema: Type[BaseModel]) -> Dict[str, Any]:
    """
    Snapshot of the entity attributes named by schema, used to re-validate
    the merged result against the create rules.
    """
    return {
        field: getattr(entity, field)
        for field in schema.model_fields
        if hasattr(entity, field)
    }


def merged_state(
    entity, payload: BaseModel, schema: Type[BaseModel], exclude: Iterable[str] = ()
) -> Dict[str, Any]:
    """
    The entity as it would look once payload is merged, without touching
    the entity itself.
    """
    state = entity_state(entity, schema)
    state.update(sent_fields(payload, exclude))
    return state
