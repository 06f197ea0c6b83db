"""Helpers for syncing child rows of an aggregate."""

from typing import Any, Callable, Hashable, Iterable, List


def sync_children(
    models: Iterable[Any],
    entities: Iterable[Any],
    key: Callable[[Any], Hashable],
    create: Callable[[Any], Any],
    update: Callable[[Any, Any], Any],
) -> List[Any]:
    """Match child entities to existing rows by key.

    Existing rows are updated in place and new entities become new rows.
    Rows without a matching entity are left out of the returned list, so
    assigning it to a ``delete-orphan`` relationship deletes them.

    Args:
        models: Rows currently attached to the parent
        entities: Domain children that should be persisted
        key: Extracts the matching key from a row or an entity
        create: Builds a new row from an entity
        update: Copies an entity onto an existing row

    Returns:
        Rows to assign to the relationship
    """
    existing = {key(model): model for model in models}
    result = []
    for entity in entities:
        model = existing.get(key(entity))
        if model is None:
            model = create(entity)
        else:
            update(entity, model)
        result.append(model)
    return result
