"""Errors raised across the ordering engine boundary."""


class OrderingError(Exception):
    """Base class for ordering engine failures."""
    pass


class ScopeNotFound(OrderingError):
    """The target scope (a list) does not exist."""

    def __init__(self, scope: str):
        super().__init__(f"Scope not found: {scope}")
        self.scope = scope


class EntityNotFound(OrderingError):
    """The entity being moved, edited or deleted does not exist."""

    def __init__(self, entity_id: str):
        super().__init__(f"Entity not found: {entity_id}")
        self.entity_id = entity_id


class InvalidMove(OrderingError):
    """The requested scope change is not allowed for this kind of entity."""
    pass


class VersionConflict(OrderingError):
    """The stored version advanced since the caller last read the entity."""

    def __init__(self, entity_id: str, expected: int, actual: int):
        super().__init__(
            f"Version conflict on {entity_id}: expected {expected}, found {actual}"
        )
        self.entity_id = entity_id
        self.expected = expected
        self.actual = actual


class RankCollision(OrderingError):
    """Allocation still collided after a fresh reindex. Internal fault."""
    pass


class StoreUnavailable(OrderingError):
    """The backing store failed. Propagated unchanged, never retried."""
    pass
