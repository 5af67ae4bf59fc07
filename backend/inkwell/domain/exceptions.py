"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class PermissionDeniedError(Exception):
    """Raised when the actor may not perform a mutation.

    Covers both the author-only rule enforced by services and writes the
    persistence layer rejects under an authorization rule.
    """

    def __init__(self, action: str, entity_type: str, entity_id: int | str | None = None):
        self.action = action
        self.entity_type = entity_type
        self.entity_id = entity_id
        target = entity_type if entity_id is None else f"{entity_type} '{entity_id}'"
        super().__init__(f"Not allowed to {action} {target}")


class PersistenceError(Exception):
    """Raised for any other gateway-level failure (connection, constraint, validation)."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"{operation} failed: {message}")


class AuthenticationError(Exception):
    """Raised when credentials or a session token cannot be verified."""


class InvalidUploadError(Exception):
    """Raised when an uploaded file is rejected (type, size, empty)."""
