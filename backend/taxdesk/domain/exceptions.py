"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RecordStoreError(Exception):
    """Base class for failures talking to the remote record store."""

    def __init__(self, resource: str, message: str):
        self.resource = resource
        self.message = message
        super().__init__(f"[{resource}] {message}")


class TransportError(RecordStoreError):
    """Non-success response or network-level failure.

    ``status_code`` is ``None`` when no response was received at all.
    """

    def __init__(self, resource: str, status_code: int | None, message: str):
        self.status_code = status_code
        super().__init__(resource, message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class DecodeError(RecordStoreError):
    """A success response whose body does not match the expected shape."""


class ValidationError(Exception):
    """Local, pre-submission validation failure of an edit."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class TransactionStateError(Exception):
    """An edit operation was attempted in a phase that does not allow it."""

    def __init__(self, operation: str, phase: str):
        self.operation = operation
        self.phase = phase
        super().__init__(f"Cannot {operation} while edit transaction is {phase}")


class SessionStateError(Exception):
    """A session operation was attempted in a load state that does not allow it."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state}")
