# SPDX-License-Identifier: MIT


class GoodDayError(Exception):
    """Base class for errors raised by the habit tracking core."""

    pass


class ValidationError(GoodDayError):
    """Raised when an operation is rejected before any mutation happens."""

    pass


class NotFoundError(GoodDayError):
    """Raised when an operation references an unknown item or group."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(f"Unknown {entity_type}: {entity_id}")
        self.entity_type = entity_type
        self.entity_id = entity_id


class PersistenceFailure(GoodDayError):
    """Raised when the storage collaborator fails to load or write data."""

    pass
