class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is malformed or missing required fields."""


class DuplicateError(DomainError):
    """Raised when a uniqueness rule on the roster is violated."""

    def __init__(self, message: str = "Duplicate RFID tag or ID number"):
        super().__init__(message)


class DuplicateTagError(DuplicateError):
    def __init__(self, message: str = "RFID tag already exists"):
        super().__init__(message)


class DuplicateIdentifierError(DuplicateError):
    def __init__(self, message: str = "ID number already exists"):
        super().__init__(message)


class SectionConflictError(DuplicateError):
    def __init__(self, message: str = "Section was created concurrently, retry"):
        super().__init__(message)


class LocationNotFoundError(DomainError):
    status_code = 404

    def __init__(self, location_id: int):
        super().__init__(f"Classroom {location_id} not found")
        self.location_id = location_id


class StorageError(Exception):
    """Raised when the database is unreachable or a query fails.

    Not a DomainError: the message is logged server-side and the client only
    sees a generic failure.
    """

    status_code = 500
