"""Custom exceptions for document service operations."""


class DocumentServiceError(Exception):
    """Base exception for document service errors."""

    pass


class ValidationError(DocumentServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class UnauthenticatedError(DocumentServiceError):
    """Raised when an operation requires a caller identity and none was given."""

    def __init__(self, message: str = "You must be authenticated"):
        super().__init__(message)


class NotFoundError(DocumentServiceError):
    """Raised when a document is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ForbiddenError(DocumentServiceError):
    """Raised when the caller tries to change a document they do not own."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"Action not allowed on {resource_type} '{resource_id}'"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnauthorizedError(DocumentServiceError):
    """Raised when the caller reads a document that is neither public nor theirs."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"Unauthorized access to {resource_type} '{resource_id}'"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class CorruptTreeError(DocumentServiceError):
    """Raised when parent links between documents form a cycle."""

    def __init__(self, document_id: str):
        message = f"Document tree is corrupt: '{document_id}' is its own ancestor"
        super().__init__(message)
        self.document_id = document_id


class DatabaseError(DocumentServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error
