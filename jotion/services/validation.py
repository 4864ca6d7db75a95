"""Document validation logic."""

from typing import Any

from jotion.exceptions import ValidationError


class DocumentValidator:
    """Validates document data according to business rules."""

    # Validation constants
    TITLE_MIN_LENGTH = 1
    TITLE_MAX_LENGTH = 500
    ID_MAX_LENGTH = 255
    ICON_MAX_LENGTH = 255
    COVER_IMAGE_MAX_LENGTH = 2048

    @staticmethod
    def validate_title(title: str) -> None:
        """
        Validate document title.

        Args:
            title: Title to validate

        Raises:
            ValidationError: If title is invalid
        """
        if not isinstance(title, str):
            raise ValidationError("Title must be a string", "title")
        if not title or not title.strip():
            raise ValidationError("Title is required and cannot be empty", "title")
        if len(title) < DocumentValidator.TITLE_MIN_LENGTH:
            raise ValidationError(
                f"Title must be at least {DocumentValidator.TITLE_MIN_LENGTH} character(s)", "title"
            )
        if len(title) > DocumentValidator.TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Title must be at most {DocumentValidator.TITLE_MAX_LENGTH} characters", "title"
            )

    @staticmethod
    def validate_id(document_id: str, field: str = "id") -> None:
        """
        Validate a document ID.

        Args:
            document_id: Document ID to validate
            field: Name of the argument carrying the ID, reported on failure

        Raises:
            ValidationError: If document_id is invalid
        """
        if not isinstance(document_id, str):
            raise ValidationError("Document ID must be a string", field)
        if not document_id or not document_id.strip():
            raise ValidationError("Document ID cannot be empty", field)
        if len(document_id) > DocumentValidator.ID_MAX_LENGTH:
            raise ValidationError(
                f"Document ID must be at most {DocumentValidator.ID_MAX_LENGTH} characters", field
            )

    @staticmethod
    def validate_optional_text(value: Any, field: str, max_length: int | None = None) -> None:
        """Validate a nullable text field such as content, icon or cover_image."""
        if value is None:
            return
        if not isinstance(value, str):
            raise ValidationError(f"{field} must be a string", field)
        if max_length is not None and len(value) > max_length:
            raise ValidationError(f"{field} must be at most {max_length} characters", field)

    @staticmethod
    def validate_flag(value: Any, field: str) -> None:
        """Validate a boolean flag."""
        if not isinstance(value, bool):
            raise ValidationError(f"{field} must be a boolean", field)
