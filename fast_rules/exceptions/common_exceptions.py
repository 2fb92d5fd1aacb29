from typing import Optional

from fast_rules.utils.serialisation import get_exception_error_type


class AppException(Exception):
    def __init__(self,
        message: str,
        *,
        error_type: Optional[str] = None,
        data: Optional[dict] = None
    ):
        """
        Base exception for everything raised outside the rule walker.

        Args:
            message: The error message.
            error_type: The error type (if not provided, it will be inferred from the exception class name).
            data: Extra context for the caller.
        """
        self.message = message
        self.error_type = error_type or get_exception_error_type(self)
        self.data = data
        super().__init__(message)


class SchemaDocumentException(AppException):
    """
    Raised when a schema document cannot be turned into a type graph.

    ``errors`` mirrors pydantic's error list when the document failed shape
    validation.
    """

    def __init__(self, message: str, *, errors: Optional[list[dict]] = None):
        super().__init__(message, data={"errors": errors} if errors else None)
        self.errors = errors or []


class UnknownTypeReferenceException(SchemaDocumentException):
    def __init__(self, reference: str, *, context: Optional[str] = None):
        message = f"Unknown type reference `{reference}`"
        if context:
            message += f" (in {context})"
        super().__init__(message)
        self.reference = reference


class TemplateNotFoundException(AppException):
    def __init__(self, template_path: str):
        super().__init__(f"Template not found: {template_path}")


class EnvInvalidException(ValueError):
    def __init__(self, env_name: str, value: str = None, supported_values: list[str] = None):
        message = f"[ENV INVALID] Invalid environment variable: `{env_name}`"
        if value is not None:
            message += f" (value: `{value}`) "
        if supported_values:
            message += f" (supported values: {', '.join(supported_values)})"
        super().__init__(message)
