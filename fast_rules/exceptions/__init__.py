"""Custom exceptions for fast-rules."""

from .common_exceptions import (
    AppException,
    SchemaDocumentException,
    UnknownTypeReferenceException,
    TemplateNotFoundException,
    EnvInvalidException,
)


__all__ = [
    "AppException",
    "SchemaDocumentException",
    "UnknownTypeReferenceException",
    "TemplateNotFoundException",
    "EnvInvalidException",
]
