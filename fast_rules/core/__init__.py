"""Rule compilation core re-exported for convenient access.

Type graph -> walker -> constraints -> Laravel rule arrays.
"""

from .annotations import AnnotationStore, Annotations
from .collector import RuleCollector, collect_operation_rules
from .constraint import Constraint, CustomRule, FieldRule, RawCustomRule, Requirement
from .document import build_program, load_document
from .emitter import EmittedFile, FormRequestEmitter, render_form_request
from .http import (
    HttpBody,
    HttpParameter,
    HttpSchemaProvider,
    Operation,
    Service,
    Visibility,
    resolve_request_visibility,
)
from .laravel import to_laravel_validation_rule, to_laravel_validation_rules
from .options import EmitterOptions
from .program import Diagnostic, Program
from .synthesizer import apply_annotations, apply_requirement_policy, has_lower_bound, std_scalar_constraint
from .walker import RuleWalker

__all__ = [
    "AnnotationStore",
    "Annotations",
    "RuleCollector",
    "collect_operation_rules",
    "Constraint",
    "CustomRule",
    "FieldRule",
    "RawCustomRule",
    "Requirement",
    "build_program",
    "load_document",
    "EmittedFile",
    "FormRequestEmitter",
    "render_form_request",
    "HttpBody",
    "HttpParameter",
    "HttpSchemaProvider",
    "Operation",
    "Service",
    "Visibility",
    "resolve_request_visibility",
    "to_laravel_validation_rule",
    "to_laravel_validation_rules",
    "EmitterOptions",
    "Diagnostic",
    "Program",
    "apply_annotations",
    "apply_requirement_policy",
    "has_lower_bound",
    "std_scalar_constraint",
    "RuleWalker",
]
