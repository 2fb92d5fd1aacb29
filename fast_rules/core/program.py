from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from fast_rules.core.annotations import AnnotationStore

if TYPE_CHECKING:
    from fast_rules.core.http import Service
    from fast_rules.core.types import TypeNode


DIAGNOSTICS: dict[str, dict[str, str]] = {
    "enum-unique-type": {
        "severity": "warning",
        "message": "Enum members must share one type.",
    },
}


@dataclass(frozen=True)
class Diagnostic:
    code: str
    severity: str
    message: str
    target: Optional["TypeNode"] = None

    @property
    def target_name(self) -> str:
        return getattr(self.target, "name", "") or ""

    def __str__(self) -> str:
        suffix = f" ({self.target_name})" if self.target_name else ""
        return f"{self.severity} {self.code}: {self.message}{suffix}"


@dataclass
class Program:
    """
    One compilation: the annotation store, the services to emit and every
    diagnostic reported while walking them.
    """
    namespace: str = ""
    annotations: AnnotationStore = field(default_factory=AnnotationStore)
    services: list["Service"] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report_diagnostic(self, code: str, target: Optional["TypeNode"] = None) -> Diagnostic:
        """Record a diagnostic; a code already reported for the same target is recorded once."""
        for existing in self.diagnostics:
            if existing.code == code and existing.target is target:
                return existing

        definition = DIAGNOSTICS[code]
        diagnostic = Diagnostic(
            code=code,
            severity=definition["severity"],
            message=definition["message"],
            target=target,
        )
        self.diagnostics.append(diagnostic)
        logging.warning(f"[DIAGNOSTIC] {diagnostic}")
        return diagnostic

    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)
