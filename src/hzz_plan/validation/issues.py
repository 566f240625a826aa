"""Result types shared by the validation pipeline.

``Coerced`` is what every coercer returns: a best-effort value plus zero or
more issue messages.  ``Issue`` ties a message to its section and field, and
``ValidationResult`` is the pipeline's output.
"""

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict


class Coerced(NamedTuple):
    """A best-effort value and the problems found while producing it."""

    value: Any
    issues: tuple[str, ...] = ()

    @property
    def issue(self) -> str | None:
        """All messages joined, or None when the value is clean."""
        return "; ".join(self.issues) if self.issues else None


class Issue(BaseModel):
    """One non-fatal divergence between the raw document and the catalog.

    ``field_key`` is None for section-level issues; ``section_key`` is also
    None when the whole document had the wrong shape.
    """

    model_config = ConfigDict(frozen=True)

    section_key: str | None
    field_key: str | None = None
    message: str
    section_id: str | None = None
    field_label: str | None = None

    def __str__(self) -> str:
        if self.section_key is None:
            return self.message
        section = f"Section {self.section_id or self.section_key}"
        if self.field_key is None:
            return f"{section}: {self.message}"
        return f'{section} - field "{self.field_label or self.field_key}" ({self.field_key}): {self.message}'


class ValidationResult(BaseModel):
    """Sanitized document plus the issues found while producing it.

    ``data`` is always fully populated; ``success`` is True iff there are no issues.
    """

    success: bool
    data: dict[str, dict[str, Any]]
    issues: list[Issue]

    def messages(self) -> list[str]:
        return [str(issue) for issue in self.issues]

    def as_payload(self) -> dict[str, Any]:
        """JSON shape handed to callers: ``{success, data, issues: [str]}``."""
        return {"success": self.success, "data": self.data, "issues": self.messages()}
