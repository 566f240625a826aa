"""Exception hierarchy for hzz_plan.

The validation pipeline itself never raises; these cover the collaborators
around it (catalog loading, configuration, and the LLM call).
"""


class HZZPlanError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class SchemaError(HZZPlanError):
    """Raised when the field catalog cannot be read or is invalid."""


class ConfigurationError(HZZPlanError):
    """Raised when required configuration (e.g. an API key) is missing."""


class GenerationError(HZZPlanError):
    """Raised when the LLM call fails or returns something that is not a JSON object."""
