"""Validation outcome value type."""


class ValidationOutcome:
    """Result of validating an import map.

    Errors are appended while the validator runs and exposed afterwards as
    copies, so callers cannot alter the recorded outcome.

    Attributes:
        valid: True when no error was recorded
        errors: Ordered error messages (a new list on each access)
    """

    def __init__(self):
        self._errors: list[str] = []

    @property
    def valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    def add_error(self, error: str) -> None:
        """Record a validation error. Marks the outcome invalid."""
        self._errors.append(error)

    def __repr__(self) -> str:
        return f"ValidationOutcome(valid={self.valid}, errors={len(self._errors)})"
