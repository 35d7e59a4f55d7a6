"""Domain value object for field-level validation outcomes."""

from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """Outcome of checking a candidate record; errors keyed by field name."""

    valid: bool
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return "; ".join(self.field_errors.values())
