from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of running a rule set against one candidate entity."""

    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: Optional[str]) -> None:
        if message:
            self.errors.append(FieldError(field_name, message))

    def for_field(self, field_name: str) -> List[str]:
        return [e.message for e in self.errors if e.field == field_name]

    def as_dict(self) -> dict[str, List[str]]:
        return group_errors(self.errors)


def require_non_empty(value: Optional[str], label: str) -> Optional[str]:
    if value is None or not value.strip():
        return f"'{label}' must not be empty."
    return None


def require_max_length(value: Optional[str], label: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        return f"The length of '{label}' must be {max_len} characters or fewer. You entered {len(value)} characters."
    return None


def require_present(value: object, label: str) -> Optional[str]:
    if value is None:
        return f"'{label}' must not be empty."
    return None


def check_text(value: Optional[str], label: str, max_len: int) -> Optional[str]:
    """Required, bounded text: the first failing rule wins."""
    return require_non_empty(value, label) or require_max_length(value, label, max_len)


def merge_errors(parse_errors: Sequence[FieldError], rule_errors: Sequence[FieldError]) -> List[FieldError]:
    """Form parse errors first; rule errors for a field that failed to parse are dropped."""
    unparsed = {e.field for e in parse_errors}
    return list(parse_errors) + [e for e in rule_errors if e.field not in unparsed]


def group_errors(errors: Iterable[FieldError]) -> dict[str, List[str]]:
    """Messages keyed by field, for rendering next to form inputs."""
    out: dict[str, List[str]] = {}
    for e in errors:
        out.setdefault(e.field, []).append(e.message)
    return out
