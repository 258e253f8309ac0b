"""Errors raised at the engine boundary."""

from __future__ import annotations

from pydantic import ValidationError


class InvalidProfileError(ValueError):
    """A vehicle profile was built from absent or out-of-domain fields.

    ``errors`` maps each offending field to its messages; ``field`` is the
    first of them.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        self.field = next(iter(errors), "profile")
        details = "; ".join(f"{name}: {', '.join(msgs)}" for name, msgs in errors.items())
        super().__init__(f"Invalid vehicle tax profile ({details})")

    @classmethod
    def for_field(cls, field: str, message: str) -> InvalidProfileError:
        return cls({field: [message]})

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> InvalidProfileError:
        errors: dict[str, list[str]] = {}
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "profile"
            errors.setdefault(field, []).append(err["msg"])
        return cls(errors)
