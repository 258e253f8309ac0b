"""Ordered bracket tables used by every tax schedule."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """One row of a lookup table.

    Applies to keys up to and including ``upper_bound_inclusive``. A row
    without an upper bound is the open-ended "else" row and must come last.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    upper_bound_inclusive: float | None = Field(default=None, alias="upper_bound")
    value: float


class BracketTable(BaseModel):
    """Contiguous, ascending bracket table resolved by first matching bound."""

    model_config = ConfigDict(frozen=True)

    name: str
    rows: tuple[TaxBracket, ...]

    @model_validator(mode="after")
    def check_ordering(self) -> BracketTable:
        if not self.rows:
            raise ValueError(f"Bracket table {self.name!r} is empty")

        previous: float | None = None
        for index, row in enumerate(self.rows):
            bound = row.upper_bound_inclusive
            if bound is None:
                if index != len(self.rows) - 1:
                    raise ValueError(
                        f"Bracket table {self.name!r}: only the last row may be open-ended"
                    )
                continue
            if previous is not None and bound <= previous:
                raise ValueError(
                    f"Bracket table {self.name!r}: bounds must be strictly increasing "
                    f"({bound} follows {previous})"
                )
            previous = bound
        return self

    @property
    def open_ended(self) -> bool:
        return self.rows[-1].upper_bound_inclusive is None

    @property
    def ceiling(self) -> float | None:
        """Highest explicit bound, or None if the table has no bounded row."""
        for row in reversed(self.rows):
            if row.upper_bound_inclusive is not None:
                return row.upper_bound_inclusive
        return None

    def lookup(self, key: float) -> float:
        for row in self.rows:
            if row.upper_bound_inclusive is None or key <= row.upper_bound_inclusive:
                return row.value
        raise ValueError(
            f"{key} is above the last bracket of {self.name!r} (ceiling {self.ceiling})"
        )

    @classmethod
    def from_rows(cls, name: str, rows: list[dict]) -> BracketTable:
        return cls(name=name, rows=tuple(TaxBracket.model_validate(r) for r in rows))
