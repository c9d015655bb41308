"""Number formatting for exported tables."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NumberFormat:
    """Fixed-point formatting with configurable separators.

    Defaults follow the German convention (``1.234,567``) so cells stay
    unambiguous next to the ``;`` column delimiter.
    """

    places: int = 3
    decimal_separator: str = ","
    grouping_separator: str = "."
    delimiter: str = ";"

    def __post_init__(self) -> None:
        if self.delimiter in (self.decimal_separator, self.grouping_separator):
            raise ValueError("column delimiter must differ from the number separators")

    def format(self, value: float) -> str:
        text = f"{value:,.{self.places}f}"
        if text.startswith("-") and float(text[1:].replace(",", "")) == 0.0:
            text = text[1:]
        return text.translate(str.maketrans({",": self.grouping_separator, ".": self.decimal_separator}))


def flag(ok: bool) -> str:
    return "1" if ok else "0"


__all__ = ["NumberFormat", "flag"]
