"""Field schemas for line-oriented export formats.

A format is described by an ordered table of :class:`FieldSpec` entries.
Adding a format means adding a table, not new parsing code.

Coercions are strict: they raise :class:`ValueError` on bad input so the
caller can drop the whole line.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

Coercion = Callable[[str], Any]


def parse_int(value: str) -> int:
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    number = parse_float(text)
    if not number.is_integer():
        raise ValueError(f"not an integer: {value!r}")
    return int(number)


def parse_float(value: str) -> float:
    result = float(value.strip())
    if math.isnan(result) or math.isinf(result):
        raise ValueError(f"not a finite number: {value!r}")
    return result


def parse_bool(value: str) -> bool:
    """Only the literal ``true`` is truthy; every other string is ``False``."""
    return value.strip() == "true"


def parse_str(value: str) -> str:
    return value


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One named field and how to coerce its raw text.

    A missing or empty optional field takes ``default``; a missing or empty
    required field makes the record invalid.
    """

    name: str
    coerce: Coercion = parse_str
    required: bool = False
    default: Any = None


@dataclass(frozen=True, slots=True)
class LineSchema:
    """Ordered field table for one export format."""

    fields: tuple[FieldSpec, ...]
    passthrough_unknown: bool = False

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def coerce_record(self, raw: Mapping[str, str]) -> dict[str, Any]:
        """Coerce a ``name -> text`` mapping into typed values.

        Raises
        ------
        ValueError
            If a required field is missing or any present field fails to coerce.
        """
        record: dict[str, Any] = {}
        for field in self.fields:
            text = raw.get(field.name)
            if text is None or text.strip() == "":
                if field.required:
                    raise ValueError(f"missing required field {field.name!r}")
                record[field.name] = field.default
                continue
            record[field.name] = field.coerce(text)

        if self.passthrough_unknown:
            known = set(self.names)
            for key, text in raw.items():
                if key not in known:
                    record[key] = text
        return record

    def parse_positional(self, values: Sequence[str]) -> dict[str, Any]:
        """Map positional values onto the field order, then coerce."""
        return self.coerce_record(dict(zip(self.names, values, strict=False)))
