"""Table normalization: coerce a raw table value into canonical rows for its row kind.

A table field should hold a list of row objects keyed by the row kind's
columns.  LLM output also arrives as:

  - a single row object instead of a list
  - one string with a bullet-style line per row ("Usluge - 24000 - 100 - 20")
  - a list mixing strings and objects
  - objects using alternate key names ("kod" + "naziv" instead of "nkd_djelatnost")

Each row is normalized on its own (see ``normalize_row``), in input order.
Rows with nothing but empty values are dropped, though any cells reset on
the way are still reported.  Rows that fit no branch are dropped and
reported once per table, not once per row.
"""

from enum import Enum
from typing import Any, NamedTuple

from hzz_plan.schema.tables import SEGMENT_SEPARATOR, RowShape, get_row_shape
from hzz_plan.validation.coercion import is_scalar, parse_number, to_text
from hzz_plan.validation.issues import Coerced

EXPECTED_TABLE = "expected a table"


class RowStatus(str, Enum):
    """How a raw row was handled."""

    EXACT = "exact"  # already canonical, passed through
    REPAIRED = "repaired"  # object with aliases / missing columns / bad cells
    PARSED = "parsed"  # string parsed by the row kind's layouts
    EMPTY = "empty"  # nothing but empty values, dropped (reset cells still reported)
    UNCLASSIFIABLE = "unclassifiable"  # fits no branch, dropped and reported


class RowOutcome(NamedTuple):
    row: dict[str, Any] | None
    status: RowStatus
    bad_cells: int = 0


def _is_blank(value) -> bool:
    """Falsy in the JSON sense: null, false, 0, or a blank string."""
    if isinstance(value, str):
        return not value.strip()
    return not value


def _is_empty_row(row: dict[str, Any]) -> bool:
    return all(_is_blank(value) for value in row.values())


# ─── Object Rows ─────────────────────────────────────────────────────────────


def _is_exact(shape: RowShape, raw: dict) -> bool:
    return set(raw) == set(shape.column_keys) and all(is_scalar(value) for value in raw.values())


def _repair_object(shape: RowShape, raw: dict) -> RowOutcome:
    """Rename alias keys, merge combined keys, default missing columns, drop unknown keys.

    Declared column keys win over combinations, which win over aliases.
    """
    row = shape.empty_row()
    filled: set[str] = set()
    bad_cells = 0

    def assign(column: str, value) -> None:
        nonlocal bad_cells
        filled.add(column)
        if is_scalar(value):
            row[column] = value
        else:
            bad_cells += 1

    for key in shape.column_keys:
        if key in raw:
            assign(key, raw[key])

    for combination in shape.combinations:
        if combination.target in filled:
            continue
        parts: list[str] = []
        found = False
        for group in combination.sources:
            key = next((k for k in group if k in raw), None)
            if key is None:
                continue
            found = True
            text = to_text(raw[key])
            if text is None:
                bad_cells += 1
            elif text.strip():
                parts.append(text.strip())
        if found:
            filled.add(combination.target)
            row[combination.target] = combination.separator.join(parts)

    for key, value in raw.items():
        column = shape.aliases.get(key)
        if column is not None and column not in filled:
            assign(column, value)

    if not filled:
        return RowOutcome(None, RowStatus.UNCLASSIFIABLE)
    return RowOutcome(row, RowStatus.REPAIRED, bad_cells)


# ─── String Rows ─────────────────────────────────────────────────────────────


def parse_row_text(shape: RowShape, text: str) -> dict[str, Any] | None:
    """Parse one bullet-style line with the row kind's layouts (first match wins).

    Numeric columns that fail to parse become 0; derived columns are computed
    after the mapped cells are parsed.
    """
    clean = text.strip()
    if not clean:
        return None
    parts = [part.strip() for part in clean.split(SEGMENT_SEPARATOR)]

    for layout in shape.layouts:
        cells = layout.extract(clean, parts)
        if cells is None:
            continue
        row = shape.empty_row()
        for key, value in cells.items():
            column = shape.column(key)
            if column is None:
                continue
            row[key] = parse_number(value) if column.numeric else str(value).strip()
        for key, derive in layout.derived:
            row[key] = derive(row)
        return row
    return None


# ─── Public API ──────────────────────────────────────────────────────────────


def normalize_row(shape: RowShape, raw: Any) -> RowOutcome:
    """Normalize one raw row into the canonical row for *shape*."""
    if isinstance(raw, dict):
        if _is_exact(shape, raw):
            outcome = RowOutcome(dict(raw), RowStatus.EXACT)
        else:
            outcome = _repair_object(shape, raw)
    elif isinstance(raw, str):
        if not raw.strip():
            return RowOutcome(None, RowStatus.EMPTY)
        row = parse_row_text(shape, raw)
        outcome = RowOutcome(row, RowStatus.PARSED) if row is not None else RowOutcome(None, RowStatus.UNCLASSIFIABLE)
    elif raw is None:
        return RowOutcome(None, RowStatus.EMPTY)
    else:
        return RowOutcome(None, RowStatus.UNCLASSIFIABLE)

    if outcome.row is not None and _is_empty_row(outcome.row):
        # Cells reset to blank still count as bad cells
        return RowOutcome(None, RowStatus.EMPTY, outcome.bad_cells)
    return outcome


def _table_issues(dropped: int, bad_cells: int) -> tuple[str, ...]:
    issues = []
    if dropped:
        issues.append(f"{dropped} row(s) could not be interpreted and were dropped")
    if bad_cells:
        issues.append(f"{bad_cells} cell value(s) were not plain values and were reset")
    return tuple(issues)


def normalize_table(row_kind: str, raw: Any) -> Coerced:
    """Coerce a raw table value into a list of canonical rows for *row_kind*."""
    shape = get_row_shape(row_kind)

    if raw is None:
        return Coerced([])
    if isinstance(raw, dict):
        items: list = [raw]
    elif isinstance(raw, str):
        items = [line for line in raw.splitlines() if line.strip()]
    elif isinstance(raw, (list, tuple)):
        items = list(raw)
    else:
        return Coerced([], (EXPECTED_TABLE,))

    rows: list[dict[str, Any]] = []
    dropped = 0
    bad_cells = 0
    for item in items:
        outcome = normalize_row(shape, item)
        bad_cells += outcome.bad_cells
        if outcome.status is RowStatus.UNCLASSIFIABLE:
            dropped += 1
        elif outcome.row is not None:
            rows.append(outcome.row)

    return Coerced(rows, _table_issues(dropped, bad_cells))
