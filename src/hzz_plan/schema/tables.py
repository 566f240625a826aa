"""Row kinds for table fields: column sets, key aliases, and string layouts.

Each table field in the catalog names a row kind (``tableType``).  A row kind
declares:

  columns       -- the canonical column keys in display order, and whether
                   each holds a number or text
  aliases       -- alternate key names the LLM uses for the same column
  combinations  -- groups of alternate keys merged into one display column
                   (e.g. ``kod`` + ``naziv`` -> ``nkd_djelatnost``)
  layouts       -- how a bullet-style string row ("Usluge - 24000 - 100 - 20")
                   maps onto columns, tried in order, first match wins

Adding a row kind is a data change here; the normalizer in
``hzz_plan.validation.rows`` applies these tables generically.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable

# Literal separator between segments of a bullet-style row
SEGMENT_SEPARATOR = " - "

# Segment index meaning "the whole, unsplit line"
WHOLE_LINE = -1


# ─── Building Blocks ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Column:
    """One canonical table column."""

    key: str
    numeric: bool = False

    @property
    def default(self) -> int | str:
        return 0 if self.numeric else ""


@dataclass(frozen=True)
class Combination:
    """Alternate keys whose non-empty values are joined into one column."""

    target: str
    sources: tuple[tuple[str, ...], ...]  # each inner tuple: keys for one part, first present wins
    separator: str = SEGMENT_SEPARATOR


@dataclass(frozen=True)
class SegmentLayout:
    """Positional mapping of separated segments onto columns.

    Applies when the line has at least ``arity`` segments (exactly ``arity``
    when ``exact`` is set).  ``segments`` maps a column to a segment index,
    ``WHOLE_LINE``, or a slice whose segments are re-joined.  ``derived``
    columns are computed from the already-parsed row, in order.
    """

    arity: int
    segments: tuple[tuple[str, int | slice], ...]
    derived: tuple[tuple[str, Callable[[dict], Any]], ...] = ()
    exact: bool = False

    def extract(self, text: str, parts: list[str]) -> dict[str, Any] | None:
        """Return raw cell values for the mapped columns, or None if the arity does not fit."""
        if len(parts) < self.arity or (self.exact and len(parts) != self.arity):
            return None
        cells: dict[str, Any] = {}
        for column, index in self.segments:
            if isinstance(index, slice):
                cells[column] = SEGMENT_SEPARATOR.join(parts[index])
            elif index == WHOLE_LINE:
                cells[column] = text
            else:
                cells[column] = parts[index] if index < len(parts) else ""
        return cells


@dataclass(frozen=True)
class PatternLayout:
    """Regex-based mapping for legacy free-form lines."""

    pattern: re.Pattern
    build: Callable[[re.Match], dict[str, Any]]
    derived: tuple[tuple[str, Callable[[dict], Any]], ...] = ()

    def extract(self, text: str, parts: list[str]) -> dict[str, Any] | None:  # pylint: disable=unused-argument
        match = self.pattern.search(text)
        return self.build(match) if match else None


@dataclass(frozen=True)
class RowShape:
    """Column set and parsing heuristics for one row kind."""

    name: str
    columns: tuple[Column, ...]
    layouts: tuple[SegmentLayout | PatternLayout, ...]
    aliases: dict[str, str] = field(default_factory=dict)
    combinations: tuple[Combination, ...] = ()

    @property
    def column_keys(self) -> tuple[str, ...]:
        return tuple(column.key for column in self.columns)

    def column(self, key: str) -> Column | None:
        for column in self.columns:
            if column.key == key:
                return column
        return None

    def empty_row(self) -> dict[str, int | str]:
        return {column.key: column.default for column in self.columns}


# ─── Derivations ─────────────────────────────────────────────────────────────


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def per_month(column: str) -> Callable[[dict], int]:
    """Monthly amount derived from an annual column."""
    return lambda row: round_half_up(row[column] / 12)


def unit_price_estimate(column: str) -> Callable[[dict], int]:
    """Unit price estimate for income lines that only state an annual total (10 sales a month)."""
    return lambda row: round_half_up(row[column] / 12 / DEFAULT_MONTHLY_SALES)


# Income lines without a sales count assume this many sales per month
DEFAULT_MONTHLY_SALES = 10

# Legacy cost line: "5000 - Laptop - EUR - jednokratno" (amount first, optional currency and period)
LEGACY_COST_RE = re.compile(r"(\d+)\s*-\s*(.+?)\s*-\s*(HRK|EUR)?\s*-?\s*(mjesečno|godisnje|jednokratno)?")


def _legacy_cost(match: re.Match) -> dict[str, Any]:
    amount = float(match.group(1))
    if match.group(4) == "mjesečno":
        amount *= 12
    return {"vrsta_troska": match.group(2), "iznos": amount}


# ─── Row Kinds ───────────────────────────────────────────────────────────────

_WORK_HISTORY_COLUMNS = (Column("razdoblje"), Column("poslodavac"), Column("zanimanje"))

# "Igrač u lokalnom klubu - 5 godina" -> occupation, period
_WORK_HISTORY_LAYOUTS = (
    SegmentLayout(arity=2, segments=(("zanimanje", 0), ("razdoblje", 1))),
    SegmentLayout(arity=1, segments=(("zanimanje", WHOLE_LINE),)),
)

_WORK_HISTORY_ALIASES = {"period": "razdoblje", "trajanje": "razdoblje", "tvrtka": "poslodavac", "opis": "zanimanje", "pozicija": "zanimanje"}

# Cost lines: "<name> - <annual> - <period> - <monthly>" (new) or "<currency> - <name> - <annual>" (old)
_COST_LAYOUTS_SHORT = (
    SegmentLayout(arity=3, exact=True, segments=(("naziv", 1), ("godisnji_iznos", 2)), derived=(("mjesecni_iznos", per_month("godisnji_iznos")),)),
    SegmentLayout(arity=2, exact=True, segments=(("naziv", 0), ("godisnji_iznos", 1)), derived=(("mjesecni_iznos", per_month("godisnji_iznos")),)),
    SegmentLayout(arity=1, segments=(("naziv", WHOLE_LINE),)),
)

ROW_SHAPES: dict[str, RowShape] = {
    "prihodi": RowShape(
        name="prihodi",
        columns=(
            Column("naziv"),
            Column("cijena", numeric=True),
            Column("broj_prodaja", numeric=True),
            Column("mjesecni_prihod", numeric=True),
            Column("godisnji_prihod", numeric=True),
        ),
        layouts=(
            # "Prihodi od tura - 20000 - 100 - 200": name - annual - sales - price
            SegmentLayout(
                arity=4,
                segments=(("naziv", 0), ("godisnji_prihod", 1), ("broj_prodaja", 2), ("cijena", 3)),
                derived=(("mjesecni_prihod", per_month("godisnji_prihod")),),
            ),
            # "HRK - Najam terena - 150000": currency - name - annual
            SegmentLayout(
                arity=3,
                exact=True,
                segments=(("naziv", 1), ("godisnji_prihod", 2)),
                derived=(
                    ("cijena", unit_price_estimate("godisnji_prihod")),
                    ("broj_prodaja", lambda row: DEFAULT_MONTHLY_SALES),
                    ("mjesecni_prihod", per_month("godisnji_prihod")),
                ),
            ),
            # "Članarine - 30000": name - annual
            SegmentLayout(
                arity=2,
                exact=True,
                segments=(("naziv", 0), ("godisnji_prihod", 1)),
                derived=(
                    ("cijena", unit_price_estimate("godisnji_prihod")),
                    ("broj_prodaja", lambda row: DEFAULT_MONTHLY_SALES),
                    ("mjesecni_prihod", per_month("godisnji_prihod")),
                ),
            ),
            SegmentLayout(arity=1, segments=(("naziv", WHOLE_LINE),)),
        ),
        aliases={
            "naziv_proizvoda": "naziv",
            "proizvod": "naziv",
            "usluga": "naziv",
            "opis": "naziv",
            "cijena_po_jedinici": "cijena",
            "broj_prodaja_mjesecno": "broj_prodaja",
            "kolicina": "broj_prodaja",
            "mjesecno": "mjesecni_prihod",
            "godisnje": "godisnji_prihod",
            "iznos": "godisnji_prihod",
        },
    ),
    "trosak_rada": RowShape(
        name="trosak_rada",
        columns=(Column("vrsta"), Column("mjesecni_iznos", numeric=True), Column("godisnji_iznos", numeric=True)),
        layouts=(
            # "Osobni dohodak - 60000 - 12 - 5000": kind - annual - months - monthly
            SegmentLayout(arity=4, segments=(("vrsta", 0), ("godisnji_iznos", 1), ("mjesecni_iznos", 3))),
            SegmentLayout(arity=3, exact=True, segments=(("vrsta", 1), ("godisnji_iznos", 2)), derived=(("mjesecni_iznos", per_month("godisnji_iznos")),)),
            SegmentLayout(arity=2, exact=True, segments=(("vrsta", 0), ("godisnji_iznos", 1)), derived=(("mjesecni_iznos", per_month("godisnji_iznos")),)),
            SegmentLayout(arity=1, segments=(("vrsta", WHOLE_LINE),)),
        ),
        aliases={"naziv": "vrsta", "opis": "vrsta", "mjesecno": "mjesecni_iznos", "godisnje": "godisnji_iznos"},
    ),
    "ostali_troskovi": RowShape(
        name="ostali_troskovi",
        columns=(Column("naziv"), Column("mjesecni_iznos", numeric=True), Column("godisnji_iznos", numeric=True)),
        layouts=(
            # "Marketing - 3000 - 1 - 3000": name - annual - period - amount
            SegmentLayout(arity=4, segments=(("naziv", 0), ("godisnji_iznos", 1)), derived=(("mjesecni_iznos", per_month("godisnji_iznos")),)),
        )
        + _COST_LAYOUTS_SHORT,
        aliases={"vrsta": "naziv", "opis": "naziv", "stavka": "naziv", "mjesecno": "mjesecni_iznos", "godisnje": "godisnji_iznos"},
    ),
    "troskovnik": RowShape(
        name="troskovnik",
        columns=(Column("vrsta_troska"), Column("iznos", numeric=True)),
        layouts=(
            # "Kupnja opreme - 5000 - 1 - 5000": name - amount - period - amount
            SegmentLayout(arity=4, segments=(("vrsta_troska", 0), ("iznos", 1))),
            PatternLayout(pattern=LEGACY_COST_RE, build=_legacy_cost),
            SegmentLayout(arity=2, segments=(("vrsta_troska", 0), ("iznos", 1))),
            SegmentLayout(arity=1, segments=(("vrsta_troska", WHOLE_LINE),)),
        ),
        aliases={"naziv": "vrsta_troska", "vrsta": "vrsta_troska", "stavka": "vrsta_troska", "opis": "vrsta_troska", "iznos_bez_pdv": "iznos"},
    ),
    "ulaganja_drugi_izvori": RowShape(
        name="ulaganja_drugi_izvori",
        columns=(Column("vrsta_ulaganja"), Column("iznos", numeric=True)),
        layouts=(
            # "Osobni kapital - 5000"
            SegmentLayout(arity=2, segments=(("vrsta_ulaganja", 0), ("iznos", 1))),
            SegmentLayout(arity=1, segments=(("vrsta_ulaganja", WHOLE_LINE),)),
        ),
        aliases={"naziv": "vrsta_ulaganja", "vrsta": "vrsta_ulaganja", "izvor": "vrsta_ulaganja", "opis": "vrsta_ulaganja"},
    ),
    "postojeca_oprema": RowShape(
        name="postojeca_oprema",
        columns=(Column("naziv"),),
        # "Košarkaške lopte - 10" keeps only the item name
        layouts=(SegmentLayout(arity=1, segments=(("naziv", 0),)),),
        aliases={"oprema": "naziv", "opis": "naziv", "stavka": "naziv"},
    ),
    "radno_iskustvo_ugovor": RowShape(
        name="radno_iskustvo_ugovor", columns=_WORK_HISTORY_COLUMNS, layouts=_WORK_HISTORY_LAYOUTS, aliases=_WORK_HISTORY_ALIASES
    ),
    "radno_iskustvo_ostalo": RowShape(
        name="radno_iskustvo_ostalo", columns=_WORK_HISTORY_COLUMNS, layouts=_WORK_HISTORY_LAYOUTS, aliases=_WORK_HISTORY_ALIASES
    ),
    "struktura_vlasnistva": RowShape(
        name="struktura_vlasnistva",
        columns=(Column("ime_prezime"), Column("udio", numeric=True)),
        layouts=(
            SegmentLayout(arity=2, segments=(("ime_prezime", 0), ("udio", 1))),
            SegmentLayout(arity=1, segments=(("ime_prezime", WHOLE_LINE),)),
        ),
        aliases={"vlasnik": "ime_prezime", "ime": "ime_prezime", "postotak": "udio", "udio_posto": "udio"},
    ),
    "nkd_lista": RowShape(
        name="nkd_lista",
        columns=(Column("nkd_kod"), Column("naziv_djelatnosti")),
        layouts=(
            SegmentLayout(arity=2, segments=(("nkd_kod", 0), ("naziv_djelatnosti", slice(1, None)))),
            SegmentLayout(arity=1, segments=(("nkd_kod", WHOLE_LINE),)),
        ),
        aliases={"kod": "nkd_kod", "naziv": "naziv_djelatnosti", "djelatnost": "naziv_djelatnosti"},
    ),
    "nkd_lista_simple": RowShape(
        name="nkd_lista_simple",
        columns=(Column("nkd_djelatnost"),),
        # "73.11 - Reklamne agencije" is one cell; the separator is part of the value
        layouts=(SegmentLayout(arity=1, segments=(("nkd_djelatnost", WHOLE_LINE),)),),
        aliases={"djelatnost": "nkd_djelatnost"},
        combinations=(Combination(target="nkd_djelatnost", sources=(("nkd_kod", "kod"), ("naziv_djelatnosti", "naziv"))),),
    ),
    "izracun_dobiti": RowShape(
        name="izracun_dobiti",
        columns=(Column("godina"), Column("prihodi", numeric=True), Column("troskovi", numeric=True), Column("dobit", numeric=True)),
        layouts=(
            SegmentLayout(
                arity=3,
                segments=(("godina", 0), ("prihodi", 1), ("troskovi", 2)),
                derived=(("dobit", lambda row: row["prihodi"] - row["troskovi"]),),
            ),
            SegmentLayout(arity=1, segments=(("godina", 0),)),
        ),
        aliases={"razdoblje": "godina", "ukupni_prihodi": "prihodi", "ukupni_troskovi": "troskovi", "dohodak": "dobit"},
    ),
}


def get_row_shape(row_kind: str) -> RowShape:
    """Return the RowShape for *row_kind* (KeyError if unknown)."""
    return ROW_SHAPES[row_kind]
