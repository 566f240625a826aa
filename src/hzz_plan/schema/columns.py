"""Display labels and column ordering for table fields."""

from hzz_plan.schema.tables import ROW_SHAPES

TABLE_COLUMN_LABELS: dict[str, str] = {
    "naziv": "Naziv",
    "godina": "Godina",
    "cijena": "Cijena",
    "broj_prodaja": "Broj prodaja",
    "mjesecni_prihod": "Mjesečni prihod",
    "godisnji_prihod": "Godišnji prihod",
    "vrsta": "Vrsta",
    "mjesecni_iznos": "Mjesečni iznos",
    "godisnji_iznos": "Godišnji iznos",
    "vrsta_troska": "Vrsta troška",
    "iznos": "Iznos",
    "prihodi": "Ukupni prihodi (€)",
    "troskovi": "Ukupni troškovi (€)",
    "dobit": "Očekivana dobit (€)",
    "razdoblje": "Razdoblje",
    "poslodavac": "Poslodavac",
    "zanimanje": "Zanimanje",
    "vrsta_ulaganja": "Vrsta ulaganja",
    "ime_prezime": "Ime i prezime",
    "udio": "Udio (%)",
    "nkd_kod": "NKD kod",
    "naziv_djelatnosti": "Naziv djelatnosti",
    "nkd_djelatnost": "NKD kod i naziv djelatnosti",
}


def _has_value(value) -> bool:
    return value is not None and str(value).strip() != ""


def column_label(column: str) -> str:
    """Human label for a column key (the key itself when unknown)."""
    return TABLE_COLUMN_LABELS.get(column, column)


def resolve_table_columns(row_kind: str, rows: list) -> list[str]:
    """Return the columns worth displaying for *rows*.

    Only columns holding a non-empty value in at least one row are kept.
    They are ordered by the row kind's declared column order; columns the row
    kind does not declare are appended in first-row order.
    """
    if not isinstance(rows, list) or not rows:
        return []

    first_row = next((row for row in rows if isinstance(row, dict)), None)
    if first_row is None:
        return []

    columns_with_data = [key for key in first_row if any(isinstance(row, dict) and _has_value(row.get(key)) for row in rows)]

    shape = ROW_SHAPES.get(row_kind)
    if shape is None:
        return columns_with_data

    present = set(columns_with_data)
    ordered = [key for key in shape.column_keys if key in present]
    return ordered + [key for key in columns_with_data if key not in shape.column_keys]
