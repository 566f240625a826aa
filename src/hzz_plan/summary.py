"""Profit summary for the two business years of a sanitized plan.

The form's "izračun dobiti" block is not generated; it is computed from the
income table in section 3.5 and the cost tables in section 3.6:

  1. income            sum of ``godisnji_prihod``
  2. total costs       labor costs + other costs (sum of ``godisnji_iznos``)
  3. profit before tax income - total costs
  4. tax               profit before tax * 0.20 (an indicative flat rate)
  5. net profit        profit before tax - tax
"""

from typing import Any

from pydantic import BaseModel

from hzz_plan.validation.coercion import parse_number

TAX_RATE = 0.20

INCOME_SECTION = "3.5"
COST_SECTION = "3.6"

# Table field keys per business year
INCOME_TABLES = {1: "tablica_prihodi_god1_T2_1", 2: "tablica_prihodi_god2_T2_2"}
LABOR_COST_TABLES = {1: "trosak_rada_god1_T3_1", 2: "trosak_rada_god2_T3_2"}
OTHER_COST_TABLES = {1: "ostali_troskovi_god1_T4_1", 2: "ostali_troskovi_god2_T4_2"}


class YearSummary(BaseModel):
    """Income, costs, and profit for one business year."""

    year: int
    income: float
    labor_costs: float
    other_costs: float

    @property
    def total_costs(self) -> float:
        return self.labor_costs + self.other_costs

    @property
    def profit_before_tax(self) -> float:
        return self.income - self.total_costs

    @property
    def tax(self) -> float:
        return self.profit_before_tax * TAX_RATE

    @property
    def net_profit(self) -> float:
        return self.profit_before_tax - self.tax


class ProfitSummary(BaseModel):
    years: list[YearSummary]

    def year(self, year: int) -> YearSummary:
        for summary in self.years:
            if summary.year == year:
                return summary
        raise KeyError(year)


def _sum_column(document: dict[str, Any], section_key: str, field_key: str, column: str) -> float:
    section = document.get(section_key)
    rows = section.get(field_key) if isinstance(section, dict) else None
    if not isinstance(rows, list):
        return 0.0
    return float(sum(parse_number(row.get(column)) for row in rows if isinstance(row, dict)))


def compute_profit_summary(document: dict[str, Any]) -> ProfitSummary:
    """Compute the per-year profit summary of a (sanitized) plan document.

    Missing sections or tables count as zero.
    """
    years = []
    for year in (1, 2):
        years.append(
            YearSummary(
                year=year,
                income=_sum_column(document, INCOME_SECTION, INCOME_TABLES[year], "godisnji_prihod"),
                labor_costs=_sum_column(document, COST_SECTION, LABOR_COST_TABLES[year], "godisnji_iznos"),
                other_costs=_sum_column(document, COST_SECTION, OTHER_COST_TABLES[year], "godisnji_iznos"),
            )
        )
    return ProfitSummary(years=years)


def format_amount(amount: float) -> str:
    """Render an amount with two decimals and comma thousands separators: ``1,234.50``."""
    return f"{amount:,.2f}"
