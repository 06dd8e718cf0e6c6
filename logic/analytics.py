import pandas as pd
from typing import Optional

from logic import projection
from logic.models import PROJECTION_YEARS, ComparisonResult, CompensationPackage, TaxRateConfig
from logic.salary import project_bonus, project_salary
from logic.equity import value_equity
from logic.tax import estimate_equity_tax


def comparison_frame(result: ComparisonResult) -> pd.DataFrame:
    """
    Flattens a comparison into one row per year.
    Columns are prefixed with Current/New/Diff for each component.
    """
    rows = []
    for year in result:
        cur, new = year.current, year.new
        rows.append({
            "Year": year.label,
            "Current Salary": cur.salary,
            "Current Bonus": cur.bonus,
            "Current Equity": cur.equity.risk_adjusted,
            "Current Total": cur.total,
            "New Salary": new.salary,
            "New Bonus": new.bonus,
            "New Equity": new.equity.risk_adjusted,
            "New Total": new.total,
            "Diff Salary": new.salary - cur.salary,
            "Diff Bonus": new.bonus - cur.bonus,
            "Diff Equity": new.equity.risk_adjusted - cur.equity.risk_adjusted,
            "Difference": year.difference,
        })
    df = pd.DataFrame(rows)
    if not df.empty:
        df.set_index("Year", inplace=True)
    return df


def cash_frame(package: CompensationPackage, years: Optional[int] = None) -> pd.DataFrame:
    """Salary, bonus and total cash for every configured growth year."""
    if years is None:
        years = len(package.growth)
    rows = []
    for y in range(years):
        salary = project_salary(package, y)
        bonus = project_bonus(package, y)
        rows.append({"Year": f"Year {y + 1}", "Base Salary": salary, "Target Bonus": bonus, "Total Cash": salary + bonus})
    return pd.DataFrame(rows, columns=["Year", "Base Salary", "Target Bonus", "Total Cash"])


def equity_frame(package: CompensationPackage, tax_rates: TaxRateConfig, years: int = PROJECTION_YEARS) -> pd.DataFrame:
    """
    Gross (risk-adjusted), tax and net equity per year.
    Also carries the raw value so private-company adjustments stay visible.
    """
    rows = []
    for y in range(years):
        value = value_equity(package, y)
        result = estimate_equity_tax(value.risk_adjusted, package.equity, tax_rates)
        rows.append({
            "Year": f"Year {y + 1}",
            "Raw": value.raw,
            "Gross": value.risk_adjusted,
            "Tax": result.tax,
            "Net": result.net_value,
            "Negative Tax": result.is_negative_tax_credit,
        })
    return pd.DataFrame(rows, columns=["Year", "Raw", "Gross", "Tax", "Net", "Negative Tax"])


def summary_metrics(result: ComparisonResult, new_package: CompensationPackage) -> dict:
    return {
        "first_year_difference": result[0].difference if len(result) else 0.0,
        "total_difference": projection.total_difference(result),
        "risk_adjusted_difference": projection.risk_adjusted_difference(result, new_package),
    }
