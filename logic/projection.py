"""
Year-by-year compensation projection and offer comparison.

This is the single place where salary, bonus and equity are combined. The UI
calls into it on every edit with immutable package snapshots and renders
whatever comes back.
"""
import logging
from typing import List, Optional

from logic import equity as equity_valuator
from logic import salary as salary_projector
from logic.errors import ConfigurationError, ProjectionRangeError
from logic.models import (
    PROJECTION_YEARS,
    ComparisonResult,
    ComparisonYear,
    CompensationPackage,
    TaxRateConfig,
    YearlyBreakdown,
)
from logic.tax import estimate_equity_tax

logger = logging.getLogger(__name__)


def project_year(package: CompensationPackage, year: int, tax_rates: Optional[TaxRateConfig] = None) -> YearlyBreakdown:
    """
    Projects a single year (0-based) for one package.

    Tax is estimated on the year's risk-adjusted equity when tax rates are
    supplied, otherwise reported as 0. Tax is informational only and is not
    subtracted from the total.

    Raises ProjectionRangeError when the year is past the growth or vesting
    schedule.
    """
    salary = salary_projector.project_salary(package, year)
    bonus = salary_projector.project_bonus(package, year)
    equity_value = equity_valuator.value_equity(package, year)

    tax = 0.0
    if tax_rates is not None:
        tax = estimate_equity_tax(equity_value.risk_adjusted, package.equity, tax_rates).tax

    return YearlyBreakdown(
        year=year,
        salary=salary,
        bonus=bonus,
        equity=equity_value,
        tax=tax,
        total=salary + bonus + equity_value.risk_adjusted,
    )


def project_years(package: CompensationPackage, years: int = PROJECTION_YEARS,
                  tax_rates: Optional[TaxRateConfig] = None) -> List[YearlyBreakdown]:
    return [project_year(package, y, tax_rates) for y in range(years)]


def project_years_safe(package: CompensationPackage, years: int = PROJECTION_YEARS,
                       tax_rates: Optional[TaxRateConfig] = None) -> List[Optional[YearlyBreakdown]]:
    """
    Like project_years, but a year that cannot be projected comes back as
    None so the caller can mark it unavailable while still showing the rest.
    """
    breakdowns = []
    for y in range(years):
        try:
            breakdowns.append(project_year(package, y, tax_rates))
        except ProjectionRangeError as e:
            logger.warning("Year %d unavailable: %s", y + 1, e)
            breakdowns.append(None)
    return breakdowns


def compare(current: CompensationPackage,
            new: CompensationPackage,
            horizon_years: int = PROJECTION_YEARS,
            tax_rates: Optional[TaxRateConfig] = None) -> ComparisonResult:
    """
    Projects both packages over the horizon and diffs them year by year.
    Any out-of-range year propagates; no year is ever filled with zero.
    """
    if horizon_years < 1:
        raise ConfigurationError(f"must be at least 1, got {horizon_years}", "horizon_years")

    years = []
    for y in range(horizon_years):
        current_year = project_year(current, y, tax_rates)
        new_year = project_year(new, y, tax_rates)
        years.append(ComparisonYear(
            year=y,
            current=current_year,
            new=new_year,
            difference=new_year.total - current_year.total,
        ))
    return ComparisonResult(years=tuple(years))


def total_difference(result: ComparisonResult) -> float:
    """Sum of the per-year differences over the whole horizon."""
    return result.total_difference


def risk_adjusted_difference(result: ComparisonResult, new_package: CompensationPackage) -> float:
    """
    Final-year difference with a flat haircut when the new package is private.
    Independent of the per-grant liquidity discount and exit multiple.
    """
    return result.risk_adjusted_difference(new_package.company_type)
