import logging

from logic.errors import ProjectionRangeError
from logic.models import CompensationPackage, EquityTerms, EquityValue

logger = logging.getLogger(__name__)


def appreciation_multiplier(annual_appreciation: float, years: int) -> float:
    return (1 + annual_appreciation / 100.0) ** years


def vested_value(equity: EquityTerms, year: int) -> float:
    """
    Value of the initial grant vesting in the given year.
    Each schedule entry is the percent vesting in that year, not vested-to-date.
    """
    if year < 0 or year >= len(equity.vesting_schedule):
        raise ProjectionRangeError("vesting schedule", year, len(equity.vesting_schedule))
    vesting_pct = equity.vesting_schedule[year]
    return equity.initial_grant * (vesting_pct / 100.0) * appreciation_multiplier(equity.annual_appreciation, year)


def refresh_grant_value(equity: EquityTerms, year: int) -> float:
    """
    Refresh grants land at year index (grant.year - 1) and appreciate from
    their issuance year onwards.
    """
    total = 0.0
    for grant in equity.refresh_grants:
        if grant.year != year + 1:
            continue
        years_appreciated = year - (grant.year - 1)
        total += grant.amount * appreciation_multiplier(equity.annual_appreciation, years_appreciated)
    return total


def apply_risk_adjustment(raw: float, company_type: str, equity: EquityTerms) -> float:
    """
    Liquidity discount and exit multiple for private companies.
    Missing terms leave the value unadjusted rather than failing.
    """
    if company_type != "private":
        return raw
    if not equity.has_risk_terms:
        logger.debug("Private company without liquidity discount/exit multiple, skipping risk adjustment")
        return raw
    return raw * (1 - equity.liquidity_discount / 100.0) * equity.exit_multiple


def value_equity(package: CompensationPackage, year: int) -> EquityValue:
    equity = package.equity
    raw = vested_value(equity, year) + refresh_grant_value(equity, year)
    return EquityValue(raw=raw, risk_adjusted=apply_risk_adjustment(raw, package.company_type, equity))
