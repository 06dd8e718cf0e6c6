"""
Boundary parsing for package and tax-rate payloads.

Payloads use the camelCase layout of config/defaults.json. Everything that
enters the projection functions goes through here first so that a missing or
non-numeric field is reported as a ConfigurationError instead of surfacing
later as a NaN in a chart.
"""
import math
from typing import Any, Dict, Optional

from logic.errors import ConfigurationError
from logic.models import (
    COMPANY_TYPES,
    EQUITY_TYPES,
    CompensationPackage,
    EquityTerms,
    GrowthStep,
    RefreshGrant,
    TaxRateConfig,
)


def _number(value: Any, field: str, minimum: Optional[float] = None, maximum: Optional[float] = None) -> float:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"expected a number, got {value!r}", field)
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise ConfigurationError("must be a finite number", field)
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"must be >= {minimum:g}, got {value:g}", field)
    if maximum is not None and value > maximum:
        raise ConfigurationError(f"must be <= {maximum:g}, got {value:g}", field)
    return value


def _optional_number(data: Dict[str, Any], key: str, field: str,
                     minimum: Optional[float] = None, maximum: Optional[float] = None) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    return _number(value, field, minimum=minimum, maximum=maximum)


def _require(data: Dict[str, Any], key: str, field: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigurationError(f"expected an object, got {type(data).__name__}", field)
    if key not in data or data[key] is None:
        raise ConfigurationError("is required", f"{field}.{key}" if field else key)
    return data[key]


def parse_growth(raw: Any, field: str = "growth") -> tuple:
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError("expected a list of yearly growth entries", field)
    steps = []
    for i, entry in enumerate(raw):
        entry_field = f"{field}[{i}]"
        steps.append(GrowthStep(
            salary_growth=_number(_require(entry, "salaryGrowth", entry_field), f"{entry_field}.salaryGrowth", minimum=-100),
            bonus_percentage=_number(_require(entry, "bonusPercentage", entry_field), f"{entry_field}.bonusPercentage", minimum=0),
        ))
    return tuple(steps)


def parse_equity(raw: Any, field: str = "equity") -> EquityTerms:
    equity_type = _require(raw, "type", field)
    if equity_type not in EQUITY_TYPES:
        raise ConfigurationError(f"must be one of {', '.join(EQUITY_TYPES)}, got {equity_type!r}", f"{field}.type")

    schedule = _require(raw, "vestingSchedule", field)
    if not isinstance(schedule, (list, tuple)):
        raise ConfigurationError("expected a list of percentages", f"{field}.vestingSchedule")
    vesting = tuple(
        _number(pct, f"{field}.vestingSchedule[{i}]", minimum=0, maximum=100)
        for i, pct in enumerate(schedule)
    )

    grants_raw = raw.get("refreshGrants") or []
    if not isinstance(grants_raw, (list, tuple)):
        raise ConfigurationError("expected a list of grants", f"{field}.refreshGrants")
    grants = []
    for i, grant in enumerate(grants_raw):
        grant_field = f"{field}.refreshGrants[{i}]"
        year = _number(_require(grant, "year", grant_field), f"{grant_field}.year", minimum=2)
        if not year.is_integer():
            raise ConfigurationError(f"must be a whole year, got {year:g}", f"{grant_field}.year")
        grants.append(RefreshGrant(
            year=int(year),
            amount=_number(_require(grant, "amount", grant_field), f"{grant_field}.amount", minimum=0),
        ))

    appreciation = raw.get("annualAppreciation")
    return EquityTerms(
        type=equity_type,
        initial_grant=_number(_require(raw, "initialGrant", field), f"{field}.initialGrant", minimum=0),
        vesting_schedule=vesting,
        refresh_grants=tuple(grants),
        annual_appreciation=0.0 if appreciation is None else _number(appreciation, f"{field}.annualAppreciation", minimum=-100),
        strike_price=_optional_number(raw, "strikePrice", f"{field}.strikePrice", minimum=0),
        shares=_optional_number(raw, "shares", f"{field}.shares", minimum=0),
        current_fmv=_optional_number(raw, "currentFMV", f"{field}.currentFMV", minimum=0),
        liquidity_discount=_optional_number(raw, "liquidityDiscount", f"{field}.liquidityDiscount", minimum=0, maximum=100),
        exit_multiple=_optional_number(raw, "exitMultiple", f"{field}.exitMultiple", minimum=0),
    )


def parse_package(raw: Any, field: str = "package") -> CompensationPackage:
    """Builds a CompensationPackage from its JSON form, rejecting malformed input."""
    base = _number(_require(raw, "base", field), f"{field}.base", minimum=0)
    if base <= 0:
        raise ConfigurationError("must be positive", f"{field}.base")

    company = _require(raw, "company", field)
    company_type = _require(company, "type", f"{field}.company")
    if company_type not in COMPANY_TYPES:
        raise ConfigurationError(f"must be one of {', '.join(COMPANY_TYPES)}, got {company_type!r}", f"{field}.company.type")

    return CompensationPackage(
        base=base,
        growth=parse_growth(_require(raw, "growth", field), f"{field}.growth"),
        company_type=company_type,
        equity=parse_equity(_require(raw, "equity", field), f"{field}.equity"),
    )


def parse_tax_rates(raw: Any, field: str = "taxRates") -> TaxRateConfig:
    capital_gains = raw.get("capitalGains") if isinstance(raw, dict) else None
    capital_gains = capital_gains or {}
    return TaxRateConfig(
        federal=_number(_require(raw, "federal", field), f"{field}.federal", minimum=0, maximum=100),
        state=_number(_require(raw, "state", field), f"{field}.state", minimum=0, maximum=100),
        amt=_number(_require(raw, "amt", field), f"{field}.amt", minimum=0, maximum=100),
        capital_gains_short_term=_number(capital_gains.get("shortTerm", 0), f"{field}.capitalGains.shortTerm", minimum=0, maximum=100),
        capital_gains_long_term=_number(capital_gains.get("longTerm", 0), f"{field}.capitalGains.longTerm", minimum=0, maximum=100),
    )


def check_horizon(package: CompensationPackage, years: int, field: str = "package") -> None:
    """Raises if the package cannot be projected for the full horizon."""
    if len(package.growth) < years:
        raise ConfigurationError(f"needs {years} year(s), has {len(package.growth)}", f"{field}.growth")
    if len(package.equity.vesting_schedule) < years:
        raise ConfigurationError(
            f"needs {years} year(s), has {len(package.equity.vesting_schedule)}",
            f"{field}.equity.vestingSchedule",
        )


def package_to_dict(package: CompensationPackage) -> Dict[str, Any]:
    equity = package.equity
    data = {
        "base": package.base,
        "growth": [
            {"salaryGrowth": s.salary_growth, "bonusPercentage": s.bonus_percentage}
            for s in package.growth
        ],
        "company": {"type": package.company_type},
        "equity": {
            "type": equity.type,
            "initialGrant": equity.initial_grant,
            "vestingSchedule": list(equity.vesting_schedule),
            "refreshGrants": [{"year": g.year, "amount": g.amount} for g in equity.refresh_grants],
            "annualAppreciation": equity.annual_appreciation,
        },
    }
    optional = {
        "strikePrice": equity.strike_price,
        "shares": equity.shares,
        "currentFMV": equity.current_fmv,
        "liquidityDiscount": equity.liquidity_discount,
        "exitMultiple": equity.exit_multiple,
    }
    data["equity"].update({k: v for k, v in optional.items() if v is not None})
    return data


def tax_rates_to_dict(rates: TaxRateConfig) -> Dict[str, Any]:
    return {
        "federal": rates.federal,
        "state": rates.state,
        "amt": rates.amt,
        "capitalGains": {
            "shortTerm": rates.capital_gains_short_term,
            "longTerm": rates.capital_gains_long_term,
        },
    }
