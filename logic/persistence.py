import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from logic.errors import ConfigurationError
from logic.models import PROJECTION_YEARS, CompensationPackage, TaxRateConfig
from logic.validation import _number, check_horizon, parse_package, parse_tax_rates, tax_rates_to_dict

logger = logging.getLogger(__name__)

DEFAULTS_FILE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config", "defaults.json")
TAX_RATES_FILE = "data/tax_rates.json"
DEFAULT_SESSION_KEY = "default"


@dataclass(frozen=True)
class DefaultConfig:
    """Startup payload: default tax rates, company defaults and both starting packages."""
    tax_rates: TaxRateConfig
    vesting_schedule: Tuple[float, ...]
    liquidity_discount: float
    exit_multiple: float
    current_package: CompensationPackage
    new_package: CompensationPackage


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"expected an object, got {type(value).__name__}", key)
    return value


def _vesting_schedule(equity: Dict[str, Any]) -> Tuple[float, ...]:
    schedule = equity.get("defaultVestingSchedule", [25, 25, 25, 25])
    if not isinstance(schedule, (list, tuple)):
        raise ConfigurationError("expected a list of percentages", "equity.defaultVestingSchedule")
    return tuple(
        _number(pct, f"equity.defaultVestingSchedule[{i}]", minimum=0, maximum=100)
        for i, pct in enumerate(schedule)
    )


def load_defaults(filepath: str = DEFAULTS_FILE) -> DefaultConfig:
    """Loads and validates the defaults payload. A broken payload is fatal."""
    try:
        with open(filepath, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"cannot read defaults from {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("expected an object at the top level", filepath)

    company = _section(data, "company")
    equity = _section(data, "equity")
    packages = _section(data, "packages")
    if "current" not in packages or "new" not in packages:
        raise ConfigurationError("must define both 'current' and 'new'", "packages")

    current = parse_package(packages["current"], "packages.current")
    new = parse_package(packages["new"], "packages.new")
    check_horizon(current, PROJECTION_YEARS, "packages.current")
    check_horizon(new, PROJECTION_YEARS, "packages.new")

    return DefaultConfig(
        tax_rates=parse_tax_rates(data.get("taxRates"), "taxRates"),
        vesting_schedule=_vesting_schedule(equity),
        liquidity_discount=_number(company.get("defaultLiquidityDiscount", 30), "company.defaultLiquidityDiscount", minimum=0, maximum=100),
        exit_multiple=_number(company.get("defaultExitMultiple", 2), "company.defaultExitMultiple", minimum=0),
        current_package=current,
        new_package=new,
    )


def _read_cache(filepath: str) -> Dict[str, Any]:
    if not os.path.exists(filepath):
        return {}
    try:
        with open(filepath, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable tax rate cache %s: %s", filepath, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring tax rate cache %s: expected an object", filepath)
        return {}
    return data


def _numeric_only(saved: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay saved values onto defaults, keeping only keys the defaults know with numeric values."""
    merged = defaults.copy()
    for key, default_value in defaults.items():
        if key not in saved:
            continue
        value = saved[key]
        if isinstance(default_value, dict):
            if isinstance(value, dict):
                merged[key] = _numeric_only(value, default_value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            merged[key] = value
        else:
            logger.warning("Dropping non-numeric cached tax rate %s=%r", key, value)
    return merged


def load_tax_rates(defaults: TaxRateConfig,
                   session_key: str = DEFAULT_SESSION_KEY,
                   filepath: str = TAX_RATES_FILE) -> TaxRateConfig:
    """Loads cached tax-rate overrides for a session, falling back to defaults."""
    saved = _read_cache(filepath).get(session_key)
    if not isinstance(saved, dict):
        return defaults

    merged = _numeric_only(saved, tax_rates_to_dict(defaults))
    try:
        return parse_tax_rates(merged)
    except ConfigurationError as e:
        logger.warning("Ignoring cached tax rates for session %s: %s", session_key, e)
        return defaults


def save_tax_rates(rates: TaxRateConfig,
                   session_key: str = DEFAULT_SESSION_KEY,
                   filepath: str = TAX_RATES_FILE) -> None:
    """Saves tax rates for a session, preserving entries for other sessions."""
    existing_data = _read_cache(filepath)
    existing_data[session_key] = tax_rates_to_dict(rates)

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    try:
        with open(filepath, "w") as f:
            json.dump(existing_data, f, indent=2)
    except OSError as e:
        logger.error("Error saving tax rates to %s: %s", filepath, e)
        raise
