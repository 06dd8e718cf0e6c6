import logging
from dataclasses import dataclass
from typing import Optional

from logic.errors import ConfigurationError
from logic.models import EQUITY_TYPES, EquityTerms, TaxRateConfig

logger = logging.getLogger(__name__)


@dataclass
class TaxResult:
    equity_type: str
    gross_value: float
    exercise_cost: float  # shares * strike, 0 for RSUs
    taxable_amount: float
    tax: float
    net_value: float
    # NSO spread below zero yields a negative tax (a credit). Passed through
    # unclamped and flagged here so the UI can call it out.
    is_negative_tax_credit: bool


class EquityTaxEngine:
    """
    Flat-rate tax estimate on one year's equity value.
    RSUs pay ordinary rates on the full value, ISOs pay AMT on the spread,
    NSOs pay ordinary rates on the spread.
    """

    def __init__(self, tax_rates: TaxRateConfig):
        self.tax_rates = tax_rates

    def calculate_rsu_tax(self, gross_value: float) -> float:
        return gross_value * self.tax_rates.ordinary_rate

    def calculate_iso_amt(self, gross_value: float, exercise_cost: float) -> float:
        amt_income = gross_value - exercise_cost
        return max(0.0, amt_income * (self.tax_rates.amt / 100.0))

    def calculate_nso_tax(self, gross_value: float, exercise_cost: float) -> float:
        spread = gross_value - exercise_cost
        return spread * self.tax_rates.ordinary_rate

    def run_estimate(self,
                     gross_value: float,
                     equity_type: str,
                     strike_price: Optional[float] = None,
                     shares: Optional[float] = None) -> TaxResult:
        if equity_type not in EQUITY_TYPES:
            raise ConfigurationError(f"must be one of {', '.join(EQUITY_TYPES)}, got {equity_type!r}", "equity.type")

        exercise_cost = 0.0
        if equity_type == "RSU":
            taxable = gross_value
            tax = self.calculate_rsu_tax(gross_value)
        elif strike_price is None or shares is None:
            # Options without strike/shares cannot be estimated; treat as no tax
            logger.debug("%s grant missing strike price or share count, skipping tax estimate", equity_type)
            taxable = 0.0
            tax = 0.0
        else:
            exercise_cost = shares * strike_price
            taxable = gross_value - exercise_cost
            if equity_type == "ISO":
                tax = self.calculate_iso_amt(gross_value, exercise_cost)
            else:
                tax = self.calculate_nso_tax(gross_value, exercise_cost)

        return TaxResult(
            equity_type=equity_type,
            gross_value=gross_value,
            exercise_cost=exercise_cost,
            taxable_amount=taxable,
            tax=tax,
            net_value=gross_value - tax,
            is_negative_tax_credit=tax < 0,
        )


def estimate_tax(gross_value: float,
                 equity_type: str,
                 strike_price: Optional[float],
                 shares: Optional[float],
                 tax_rates: TaxRateConfig) -> float:
    engine = EquityTaxEngine(tax_rates)
    return engine.run_estimate(gross_value, equity_type, strike_price, shares).tax


def estimate_equity_tax(gross_value: float, equity: EquityTerms, tax_rates: TaxRateConfig) -> TaxResult:
    engine = EquityTaxEngine(tax_rates)
    return engine.run_estimate(gross_value, equity.type, equity.strike_price, equity.shares)
