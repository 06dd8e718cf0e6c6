from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

EQUITY_TYPES = ("RSU", "ISO", "NSO")
COMPANY_TYPES = ("public", "private")

# Every comparison in the app looks four years ahead
PROJECTION_YEARS = 4

# Flat haircut applied to the final-year difference when the new offer is private
PRIVATE_COMPANY_HAIRCUT = 0.7


@dataclass(frozen=True)
class GrowthStep:
    """Growth applied when moving into a year, plus that year's bonus target."""
    salary_growth: float  # percent
    bonus_percentage: float  # percent of that year's salary


@dataclass(frozen=True)
class RefreshGrant:
    year: int  # 1-based, first value shows up at year index (year - 1)
    amount: float


@dataclass(frozen=True)
class EquityTerms:
    type: str  # 'RSU', 'ISO', 'NSO'
    initial_grant: float
    vesting_schedule: Tuple[float, ...]  # percent vesting *in* each year, not cumulative
    refresh_grants: Tuple[RefreshGrant, ...] = ()
    annual_appreciation: float = 0.0
    # Options only
    strike_price: Optional[float] = None
    shares: Optional[float] = None
    current_fmv: Optional[float] = None
    # Private companies only
    liquidity_discount: Optional[float] = None
    exit_multiple: Optional[float] = None

    @property
    def is_option(self) -> bool:
        return self.type in ("ISO", "NSO")

    @property
    def has_risk_terms(self) -> bool:
        return self.liquidity_discount is not None and self.exit_multiple is not None


@dataclass(frozen=True)
class CompensationPackage:
    """
    One offer. Never mutated: every edit returns a new package so that a
    projection always reads a consistent snapshot.
    """
    base: float
    growth: Tuple[GrowthStep, ...]
    company_type: str  # 'public', 'private'
    equity: EquityTerms

    @property
    def is_private(self) -> bool:
        return self.company_type == "private"

    def with_base(self, base: float) -> "CompensationPackage":
        return replace(self, base=base)

    def with_growth_step(self, year: int, **changes) -> "CompensationPackage":
        steps = list(self.growth)
        steps[year] = replace(steps[year], **changes)
        return replace(self, growth=tuple(steps))

    def with_equity(self, **changes) -> "CompensationPackage":
        return replace(self, equity=replace(self.equity, **changes))

    def with_company_type(self, company_type: str, liquidity_discount: Optional[float] = None,
                          exit_multiple: Optional[float] = None) -> "CompensationPackage":
        """
        Switch company type. Going public drops the private-company risk terms,
        going private seeds them with the supplied defaults.
        """
        if company_type == "public":
            equity = replace(self.equity, liquidity_discount=None, exit_multiple=None)
        else:
            equity = replace(self.equity, liquidity_discount=liquidity_discount, exit_multiple=exit_multiple)
        return replace(self, company_type=company_type, equity=equity)


@dataclass(frozen=True)
class TaxRateConfig:
    """Flat rates in percent. Shared by both packages being compared."""
    federal: float
    state: float
    amt: float
    capital_gains_short_term: float = 0.0
    capital_gains_long_term: float = 0.0

    @property
    def ordinary_rate(self) -> float:
        return (self.federal + self.state) / 100.0


@dataclass(frozen=True)
class EquityValue:
    raw: float
    risk_adjusted: float


@dataclass(frozen=True)
class YearlyBreakdown:
    year: int  # 0-based index
    salary: float
    bonus: float
    equity: EquityValue
    tax: float
    total: float

    @property
    def cash(self) -> float:
        return self.salary + self.bonus

    @property
    def net_equity(self) -> float:
        return self.equity.risk_adjusted - self.tax

    @property
    def label(self) -> str:
        return f"Year {self.year + 1}"


@dataclass(frozen=True)
class ComparisonYear:
    year: int
    current: YearlyBreakdown
    new: YearlyBreakdown
    difference: float  # new.total - current.total, may be negative

    @property
    def label(self) -> str:
        return f"Year {self.year + 1}"


@dataclass(frozen=True)
class ComparisonResult:
    years: Tuple[ComparisonYear, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.years)

    def __iter__(self):
        return iter(self.years)

    def __getitem__(self, idx: int) -> ComparisonYear:
        return self.years[idx]

    @property
    def total_difference(self) -> float:
        return sum(y.difference for y in self.years)

    def risk_adjusted_difference(self, new_company_type: str) -> float:
        """Final-year difference, haircut when the new offer is a private company."""
        if not self.years:
            return 0.0
        multiplier = PRIVATE_COMPANY_HAIRCUT if new_company_type == "private" else 1.0
        return self.years[-1].difference * multiplier
