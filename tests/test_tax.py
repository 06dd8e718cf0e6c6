import unittest
from logic import tax
from logic.errors import ConfigurationError
from logic.models import EquityTerms, TaxRateConfig


class TestEquityTax(unittest.TestCase):
    def setUp(self):
        self.rates = TaxRateConfig(federal=24.0, state=9.3, amt=28.0)

    def test_should_tax_rsu_at_ordinary_rates(self):
        # Under test
        amount = tax.estimate_tax(100000.0, "RSU", None, None, self.rates)

        # Postcondition
        self.assertAlmostEqual(amount, 33300.0)

    def test_should_apply_amt_to_iso_spread(self):
        # Precondition
        rates = TaxRateConfig(federal=24.0, state=9.3, amt=28.0)

        # Under test
        amount = tax.estimate_tax(300000.0, "ISO", 5.0, 30000.0, rates)

        # Postcondition
        # 300k - 30k * $5 = 150k of AMT income
        self.assertAlmostEqual(amount, 42000.0)

    def test_should_floor_iso_tax_at_zero(self):
        amount = tax.estimate_tax(100000.0, "ISO", 5.0, 30000.0, self.rates)
        self.assertEqual(amount, 0.0)

    def test_should_tax_nso_spread_at_ordinary_rates(self):
        amount = tax.estimate_tax(300000.0, "NSO", 5.0, 30000.0, self.rates)
        self.assertAlmostEqual(amount, 150000.0 * 0.333)

    def test_should_keep_negative_nso_tax_unclamped(self):
        # Precondition
        # Spread is 100k - 150k = -50k
        engine = tax.EquityTaxEngine(self.rates)

        # Under test
        result = engine.run_estimate(100000.0, "NSO", strike_price=5.0, shares=30000.0)

        # Postcondition
        self.assertAlmostEqual(result.tax, -50000.0 * 0.333)
        self.assertLess(result.tax, 0)
        self.assertTrue(result.is_negative_tax_credit)
        self.assertAlmostEqual(result.net_value, 100000.0 + 50000.0 * 0.333)

    def test_should_skip_option_tax_when_strike_or_shares_missing(self):
        # Under test / Postcondition
        self.assertEqual(tax.estimate_tax(300000.0, "ISO", None, 30000.0, self.rates), 0.0)
        self.assertEqual(tax.estimate_tax(300000.0, "NSO", 5.0, None, self.rates), 0.0)

    def test_should_treat_zero_strike_as_present(self):
        amount = tax.estimate_tax(100000.0, "ISO", 0.0, 1000.0, self.rates)
        self.assertAlmostEqual(amount, 28000.0)

    def test_should_reject_unknown_equity_type(self):
        with self.assertRaises(ConfigurationError):
            tax.estimate_tax(100000.0, "ESPP", None, None, self.rates)

    def test_should_compute_net_from_equity_terms(self):
        # Precondition
        equity = EquityTerms(type="RSU", initial_grant=0.0, vesting_schedule=())

        # Under test
        result = tax.estimate_equity_tax(50000.0, equity, self.rates)

        # Postcondition
        self.assertAlmostEqual(result.tax, 16650.0)
        self.assertAlmostEqual(result.net_value, 33350.0)
        self.assertFalse(result.is_negative_tax_credit)
        self.assertEqual(result.exercise_cost, 0.0)


if __name__ == '__main__':
    unittest.main()
