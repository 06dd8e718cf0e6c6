import unittest
from logic.errors import ConfigurationError
from logic.models import RefreshGrant
from logic.validation import (
    check_horizon,
    package_to_dict,
    parse_package,
    parse_tax_rates,
    tax_rates_to_dict,
)


def build_payload() -> dict:
    return {
        "base": 170000,
        "growth": [{"salaryGrowth": 5, "bonusPercentage": 15}] * 4,
        "company": {"type": "private"},
        "equity": {
            "type": "ISO",
            "initialGrant": 300000,
            "vestingSchedule": [25, 25, 25, 25],
            "refreshGrants": [{"year": 2, "amount": 50000}],
            "annualAppreciation": 10,
            "strikePrice": 5,
            "shares": 30000,
            "liquidityDiscount": 30,
            "exitMultiple": 2,
        },
    }


class TestParsePackage(unittest.TestCase):
    def test_should_parse_complete_payload(self):
        # Under test
        pkg = parse_package(build_payload())

        # Postcondition
        self.assertEqual(pkg.base, 170000.0)
        self.assertEqual(len(pkg.growth), 4)
        self.assertEqual(pkg.growth[0].bonus_percentage, 15.0)
        self.assertTrue(pkg.is_private)
        self.assertEqual(pkg.equity.type, "ISO")
        self.assertEqual(pkg.equity.refresh_grants, (RefreshGrant(year=2, amount=50000.0),))
        self.assertEqual(pkg.equity.strike_price, 5.0)
        self.assertIsNone(pkg.equity.current_fmv)
        self.assertTrue(pkg.equity.has_risk_terms)

    def test_should_default_optional_fields_to_neutral(self):
        # Precondition
        payload = build_payload()
        for key in ("annualAppreciation", "strikePrice", "shares", "liquidityDiscount", "exitMultiple", "refreshGrants"):
            del payload["equity"][key]

        # Under test
        pkg = parse_package(payload)

        # Postcondition
        self.assertEqual(pkg.equity.annual_appreciation, 0.0)
        self.assertIsNone(pkg.equity.strike_price)
        self.assertIsNone(pkg.equity.shares)
        self.assertFalse(pkg.equity.has_risk_terms)
        self.assertEqual(pkg.equity.refresh_grants, ())

    def test_should_name_field_path_when_base_missing(self):
        # Precondition
        payload = build_payload()
        del payload["base"]

        # Under test / Postcondition
        with self.assertRaises(ConfigurationError) as ctx:
            parse_package(payload)
        self.assertEqual(ctx.exception.field, "package.base")

    def test_should_reject_non_numeric_and_nan_values(self):
        for bad in ("150000", None, float("nan"), float("inf"), True):
            payload = build_payload()
            payload["growth"][1] = {"salaryGrowth": bad, "bonusPercentage": 10}
            with self.assertRaises(ConfigurationError, msg=f"accepted {bad!r}"):
                parse_package(payload)

    def test_should_reject_unknown_enums(self):
        # Precondition
        bad_company = build_payload()
        bad_company["company"]["type"] = "nonprofit"
        bad_equity = build_payload()
        bad_equity["equity"]["type"] = "ESPP"

        # Under test / Postcondition
        with self.assertRaises(ConfigurationError):
            parse_package(bad_company)
        with self.assertRaises(ConfigurationError):
            parse_package(bad_equity)

    def test_should_reject_out_of_bounds_amounts(self):
        cases = [
            ("base", 0),
            ("base", -1),
        ]
        for key, value in cases:
            payload = build_payload()
            payload[key] = value
            with self.assertRaises(ConfigurationError):
                parse_package(payload)

        payload = build_payload()
        payload["equity"]["vestingSchedule"] = [25, 125, 25, 25]
        with self.assertRaises(ConfigurationError):
            parse_package(payload)

        payload = build_payload()
        payload["equity"]["initialGrant"] = -5
        with self.assertRaises(ConfigurationError):
            parse_package(payload)

        # Liquidity discount is a percentage of the exit value
        payload = build_payload()
        payload["equity"]["liquidityDiscount"] = 150
        with self.assertRaises(ConfigurationError):
            parse_package(payload)

    def test_should_reject_refresh_grant_in_first_year(self):
        # Precondition
        payload = build_payload()
        payload["equity"]["refreshGrants"] = [{"year": 1, "amount": 1000}]

        # Under test / Postcondition
        with self.assertRaises(ConfigurationError):
            parse_package(payload)

    def test_should_reject_fractional_refresh_year(self):
        payload = build_payload()
        payload["equity"]["refreshGrants"] = [{"year": 2.5, "amount": 1000}]
        with self.assertRaises(ConfigurationError):
            parse_package(payload)

    def test_should_rebuild_same_package_from_dict(self):
        pkg = parse_package(build_payload())
        self.assertEqual(parse_package(package_to_dict(pkg)), pkg)


class TestCheckHorizon(unittest.TestCase):
    def test_should_pass_when_schedules_cover_horizon(self):
        check_horizon(parse_package(build_payload()), 4)

    def test_should_fail_when_vesting_too_short(self):
        # Precondition
        payload = build_payload()
        payload["equity"]["vestingSchedule"] = [50, 50]

        # Under test / Postcondition
        with self.assertRaises(ConfigurationError) as ctx:
            check_horizon(parse_package(payload), 4)
        self.assertEqual(ctx.exception.field, "package.equity.vestingSchedule")


class TestParseTaxRates(unittest.TestCase):
    def test_should_parse_rates_with_capital_gains(self):
        # Under test
        rates = parse_tax_rates({"federal": 24, "state": 9.3, "amt": 28, "capitalGains": {"shortTerm": 24, "longTerm": 15}})

        # Postcondition
        self.assertEqual(rates.federal, 24.0)
        self.assertEqual(rates.capital_gains_long_term, 15.0)
        self.assertAlmostEqual(rates.ordinary_rate, 0.333)

    def test_should_default_missing_capital_gains(self):
        rates = parse_tax_rates({"federal": 24, "state": 9.3, "amt": 28})
        self.assertEqual(rates.capital_gains_short_term, 0.0)

    def test_should_reject_missing_or_invalid_rates(self):
        with self.assertRaises(ConfigurationError):
            parse_tax_rates({"federal": 24, "state": 9.3})
        with self.assertRaises(ConfigurationError):
            parse_tax_rates({"federal": 124, "state": 9.3, "amt": 28})
        with self.assertRaises(ConfigurationError):
            parse_tax_rates(None)

    def test_should_rebuild_same_rates_from_dict(self):
        rates = parse_tax_rates({"federal": 22, "state": 5, "amt": 26, "capitalGains": {"shortTerm": 22, "longTerm": 15}})
        self.assertEqual(parse_tax_rates(tax_rates_to_dict(rates)), rates)


if __name__ == '__main__':
    unittest.main()
