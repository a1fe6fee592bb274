"""Unit tests for progressive income tax on additional income.

Uses the shipped 2026 brackets:
10% to 84,120 | 14% to 120,720 | 20% to 193,800 | 31% to 269,280 |
35% to 560,280 | 47% to 721,560 | 50% above
"""

import pytest

from equitycalc.sdk.taxes import (
    DEFAULT_TAX_CONFIGURATION as CONFIG,
    BracketTax,
    calc_income_tax,
    calc_income_tax_brackets,
    calc_marginal_income_tax,
)


class TestCumulativeIncomeTax:
    """Tests for calc_income_tax()."""

    def test_zero_income(self):
        assert calc_income_tax(CONFIG, 0) == 0

    def test_first_bracket_only(self):
        assert calc_income_tax(CONFIG, 50000) == pytest.approx(5000)

    def test_two_brackets(self):
        """100,000 = 84,120 at 10% + 15,880 at 14%."""
        assert calc_income_tax(CONFIG, 100000) == pytest.approx(8412 + 15880 * 0.14)


class TestMarginalIncomeTax:
    """Tests for calc_marginal_income_tax()."""

    def test_zero_additional_is_zero(self):
        assert calc_marginal_income_tax(CONFIG, 400000, 0) == 0

    def test_negative_additional_is_zero(self):
        assert calc_marginal_income_tax(CONFIG, 400000, -5000) == 0

    def test_last_shekel_of_first_bracket(self):
        """One shekel ending exactly at 84,120 is taxed at 10%."""
        assert calc_marginal_income_tax(CONFIG, 84119, 1) == pytest.approx(0.10)

    def test_baseline_at_bracket_edge(self):
        """Baseline exactly at the edge: all additional income at 14%."""
        assert calc_marginal_income_tax(CONFIG, 84120, 1000) == pytest.approx(140)

    def test_from_zero_baseline(self):
        assert calc_marginal_income_tax(CONFIG, 0, 84120) == pytest.approx(8412)

    def test_top_bracket(self):
        assert calc_marginal_income_tax(CONFIG, 1_000_000, 1000) == pytest.approx(500)

    def test_split_across_brackets(self):
        """84,000 + 1,000: 120 at 10% and 880 at 14%."""
        assert calc_marginal_income_tax(CONFIG, 84000, 1000) == pytest.approx(12 + 123.2)

    def test_decomposes_into_sum(self):
        """Tax on a+b equals tax on a followed by tax on b."""
        base, a, b = 150000, 40000, 90000
        whole = calc_marginal_income_tax(CONFIG, base, a + b)
        parts = calc_marginal_income_tax(CONFIG, base, a) + calc_marginal_income_tax(CONFIG, base + a, b)
        assert whole == pytest.approx(parts)

    def test_higher_baseline_never_taxed_less(self):
        taxes = [calc_marginal_income_tax(CONFIG, base, 10000) for base in range(0, 900000, 25000)]
        assert all(a <= b + 1e-9 for a, b in zip(taxes, taxes[1:]))

    def test_more_income_never_taxed_less(self):
        """Fixed baseline, income growing across the 84,120 edge."""
        amounts = sorted(set(range(0, 20001, 500)) | {4119, 4120, 4121})
        taxes = [calc_marginal_income_tax(CONFIG, 80000, amount) for amount in amounts]
        assert all(a <= b + 1e-9 for a, b in zip(taxes, taxes[1:]))
        assert taxes[amounts.index(4120)] == pytest.approx(412)

    def test_negative_baseline_treated_as_zero(self):
        assert calc_marginal_income_tax(CONFIG, -50000, 1000) == pytest.approx(100)


class TestIncomeTaxBrackets:
    """Tests for calc_income_tax_brackets()."""

    def test_split_across_two_brackets(self):
        brackets = calc_income_tax_brackets(CONFIG, 84000, 1000)

        assert len(brackets) == 2
        assert brackets[0].rate == 0.10
        assert brackets[0].taxable == pytest.approx(120)
        assert brackets[0].tax == pytest.approx(12)
        assert brackets[1].rate == 0.14
        assert brackets[1].taxable == pytest.approx(880)
        assert brackets[1].tax == pytest.approx(123.2)

    def test_filled_brackets_are_skipped(self):
        brackets = calc_income_tax_brackets(CONFIG, 400000, 18500)
        assert brackets == [BracketTax(rate=0.35, taxable=18500, tax=pytest.approx(6475))]

    def test_zero_additional_is_empty(self):
        assert calc_income_tax_brackets(CONFIG, 400000, 0) == []

    def test_top_bracket_is_unbounded(self):
        brackets = calc_income_tax_brackets(CONFIG, 721560, 100000)
        assert [b.rate for b in brackets] == [0.50]
        assert brackets[0].taxable == pytest.approx(100000)

    @pytest.mark.parametrize("baseline,income", [
        (0, 50000),
        (84000, 1000),
        (100000, 250000),
        (650000, 200000),
    ])
    def test_sums_to_marginal_tax(self, baseline, income):
        brackets = calc_income_tax_brackets(CONFIG, baseline, income)
        assert sum(b.tax for b in brackets) == pytest.approx(
            calc_marginal_income_tax(CONFIG, baseline, income)
        )
        assert sum(b.taxable for b in brackets) == pytest.approx(income)
