"""Tests for compute_breakdown (gross-to-net orchestration).

Exact figures use the small fixture jurisdiction from conftest; comparative
scenarios use the bundled de-2025 jurisdiction.
"""

import pytest

from netpay.sdk import SalaryInput, TaxClassNotFoundError, compute_breakdown


def make_input(**overrides) -> SalaryInput:
    fields = {"base_monthly_gross": 3000, "tax_class": "A"}
    fields.update(overrides)
    return SalaryInput(**fields)


def assert_consistent(breakdown):
    """Totals add up and net = gross - deductions."""
    c = breakdown.social_contributions
    expected_deductions = (
        breakdown.income_tax
        + breakdown.solidarity_tax
        + breakdown.church_tax
        + c.health + c.pension + c.unemployment + c.long_term_care + c.voluntary
    )
    assert breakdown.total_deductions == pytest.approx(expected_deductions)
    assert breakdown.annual_net == pytest.approx(breakdown.annual_gross - breakdown.total_deductions)
    assert breakdown.monthly_net == pytest.approx(breakdown.annual_net / breakdown.paid_periods)


class TestExactBreakdown:
    """Hand-computed scenario: 3000/month, class A, childless."""

    @pytest.fixture
    def breakdown(self, simple_config):
        return compute_breakdown(make_input(), simple_config)

    def test_gross(self, breakdown):
        assert breakdown.annual_gross == pytest.approx(36000)
        assert breakdown.monthly_gross == pytest.approx(3000)
        assert breakdown.annual_bonuses == 0

    def test_taxes(self, breakdown):
        """36000 - 10000 allowance = 26000 -> 1000 + 16000 * 30%."""
        assert breakdown.taxable_income == pytest.approx(36000)
        assert breakdown.income_tax == pytest.approx(5800)
        assert breakdown.solidarity_tax == 0  # below free allowance
        assert breakdown.church_tax == 0

    def test_contributions(self, breakdown):
        c = breakdown.social_contributions
        assert c.health == pytest.approx(2880)
        assert c.pension == pytest.approx(3240)
        assert c.unemployment == pytest.approx(360)
        assert c.long_term_care == pytest.approx(900)  # 2.5% incl. childless surcharge
        assert c.voluntary == 0

    def test_net(self, breakdown):
        assert breakdown.total_deductions == pytest.approx(13180)
        assert breakdown.annual_net == pytest.approx(22820)
        assert breakdown.monthly_net == pytest.approx(22820 / 12)
        assert_consistent(breakdown)

    def test_monthly_amounts(self, breakdown):
        assert breakdown.monthly_grosses == [3000] * 12
        assert breakdown.monthly_net_amounts == pytest.approx([22820 / 12] * 12)


class TestTaxableIncome:
    """Allowances and benefits in kind feed the taxable income."""

    def test_all_adjustments(self, simple_config):
        salary = make_input(
            car_list_price=40000,
            car_type="hybrid",            # +2400
            meal_vouchers=80,             # +360
            home_office_days=60,          # -360
            commute_distance_km=10,
            commute_days_per_month=10,    # -360
            company_pension=100,          # -1200
            capital_gains_allowance=40,   # -480
        )

        breakdown = compute_breakdown(salary, simple_config)

        assert breakdown.taxable_income == pytest.approx(36000 + 2400 + 360 - 360 - 360 - 1200 - 480)
        assert breakdown.allowances.total_additions == pytest.approx(2760)
        assert breakdown.allowances.total_reductions == pytest.approx(2400)

    def test_taxable_income_floored_at_zero(self, simple_config):
        salary = make_input(base_monthly_gross=50, home_office_days=200)

        breakdown = compute_breakdown(salary, simple_config)

        assert breakdown.taxable_income == 0
        assert breakdown.income_tax == 0

    def test_child_allowance_is_informational(self, simple_config):
        without = compute_breakdown(make_input(), simple_config)
        with_factors = compute_breakdown(make_input(child_allowance_factors=1.0), simple_config)

        assert with_factors.allowances.child_allowance == pytest.approx(9600)
        assert with_factors.taxable_income == without.taxable_income


class TestBonusesAndCaps:
    """Bonus months and per-period contribution ceilings."""

    def test_bonus_month_hits_ceiling(self, simple_config):
        salary = make_input(bonuses=[{"id": "dec", "period": 12, "kind": "amount", "value": 9000}])

        breakdown = compute_breakdown(salary, simple_config)

        assert breakdown.annual_bonuses == pytest.approx(9000)
        assert breakdown.monthly_grosses[11] == pytest.approx(12000)
        assert breakdown.social_contributions.pension == pytest.approx(11 * 270 + 630)
        assert_consistent(breakdown)

    def test_monthly_net_amounts_sum_to_annual_net(self, simple_config):
        salary = make_input(
            voluntary_insurance=True,
            bonuses=[
                {"id": "jun", "period": 6, "kind": "amount", "value": 1500},
                {"id": "nov", "period": 11, "kind": "percent", "value": 50},
            ],
        )

        breakdown = compute_breakdown(salary, simple_config)

        assert sum(breakdown.monthly_net_amounts) == pytest.approx(breakdown.annual_net)
        assert breakdown.monthly_net_amounts[10] > breakdown.monthly_net_amounts[0]

    def test_monthly_net_reconciles_when_low_months_go_negative(self, simple_config):
        # Car benefit 1,000,000 * 1% * 12 = 120000 -> taxable 172000, tax 46600.
        # Regular months owe more tax share plus contributions than they pay out.
        salary = make_input(
            base_monthly_gross=1000,
            solidarity_tax=False,
            car_list_price=1_000_000,
            car_type="combustion",
            bonuses=[{"id": "dec", "period": 12, "kind": "amount", "value": 40000}],
        )

        breakdown = compute_breakdown(salary, simple_config)

        # 52000 - 46600 - (11 * 205 + 1225)
        assert breakdown.annual_net == pytest.approx(1920)
        assert breakdown.monthly_net_amounts[:11] == [0] * 11
        assert breakdown.monthly_net_amounts[11] == pytest.approx(1920)
        assert sum(breakdown.monthly_net_amounts) == pytest.approx(breakdown.annual_net)
        assert_consistent(breakdown)

    def test_partial_year(self, simple_config):
        breakdown = compute_breakdown(make_input(paid_periods=6), simple_config)

        assert breakdown.paid_periods == 6
        assert breakdown.annual_gross == pytest.approx(18000)
        assert breakdown.monthly_net == pytest.approx(breakdown.annual_net / 6)
        assert breakdown.monthly_net_amounts[6:] == [0] * 6

    def test_zero_periods_means_full_year(self, simple_config):
        breakdown = compute_breakdown(make_input(paid_periods=0), simple_config)

        assert breakdown.paid_periods == 12
        assert breakdown.annual_gross == pytest.approx(36000)


class TestInputSwitches:
    """Flags and family situation."""

    def test_private_health_insurance(self, simple_config):
        statutory = compute_breakdown(make_input(), simple_config)
        private = compute_breakdown(make_input(private_health_insurance=True), simple_config)

        assert private.social_contributions.health == 0
        assert private.total_deductions < statutory.total_deductions

    def test_childless_surcharge(self, simple_config):
        childless = compute_breakdown(make_input(dependents_under_25=0), simple_config)
        one_child = compute_breakdown(make_input(dependents_under_25=1), simple_config)

        difference = childless.social_contributions.long_term_care - one_child.social_contributions.long_term_care
        assert difference == pytest.approx(0.005 * 3000 * 12)

    def test_solidarity_above_threshold(self, simple_config):
        with_soli = compute_breakdown(make_input(base_monthly_gross=6000), simple_config)
        without_soli = compute_breakdown(make_input(base_monthly_gross=6000, solidarity_tax=False), simple_config)

        assert with_soli.solidarity_tax == pytest.approx(with_soli.income_tax * 0.05)
        assert without_soli.solidarity_tax == 0

    def test_church_tax_by_state(self, simple_config):
        bavaria = compute_breakdown(make_input(church_tax=True, federal_state="BY"), simple_config)
        other = compute_breakdown(make_input(church_tax=True, federal_state="NW"), simple_config)

        assert bavaria.church_tax == pytest.approx(bavaria.income_tax * 0.08)
        assert other.church_tax == pytest.approx(other.income_tax * 0.09)

    def test_voluntary_insurance(self, simple_config):
        breakdown = compute_breakdown(
            make_input(base_monthly_gross=6000, voluntary_insurance=True), simple_config
        )

        assert breakdown.social_contributions.voluntary == pytest.approx(240)
        assert_consistent(breakdown)


class TestLookupAndPurity:

    def test_unknown_tax_class(self, simple_config):
        with pytest.raises(TaxClassNotFoundError) as exc_info:
            compute_breakdown(make_input(tax_class="Z"), simple_config)

        assert exc_info.value.tax_class == "Z"
        assert exc_info.value.available == ["A"]
        assert "Unknown tax class 'Z'" in str(exc_info.value)

    def test_idempotent(self, de_config):
        salary = SalaryInput(
            base_monthly_gross=5200,
            tax_class="III",
            church_tax=True,
            federal_state="BY",
            bonuses=[{"id": "x", "period": 3, "kind": "percent", "value": 15}],
        )

        first = compute_breakdown(salary, de_config)
        second = compute_breakdown(salary, de_config)

        assert first.model_dump() == second.model_dump()

    def test_degenerate_input_is_defined(self, simple_config):
        salary = SalaryInput(
            base_monthly_gross=float("nan"),
            tax_class="A",
            paid_periods=-2,
            home_office_days=-10,
            commute_distance_km=-3,
        )

        breakdown = compute_breakdown(salary, simple_config)

        assert breakdown.annual_gross == 0
        assert breakdown.annual_net == 0
        assert breakdown.total_deductions == 0


class TestBundledJurisdiction:
    """Comparative scenarios on de-2025."""

    @pytest.fixture
    def base_input(self):
        return {
            "base_monthly_gross": 6500,
            "tax_class": "I",
            "bonuses": [
                {"id": "june", "period": 6, "kind": "amount", "value": 1000},
                {"id": "nov", "period": 11, "kind": "percent", "value": 20},
            ],
            "home_office_days": 60,
            "commute_days_per_month": 12,
            "commute_distance_km": 18,
            "child_allowance_factors": 0.5,
            "dependents_under_25": 1,
            "age": 35,
            "federal_state": "NW",
            "health_additional_rate": 1.5,
        }

    def test_consistent(self, de_config, base_input):
        breakdown = compute_breakdown(SalaryInput(**base_input), de_config)

        assert breakdown.annual_gross > 6500 * 12
        assert breakdown.annual_bonuses == pytest.approx(1000 + 0.2 * 78000)
        assert breakdown.income_tax > 0
        assert breakdown.currency == "EUR"
        assert_consistent(breakdown)

    def test_voluntary_insurance_adds_deductions(self, de_config, base_input):
        without = compute_breakdown(SalaryInput(**base_input), de_config)
        with_voluntary = compute_breakdown(SalaryInput(**base_input, voluntary_insurance=True), de_config)

        assert with_voluntary.social_contributions.voluntary > 0
        assert with_voluntary.total_deductions > without.total_deductions

    @pytest.mark.parametrize("car_type,benefit", [
        ("combustion", 4800),
        ("hybrid", 2400),
        ("electric", 1200),
        ("none", 0),
    ])
    def test_company_car(self, de_config, base_input, car_type, benefit):
        without = compute_breakdown(SalaryInput(**base_input), de_config)
        with_car = compute_breakdown(
            SalaryInput(**base_input, car_list_price=40000, car_type=car_type), de_config
        )

        assert with_car.taxable_income - without.taxable_income == pytest.approx(benefit)
        if benefit:
            assert with_car.annual_net < without.annual_net

    def test_company_pension_lowers_tax(self, de_config, base_input):
        without = compute_breakdown(SalaryInput(**base_input), de_config)
        with_pension = compute_breakdown(SalaryInput(**base_input, company_pension=200), de_config)

        assert with_pension.taxable_income < without.taxable_income
        assert with_pension.income_tax < without.income_tax

    def test_church_tax_lower_in_bavaria_and_bw(self, de_config, base_input):
        base_input["church_tax"] = True
        northrhine = compute_breakdown(SalaryInput(**base_input), de_config)
        base_input["federal_state"] = "BW"
        baden = compute_breakdown(SalaryInput(**base_input), de_config)

        assert baden.church_tax < northrhine.church_tax

    def test_health_additional_rate(self, de_config, base_input):
        standard = compute_breakdown(SalaryInput(**base_input), de_config)
        base_input["health_additional_rate"] = 2.5
        higher = compute_breakdown(SalaryInput(**base_input), de_config)

        assert higher.social_contributions.health > standard.social_contributions.health
