"""
End-to-end tests: whole validators run against realistic object graphs.
"""

import pytest

from pathrules.core.models import ComparisonTarget
from pathrules.core.rules import Rule, RuleConfigBuilder, RuleSet, Validator
from tests.helpers.dummy_entities import Address, Customer, Entity, SubEntity

pytestmark = pytest.mark.e2e


class TestDocumentedScenarios:
    """Scenarios describing the engine's observable behavior"""

    def test_case_sensitive_pattern_on_indexed_array_element(self, invalid_fields):
        """'Test' does not match 'this is a TEST': the rule fails on the one resolved field"""
        entity = Entity(sub_class_array=[SubEntity(test_prop="this is a TEST")])
        rule = Rule(
            name="test prop",
            field_path="Entity.sub_class_array",
            field_name="test_prop",
            array_index=0,
            validation_expression="^.*Test.*$",
        )

        result = Validator(rule_sets=[RuleSet(rules=[rule], on_invalid=invalid_fields.append)]).execute(entity)

        assert result.succeeded is False
        assert [f.value for f in invalid_fields] == ["this is a TEST"]

    def test_comparison_same_multiset_different_order(self):
        t = Entity(string_array=["v1", "v2"])
        t1 = SubEntity(secondary_sub=["v2", "v1"])

        validator = RuleConfigBuilder() \
            .add_comparison("arrays match", "Entity", "string_array", [("SubEntity", "secondary_sub")]) \
            .build("comparison")

        assert validator.execute(t, t1).succeeded is True

    def test_comparison_size_mismatch_reports_all_fields(self, invalid_fields):
        t = Entity(string_array=["v1"])
        t1 = SubEntity(secondary_sub=["v1", "v2"])

        validator = RuleConfigBuilder() \
            .rule_set(on_invalid=invalid_fields.append) \
            .add_comparison("arrays match", "Entity", "string_array", [("SubEntity", "secondary_sub")]) \
            .build("comparison")

        result = validator.execute(t, t1)

        assert result.succeeded is False
        assert len(invalid_fields) == 3
        assert [f.owner for f in invalid_fields] == [t, t1, t1]


class TestCustomerOnboarding:
    """A multi rule set validator over pydantic models"""

    @pytest.fixture
    def validator(self) -> Validator:
        return Validator(
            name="customer onboarding",
            rule_sets=[
                RuleSet(
                    name="addresses",
                    skip_on_error=True,
                    rules=[
                        Rule(
                            name="has addresses",
                            custom_validator=lambda roots: any(
                                isinstance(root, Customer) and root.addresses for root in roots
                            ),
                        ),
                        Rule(
                            name="zip codes are five digits",
                            field_path="Customer.addresses",
                            field_name="zip_code",
                            validation_expression=r"^[0-9]{5}$",
                        ),
                        Rule(
                            name="billing zip codes match",
                            field_path="Customer.addresses",
                            field_name="zip_code",
                            field_comparison_list=[ComparisonTarget(field_path="Billing", field_name="zip_codes")],
                        ),
                    ],
                ),
                RuleSet(
                    name="identity",
                    rules=[
                        Rule(
                            name="name is capitalized",
                            field_path="Customer",
                            field_name="name",
                            validation_expression=r"^[A-Z][a-z]+$",
                        ),
                    ],
                ),
            ],
        )

    def test_valid_customer(self, validator):
        customer = Customer(
            name="Ada",
            addresses=[Address(street="Main St", zip_code="12345"), Address(street="Side St", zip_code="54321")],
        )
        billing = {"zip_codes": ["54321", "12345"]}

        result = validator.execute(customer, billing)

        assert result.succeeded is True
        assert result.succeeded_rule_names == [
            "has addresses",
            "zip codes are five digits",
            "billing zip codes match",
            "name is capitalized",
        ]

    def test_customer_without_addresses_skips_address_checks(self, validator):
        result = validator.execute(Customer(name="Ada"), {"zip_codes": []})

        assert result.succeeded is True
        assert result.rule_set_results[0].skipped is True
        assert result.succeeded_rule_names == ["name is capitalized"]

    def test_failures_collected_across_rule_sets(self, validator):
        customer = Customer(name="ada", addresses=[Address(street="Main St", zip_code="1234X")])

        result = validator.execute(customer, {"zip_codes": ["1234X"]})

        assert result.succeeded is False
        assert result.failed_rule_names == ["zip codes are five digits", "name is capitalized"]
        assert [r.name for r in result.not_ran_rules] == ["billing zip codes match"]
        assert [f.value for f in result.rejected_fields] == ["1234X", "ada"]
