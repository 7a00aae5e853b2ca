"""Tests for the dataLayer path mapper."""

import pytest
from growthnav.gtm.path_mapper import (
    camel_case_to_path,
    is_camel_case,
    map_variables_to_datalayer,
    variable_to_datalayer_path,
)


class TestVariableToDataLayerPath:
    """Test variable_to_datalayer_path rule precedence."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Ecommerce.total", "ecommerce.total"),
            ("User.Email", "user.email"),
            ("  Ecommerce . Purchase.Total ", "ecommerce.purchase.total"),
            ("ecommerceTotal", "ecommerce.total"),
            ("userEmailAddress", "user.email.address"),
            ("Purchase Value", None),
            ("EVENT_something", "event_something"),
            ("PageType", "pagetype"),
            ("google_tag_params", "google_tag_params"),
            ("transactionId", "transaction.id"),
            ("CustomThing", None),
            ("orderid", None),
        ],
    )
    def test_rules(self, name, expected):
        assert variable_to_datalayer_path(name) == expected

    def test_dot_rule_beats_space_rule(self):
        """Test a dotted name with spaces is still mapped."""
        assert variable_to_datalayer_path("Enhanced Ecommerce.Total") == "enhancedecommerce.total"

    def test_space_rule_beats_prefix_rule(self):
        """Test a spaced name is unmapped even with a known prefix."""
        assert variable_to_datalayer_path("Enhanced Ecommerce Data") is None
        assert variable_to_datalayer_path("Page Path") is None

    def test_camel_case_beats_prefix_rule(self):
        assert variable_to_datalayer_path("pageType") == "page.type"

    def test_deterministic(self):
        names = ["ecommerceTotal", "Purchase Value", "User.Email", "eventCategory"]
        assert [variable_to_datalayer_path(n) for n in names] == [
            variable_to_datalayer_path(n) for n in names
        ]


class TestCamelCase:
    """Test camelCase helpers."""

    def test_is_camel_case(self):
        assert is_camel_case("ecommerceTotal") is True
        assert is_camel_case("ecommerce") is False
        assert is_camel_case("EcommerceTotal") is False
        assert is_camel_case("ecommerce_total") is False
        assert is_camel_case("valueUSD") is True

    def test_camel_case_to_path(self):
        assert camel_case_to_path("ecommerceTotal") == "ecommerce.total"
        assert camel_case_to_path("valueUSD") == "value.u.s.d"


class TestMapVariablesToDataLayer:
    """Test map_variables_to_datalayer."""

    def test_maps_each_name(self):
        assert map_variables_to_datalayer(["ecommerceTotal", "Purchase Value", "User.Email"]) == {
            "ecommerceTotal": "ecommerce.total",
            "Purchase Value": None,
            "User.Email": "user.email",
        }

    def test_empty(self):
        assert map_variables_to_datalayer([]) == {}
