"""Tests for dataLayer dot-path reads."""

from growthnav.tracking.datalayer import (
    get_first_valid_path,
    get_from_datalayer,
    path_exists,
)


class TestGetFromDataLayer:
    """Test get_from_datalayer."""

    def test_reads_nested_value(self, sample_data_layer):
        """Test reading a nested value by dot path."""
        assert get_from_datalayer(sample_data_layer, "ecommerce.total") == 150.0
        assert get_from_datalayer(sample_data_layer, "user.email") == "buyer@example.com"

    def test_reads_top_level_value(self, sample_data_layer):
        """Test single-segment paths."""
        assert get_from_datalayer(sample_data_layer, "event") == "purchase"

    def test_returns_container_values(self, sample_data_layer):
        """Test that a path can resolve to a dict."""
        assert get_from_datalayer(sample_data_layer, "user") == sample_data_layer["user"]

    def test_missing_terminal_key(self, sample_data_layer):
        """Test missing final key returns None."""
        assert get_from_datalayer(sample_data_layer, "ecommerce.tax") is None

    def test_missing_intermediate_key(self, sample_data_layer):
        """Test missing branch returns None without raising."""
        assert get_from_datalayer(sample_data_layer, "checkout.step.number") is None

    def test_none_intermediate(self):
        """Test None intermediate value returns None."""
        assert get_from_datalayer({"ecommerce": None}, "ecommerce.total") is None

    def test_scalar_intermediate(self):
        """Test descending into a scalar returns None."""
        assert get_from_datalayer({"ecommerce": 5}, "ecommerce.total") is None
        assert get_from_datalayer({"ecommerce": "text"}, "ecommerce.total") is None

    def test_list_index(self, sample_data_layer):
        """Test numeric segments index into lists."""
        assert get_from_datalayer(sample_data_layer, "ecommerce.items.0.item_id") == "product-123"
        assert get_from_datalayer(sample_data_layer, "ecommerce.items.5.item_id") is None
        assert get_from_datalayer(sample_data_layer, "ecommerce.items.first") is None

    def test_empty_inputs(self):
        """Test empty object or path returns None."""
        assert get_from_datalayer(None, "a.b") is None
        assert get_from_datalayer({}, "a") is None
        assert get_from_datalayer({"a": 1}, "") is None

    def test_falsy_values_are_returned(self):
        """Test falsy but present values are returned as-is."""
        data = {"cart": {"count": 0, "empty": False, "note": ""}}
        assert get_from_datalayer(data, "cart.count") == 0
        assert get_from_datalayer(data, "cart.empty") is False
        assert get_from_datalayer(data, "cart.note") == ""

    def test_does_not_mutate_input(self, sample_data_layer):
        """Test reads leave the snapshot untouched."""
        import copy

        before = copy.deepcopy(sample_data_layer)
        get_from_datalayer(sample_data_layer, "ecommerce.items.0.item_name")
        get_from_datalayer(sample_data_layer, "missing.path")
        assert sample_data_layer == before


class TestGetFirstValidPath:
    """Test get_first_valid_path."""

    def test_first_match_wins(self, sample_data_layer):
        """Test the first resolving path is used, not merged."""
        value = get_first_valid_path(
            sample_data_layer, ["ecommerce.revenue", "ecommerce.total", "ecommerce.currency"]
        )
        assert value == 150.0

    def test_none_values_are_skipped(self):
        """Test explicit None values fall through to later paths."""
        data = {"a": None, "b": 2}
        assert get_first_valid_path(data, ["a", "b"]) == 2

    def test_no_match(self, sample_data_layer):
        """Test None when nothing resolves."""
        assert get_first_valid_path(sample_data_layer, ["x", "y.z"]) is None
        assert get_first_valid_path(sample_data_layer, []) is None


class TestPathExists:
    """Test path_exists."""

    def test_existing_path(self, sample_data_layer):
        assert path_exists(sample_data_layer, "ecommerce.currency") is True

    def test_missing_path(self, sample_data_layer):
        assert path_exists(sample_data_layer, "ecommerce.coupon") is False

    def test_null_value_counts_as_missing(self):
        assert path_exists({"coupon": None}, "coupon") is False
