"""Tests for the naming-convention helpers.

Covers:
- Word splitting on separators and case boundaries
- Every case transform, including the empty string
- Idempotence of each transform
- Pluralisation rules and irregular nouns
- ComponentNames derivation
"""

from __future__ import annotations

import pytest

from flg.naming import (
    ComponentNames,
    pluralize,
    split_words,
    to_camel_case,
    to_constant_case,
    to_dot_case,
    to_kebab_case,
    to_pascal_case,
    to_path_case,
    to_sentence_case,
    to_snake_case,
    to_title_case,
)


pytestmark = pytest.mark.unit

ALL_TRANSFORMS = [
    to_pascal_case,
    to_camel_case,
    to_snake_case,
    to_kebab_case,
    to_constant_case,
    to_title_case,
    to_sentence_case,
    to_dot_case,
    to_path_case,
]


# ---------------------------------------------------------------------------
# split_words
# ---------------------------------------------------------------------------


class TestSplitWords:
    """Tests for split_words()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("user_profile", ["user", "profile"]),
            ("UserProfile", ["user", "profile"]),
            ("userProfile", ["user", "profile"]),
            ("user-profile", ["user", "profile"]),
            ("user profile", ["user", "profile"]),
            ("user.profile/page", ["user", "profile", "page"]),
            ("HTTPClient", ["http", "client"]),
            ("  Order-Item ", ["order", "item"]),
            ("v2Api", ["v2", "api"]),
        ],
    )
    def test_splits(self, value: str, expected: list[str]) -> None:
        assert split_words(value) == expected

    def test_empty_string(self) -> None:
        assert split_words("") == []

    def test_only_separators(self) -> None:
        assert split_words("__--  ") == []


# ---------------------------------------------------------------------------
# Case transforms
# ---------------------------------------------------------------------------


class TestCaseTransforms:
    """Tests for the to_*_case() functions."""

    def test_pascal(self) -> None:
        assert to_pascal_case("user_profile") == "UserProfile"
        assert to_pascal_case("product") == "Product"

    def test_camel(self) -> None:
        assert to_camel_case("user_profile") == "userProfile"
        assert to_camel_case("HTTPClient") == "httpClient"

    def test_snake(self) -> None:
        assert to_snake_case("UserProfile") == "user_profile"
        assert to_snake_case("getAll") == "get_all"

    def test_kebab(self) -> None:
        assert to_kebab_case("UserProfile") == "user-profile"

    def test_constant(self) -> None:
        assert to_constant_case("userProfile") == "USER_PROFILE"

    def test_title(self) -> None:
        assert to_title_case("user_profile") == "User Profile"

    def test_sentence(self) -> None:
        assert to_sentence_case("user_profile") == "User profile"

    def test_dot_and_path(self) -> None:
        assert to_dot_case("UserProfile") == "user.profile"
        assert to_path_case("UserProfile") == "user/profile"

    @pytest.mark.parametrize("transform", ALL_TRANSFORMS)
    def test_empty_string_maps_to_empty(self, transform) -> None:
        assert transform("") == ""

    @pytest.mark.parametrize("transform", ALL_TRANSFORMS)
    @pytest.mark.parametrize(
        "value",
        [
            "user_profile",
            "UserProfile",
            "HTTPClient",
            "order item",
            "getAll",
            "x_y",
            "a_b_c",
            "point_x_y",
        ],
    )
    def test_idempotent(self, transform, value: str) -> None:
        once = transform(value)
        assert transform(once) == once

    @pytest.mark.parametrize(
        "value,pascal,camel",
        [("x_y", "XY", "xY"), ("a_b_c", "ABC", "aBC"), ("point_x_y", "PointXY", "pointXY")],
    )
    def test_single_letter_words_are_stable(self, value: str, pascal: str, camel: str) -> None:
        assert to_pascal_case(value) == pascal
        assert to_pascal_case(pascal) == pascal
        assert to_camel_case(value) == camel
        assert to_camel_case(camel) == camel

    def test_identifiers_are_kept(self) -> None:
        assert to_pascal_case("HTTPClient") == "HTTPClient"
        assert to_camel_case("pointXY") == "pointXY"
        assert to_pascal_case("http_client") == "HttpClient"


# ---------------------------------------------------------------------------
# pluralize
# ---------------------------------------------------------------------------


class TestPluralize:
    """Tests for pluralize()."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("product", "products"),
            ("category", "categories"),
            ("day", "days"),
            ("box", "boxes"),
            ("bus", "buses"),
            ("quiz", "quizes"),
            ("match", "matches"),
            ("dish", "dishes"),
            ("leaf", "leaves"),
            ("knife", "knives"),
            ("order", "orders"),
        ],
    )
    def test_suffix_rules(self, word: str, expected: str) -> None:
        assert pluralize(word) == expected

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("child", "children"),
            ("person", "people"),
            ("man", "men"),
            ("woman", "women"),
            ("tooth", "teeth"),
            ("foot", "feet"),
            ("mouse", "mice"),
            ("goose", "geese"),
        ],
    )
    def test_irregular(self, word: str, expected: str) -> None:
        assert pluralize(word) == expected

    def test_irregular_keeps_capital(self) -> None:
        assert pluralize("Person") == "People"

    def test_keeps_original_case_for_suffix(self) -> None:
        assert pluralize("orderItem") == "orderItems"
        assert pluralize("Category") == "Categories"

    def test_empty(self) -> None:
        assert pluralize("") == ""

    def test_already_plural_is_not_detected(self) -> None:
        assert pluralize("boxes") == "boxeses"


# ---------------------------------------------------------------------------
# ComponentNames
# ---------------------------------------------------------------------------


class TestComponentNames:
    """Tests for ComponentNames.from_name()."""

    def test_all_variants(self) -> None:
        names = ComponentNames.from_name("order_item")
        assert names.raw == "order_item"
        assert names.snake == "order_item"
        assert names.pascal == "OrderItem"
        assert names.camel == "orderItem"
        assert names.kebab == "order-item"
        assert names.constant == "ORDER_ITEM"
        assert names.title == "Order Item"
        assert names.plural_camel == "orderItems"
        assert names.plural_pascal == "OrderItems"
        assert names.plural_snake == "order_items"

    def test_same_component_from_any_spelling(self) -> None:
        a = ComponentNames.from_name("UserProfile")
        b = ComponentNames.from_name("user profile")
        assert (a.snake, a.pascal, a.plural_snake) == (b.snake, b.pascal, b.plural_snake)

    def test_plural_of_y_ending(self) -> None:
        names = ComponentNames.from_name("category")
        assert names.plural_pascal == "Categories"
        assert names.plural_snake == "categories"

    def test_is_frozen(self) -> None:
        names = ComponentNames.from_name("product")
        with pytest.raises(AttributeError):
            names.snake = "other"  # type: ignore[misc]
