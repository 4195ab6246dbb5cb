from __future__ import annotations

import pytest

from taxofeed.domain.field_resolution import FieldInfo
from taxofeed.domain.field_resolution.values import (
    extract_values,
    is_empty_scalar,
    is_numeric,
    is_value_empty,
    node_key_from,
    strip_indexes,
)


def test_extract_values_collects_indexed_paths_in_row_order() -> None:
    row = {
        "title": "Runner",
        "categories/0/title": "Shoes",
        "categories/1/title": "Boots",
    }

    extracted = extract_values(row, FieldInfo(node="categories/title"), delimiter="|")

    assert extracted.value == ("Shoes", "Boots")
    assert extracted.default == ()


def test_extract_values_reports_absent_node() -> None:
    extracted = extract_values({"title": "Runner"}, FieldInfo(node="categories"), delimiter="|")

    assert extracted.is_absent
    assert extracted.value is None


def test_extract_values_treats_unmapped_field_as_absent() -> None:
    extracted = extract_values({"categories": "Shoes"}, FieldInfo(node=None), delimiter="|")

    assert extracted.is_absent


def test_extract_values_splits_on_delimiter_and_strips() -> None:
    row = {"categories": "Shoes | Boots|Sandals"}

    extracted = extract_values(row, FieldInfo(node="categories"), delimiter="|")

    assert extracted.value == ("Shoes", "Boots", "Sandals")


def test_extract_values_keeps_present_but_empty_value() -> None:
    extracted = extract_values({"categories": ""}, FieldInfo(node="categories"), delimiter="|")

    assert not extracted.is_absent
    assert extracted.value == ("",)


def test_extract_values_flattens_sequences() -> None:
    row = {"categories": ["Shoes", ["Boots", 7]]}

    extracted = extract_values(row, FieldInfo(node="categories"), delimiter="|")

    assert extracted.value == ("Shoes", "Boots", 7)


def test_extract_values_usedefault_returns_default_as_value() -> None:
    info = FieldInfo(node="usedefault", default=(5, 6))

    extracted = extract_values({"categories": "ignored"}, info, delimiter="|")

    assert extracted.value == (5, 6)
    assert extracted.default == (5, 6)


def test_strip_indexes_drops_numeric_segments() -> None:
    assert strip_indexes("categories/0/title") == "categories/title"
    assert strip_indexes("categories") == "categories"


def test_node_key_from_returns_first_numeric_segment() -> None:
    assert node_key_from("variants/2/categories/0") == 2
    assert node_key_from("categories/title") is None
    assert node_key_from(None) is None


@pytest.mark.parametrize(
    ("value", "allow_zero", "expected"),
    [
        (None, False, True),
        ("", False, True),
        ("0", False, True),
        ("0", True, False),
        (0, False, True),
        (0, True, True),
        (False, False, True),
        ("Shoes", False, False),
        (3, False, False),
    ],
)
def test_is_empty_scalar(value: str | int | None, allow_zero: bool, expected: bool) -> None:
    assert is_empty_scalar(value, allow_zero=allow_zero) is expected


def test_is_value_empty_requires_every_item_empty() -> None:
    assert is_value_empty(())
    assert is_value_empty(None)
    assert is_value_empty(("", None))
    assert not is_value_empty(("", "Shoes"))
    assert not is_value_empty(("0",), allow_zero=True)


def test_is_numeric() -> None:
    assert is_numeric(5)
    assert is_numeric("12")
    assert is_numeric(" 1.5 ")
    assert not is_numeric("Shoes")
    assert not is_numeric("")
    assert not is_numeric(True)
    assert not is_numeric(None)
