from __future__ import annotations

import pytest

from taxofeed.domain.field_resolution import (
    NO_OP,
    FieldInfo,
    IdentifierList,
    NoOp,
    SourceResolutionError,
)
from taxofeed.domain.model import SourceDefinition
from tests.helpers.taxonomy import ResolverHarness, make_feed, make_field_config, make_node


def test_resolve_creates_missing_node_when_allowed() -> None:
    harness = ResolverHarness()

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories", allow_create=True),
        make_feed(),
        {"categories": ["Shoes"]},
    )

    assert harness.store.create_calls == 1
    created = harness.store.created[0]
    assert created.title == "Shoes"
    assert created.group_id == 1
    assert outcome == IdentifierList(ids=(created.id,))


def test_resolve_empty_value_uses_default_without_touching_store() -> None:
    harness = ResolverHarness()

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories", default=(5, 6)),
        make_feed(),
        {"categories": []},
    )

    assert outcome == IdentifierList(ids=(5, 6))
    assert harness.store.queries == []
    assert harness.store.create_calls == 0


def test_resolve_counts_duplicates_against_limit_before_removing_them() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(10, "Shoes"))
    harness.store.add(make_node(11, "Boots"))

    outcome = harness.resolver.resolve(
        make_field_config(max_relations=2),
        FieldInfo(node="categories"),
        make_feed(),
        {"categories": "Shoes|Shoes|Boots"},
    )

    assert outcome == IdentifierList(ids=(10,))


def test_resolve_returns_noop_when_value_absent() -> None:
    harness = ResolverHarness()

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories"),
        make_feed(),
        {"title": "Runner"},
    )

    assert outcome is NO_OP
    assert harness.store.queries == []


def test_resolve_clears_relations_when_value_and_default_are_empty() -> None:
    harness = ResolverHarness()

    outcome = harness.resolver.resolve(
        make_field_config(source=None),
        FieldInfo(node="categories"),
        make_feed(),
        {"categories": ""},
    )

    assert outcome == IdentifierList(ids=())
    assert not isinstance(outcome, NoOp)


def test_resolve_looks_up_zero_title_next_to_other_values() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(4, "0"))
    harness.store.add(make_node(5, "Shoes"))

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories"),
        make_feed(),
        {"categories": "0|Shoes"},
    )

    assert outcome == IdentifierList(ids=(4, 5))


def test_resolve_lone_zero_title_neither_clears_nor_queries() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(4, "0"))

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories"),
        make_feed(),
        {"categories": "0"},
    )

    assert outcome is NO_OP
    assert harness.store.queries == []


def test_resolve_lone_zero_title_falls_back_to_default() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(4, "0"))

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories", default=(5,)),
        make_feed(),
        {"categories": ["0"]},
    )

    assert outcome == IdentifierList(ids=(5,))
    assert harness.store.queries == []


def test_resolve_usedefault_returns_default_verbatim() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Shoes"))

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="usedefault", default=(6, 5, 6)),
        make_feed(),
        {"categories": "Shoes"},
    )

    assert outcome == IdentifierList(ids=(6, 5))
    assert harness.store.queries == []


def test_resolve_is_stable_for_repeated_matching() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Shoes"))
    harness.store.add(make_node(2, "Boots"))
    args = (
        make_field_config(),
        FieldInfo(node="categories/title"),
        make_feed(),
        {"categories/0/title": "Boots", "categories/1/title": "Shoes"},
    )

    first = harness.resolver.resolve(*args)
    second = harness.resolver.resolve(*args)

    assert first == second == IdentifierList(ids=(2, 1))


def test_resolve_returns_noop_when_nothing_matches() -> None:
    harness = ResolverHarness()

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories", allow_create=False),
        make_feed(),
        {"categories": "Sandals"},
    )

    assert outcome is NO_OP
    assert harness.store.create_calls == 0


def test_resolve_never_creates_for_custom_source() -> None:
    harness = ResolverHarness()
    harness.sources.definitions["custom:top"] = SourceDefinition(
        key="custom:top",
        label="Top level",
        condition={"level": {"=": 1}},
    )

    outcome = harness.resolver.resolve(
        make_field_config(source="custom:top"),
        FieldInfo(node="categories", allow_create=True),
        make_feed(),
        {"categories": "Sandals"},
    )

    assert outcome is NO_OP
    assert harness.store.create_calls == 0
    assert harness.conditions.configs == [{"level": {"=": 1}}]


def test_resolve_expands_missing_ancestors_for_structured_fields() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Clothing"))
    harness.store.add(make_node(2, "Shoes", parent_id=1, level=2))
    harness.store.add(make_node(3, "Sneakers", parent_id=2, level=3))

    outcome = harness.resolver.resolve(
        make_field_config(maintain_hierarchy=True),
        FieldInfo(node="categories"),
        make_feed(compare_content=True),
        {"categories": "Sneakers"},
    )

    assert outcome == IdentifierList(ids=(1, 2, 3))


def test_resolve_applies_branch_limit_after_expansion() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Clothing"))
    harness.store.add(make_node(2, "Shoes", parent_id=1, level=2))

    outcome = harness.resolver.resolve(
        make_field_config(maintain_hierarchy=True, branch_limit=1, max_relations=5),
        FieldInfo(node="categories"),
        make_feed(),
        {"categories": "Shoes"},
    )

    assert outcome == IdentifierList(ids=(1,))


def test_resolve_skips_expansion_without_content_comparison() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Clothing"))
    harness.store.add(make_node(2, "Shoes", parent_id=1, level=2))

    outcome = harness.resolver.resolve(
        make_field_config(maintain_hierarchy=True),
        FieldInfo(node="categories"),
        make_feed(compare_content=False),
        {"categories": "Shoes"},
    )

    assert outcome == IdentifierList(ids=(2,))
    assert harness.store.load_calls == []


def test_resolve_hands_final_ids_to_sub_field_population() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Shoes"))

    harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="variants/0/categories", sub_fields={"colour": "variants/0/colour"}),
        make_feed(),
        {"variants/0/categories": "Shoes|Shoes"},
    )

    assert harness.sub_fields.calls == [([1], 0, {"colour": "variants/0/colour"})]
    assert harness.sub_fields.rows == [{"variants/0/categories": "Shoes|Shoes"}]


def test_resolve_without_sub_fields_does_not_populate() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Shoes"))

    harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories"),
        make_feed(),
        {"categories": "Shoes"},
    )

    assert harness.sub_fields.calls == []


def test_resolve_propagates_source_errors() -> None:
    harness = ResolverHarness()

    with pytest.raises(SourceResolutionError):
        harness.resolver.resolve(
            make_field_config(source="group:unknown"),
            FieldInfo(node="categories"),
            make_feed(),
            {"categories": "Shoes"},
        )


def test_resolve_honours_feed_delimiter() -> None:
    harness = ResolverHarness()
    harness.store.add(make_node(1, "Shoes"))
    harness.store.add(make_node(2, "Boots"))

    outcome = harness.resolver.resolve(
        make_field_config(),
        FieldInfo(node="categories"),
        make_feed(data_delimiter=";"),
        {"categories": "Shoes; Boots"},
    )

    assert outcome == IdentifierList(ids=(1, 2))
