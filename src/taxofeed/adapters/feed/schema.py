"""Pydantic models describing feed, field and field-mapping payloads.

Payloads come from stored feed settings, so blank strings stand in for unset values
and numbers may arrive as strings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class FeedBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FieldSettingsPayload(FeedBaseModel):
    source: str | None = None
    maintain_hierarchy: bool | None = Field(default=False, alias="maintainHierarchy")
    branch_limit: int | None = Field(default=None, alias="branchLimit", ge=0)
    max_relations: int | None = Field(default=None, alias="maxRelations", ge=0)
    target_site_id: str | None = Field(default=None, alias="targetSiteId")

    _normalize_blanks = field_validator(
        "source",
        "maintain_hierarchy",
        "branch_limit",
        "max_relations",
        "target_site_id",
        mode="before",
    )(_blank_to_none)

    @field_validator("maintain_hierarchy", mode="after")
    @classmethod
    def _none_is_false(cls, value: bool | None) -> bool:
        return bool(value)


class FieldPayload(FeedBaseModel):
    handle: str
    settings: FieldSettingsPayload = Field(default_factory=FieldSettingsPayload)


class MatchOptionsPayload(FeedBaseModel):
    match: str = "title"
    create: bool = False

    @field_validator("match", mode="before")
    @classmethod
    def _default_match(cls, value: object) -> object:
        return _blank_to_none(value) or "title"

    @field_validator("create", mode="before")
    @classmethod
    def _blank_create(cls, value: object) -> object:
        return _blank_to_none(value) or False


class FieldMappingPayload(FeedBaseModel):
    node: str | None = None
    default: Any = None
    options: MatchOptionsPayload = Field(default_factory=MatchOptionsPayload)
    fields: dict[str, Any] | None = None

    _normalize_node = field_validator("node", mode="before")(_blank_to_none)


class FeedPayload(FeedBaseModel):
    id: int | str | None = None
    site_id: int | None = Field(default=None, alias="siteId")
    update_search_indexes: bool = Field(default=True, alias="updateSearchIndexes")
    compare_content: bool | None = Field(default=None, alias="compareContent")
    data_delimiter: str | None = Field(default=None, alias="dataDelimiter")

    _normalize_site = field_validator("site_id", "compare_content", mode="before")(
        _blank_to_none
    )
