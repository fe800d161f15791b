"""Unit tests for ObjectBuilder."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from wildfire.core.config import HydrationConfig
from wildfire.core.exceptions import (
    ColumnMismatchError,
    HydrationDepthError,
    ModelNotFoundError,
)
from wildfire.describe.column import Column
from wildfire.mapping.object import ObjectBuilder
from wildfire.model.base import Model
from wildfire.model.naming import table_key
from wildfire.model.registry import ModelRegistry


class FakeDescribe:
    def __init__(self, tables: dict[str, list[Column]]) -> None:
        self.tables = tables
        self.calls: list[str] = []

    def get_table(self, table: str) -> list[Column]:
        self.calls.append(table)
        return self.tables[table]


class Builder(ObjectBuilder):
    """ObjectBuilder answering find() from in-memory rows."""

    def __init__(self, describe: Any, registry: Any, rows: dict[str, list[dict]], **kw: Any):
        super().__init__(describe, registry, **kw)
        self.rows = rows
        self.find_calls: list[tuple[str, dict]] = []

    def find(self, table: str, delimiters: Any = None) -> Any:
        self.find_calls.append((table, dict(delimiters)))
        for row in self.rows.get(table, []):
            if all(row.get(k) == v for k, v in delimiters.items()):
                return row
        return None

    def get_table_name(self, table: str) -> str:
        return table_key(table)


class User(Model):
    table = "users"


class Role(Model):
    table = "roles"


class Category(Model):
    table = "categories"


class PublicUser(Model):
    table = "users"
    columns = ("id", "name")


USERS = [
    Column("id", "integer", is_primary_key=True),
    Column("name", "text"),
    Column(
        "role_id",
        "integer",
        is_foreign_key=True,
        referenced_table="roles",
        referenced_field="id",
    ),
]
ROLES = [Column("id", "integer", is_primary_key=True), Column("title", "text")]
CATEGORIES = [
    Column("id", "integer", is_primary_key=True),
    Column("name", "text"),
    Column(
        "parent_id",
        "integer",
        is_foreign_key=True,
        referenced_table="categories",
        referenced_field="id",
    ),
]


@pytest.fixture
def describe() -> FakeDescribe:
    return FakeDescribe({"users": USERS, "roles": ROLES, "categories": CATEGORIES})


@pytest.fixture
def registry() -> ModelRegistry:
    registry = ModelRegistry()
    registry.register("users", User)
    registry.register("roles", Role)
    registry.register("categories", Category)
    return registry


@pytest.fixture
def builder(describe: FakeDescribe, registry: ModelRegistry) -> Builder:
    return Builder(describe, registry, {"roles": [{"id": 5, "title": "Admin"}]})


class TestCreateObject:
    def test_users_with_role(self, builder: Builder) -> None:
        user = builder.create_object("users", {"id": 1, "name": "Ann", "role_id": 5})
        assert isinstance(user, User)
        assert isinstance(user.role, Role)
        assert user.to_dict() == {
            "id": 1,
            "name": "Ann",
            "role_id": 5,
            "role": {"id": 5, "title": "Admin"},
        }

    def test_copies_every_described_column(self, builder: Builder) -> None:
        role = builder.create_object("roles", {"id": 5, "title": "Admin", "extra": "x"})
        assert role.keys() == ["id", "title"]
        assert role.title == "Admin"

    def test_allow_list_restricts_columns(self, describe: FakeDescribe) -> None:
        registry = ModelRegistry()
        registry.register("users", PublicUser)
        builder = Builder(describe, registry, {})

        user = builder.create_object("users", {"id": 1, "name": "Ann", "role_id": 5})

        assert user.to_dict() == {"id": 1, "name": "Ann"}
        assert builder.find_calls == []

    def test_allow_list_ignores_unknown_names(self, describe: FakeDescribe) -> None:
        class Narrow(Model):
            columns = ("name", "nickname")

        registry = ModelRegistry()
        registry.register("roles", Narrow)
        builder = Builder(describe, registry, {})

        role = builder.create_object("roles", {"id": 5, "title": "Admin", "nickname": "boss"})
        assert role.to_dict() == {}

    def test_accepts_attribute_rows(self, builder: Builder) -> None:
        row = SimpleNamespace(id=5, title="Admin")
        role = builder.create_object("roles", row)
        assert role.to_dict() == {"id": 5, "title": "Admin"}

    def test_missing_field_raises(self, builder: Builder) -> None:
        with pytest.raises(ColumnMismatchError) as exc_info:
            builder.create_object("roles", {"id": 5})
        assert exc_info.value.missing_fields == ["title"]

    def test_missing_attribute_raises(self, builder: Builder) -> None:
        with pytest.raises(ColumnMismatchError):
            builder.create_object("roles", SimpleNamespace(id=5))

    def test_unknown_model_raises(self, builder: Builder) -> None:
        with pytest.raises(ModelNotFoundError):
            builder.create_object("invoices", {"id": 1})

    def test_fresh_instance_per_call(self, builder: Builder) -> None:
        first = builder.create_object("roles", {"id": 5, "title": "Admin"})
        second = builder.create_object("roles", {"id": 5, "title": "Admin"})
        assert first == second
        assert first is not second


class TestTableMetadataCache:
    def test_described_once_per_table(self, builder: Builder, describe: FakeDescribe) -> None:
        builder.create_object("roles", {"id": 1, "title": "A"})
        builder.create_object("roles", {"id": 2, "title": "B"})
        assert describe.calls == ["roles"]

    def test_cache_is_case_insensitive(self, builder: Builder, describe: FakeDescribe) -> None:
        builder.create_object("roles", {"id": 1, "title": "A"})
        builder.create_object("ROLES", {"id": 2, "title": "B"})
        assert describe.calls == ["roles"]

    def test_cache_is_per_instance(self, describe: FakeDescribe, registry: ModelRegistry) -> None:
        Builder(describe, registry, {}).create_object("roles", {"id": 1, "title": "A"})
        Builder(describe, registry, {}).create_object("roles", {"id": 1, "title": "A"})
        assert describe.calls == ["roles", "roles"]

    def test_model_table_overrides_name(self, describe: FakeDescribe) -> None:
        class Staff(Model):
            table = "users"

        registry = ModelRegistry()
        registry.register("staff", Staff)
        registry.register("roles", Role)
        builder = Builder(describe, registry, {"roles": []})

        staff = builder.create_object("staff", {"id": 1, "name": "Ann", "role_id": None})
        assert isinstance(staff, Staff)
        assert describe.calls == ["users"]


class TestForeignKeys:
    def test_find_called_once_with_delimiters(self, builder: Builder) -> None:
        builder.create_object("users", {"id": 1, "name": "Ann", "role_id": 5})
        assert builder.find_calls == [("roles", {"id": 5})]

    def test_missing_reference_attaches_falsy_result(self, builder: Builder) -> None:
        user = builder.create_object("users", {"id": 1, "name": "Ann", "role_id": 99})
        assert user.role is None
        assert builder.find_calls == [("roles", {"id": 99})]

    def test_one_lookup_per_row(self, builder: Builder) -> None:
        for i in range(3):
            builder.create_object("users", {"id": i, "name": "x", "role_id": 5})
        assert len(builder.find_calls) == 3

    def test_follow_foreign_keys_disabled(self, describe: FakeDescribe, registry) -> None:
        builder = Builder(
            describe,
            registry,
            {"roles": [{"id": 5, "title": "Admin"}]},
            config=HydrationConfig(follow_foreign_keys=False),
        )
        user = builder.create_object("users", {"id": 1, "name": "Ann", "role_id": 5})
        assert "role" not in user
        assert builder.find_calls == []

    def test_chain_is_followed(self, describe: FakeDescribe, registry: ModelRegistry) -> None:
        rows = {
            "categories": [
                {"id": 1, "name": "root", "parent_id": None},
                {"id": 2, "name": "child", "parent_id": 1},
            ]
        }
        builder = Builder(describe, registry, rows)

        leaf = builder.create_object("categories", {"id": 3, "name": "leaf", "parent_id": 2})

        assert leaf.category.name == "child"
        assert leaf.category.category.name == "root"
        assert leaf.category.category.category is None

    def test_self_reference_is_not_followed(
        self, describe: FakeDescribe, registry: ModelRegistry
    ) -> None:
        rows = {"categories": [{"id": 1, "name": "root", "parent_id": 1}]}
        builder = Builder(describe, registry, rows)

        root = builder.create_object("categories", rows["categories"][0])

        assert root.category is None
        assert builder.find_calls == []

    def test_cycle_is_cut(self, describe: FakeDescribe, registry: ModelRegistry) -> None:
        rows = {
            "categories": [
                {"id": 1, "name": "a", "parent_id": 2},
                {"id": 2, "name": "b", "parent_id": 1},
            ]
        }
        builder = Builder(describe, registry, rows)

        a = builder.create_object("categories", rows["categories"][0])

        assert a.category.name == "b"
        assert a.category.category is None
        assert builder.find_calls == [("categories", {"id": 2})]

    def test_path_is_cleared_between_calls(
        self, describe: FakeDescribe, registry: ModelRegistry
    ) -> None:
        rows = {"categories": [{"id": 1, "name": "root", "parent_id": None}]}
        builder = Builder(describe, registry, rows)

        builder.create_object("categories", {"id": 2, "name": "x", "parent_id": 1})
        again = builder.create_object("categories", {"id": 3, "name": "y", "parent_id": 1})

        assert again.category.name == "root"

    def test_max_depth_exceeded(self, describe: FakeDescribe, registry: ModelRegistry) -> None:
        rows = {
            "categories": [
                {"id": 1, "name": "a", "parent_id": None},
                {"id": 2, "name": "b", "parent_id": 1},
                {"id": 3, "name": "c", "parent_id": 2},
            ]
        }
        builder = Builder(describe, registry, rows, config=HydrationConfig(max_depth=2))

        with pytest.raises(HydrationDepthError):
            builder.create_object("categories", {"id": 4, "name": "d", "parent_id": 3})

    def test_depth_resets_after_error(self, describe: FakeDescribe, registry) -> None:
        rows = {
            "categories": [
                {"id": 1, "name": "a", "parent_id": None},
                {"id": 2, "name": "b", "parent_id": 1},
            ]
        }
        builder = Builder(describe, registry, rows, config=HydrationConfig(max_depth=1))

        with pytest.raises(HydrationDepthError):
            builder.create_object("categories", {"id": 3, "name": "c", "parent_id": 2})

        one_hop = builder.create_object("categories", {"id": 9, "name": "z", "parent_id": 1})
        assert one_hop.category.name == "a"

    def test_raised_bound_allows_deeper_chain(
        self, describe: FakeDescribe, registry: ModelRegistry
    ) -> None:
        rows = {
            "categories": [
                {"id": 1, "name": "a", "parent_id": None},
                {"id": 2, "name": "b", "parent_id": 1},
                {"id": 3, "name": "c", "parent_id": 2},
            ]
        }
        builder = Builder(describe, registry, rows, config=HydrationConfig(max_depth=3))

        d = builder.create_object("categories", {"id": 4, "name": "d", "parent_id": 3})

        assert d.category.category.category.name == "a"


class TestReservedColumnNames:
    def test_foreign_key_named_like_a_model_method(self) -> None:
        class Item(Model):
            table = "items"

        class Key(Model):
            table = "keys"

        describe = FakeDescribe(
            {
                "items": [
                    Column("id", "integer", is_primary_key=True),
                    Column(
                        "keys",
                        "integer",
                        is_foreign_key=True,
                        referenced_table="keys",
                        referenced_field="id",
                    ),
                ],
                "keys": [Column("id", "integer", is_primary_key=True), Column("code", "text")],
            }
        )
        registry = ModelRegistry()
        registry.register("items", Item)
        registry.register("keys", Key)
        builder = Builder(describe, registry, {"keys": [{"id": 3, "code": "k3"}]})

        item = builder.create_object("items", {"id": 1, "keys": 3})

        assert builder.find_calls == [("keys", {"id": 3})]
        assert item["keys"] == 3
        assert item.key.code == "k3"

    def test_primary_key_named_like_a_model_method(self) -> None:
        class Node(Model):
            table = "nodes"

        describe = FakeDescribe(
            {
                "nodes": [
                    Column("get", "integer", is_primary_key=True),
                    Column(
                        "parent",
                        "integer",
                        is_foreign_key=True,
                        referenced_table="nodes",
                        referenced_field="get",
                    ),
                ]
            }
        )
        registry = ModelRegistry()
        registry.register("nodes", Node)
        builder = Builder(describe, registry, {"nodes": [{"get": 1, "parent": 1}]})

        node = builder.create_object("nodes", {"get": 1, "parent": 1})

        assert node.node is None
        assert builder.find_calls == []


class TestGetModel:
    def test_none_table(self, builder: Builder) -> None:
        assert builder._get_model(None) == (None, "")

    def test_name_resolution_is_case_insensitive(self, builder: Builder) -> None:
        model, table = builder._get_model("Users")
        assert isinstance(model, User)
        assert table == "users"

    def test_primary_key_uses_cached_metadata(
        self, builder: Builder, describe: FakeDescribe
    ) -> None:
        assert builder._primary_key("users") == "id"
        assert builder._primary_key("Users") == "id"
        assert describe.calls == ["users"]

    def test_abstract_collaborators(self, describe: FakeDescribe, registry) -> None:
        bare = ObjectBuilder(describe, registry)
        with pytest.raises(NotImplementedError):
            bare.find("roles", {"id": 1})
        with pytest.raises(NotImplementedError):
            bare.get_table_name("roles")
