"""Tests for naming conventions and the type name registry."""

import pytest

from sheetql.schema.naming import (
    BuildContext,
    NamingConvention,
    TypeNameRegistry,
    graphql_name,
    python_name,
)


class TestNamingConvention:
    """Test relation detection and singular/plural names."""

    @pytest.fixture
    def naming(self):
        return NamingConvention()

    def test_relation_target(self, naming):
        assert naming.relation_target("authorId") == "author"
        assert naming.relation_target("parentCategoryId") == "parentCategory"

    def test_non_relations(self, naming):
        assert naming.relation_target("id") is None
        assert naming.relation_target("ID") is None
        assert naming.relation_target("author_id") is None
        assert naming.relation_target("paid") is None

    def test_bare_suffix_targets_empty_name(self, naming):
        assert naming.relation_target("Id") == ""

    @pytest.mark.parametrize("name,singular", [
        ("books", "book"),
        ("book", "book"),
        ("address", "addres"),
        ("glasses", "glasse"),
        ("s", ""),
    ])
    def test_singular_strips_one_trailing_s(self, naming, name, singular):
        assert naming.singular(name) == singular

    def test_plural_appends_s(self, naming):
        assert naming.plural("book") == "books"
        assert naming.plural("people") == "peoples"

    def test_collection_for_collapses_double_s(self, naming):
        assert naming.collection_for("author") == "authors"
        assert naming.collection_for("address") == "address"
        assert naming.collection_for("class") == "class"

    def test_custom_convention(self):
        class SnakeCase(NamingConvention):
            relation_suffix = "_id"

        assert SnakeCase().relation_target("author_id") == "author"
        assert SnakeCase().relation_target("authorId") is None


class TestTypeNameRegistry:
    """Test unique type naming."""

    def test_first_use_is_unchanged(self):
        assert TypeNameRegistry().sanitize("book") == "book"

    def test_collisions_get_numbered(self):
        registry = TypeNameRegistry()
        names = [registry.sanitize("book") for _ in range(3)]
        assert names == ["book", "book_1", "book_2"]

    def test_replaces_dots_and_slashes(self):
        registry = TypeNameRegistry()
        assert registry.sanitize("data/books.xlsx") == "data_books_xlsx"
        assert registry.sanitize("data.books/xlsx") == "data_books_xlsx_1"

    def test_never_reuses_a_taken_name(self):
        registry = TypeNameRegistry()
        assert registry.sanitize("book_1") == "book_1"
        assert registry.sanitize("book") == "book"
        assert registry.sanitize("book") == "book_2"

    def test_reserved_names(self):
        registry = TypeNameRegistry()
        registry.reserve("root")
        assert "root" in registry
        assert registry.sanitize("root") == "root_1"

    def test_reset_starts_over(self):
        registry = TypeNameRegistry()
        registry.sanitize("book")
        registry.reset()
        assert registry.sanitize("book") == "book"

    def test_context_reserves_builtin_scalars(self):
        context = BuildContext()
        assert [context.sanitize(name) for name in ("ID", "String", "Int", "Float", "Boolean")] == [
            "ID_1", "String_1", "Int_1", "Float_1", "Boolean_1"
        ]
        context.reset()
        assert context.sanitize("Int") == "Int_1"

    def test_contexts_do_not_share_counters(self):
        first, second = BuildContext(), BuildContext()
        first.sanitize("book")
        assert second.sanitize("book") == "book"


class TestNameConversion:
    """Test GraphQL and Python name conversion."""

    def test_graphql_name(self):
        assert graphql_name("first name") == "first_name"
        assert graphql_name("2019") == "_2019"
        assert graphql_name("") == "_"
        assert graphql_name("ok_Name1") == "ok_Name1"

    def test_graphql_name_avoids_introspection_prefix(self):
        assert graphql_name("__meta") == "_meta"
        assert graphql_name("  x") == "_x"
        assert graphql_name("__") == "_"
        assert graphql_name("_private") == "_private"

    def test_python_name_avoids_keywords_and_taken(self):
        assert python_name("class") == "class_"
        assert python_name("name", {"name"}) == "name_1"
        assert python_name("name", {"name", "name_1"}) == "name_2"
