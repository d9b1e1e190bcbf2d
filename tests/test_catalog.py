"""Unit tests for the kind catalog (stackgen.catalog).

Tests cover:
- Completeness of datastore and runtime metadata
- Stable listing order and default frameworks
- Edition labels used for license disclosure
- Caller-side parsing of kind names
"""

from __future__ import annotations

import pytest

from stackgen.catalog import (
    DatastoreInfo,
    DatastoreKind,
    RuntimeInfo,
    RuntimeKind,
    all_datastore_kinds,
    all_runtime_kinds,
    datastore_info,
    default_framework,
    default_tag,
    metadata,
    parse_datastore_kind,
    parse_runtime_kind,
    runtime_info,
)
from stackgen.errors import UnknownKindError

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# metadata
# ---------------------------------------------------------------------------


class TestMetadata:
    @pytest.mark.parametrize("kind", list(DatastoreKind))
    def test_every_datastore_has_entry(self, kind):
        info = metadata(kind)
        assert isinstance(info, DatastoreInfo)
        assert info.kind is kind
        assert info.display_name
        assert info.default_port > 0
        assert info.edition
        assert info.default_tag

    @pytest.mark.parametrize("kind", list(RuntimeKind))
    def test_every_runtime_has_entry(self, kind):
        info = metadata(kind)
        assert isinstance(info, RuntimeInfo)
        assert info.kind is kind
        assert info.display_name
        assert info.default_port > 0
        assert len(info.frameworks) >= 1

    def test_rejects_non_kind(self):
        with pytest.raises(TypeError):
            metadata("postgres")

    def test_datastore_info_accepts_string_value(self):
        assert datastore_info("mysql").default_port == 3306

    def test_runtime_info_accepts_string_value(self):
        assert runtime_info("csharp").default_port == 5000


class TestOrdering:
    def test_datastore_order(self):
        assert [k.value for k in all_datastore_kinds()] == [
            "postgres", "mysql", "mssql", "neo4j", "redis", "redis-stack",
        ]

    def test_runtime_order(self):
        assert [k.value for k in all_runtime_kinds()] == [
            "go", "node", "python", "java", "rust", "csharp",
        ]

    def test_listing_returns_fresh_list(self):
        kinds = all_datastore_kinds()
        kinds.clear()
        assert len(all_datastore_kinds()) == 6


class TestDefaults:
    @pytest.mark.parametrize(
        "kind,expected",
        [
            (RuntimeKind.GO, "stdlib"),
            (RuntimeKind.NODE, "express"),
            (RuntimeKind.PYTHON, "fastapi"),
            (RuntimeKind.JAVA, "spring-boot"),
            (RuntimeKind.RUST, "actix-web"),
            (RuntimeKind.CSHARP, "aspnetcore"),
        ],
    )
    def test_default_framework_is_first(self, kind, expected):
        assert default_framework(kind) == expected
        assert runtime_info(kind).frameworks[0] == expected

    def test_default_tags(self):
        assert default_tag(DatastoreKind.POSTGRES) == "16-alpine"
        assert default_tag(DatastoreKind.NEO4J) == "5"
        assert default_tag(DatastoreKind.MSSQL) == "2022-latest"

    def test_redis_kinds_share_default_port(self):
        assert datastore_info(DatastoreKind.REDIS).default_port == 6379
        assert datastore_info(DatastoreKind.REDIS_STACK).default_port == 6379


class TestEditions:
    def test_mssql_is_developer_edition(self):
        edition = datastore_info(DatastoreKind.MSSQL).edition
        assert edition.startswith("Developer Edition")
        assert "development use only" in edition

    def test_neo4j_is_community_edition(self):
        assert datastore_info(DatastoreKind.NEO4J).edition == "Community Edition"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    def test_parse_datastore_case_insensitive(self):
        assert parse_datastore_kind(" Postgres ") is DatastoreKind.POSTGRES

    def test_parse_redis_stack(self):
        assert parse_datastore_kind("redis-stack") is DatastoreKind.REDIS_STACK

    def test_parse_runtime(self):
        assert parse_runtime_kind("NODE") is RuntimeKind.NODE

    def test_unknown_datastore(self):
        with pytest.raises(UnknownKindError) as exc_info:
            parse_datastore_kind("mongodb")
        assert exc_info.value.category == "datastore"
        assert "postgres" in exc_info.value.valid

    def test_unknown_runtime_is_value_error(self):
        with pytest.raises(ValueError):
            parse_runtime_kind("cobol")
