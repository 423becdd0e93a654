"""Test statement classification."""

import pytest

from ksqlrest.statements import (
    Action,
    ObjectKind,
    classify,
    normalize,
    object_name,
    object_type,
    statement_type,
    swap_kind,
)


@pytest.mark.parametrize(
    "sql,action,kind,name",
    [
        ("CREATE TABLE FOO (id INT) WITH (kafka_topic='foo')", Action.CREATE, ObjectKind.TABLE, "foo"),
        (
            "CREATE STREAM \"MyStream\" (id INT) WITH (kafka_topic='s', value_format='JSON')",
            Action.CREATE,
            ObjectKind.STREAM,
            '"MyStream"',
        ),
        ("create source table Users (id INT PRIMARY KEY)", Action.CREATE, ObjectKind.SOURCE_TABLE, "users"),
        ("CREATE OR REPLACE STREAM Enriched AS SELECT * FROM clicks", Action.CREATE, ObjectKind.STREAM, "enriched"),
        ("CREATE STREAM IF NOT EXISTS clicks (id INT)", Action.CREATE, ObjectKind.STREAM, "clicks"),
        ("DROP STREAM IF EXISTS Clicks DELETE TOPIC", Action.DROP, ObjectKind.STREAM, "clicks"),
        ("drop table if exists Orders", Action.DROP, ObjectKind.TABLE, "orders"),
        ("INSERT INTO Totals SELECT * FROM clicks", Action.INSERT, ObjectKind.INTO, "totals"),
        (
            "CREATE SOURCE CONNECTOR jdbc_src WITH ('connector.class'='JdbcSourceConnector')",
            Action.CREATE,
            ObjectKind.SOURCE_CONNECTOR,
            "jdbc_src",
        ),
        ("CREATE SINK CONNECTOR Es_Sink WITH ('topics'='x')", Action.CREATE, ObjectKind.SINK_CONNECTOR, "es_sink"),
        ("DROP CONNECTOR jdbc_src", Action.DROP, ObjectKind.CONNECTOR, "jdbc_src"),
        # Leading comment and line breaks are ignored
        ("-- clicks\nCREATE STREAM\n  clicks (id INT)", Action.CREATE, ObjectKind.STREAM, "clicks"),
    ],
)
def test_classify_matches(sql, action, kind, name):
    stmt = classify(sql)
    assert stmt.action == action
    assert stmt.kind == kind
    assert stmt.name == name


@pytest.mark.parametrize(
    "sql",
    [
        "LIST PROPERTIES",
        "SHOW TOPICS",
        "SELECT * FROM clicks EMIT CHANGES",
        "TERMINATE CTAS_TOTALS_3",
        "DESCRIBE clicks",
        "DROP TYPE address",
        "SET 'drop table x'='y'",
        "",
        "CREATE TABLE 'unterminated",
    ],
)
def test_unmatched_statements_are_other(sql):
    stmt = classify(sql)
    assert stmt.action == Action.OTHER
    assert stmt.kind is None
    assert stmt.name is None


def test_quoted_name_keeps_case():
    assert classify('CREATE STREAM "MyStream" (id INT)').name == '"MyStream"'


def test_unquoted_name_lower_cased():
    assert classify("CREATE TABLE FOO (id INT)").name == "foo"


@pytest.mark.parametrize(
    "sql,action,kind,name",
    [
        ("DROP CONNECTOR `jdbc`", Action.DROP, ObjectKind.CONNECTOR, "`jdbc`"),
        ("DROP TABLE `Orders`", Action.DROP, ObjectKind.TABLE, "`Orders`"),
        ("CREATE STREAM `Click;s` (id INT)", Action.CREATE, ObjectKind.STREAM, "`Click;s`"),
    ],
)
def test_backtick_quoted_names(sql, action, kind, name):
    stmt = classify(sql)
    assert (stmt.action, stmt.kind, stmt.name) == (action, kind, name)


@pytest.mark.parametrize(
    "sql",
    [
        "CREATE TABLE FOO (id INT)",
        'DROP STREAM "Mixed_Case"',
        "INSERT INTO Bar SELECT * FROM baz",
    ],
)
def test_name_folding_is_stable(sql):
    first = classify(sql)
    assert classify(sql).name == first.name
    assert classify(normalize(sql)).name == first.name


def test_connector_ddl_flag():
    assert classify("CREATE SINK CONNECTOR s WITH ('a'='b')").is_connector_ddl
    assert classify("DROP CONNECTOR s").is_connector_ddl
    assert not classify("DROP STREAM s").is_connector_ddl
    assert not classify("DESCRIBE CONNECTOR s").is_connector_ddl


def test_string_accessors():
    assert statement_type("CREATE TABLE t (id INT)") == "create"
    assert statement_type("drop stream s") == "drop"
    assert statement_type("SHOW STREAMS") == "other"
    assert object_type("CREATE SOURCE CONNECTOR c WITH ('a'='b')") == "source connector"
    assert object_type("SHOW STREAMS") is None
    assert object_name("INSERT INTO Totals SELECT 1") == "totals"


class TestSwapKind:
    def test_table_to_stream(self):
        assert swap_kind(classify("DROP TABLE foo"), "STREAM") == "DROP STREAM foo"

    def test_only_kind_keyword_rewritten(self):
        stmt = classify("drop table table_events delete topic")
        assert swap_kind(stmt, "STREAM") == "drop STREAM table_events delete topic"

    def test_stream_to_table_with_if_exists(self):
        stmt = classify("DROP STREAM IF EXISTS totals")
        assert swap_kind(stmt, "TABLE") == "DROP TABLE IF EXISTS totals"

    def test_backtick_name_kept(self):
        assert swap_kind(classify("DROP TABLE `Orders`"), "STREAM") == "DROP STREAM `Orders`"

    def test_unclassified_raises(self):
        with pytest.raises(ValueError, match="no object kind"):
            swap_kind(classify("SHOW TOPICS"), "STREAM")
