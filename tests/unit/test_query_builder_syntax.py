"""Unit tests for the SQL template syntax gate."""

import pytest

from app.modules.query_builder.syntax import (
    build_limited_query,
    check_syntax,
    normalize_whitespace,
    remove_extra_semicolon,
)


class TestCheckSyntax:
    """Tests for check_syntax."""

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT a,b FROM t",
            "select count(*) from core_user",
            "select {f1}, idst from core_user where {f2}",
            "select a from backdrop_tables",
            "insert into t values (1)",
        ],
    )
    def test_accepted(self, sql: str) -> None:
        assert check_syntax(sql) is True

    @pytest.mark.parametrize(
        "sql",
        [
            "",
            None,
            "   ",
            "select * from t",
            "SELECT\n*\nFROM t",
            "select a, * from t",
            "DROP TABLE t",
            "select a from t; alter table t add c int",
            "show   tables",
            "Show Create View v",
            "msck repair table t",
            "inser into t values (1)",
        ],
    )
    def test_rejected(self, sql: str | None) -> None:
        assert check_syntax(sql) is False


def test_normalize_whitespace() -> None:
    assert normalize_whitespace("select\n a\t\tfrom   t") == "select a from t"


class TestRemoveExtraSemicolon:
    """Tests for remove_extra_semicolon."""

    def test_trailing_semicolon_removed(self) -> None:
        assert remove_extra_semicolon("  select 1;  ") == "select 1"

    def test_only_one_semicolon_removed(self) -> None:
        assert remove_extra_semicolon("select 1;;") == "select 1;"

    def test_inner_semicolons_kept(self) -> None:
        sql = "select \"idst;\" from t where a like 'x;y';"
        assert remove_extra_semicolon(sql) == "select \"idst;\" from t where a like 'x;y'"

    @pytest.mark.parametrize("sql", [None, ""])
    def test_empty(self, sql: str | None) -> None:
        assert remove_extra_semicolon(sql) == ""


def test_build_limited_query() -> None:
    assert build_limited_query("select a from t", 10) == "select * from (select a from t) limit 10"
