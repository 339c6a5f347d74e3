"""Static checks on user-authored SQL templates."""

import re

# Wildcard selects, a bare ", *" projection, or a blank statement
_WILDCARD_OR_BLANK = re.compile(r"(select\s+\*)|(,\s*\*\s*,?)|(^\s+$)", re.IGNORECASE)

# "inser into" keeps the historical spelling: real INSERT INTO is not caught here
FORBIDDEN_STATEMENTS = (
    "alter table",
    "create database",
    "create table",
    "create view",
    "drop database",
    "drop table",
    "drop view",
    "msck repair table",
    "show columns",
    "show create table",
    "show create view",
    "show databases",
    "show partitions",
    "show tables",
    "show tblproperties",
    "show views",
    "inser into",
)

_FORBIDDEN = re.compile(
    "|".join(rf"\b{re.escape(statement)}\b" for statement in FORBIDDEN_STATEMENTS),
    re.IGNORECASE,
)


def normalize_whitespace(sql: str) -> str:
    """Turn newlines into spaces and collapse whitespace runs."""
    return re.sub(r"\s+", " ", sql.replace("\n", " "))


def check_syntax(sql: str | None) -> bool:
    """Return whether a SQL template passes the static syntax gate.

    The template is rejected when it is empty, selects ``*``, projects a bare
    ``*`` in a column list, is whitespace only, or contains a DDL/admin
    statement.

    Args:
        sql: SQL template, possibly containing ``{name}`` placeholders.

    Returns:
        True when the template may be substituted and executed.
    """
    if sql is None or sql == "":
        return False

    sanitized = normalize_whitespace(sql)
    if _WILDCARD_OR_BLANK.search(sanitized):
        return False

    return _FORBIDDEN.search(sanitized) is None


def remove_extra_semicolon(sql: str | None) -> str:
    """Trim a statement and drop one trailing semicolon.

    Example:
        ``select "idst;" from t where a like 'x;y';`` becomes
        ``select "idst;" from t where a like 'x;y'``
    """
    if not sql:
        return ""
    sql = sql.strip()
    if sql.endswith(";"):
        return sql[:-1]
    return sql


def build_limited_query(sql: str, limit: int) -> str:
    """Wrap a runnable query so the engine returns at most ``limit`` rows."""
    return f"select * from ({sql}) limit {limit}"
