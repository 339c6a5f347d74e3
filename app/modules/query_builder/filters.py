"""Placeholder matching and substitution for query builder SQL templates.

A template such as ``select {f1} from core_user`` is paired with a JSON
filter map ``{"f1": {"field": "core_user.userid", "type": "users"}}``. Each
placeholder is rewritten into a null-check tautology on its field so the
query keeps its shape while proving that the field resolves.
"""

import json
import logging
import re
from typing import Any

from app.core.logging import log_query_rejected
from app.modules.query_builder.constants import (
    ALLOWED_FILTER_TYPES,
    DESCRIBED_FILTER_TYPES,
    ErrorCode,
)
from app.modules.query_builder.exceptions import QueryBuilderException
from app.modules.query_builder.syntax import check_syntax

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{.*?\}")


def _reject(message: str, code: ErrorCode) -> QueryBuilderException:
    log_query_rejected(int(code), message)
    return QueryBuilderException(message, code)


def _is_filled(json_area: str | None) -> bool:
    return json_area is not None and json_area != ""


def find_placeholders(sql: str) -> list[str]:
    """Return placeholder names in match order, duplicates included."""
    return [match.replace("{", "").replace("}", "") for match in PLACEHOLDER_PATTERN.findall(sql)]


def validate_json_area(matches_length: int, json_area: str | None) -> None:
    """Cross-check the presence of the json area against the placeholder count.

    Raises:
        QueryBuilderException: WRONG_JSON, JSON_AREA_EMPTY or JSON_AREA_FILLED.
    """
    if _is_filled(json_area):
        try:
            json.loads(json_area)
        except ValueError as exc:
            raise _reject("Json is not json", ErrorCode.WRONG_JSON) from exc

    if matches_length > 0 and not _is_filled(json_area):
        raise _reject("Fill the json area", ErrorCode.JSON_AREA_EMPTY)

    if matches_length == 0 and _is_filled(json_area):
        raise _reject("Json area filled but sql not contains filter", ErrorCode.JSON_AREA_FILLED)


def parse_filter_map(json_area: str) -> dict[str, Any]:
    """Parse the json area into a filter map keyed by placeholder name."""
    try:
        filter_map = json.loads(json_area)
    except ValueError as exc:
        raise _reject("Json is not json", ErrorCode.WRONG_JSON) from exc
    if not isinstance(filter_map, dict):
        raise _reject("Json is not json", ErrorCode.WRONG_JSON)
    return filter_map


def check_filter_count(filter_map: dict[str, Any], matches_length: int) -> None:
    if len(filter_map) > matches_length:
        raise _reject("More filter in json area then sql area", ErrorCode.MORE_FILTER_IN_JSON)


def check_all_filters_are_filled(placeholders: list[str], filter_map: dict[str, Any]) -> None:
    """Every placeholder needs a descriptor, and every descriptor a placeholder."""
    for name in placeholders:
        if name not in filter_map:
            raise _reject(f"Filter {name} not found in json area", ErrorCode.FILTER_NOT_FOUND_IN_JSON)

    # Duplicated placeholders can hide an unused key from the count check
    unused = [key for key in filter_map if key not in placeholders]
    if unused:
        raise _reject("More filter in json area then sql area", ErrorCode.MORE_FILTER_IN_JSON)


def check_filter_structure(filter_map: dict[str, Any]) -> None:
    """Validate each filter descriptor.

    Raises:
        QueryBuilderException: MISSING_FIELD_IN_JSON_FILTER,
            MISSING_TYPE_IN_JSON_FILTER, WRONG_TYPE_IN_JSON_FILTER or
            MISSING_DESCRIPTION_IN_JSON_FILTER.
    """
    for name, descriptor in filter_map.items():
        if not isinstance(descriptor, dict) or not isinstance(descriptor.get("field"), str):
            raise _reject(f"Missing field in {name}", ErrorCode.MISSING_FIELD_IN_JSON_FILTER)

        if "type" not in descriptor:
            raise _reject(f"Missing type in {name}", ErrorCode.MISSING_TYPE_IN_JSON_FILTER)

        filter_type = descriptor["type"]
        if not isinstance(filter_type, str) or filter_type not in ALLOWED_FILTER_TYPES:
            raise _reject(f"Type not allowed in {name}", ErrorCode.WRONG_TYPE_IN_JSON_FILTER)

        if filter_type in DESCRIBED_FILTER_TYPES and "description" not in descriptor:
            raise _reject(
                f"Missing description in {name}", ErrorCode.MISSING_DESCRIPTION_IN_JSON_FILTER
            )


def convert_to_datalake_v3(value: str) -> str:
    """Quote a column reference for the v3 engine.

    ``core_user.userId`` becomes ``core_user."userid"``. Function calls
    (values ending with ``)``) and already quoted columns are left as they are.
    """
    if value.endswith(")"):
        return value

    table = ""
    dot = value.find(".")
    if dot != 0:
        table = value[: dot + 1]
        value = value[dot + 1 :]

    value = value.lower()
    if value.startswith('"') and value.endswith('"'):
        return table + value
    return f'{table}"{value}"'


def substitute_placeholders(
    datalake_v3: bool, placeholders: list[str], filter_map: dict[str, Any], sql: str
) -> str:
    """Replace each ``{name}`` with ``(<field> is not null or <field> is null)``."""
    for name in placeholders:
        field = filter_map[name]["field"]
        if datalake_v3:
            field = convert_to_datalake_v3(field)
        sql = sql.replace(f"{{{name}}}", f"({field} is not null or {field} is null)")
    return sql


def get_runnable_query(
    datalake_v3: bool,
    sql: str | None,
    json_area: str | None = None,
    validate: bool = True,
) -> str:
    """Turn a SQL template and its filter map into a runnable statement.

    Args:
        datalake_v3: Whether identifiers must be quoted for the v3 engine.
        sql: SQL template with ``{name}`` placeholders.
        json_area: JSON document mapping placeholder names to descriptors.
        validate: Run the syntax gate and json area checks first.

    Returns:
        The SQL with every placeholder substituted.

    Raises:
        QueryBuilderException: When the template or the filter map is rejected.
    """
    if validate and not check_syntax(sql):
        raise _reject("Syntax not valid", ErrorCode.WRONG_SQL)

    sql_string = sql or ""
    placeholders = find_placeholders(sql_string)
    matches_length = len(placeholders)

    if validate:
        validate_json_area(matches_length, json_area)

    if json_area:
        filter_map = parse_filter_map(json_area)
        check_filter_count(filter_map, matches_length)
        check_all_filters_are_filled(placeholders, filter_map)
        check_filter_structure(filter_map)
        sql_string = substitute_placeholders(datalake_v3, placeholders, filter_map, sql_string)

    logger.debug(f"Runnable query built with {matches_length} placeholder(s)")
    return sql_string
