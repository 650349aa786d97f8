"""Builders that turn validated request data into parameterized SQL fragments.

Values are always bound; column identifiers are quoted and interpolated, so
every identifier must come from an allow-list owned by the calling service.
Placeholders are numbered by position (``:p1``, ``:p2``, ...), and
``bind_params`` turns the returned value list into the mapping SQLAlchemy's
``text()`` expects.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from jobly.errors import BadRequestError


def placeholder(position: int) -> str:
    return f":p{position}"


def bind_params(values: Iterable[Any], offset: int = 0) -> dict[str, Any]:
    return {f"p{idx}": value for idx, value in enumerate(values, start=offset + 1)}


def sql_for_partial_update(
    data: Mapping[str, Any],
    column_map: Mapping[str, str],
    allowed_columns: Iterable[str],
) -> tuple[str, list[Any]]:
    """Build the assignment list of an UPDATE statement.

    ``{"firstName": "Aliya", "age": 32}`` with ``{"firstName": "first_name"}``
    gives ``('"first_name"=:p1, "age"=:p2', ["Aliya", 32])``. Keys missing
    from ``column_map`` are used as the column name verbatim.

    Raises BadRequestError when ``data`` is empty or names a column outside
    ``allowed_columns``.
    """
    if not data:
        raise BadRequestError("No data")

    allowed = set(allowed_columns)
    cols = []
    for idx, key in enumerate(data, start=1):
        column = column_map.get(key, key)
        if column not in allowed:
            raise BadRequestError(f"Invalid field: {key}")
        cols.append(f'"{column}"={placeholder(idx)}')

    return ", ".join(cols), list(data.values())


@dataclass(frozen=True)
class FilterPredicate:
    """One supported filter: its query key, SQL template and whether it binds.

    ``template`` contains ``{param}`` where the bound placeholder goes. When
    ``binds_value`` is false the filter is a switch that only accepts true.
    """

    key: str
    template: str
    binds_value: bool = True


JOB_FILTERS = {
    p.key: p
    for p in (
        FilterPredicate("minSalary", "salary >= {param}"),
        FilterPredicate("hasEquity", "CAST(equity AS REAL) > 0", binds_value=False),
        FilterPredicate("title", "lower(title) LIKE '%' || lower({param}) || '%'"),
    )
}

COMPANY_FILTERS = {
    p.key: p
    for p in (
        FilterPredicate("nameLike", "lower(name) LIKE '%' || lower({param}) || '%'"),
        FilterPredicate("minEmployees", "num_employees >= {param}"),
        FilterPredicate("maxEmployees", "num_employees <= {param}"),
    )
}


def sql_for_filters(
    filters: Mapping[str, Any],
    predicates: Mapping[str, FilterPredicate],
) -> tuple[list[str], list[Any]]:
    """Translate filter values into WHERE predicates plus bound values.

    Returns ``(clauses, values)``; join the clauses with ``" AND "``. Keys
    outside ``predicates`` raise BadRequestError.
    """
    unknown = [key for key in filters if key not in predicates]
    if unknown:
        raise BadRequestError(f"Invalid filter: {', '.join(unknown)}")

    clauses: list[str] = []
    values: list[Any] = []
    for key, value in filters.items():
        predicate = predicates[key]
        if not predicate.binds_value:
            if value is not True:
                raise BadRequestError(f"Invalid filter: {key} only accepts true")
            clauses.append(predicate.template)
            continue
        values.append(value)
        clauses.append(predicate.template.format(param=placeholder(len(values))))

    return clauses, values
