from typing import Any, Mapping, NamedTuple

from sqlalchemy import Table, bindparam, text
from sqlalchemy.orm import Session

from homeschool.core.errors import BadRequestError


class PartialUpdate(NamedTuple):
    """SET clause for a sparse update plus its positionally matched values.

    ``columns[i]`` is assigned ``values[i]`` through placeholder ``:p{i+1}``.
    """

    set_clause: str
    columns: list[str]
    values: list[Any]

    def params(self) -> dict[str, Any]:
        return {f"p{index}": value for index, value in enumerate(self.values, start=1)}


def sql_for_partial_update(data: Mapping[str, Any], column_map: Mapping[str, str] | None = None) -> PartialUpdate:
    """Build a ``SET`` clause from the fields in ``data``.

    ``column_map`` translates field names to column names; fields missing
    from it are used as column names unchanged. For example
    ``{"first_name": "Aliya", "password": "x"}`` with
    ``{"password": "hashed_password"}`` gives
    ``'"first_name" = :p1, "hashed_password" = :p2'`` and ``["Aliya", "x"]``.

    Raises BadRequestError when ``data`` is empty.
    """
    if not data:
        raise BadRequestError("No data")

    column_map = column_map or {}
    columns: list[str] = []
    values: list[Any] = []
    for field, value in data.items():
        columns.append(column_map.get(field, field))
        values.append(value)

    set_clause = ", ".join(f'"{column}" = :p{index}' for index, column in enumerate(columns, start=1))
    return PartialUpdate(set_clause=set_clause, columns=columns, values=values)


def execute_partial_update(
    db: Session,
    table: Table,
    data: Mapping[str, Any],
    where: str,
    key: Any,
    column_map: Mapping[str, str] | None = None,
) -> int:
    """Run ``UPDATE <table> SET ... WHERE <where>`` and return the matched row count.

    ``where`` references the key as ``:key``. Placeholders are typed from the
    table's columns so dates and booleans bind the same way the ORM binds them.
    """
    update = sql_for_partial_update(data, column_map)
    typed = [
        bindparam(f"p{index}", type_=table.c[column].type)
        for index, column in enumerate(update.columns, start=1)
    ]
    statement = text(f'UPDATE "{table.name}" SET {update.set_clause} WHERE {where}').bindparams(*typed)
    result = db.execute(statement, {**update.params(), "key": key})
    db.expire_all()
    return result.rowcount
