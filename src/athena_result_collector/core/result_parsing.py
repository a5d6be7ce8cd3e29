"""Parsers for GetQueryResults payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import AthenaProtocolError
from .models import ColumnInfo, ParsedRow

RawRow = list[str | None]


def _as_result_set(payload: Mapping[str, object]) -> Mapping[str, object]:
    raw = payload.get("ResultSet")
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AthenaProtocolError("ResultSet must be an object")
    return raw


def parse_column_info(payload: Mapping[str, object]) -> tuple[ColumnInfo, ...]:
    metadata = _as_result_set(payload).get("ResultSetMetadata")
    if metadata is None:
        return ()
    if not isinstance(metadata, Mapping):
        raise AthenaProtocolError("ResultSetMetadata must be an object")
    raw_columns = metadata.get("ColumnInfo", [])
    if not isinstance(raw_columns, list):
        raise AthenaProtocolError("ColumnInfo must be a list")

    columns: list[ColumnInfo] = []
    for item in raw_columns:
        if not isinstance(item, Mapping):
            raise AthenaProtocolError("ColumnInfo element must be an object")
        name = item.get("Name")
        if not isinstance(name, str):
            raise AthenaProtocolError("ColumnInfo.Name must be a string")
        column_type = item.get("Type")
        columns.append(ColumnInfo(name=name, type=str(column_type) if column_type is not None else None))
    return tuple(columns)


def parse_raw_rows(payload: Mapping[str, object]) -> list[RawRow]:
    raw_rows = _as_result_set(payload).get("Rows", [])
    if raw_rows is None:
        return []
    if not isinstance(raw_rows, list):
        raise AthenaProtocolError("ResultSet.Rows must be a list")

    rows: list[RawRow] = []
    for raw_row in raw_rows:
        if not isinstance(raw_row, Mapping):
            raise AthenaProtocolError("ResultSet.Rows element must be an object")
        data = raw_row.get("Data", [])
        if not isinstance(data, list):
            raise AthenaProtocolError("Row.Data must be a list")
        values: RawRow = []
        for datum in data:
            if not isinstance(datum, Mapping):
                raise AthenaProtocolError("Row.Data element must be an object")
            value = datum.get("VarCharValue")
            values.append(str(value) if value is not None else None)
        rows.append(values)
    return rows


def is_header_row(columns: Sequence[ColumnInfo], values: Sequence[str | None]) -> bool:
    if not columns or len(columns) != len(values):
        return False
    return all(column.name == value for column, value in zip(columns, values))


def to_parsed_row(columns: Sequence[ColumnInfo], values: Sequence[str | None]) -> ParsedRow:
    if len(columns) != len(values):
        raise AthenaProtocolError(
            f"row has {len(values)} values but result set has {len(columns)} columns"
        )
    return {column.name: value for column, value in zip(columns, values)}


def parse_next_token(payload: Mapping[str, object]) -> str | None:
    raw = payload.get("NextToken")
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise AthenaProtocolError("NextToken has unsupported type")
    if raw.strip() == "":
        return None
    return raw


__all__ = [
    "RawRow",
    "parse_column_info",
    "parse_raw_rows",
    "is_header_row",
    "to_parsed_row",
    "parse_next_token",
]
