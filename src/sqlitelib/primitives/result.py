"""A unified, simplified interface for SQLite query results"""
from typing import Any, Iterator, Optional
from dataclasses import dataclass
import sqlite3

import pandas as pd


@dataclass
class QueryResult:
    """A unified, simplified interface for SQLite query results"""
    _cursor: sqlite3.Cursor
    _sql: str = ""

    @property
    def rowcount(self) -> int:
        """The number of rows affected, or -1 for SELECT and DDL"""
        return self._cursor.rowcount if self._cursor.rowcount is not None else -1

    @property
    def lastrowid(self) -> Optional[int]:
        """Rowid of the last inserted row, if any"""
        return self._cursor.lastrowid

    @property
    def sql(self) -> str:
        """The SQL statement that was executed"""
        return self._sql

    @property
    def description(self) -> Optional[tuple]:
        """A description of the result columns"""
        return self._cursor.description

    @property
    def columns(self) -> list[str]:
        """Result column names, empty for statements that return no rows"""
        if not self._cursor.description:
            return []
        return [desc[0] for desc in self._cursor.description]

    def _to_dict(self, row: Optional[tuple[Any, ...]]) -> Optional[dict[str, Any]]:
        if row is None:
            return None
        return dict(zip(self.columns, row))

    def fetch_one(self) -> Optional[dict[str, Any]]:
        """Fetch the next row as a column -> value dict, or None when exhausted"""
        return self._to_dict(self._cursor.fetchone())

    def fetch_all(self) -> list[dict[str, Any]]:
        """Fetch all remaining rows as column -> value dicts"""
        columns = self.columns
        return [dict(zip(columns, row)) for row in self._cursor.fetchall()]

    def __iter__(self) -> Iterator[dict[str, Any]]:
        """Iterate over the remaining rows as dicts"""
        while True:
            row = self.fetch_one()
            if row is None:
                return
            yield row

    def to_df(self, lowercase_columns: bool = False) -> pd.DataFrame:
        """Fetch all remaining rows as a DataFrame with optional column casing"""
        columns = self.columns
        if columns:
            df = pd.DataFrame(self._cursor.fetchall(), columns=columns)
        else:
            df = pd.DataFrame()

        if lowercase_columns and len(df.columns) > 0:
            df.columns = df.columns.str.lower()

        return df

    def close(self) -> None:
        """Close the underlying cursor"""
        self._cursor.close()

    def __repr__(self) -> str:
        """String representation"""
        return (
            f"QueryResult(sql={self._sql!r}, "
            f"rowcount={self.rowcount})"
        )
