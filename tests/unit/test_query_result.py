"""Tests for QueryResult wrapper class."""

from unittest.mock import Mock
import pandas as pd


def _mock_cursor(rows):
    mock_cursor = Mock()
    mock_cursor.rowcount = -1
    mock_cursor.lastrowid = None
    mock_cursor.description = (
        ("ID", None, None, None, None, None, None),
        ("NAME", None, None, None, None, None, None),
    )
    mock_cursor.fetchall.return_value = list(rows)
    remaining = iter(list(rows))
    mock_cursor.fetchone.side_effect = lambda: next(remaining, None)
    return mock_cursor


class TestQueryResult:
    """Tests for QueryResult class."""

    def test_query_result_properties(self):
        """Test that QueryResult exposes cursor properties."""
        from sqlitelib.primitives.result import QueryResult

        mock_cursor = _mock_cursor([])
        mock_cursor.rowcount = 3
        mock_cursor.lastrowid = 17

        result = QueryResult(_cursor=mock_cursor, _sql="UPDATE t SET a = 1")

        assert result.rowcount == 3
        assert result.lastrowid == 17
        assert result.sql == "UPDATE t SET a = 1"
        assert result.columns == ["ID", "NAME"]
        assert len(result.description) == 2

    def test_rowcount_none_is_minus_one(self):
        from sqlitelib.primitives.result import QueryResult

        mock_cursor = _mock_cursor([])
        mock_cursor.rowcount = None

        assert QueryResult(_cursor=mock_cursor).rowcount == -1

    def test_fetch_all_returns_dicts(self):
        from sqlitelib.primitives.result import QueryResult

        result = QueryResult(_cursor=_mock_cursor([(1, "A"), (2, "B")]))

        assert result.fetch_all() == [{"ID": 1, "NAME": "A"}, {"ID": 2, "NAME": "B"}]

    def test_fetch_one_and_iteration(self):
        from sqlitelib.primitives.result import QueryResult

        result = QueryResult(_cursor=_mock_cursor([(1, "A"), (2, "B")]))

        assert result.fetch_one() == {"ID": 1, "NAME": "A"}
        assert list(result) == [{"ID": 2, "NAME": "B"}]
        assert result.fetch_one() is None

    def test_no_description(self):
        """Statements without a result set have no columns."""
        from sqlitelib.primitives.result import QueryResult

        mock_cursor = _mock_cursor([])
        mock_cursor.description = None
        result = QueryResult(_cursor=mock_cursor)

        assert result.columns == []
        assert result.to_df().empty

    def test_to_df(self):
        from sqlitelib.primitives.result import QueryResult

        result = QueryResult(_cursor=_mock_cursor([(1, "A"), (2, "B"), (3, "C")]))
        df = result.to_df()

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 3
        assert list(df.columns) == ["ID", "NAME"]

    def test_to_df_lowercases_columns(self):
        from sqlitelib.primitives.result import QueryResult

        result = QueryResult(_cursor=_mock_cursor([(1, "A")]))
        df = result.to_df(lowercase_columns=True)

        assert list(df.columns) == ["id", "name"]

    def test_repr(self):
        from sqlitelib.primitives.result import QueryResult

        mock_cursor = _mock_cursor([])
        mock_cursor.rowcount = 2
        result = QueryResult(_cursor=mock_cursor, _sql="DELETE FROM t")

        assert repr(result) == "QueryResult(sql='DELETE FROM t', rowcount=2)"
