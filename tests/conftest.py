"""
Shared fixtures: a scripted stand-in for DatabaseConnection.
"""

import pytest

from schemadump.models import ResultPage, ResultStatus


class FakeConnection:
    """Answers queries from (substring, rows) pairs, first match wins.

    A result may be an exception instance, which is raised when the query
    is sent. An exception among the rows turns the page holding it into an
    error page, as a connection lost mid-result would. Unmatched queries
    return no rows.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.compact_arrays = True
        self.queries = []
        self.modes = []
        self._pending = None

    def set_compact_arrays(self, compact):
        self.compact_arrays = compact

    def _match(self, sql):
        self.queries.append(sql)
        self.modes.append(self.compact_arrays)
        for needle, result in self.responses:
            if needle in sql:
                if isinstance(result, Exception):
                    raise result
                return list(result)
        return []

    def query(self, sql):
        return self._match(sql)

    def send_query(self, sql):
        self._pending = self._match(sql)
        return len(sql)

    def read_result(self, size):
        page, self._pending = self._pending[:size], self._pending[size:]
        failures = [row for row in page if isinstance(row, Exception)]
        if failures:
            self._pending = []
            return ResultPage([], ResultStatus.ERROR, str(failures[0]))
        status = ResultStatus.MORE if len(page) == size else ResultStatus.DONE
        return ResultPage(page, status)


SESSION_VARIABLES = [
    {'Variable_name': 'character_set_client', 'Value': 'utf8mb4'},
    {'Variable_name': 'character_set_connection', 'Value': 'utf8mb4'},
    {'Variable_name': 'character_set_results', 'Value': 'utf8mb4'},
    {'Variable_name': 'collation_connection', 'Value': 'utf8mb4_general_ci'},
]


def column_row(table, ordinal, name, data_type, rows=0):
    return {
        'table_name': table,
        'table_rows': rows,
        'column_name': name,
        'column_type': data_type,
        'column_data_type': data_type,
        'ordinal_position': ordinal,
    }


@pytest.fixture
def fake_connection():
    """Factory building a FakeConnection from response pairs."""
    return FakeConnection


@pytest.fixture
def session_variables():
    return list(SESSION_VARIABLES)


@pytest.fixture
def make_column_row():
    return column_row
