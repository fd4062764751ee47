"""
Grouping of table rows into size-capped multi-row INSERT statements.
"""

from typing import Any, Iterable, Sequence, TextIO

from .formatter import render


def render_row(data_types: Sequence[str], row: Sequence[Any]) -> str:
    """Render a row as an indented ``(v1,v2,...)`` value list."""
    return '  (' + ','.join(
        render(data_type, value) for data_type, value in zip(data_types, row)
    ) + ')'


class BatchWriter:
    """Writes rendered rows as INSERT statements below a byte cap.

    A statement is flushed as soon as adding the next row would take it
    to ``max_bytes``; the next statement starts with that row. Only a
    single row larger than the cap can produce a statement over it.
    """

    MAX_STATEMENT_BYTES = 1024 * 1024
    ROW_SEPARATOR = ',\n'

    def __init__(
        self,
        sink: TextIO,
        insert_into: str,
        data_types: Sequence[str] = (),
        max_bytes: int = MAX_STATEMENT_BYTES
    ):
        self.sink = sink
        self.insert_into = insert_into
        self.data_types = list(data_types)
        self.max_bytes = max_bytes
        self.rows_written = 0
        self.statements = 0
        self._rows: list[str] = []
        # prefix, newline after it and the closing semicolon
        self._base_length = len(insert_into.encode('utf-8')) + 2
        self._length = self._base_length

    @property
    def pending(self) -> int:
        return len(self._rows)

    def write(self, row: Sequence[Any]) -> None:
        self.add(render_row(self.data_types, row))

    def consume(self, rows: Iterable[Sequence[Any]]) -> None:
        for row in rows:
            self.write(row)

    def add(self, rendered: str) -> None:
        row_length = len(rendered.encode('utf-8'))
        if self._rows:
            row_length += len(self.ROW_SEPARATOR)
            if self._length + row_length >= self.max_bytes:
                self.flush()
                row_length -= len(self.ROW_SEPARATOR)

        self._rows.append(rendered)
        self._length += row_length

    def flush(self) -> None:
        """Write the pending rows as one statement."""
        if not self._rows:
            return

        self.sink.write(
            self.insert_into + '\n' + self.ROW_SEPARATOR.join(self._rows) + ';\n'
        )
        self.statements += 1
        self.rows_written += len(self._rows)
        self._rows = []
        self._length = self._base_length
