"""
Dump orchestration: walks the schema phase by phase and writes the dump.
"""

import logging
from typing import Any, Optional, TextIO

from mysql.connector import Error as MySQLError

from .batch import BatchWriter
from .context import DumpContext
from .formatter import escape_identifier
from .models import (
    ColumnInfo,
    DumpError,
    DumpPhase,
    DumpStats,
    RoutineInfo,
    TableInfo,
    TableStats,
    TriggerInfo,
    as_text,
)
from .rewrite import rewrite_routine_ddl, rewrite_trigger_ddl, rewrite_view_ddl
from .sql import TEMPLATES
from .stream import RowStream
from .templates import TemplateRegistry


class SchemaDumper:
    """Writes a replayable SQL dump of one database to a text sink.

    Phases run strictly in order: prologue, placeholder tables for views,
    base tables with their data, routines, triggers, the real views,
    events and the epilogue. A failed query is logged and recorded in the
    returned stats; the affected object is skipped and the dump goes on.
    """

    BASE_TABLE = 'BASE TABLE'
    VIEW = 'VIEW'
    VIEW_COLUMN_FRAGMENT = '  `{name}` tinyint NOT NULL'

    def __init__(
        self,
        connection,
        sink: TextIO,
        database: str,
        page_size: int = RowStream.DEFAULT_PAGE_SIZE,
        max_statement_bytes: int = BatchWriter.MAX_STATEMENT_BYTES,
        templates: TemplateRegistry = TEMPLATES
    ):
        self.connection = connection
        self.sink = sink
        self.templates = templates
        self.page_size = page_size
        self.max_statement_bytes = max_statement_bytes
        self.context = DumpContext(database=database)
        self.stats = DumpStats()
        self.phase = DumpPhase.PROLOGUE

    def _record_error(self, source: str, message: str) -> None:
        logging.error(f"[{self.phase.value}] {source}: {message}")
        self.stats.errors.append(DumpError(self.phase, source, message))

    def show(self, name: str, **params: Any) -> Optional[str]:
        """Render a template against the current context."""
        return self.templates.resolve(name, self.context.scope(**params))

    def say(self, name: str, **params: Any) -> None:
        """Write a rendered template to the dump."""
        text = self.show(name, **params)
        if text is not None:
            self.sink.write(text + '\n')

    def get(self, name: str, field: int, **params: Any) -> Optional[Any]:
        """Return one field of the first row of a non-streaming query."""
        query = self.show(name, **params)
        if query is None:
            return None

        self.connection.set_compact_arrays(True)
        try:
            rows = self.connection.query(query)
        except MySQLError as e:
            self._record_error(name, str(e))
            return None

        if not rows:
            return None
        return as_text(rows[0][field])

    def rows(self, name: str, finalize=None, **params: Any) -> Optional[RowStream]:
        """Return a stream over the rows of a templated query."""
        query = self.show(name, **params)
        if query is None:
            return None
        return RowStream(self.connection, query, self.page_size, finalize)

    def _check_stream(self, name: str, stream: RowStream) -> None:
        if stream.truncated:
            self._record_error(name, stream.error)

    def _definition(self, name: str, field: int, label: str) -> Optional[str]:
        """Fetch an object's CREATE statement; a missing one is a dump error."""
        failures = len(self.stats.errors)
        statement = self.get(name, field)
        if statement is None and len(self.stats.errors) == failures:
            self._record_error(name, f"no CREATE statement for {label}")
        return statement

    def load_session_variables(self) -> None:
        """Capture character_set_* and collation_* session variables."""
        self.connection.set_compact_arrays(False)
        stream = self.rows('variables')
        if stream is None:
            return
        for variable in stream:
            self.context.session[as_text(variable['Variable_name'])] = as_text(variable['Value'])
        self._check_stream('variables', stream)
        logging.debug(f"Captured {len(self.context.session)} session variable(s)")

    def _collect_tables(self, table_type: str) -> list[TableInfo]:
        """Group the flat column stream into tables by name boundaries."""
        tables: list[TableInfo] = []
        current: Optional[TableInfo] = None

        self.connection.set_compact_arrays(False)
        stream = self.rows('tables', table_type=table_type)
        if stream is None:
            return tables

        for row in stream:
            table_name = as_text(row['table_name'])
            if current is None or current.name != table_name:
                current = TableInfo(name=table_name, rows=int(row['table_rows'] or 0))
                tables.append(current)

            column_name = as_text(row['column_name'])
            quoted_name = escape_identifier(column_name)
            if table_type == self.VIEW:
                fragment = self.VIEW_COLUMN_FRAGMENT.format(name=quoted_name)
            else:
                fragment = f"`{quoted_name}`"
            current.add_column(ColumnInfo(
                ordinal=int(row['ordinal_position']),
                name=column_name,
                data_type=as_text(row['column_data_type']),
                fragment=fragment
            ))

        self._check_stream('tables', stream)
        return tables

    def dump_tables(self, table_type: str = BASE_TABLE, temporary: bool = False) -> None:
        """Dump every table of a type; views are written as DDL only."""
        tables = self._collect_tables(table_type)
        logging.info(f"Dumping {len(tables)} {table_type.lower()}(s)")

        for table in tables:
            self.context.table = table
            if table_type == self.VIEW:
                self._dump_view(table, temporary)
            else:
                self._dump_base_table(table)
        self.context.table = None

    def _dump_view(self, table: TableInfo, temporary: bool) -> None:
        if temporary:
            table.create_view = table.joined_fragments(',\n')
            self.say('create_view_tmp')
            return

        statement = self._definition('show_create_view', 1, f"view `{table.name}`")
        if statement is None:
            return
        table.create_view = rewrite_view_ddl(statement)
        self.say('create_view')
        self.stats.views += 1

    def _dump_base_table(self, table: TableInfo) -> None:
        statement = self._definition('show_create_table', 1, f"table `{table.name}`")
        if statement is None:
            return
        table.create_table = statement
        self.say('create_table')

        if table.rows > 0:
            table_stats = self.dump_rows(table)
        else:
            table_stats = TableStats(table=table.name)
        self.stats.tables.append(table_stats)
        logging.info(f"  ✓ {table.name}: {table_stats.rows_dumped} rows")

    def dump_rows(self, table: TableInfo) -> TableStats:
        """Dump a table's rows inside a lock/disable-keys guard."""
        writer = BatchWriter(
            self.sink, self.show('insert'), table.data_types, self.max_statement_bytes
        )
        table_stats = TableStats(table=table.name)

        self.say('lock_tables')
        self.connection.set_compact_arrays(True)
        stream = self.rows('rows', finalize=writer.flush)
        if stream is not None:
            writer.consume(stream)
            if stream.truncated:
                table_stats.truncated = True
                self._check_stream(f"rows of `{table.name}`", stream)
        self.say('unlock_tables')

        table_stats.rows_dumped = writer.rows_written
        table_stats.statements = writer.statements
        self.stats.total_rows += writer.rows_written
        return table_stats

    def dump_routines(self) -> None:
        """Dump stored procedures and functions, ordered by type then name."""
        self.connection.set_compact_arrays(False)
        stream = self.rows('routines')
        routines = [RoutineInfo.from_row(row) for row in stream] if stream else []
        if stream is not None:
            self._check_stream('routines', stream)
        logging.info(f"Dumping {len(routines)} routine(s)")

        for routine in routines:
            self.context.routine = routine
            statement = self._definition(
                'show_create_routine', 2, f"routine `{routine.routine_name}`"
            )
            if statement is None:
                continue
            routine.create_routine = rewrite_routine_ddl(statement)
            self.say('create_routine')
            self.stats.routines += 1
        self.context.routine = None

    def dump_triggers(self) -> None:
        """Dump triggers in their declared action order."""
        self.connection.set_compact_arrays(False)
        stream = self.rows('triggers')
        triggers = [TriggerInfo.from_row(row) for row in stream] if stream else []
        if stream is not None:
            self._check_stream('triggers', stream)
        logging.info(f"Dumping {len(triggers)} trigger(s)")

        for trigger in triggers:
            self.context.trigger = trigger
            statement = self._definition(
                'show_create_trigger', 2, f"trigger `{trigger.trigger_name}`"
            )
            if statement is None:
                continue
            trigger.create_trigger = rewrite_trigger_ddl(statement)
            self.say('create_trigger')
            self.stats.triggers += 1
        self.context.trigger = None

    def dump_views(self, temporary: bool = False) -> None:
        """Dump views: stand-in tables when temporary, real definitions otherwise."""
        self.dump_tables(self.VIEW, temporary)

    def dump_events(self) -> None:
        """Events are not part of the dump; the phase only logs."""
        logging.debug("Event definitions are not dumped")

    def dump(self) -> DumpStats:
        """Run every phase in order and return the dump statistics."""
        self.load_session_variables()

        steps = [
            (DumpPhase.PROLOGUE, lambda: self.say('begin')),
            (DumpPhase.TEMP_VIEWS, lambda: self.dump_views(temporary=True)),
            (DumpPhase.BASE_TABLES, self.dump_tables),
            (DumpPhase.ROUTINES, self.dump_routines),
            (DumpPhase.TRIGGERS, self.dump_triggers),
            (DumpPhase.VIEWS, self.dump_views),
            (DumpPhase.EVENTS, self.dump_events),
            (DumpPhase.EPILOGUE, lambda: self.say('end')),
        ]
        for phase, step in steps:
            self.phase = phase
            logging.debug(f"Phase: {phase.value}")
            step()
            self.context.reset()

        return self.stats
