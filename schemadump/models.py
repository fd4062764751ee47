"""
Data models and enums for the schema dumper.
"""

import bisect
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from operator import attrgetter
from typing import Any, Optional

from .formatter import escape_identifier


class ResultStatus(Enum):
    """State reported by the client after reading a result page."""
    MORE = "again"
    DONE = "done"
    ERROR = "error"


class DumpPhase(Enum):
    """Phases of a dump, in the order they run."""
    PROLOGUE = "prologue"
    TEMP_VIEWS = "temp_views"
    BASE_TABLES = "base_tables"
    ROUTINES = "routines"
    TRIGGERS = "triggers"
    VIEWS = "views"
    EVENTS = "events"
    EPILOGUE = "epilogue"


def as_text(value: Any) -> Optional[str]:
    """Decode driver values that may arrive as bytes."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    if value is None:
        return None
    return str(value)


@dataclass
class ResultPage:
    """One page of rows read from a streaming query."""
    rows: list
    status: ResultStatus
    error: Optional[str] = None


@dataclass
class ColumnInfo:
    """Column metadata as read from information_schema."""
    ordinal: int
    name: str
    data_type: str
    fragment: str


@dataclass
class TableInfo:
    """A table or view with its columns in ordinal order."""
    name: str
    rows: int = 0
    columns: list[ColumnInfo] = field(default_factory=list)
    create_table: Optional[str] = None
    create_view: Optional[str] = None

    def add_column(self, column: ColumnInfo) -> None:
        """Insert a column, keeping the list sorted by ordinal position."""
        bisect.insort(self.columns, column, key=attrgetter('ordinal'))

    @property
    def data_types(self) -> list[str]:
        """Column data types in ordinal order."""
        return [col.data_type for col in self.columns]

    def joined_fragments(self, separator: str = ',') -> str:
        """Join the columns' SQL fragments with separator."""
        return separator.join(col.fragment for col in self.columns)

    def template_values(self) -> dict[str, Any]:
        return {
            'table_name': escape_identifier(self.name),
            'table_rows': self.rows,
            'columns': self.joined_fragments(),
            'create_table': self.create_table,
            'create_view': self.create_view,
        }


class _MetadataRecord:
    """Mixin building a record from a row keyed by column name."""

    IDENTIFIER_FIELDS = ()

    @classmethod
    def from_row(cls, row: dict[str, Any]):
        names = {f.name for f in fields(cls)}
        values = {
            key.lower(): as_text(value)
            for key, value in row.items()
            if key.lower() in names
        }
        return cls(**values)

    def template_values(self) -> dict[str, Any]:
        values = asdict(self)
        for name in self.IDENTIFIER_FIELDS:
            if values[name] is not None:
                values[name] = escape_identifier(values[name])
        return values


@dataclass
class RoutineInfo(_MetadataRecord):
    """Stored procedure or function metadata."""

    IDENTIFIER_FIELDS = ('routine_name',)

    routine_name: str
    routine_type: str
    routine_comment: Optional[str] = None
    security_type: Optional[str] = None
    sql_mode: Optional[str] = None
    definer: Optional[str] = None
    character_set_client: Optional[str] = None
    collation_connection: Optional[str] = None
    database_collation: Optional[str] = None
    create_routine: Optional[str] = None


@dataclass
class TriggerInfo(_MetadataRecord):
    """Trigger metadata."""

    IDENTIFIER_FIELDS = ('trigger_name',)

    trigger_name: str
    event_manipulation: Optional[str] = None
    event_object_table: Optional[str] = None
    action_orientation: Optional[str] = None
    action_timing: Optional[str] = None
    sql_mode: Optional[str] = None
    definer: Optional[str] = None
    character_set_client: Optional[str] = None
    collation_connection: Optional[str] = None
    database_collation: Optional[str] = None
    create_trigger: Optional[str] = None


@dataclass
class DumpError:
    """A failure recorded while dumping."""
    phase: DumpPhase
    source: str
    message: str


@dataclass
class TableStats:
    """Statistics for a single table's data."""
    table: str
    rows_dumped: int = 0
    statements: int = 0
    truncated: bool = False


@dataclass
class DumpStats:
    """Overall dump statistics."""
    tables: list[TableStats] = field(default_factory=list)
    views: int = 0
    routines: int = 0
    triggers: int = 0
    total_rows: int = 0
    errors: list[DumpError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors
