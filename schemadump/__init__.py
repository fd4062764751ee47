"""
MySQL Schema Dumper
===================
Writes a replayable, mysqldump-compatible SQL dump of one database:
- Session-state guards around the whole dump
- Placeholder tables for views, then the real view definitions
- Table definitions with their data as size-capped INSERT batches
- Stored procedures, functions and triggers
"""

from .batch import BatchWriter, render_row
from .config import ConfigLoader
from .connection import DatabaseConnection
from .context import DumpContext
from .dumper import SchemaDumper
from .formatter import LiteralStyle, classify, render
from .main import main
from .models import (
    ColumnInfo,
    DumpError,
    DumpPhase,
    DumpStats,
    ResultPage,
    ResultStatus,
    RoutineInfo,
    TableInfo,
    TableStats,
    TriggerInfo,
)
from .rewrite import rewrite_routine_ddl, rewrite_trigger_ddl, rewrite_view_ddl
from .sql import SQL_TEMPLATES, TEMPLATES
from .stream import RowStream
from .templates import TemplateRegistry, resolve_path, substitute
from .utils import open_output, print_dry_run_info, setup_logging

__version__ = "1.0.0"

__all__ = [
    # Main entry point
    "main",
    # Core classes
    "BatchWriter",
    "ConfigLoader",
    "DatabaseConnection",
    "DumpContext",
    "RowStream",
    "SchemaDumper",
    "TemplateRegistry",
    # Models
    "ColumnInfo",
    "DumpError",
    "DumpPhase",
    "DumpStats",
    "LiteralStyle",
    "ResultPage",
    "ResultStatus",
    "RoutineInfo",
    "TableInfo",
    "TableStats",
    "TriggerInfo",
    # Templates
    "SQL_TEMPLATES",
    "TEMPLATES",
    "resolve_path",
    "substitute",
    # Formatting and rewrites
    "classify",
    "render",
    "render_row",
    "rewrite_routine_ddl",
    "rewrite_trigger_ddl",
    "rewrite_view_ddl",
    # Utilities
    "open_output",
    "print_dry_run_info",
    "setup_logging",
]
