#!/usr/bin/env python3
"""
MySQL Schema Dumper - CLI Entry Point
=====================================
Writes a replayable, mysqldump-compatible SQL dump of one database:
tables with their data, views, stored routines and triggers.
"""

import argparse
import logging
import sys

import yaml

from .config import ConfigLoader
from .connection import DatabaseConnection
from .dumper import SchemaDumper
from .stream import RowStream
from .utils import STDOUT, open_output, print_dry_run_info, setup_logging


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='MySQL Schema Dumper - mysqldump-compatible SQL dumps'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be dumped without actually dumping'
    )
    parser.add_argument(
        '-d', '--database',
        help='Database to dump (overrides the configured one)'
    )
    parser.add_argument(
        '-o', '--output',
        help="Output file, or '-' for stdout (overrides the configured one)"
    )

    args = parser.parse_args()

    # Load configuration
    try:
        config = ConfigLoader(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    output_settings = config.get_output_settings()
    if args.output:
        output_settings['file'] = args.output

    try:
        if args.database:
            config.config.setdefault('connection', {})['database'] = args.database
        connection_settings = config.get_connection_settings()
    except ValueError as e:
        logging.error(f"Invalid configuration: {e}")
        sys.exit(1)

    # Dry run mode
    if args.dry_run:
        logging.info("DRY RUN MODE - No data will be dumped")
        print_dry_run_info(connection_settings, output_settings)
        sys.exit(0)

    # Run dump
    try:
        with DatabaseConnection(
            host=connection_settings['host'],
            port=connection_settings.get('port', DatabaseConnection.DEFAULT_PORT),
            user=connection_settings['user'],
            password=connection_settings['password'],
            database=connection_settings['database'],
            charset=connection_settings.get('charset', DatabaseConnection.DEFAULT_CHARSET),
            timeout=connection_settings.get('timeout', DatabaseConnection.DEFAULT_TIMEOUT)
        ) as conn:
            sink = open_output(output_settings.get('file', STDOUT))
            try:
                dumper = SchemaDumper(
                    conn,
                    sink,
                    connection_settings['database'],
                    page_size=output_settings.get('page_size', RowStream.DEFAULT_PAGE_SIZE)
                )
                stats = dumper.dump()
            finally:
                if sink is not sys.stdout:
                    sink.close()

        # Print summary
        logging.info("=" * 50)
        logging.info("DUMP COMPLETE")
        logging.info(f"Tables: {len(stats.tables)}")
        logging.info(f"Views: {stats.views}")
        logging.info(f"Routines: {stats.routines}")
        logging.info(f"Triggers: {stats.triggers}")
        logging.info(f"Total Rows: {stats.total_rows}")

        if not stats.success:
            logging.warning(f"Errors: {len(stats.errors)}")
            for err in stats.errors:
                logging.warning(f"  - {err.phase.value}/{err.source}: {err.message}")
            sys.exit(1)

    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
