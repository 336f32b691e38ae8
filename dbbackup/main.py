#!/usr/bin/env python3
"""
Database Backup - CLI Entry Point
=================================
Exports a MySQL database to a SQL script with:
- Table selection by name prefix or explicit list
- Schema-only or schema + data per table
- Batched INSERT statements
- Stored functions and procedures
- Gzip compression
"""

import argparse
import logging
import sys
from datetime import datetime

import yaml

from .config import ConfigLoader
from .connection import DatabaseConnection
from .database_dumper import DatabaseDumper
from .models import BackupSettings
from .utils import print_dry_run_info, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Database Backup - Export a MySQL database to a SQL script'
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
        help='Show what would be exported without exporting'
    )
    parser.add_argument(
        '-n', '--name',
        help='Base name of the backup file (overrides output.name)'
    )
    parser.add_argument(
        '-z', '--compress',
        action='store_true',
        help='Gzip the backup file'
    )
    parser.add_argument(
        '--no-routines',
        action='store_true',
        help='Skip stored functions and procedures'
    )
    return parser


def main():
    """Main entry point."""
    args = build_parser().parse_args()

    # Load configuration
    try:
        config = ConfigLoader(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    output_settings = config.get_output_settings()
    settings = BackupSettings.from_config(config.get_backup_settings())
    if args.no_routines:
        settings.routines = False

    name = args.name or output_settings.get('name', 'backup')
    if output_settings.get('timestamp_suffix', True):
        name = f"{name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    compress = args.compress or output_settings.get('compress', False)

    try:
        connection_config = config.get_connection()
        with DatabaseConnection(
            host=connection_config['host'],
            port=connection_config['port'],
            user=connection_config['user'],
            password=connection_config['password'],
            database=connection_config['database']
        ) as conn:
            dumper = DatabaseDumper(
                conn,
                load_prefix=settings.prefix,
                routines=settings.routines,
                batch_size=settings.batch_size
            )
            for table, data in settings.tables:
                dumper.set_table(table, data)

            # Dry run mode
            if args.dry_run:
                logging.info("DRY RUN MODE - Nothing will be exported")
                print_dry_run_info(dumper.selection, settings.routines)
                sys.exit(0)

            attachment = dumper.create(
                name,
                compress=compress,
                directory=output_settings.get('directory', './dumps')
            )

        # Print summary
        logging.info("=" * 50)
        logging.info("BACKUP COMPLETE")
        logging.info(f"File: {attachment.path}")
        logging.info(f"Tables: {dumper.stats.tables}")
        logging.info(f"Total Rows: {dumper.stats.rows}")
        logging.info(f"Routines: {dumper.stats.routines}")

    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
