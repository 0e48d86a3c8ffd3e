"""Alembic command shortcuts, exposed as project scripts."""

import subprocess
import sys

from eventhub.platform.constant.path import ALEMBIC_DIR


ALEMBIC_INI = ALEMBIC_DIR / 'alembic.ini'


def run_alembic(args: list[str]) -> int:
    """Run alembic command with config file."""
    cmd = ['alembic', '-c', str(ALEMBIC_INI)] + args
    return subprocess.call(cmd)


def upgrade() -> int:
    """Upgrade database to latest migration."""
    print('Running migrations...')
    return run_alembic(['upgrade', 'head'])


def downgrade() -> int:
    """Downgrade database by one migration."""
    print('Rolling back one migration...')
    return run_alembic(['downgrade', '-1'])


def make_migration() -> int:
    """Create a new migration based on model changes."""
    if len(sys.argv) < 2:
        print("Usage: eventhub-make-migration 'migration message'")
        return 1

    message = ' '.join(sys.argv[1:])
    print(f'Creating migration: {message}')
    return run_alembic(['revision', '--autogenerate', '-m', message])


def history() -> int:
    """Show migration history."""
    return run_alembic(['history'])


def current() -> int:
    """Show current migration version."""
    return run_alembic(['current'])
