"""Centralized constants for configuration keys, SQLite pragmas, and exit codes."""

from __future__ import annotations


class ConfigKeys:
    """Environment variable names understood by ``Settings``."""

    ENVIRONMENT = "ENVIRONMENT"
    DEBUG = "DEBUG"
    LOG_LEVEL = "LOG_LEVEL"

    DATABASE_URL = "DATABASE__URL"
    ELECTION_SESSION_ID = "ELECTION__SESSION_ID"
    ELECTION_ADMINISTRATOR = "ELECTION__ADMINISTRATOR"


class SQLPragmas:
    """SQLite PRAGMA statements applied to each connection."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class ExitCodes:
    """Process exit codes of the command line entry point."""

    OK = 0
    REJECTED = 1
    USAGE = 2
