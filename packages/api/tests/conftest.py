# This project was developed with assistance from AI tools.
"""Shared test configuration.

Points the db package at an in-process SQLite URL before anything imports
it, so no PostgreSQL server is needed for the unit and functional suites.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_DISABLED", "false")
