"""Building blocks for generating database access code from a PostgreSQL schema."""

__version__ = "0.1.0"