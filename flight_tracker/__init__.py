"""
Flight tracker backend package.

Flight lookup API built with Flask and requests.

Modules:
    api/         REST endpoint for flight lookups
    models/      Typed flight records and lookup outcomes
    services/    AviationStack lookup with synthetic-data fallback
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
