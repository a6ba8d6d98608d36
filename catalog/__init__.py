"""Library Catalog - Core Application Package

This package contains the catalog modules:
- API endpoints (api.py)
- Book service (library.py)
- Record store and schema (store.py, database.py)
- Field validation (validators.py)
- HTTP client and CLI (client.py, main.py)
"""

__version__ = "1.0.0"
