"""
Owned-games library store.

Modules:
    store      - LibraryStore (in-memory) and JsonLibraryStore
    csv_import - CSV import/export of library entries
"""

from .csv_import import export_library_csv, import_into_store, import_library_csv
from .store import JsonLibraryStore, LibraryStore

__all__ = [
    'LibraryStore',
    'JsonLibraryStore',
    'import_library_csv',
    'import_into_store',
    'export_library_csv',
]
