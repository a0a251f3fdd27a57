"""
Persistence adapters.

These modules encapsulate how data is stored/retrieved (today one JSON file per
document). Services depend on the store object rather than touching files.
"""
