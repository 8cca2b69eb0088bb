"""
Persistence adapters.

These modules encapsulate how data is stored/retrieved (JSON file, SQL table or
memory). Services depend on BlogRepository rather than touching a storage.
"""
