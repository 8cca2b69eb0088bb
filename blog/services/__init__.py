"""
Simulated-asynchronous use cases.

Each service method waits an artificial delay, calls BlogRepository and either
returns a payload or raises a BlogError. The store turns those outcomes into
fulfilled/rejected actions; nothing here knows about the store.
"""
