"""
Client-side blog state layer.

Users register and log in, write posts and browse the public listing. Every
"server" call is faked: records live in a key-value storage (JSON file, SQL
table or memory) and are reached through async services that add an artificial
delay, so whatever sits on top sees the same loading/succeeded/failed lifecycle
it would against a real API.
"""

__version__ = "0.1.0"
