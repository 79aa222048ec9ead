"""
Per-user permission feature module.

Each permission row carries three capability flags (readable, writable,
deletable) and a display name derived from them.
"""
