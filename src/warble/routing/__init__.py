"""Routing: exact-match table from (method, path) to handler.

Routes are registered during setup. Lookup is a single dict access on
the composite key ``method + "-" + path``.
"""
