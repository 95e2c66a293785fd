"""Concrete native loaders and host queries.

Nothing here imports the rest of nativeprobe; the loaders satisfy the
capability protocol structurally.
"""
