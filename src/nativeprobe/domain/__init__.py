"""Capability protocol, registry and the failure taxonomy.

Standard library only; no imports from the other nativeprobe layers.
"""
