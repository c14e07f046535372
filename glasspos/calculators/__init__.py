"""
Deterministic edge-finishing formulas and operation metadata.

Pure Python math. No I/O, no database.
Given an operation code and glass dimensions in meters,
produce the finishing quantity used by the pricing engine.
"""
