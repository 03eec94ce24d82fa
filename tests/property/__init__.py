# tests/property/__init__.py
"""Property-based tests for spatialmin.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. The minifier must never change
a document's shape, must give the same output for the same input, and must
keep every decimal within the requested precision.
"""
