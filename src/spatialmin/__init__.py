"""
spatialmin: size reducer for spatial editor JSON exports.

Replaces long object names and IDs with short synthetic aliases, keeps every
reference to those objects consistent, and trims decimal precision.
"""

__version__ = "0.3.0"
