"""State/store layer.

This package is the single source of truth for the latest reading of
each input channel (geolocation, orientation, motion).
"""
