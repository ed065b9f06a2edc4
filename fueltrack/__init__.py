"""
FuelTrack - personal fuel expense tracker.

Derives consumption efficiency, spend trends and period statistics from
logged refueling records, served as a JSON API.
"""

__version__ = "1.0.0"
