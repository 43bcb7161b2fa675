"""
Bill Calendar - Source Package

A calendar-based bill tracker: pick a day, see what is due,
add, edit or remove bills stored in a local SQLite database.

DESIGN PRINCIPLES:
1. The store is owned explicitly and passed to whoever needs it
2. Storage faults never crash the caller
3. Storage faults are reported, not swallowed
4. Every mutation is followed by a fresh read of the selected day
"""

__version__ = "1.0.0"
__author__ = "Bill Calendar Team"
