"""
Alarm App - Daily Stock Technical Alarm Engine

Rebuilds a catalogue of technical-indicator alarms for each symbol from its
daily price history, and tells users when every alarm they watch on a
symbol fired on the same day.
"""

__version__ = "0.1.0"
__author__ = "Alarm App Team"
