"""
HistoryLib - Undo/redo for redaction actions
"""

from OR_Libs.HistoryLib.event_log import EventLog

__all__ = ["EventLog"]
