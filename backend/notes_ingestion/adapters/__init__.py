from .base import BaseAdapter, ParseResult, AdapterRegistry
from .daily_notes import DailyNoteAdapter

__all__ = ['BaseAdapter', 'ParseResult', 'AdapterRegistry', 'DailyNoteAdapter']
