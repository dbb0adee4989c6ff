"""Timer and signal driven scheduling."""

from .ticker import Ticker, TickChannel, TickEvent

__all__ = ['Ticker', 'TickChannel', 'TickEvent']
