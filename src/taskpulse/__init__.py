"""taskpulse: real-time task schedule and reminder engine."""

__version__ = "0.1.0"
