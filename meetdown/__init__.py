"""
meetdown: super simple scheduling.

Propose candidate dates and times for an event and share them by link.
"""

__version__ = "0.1.0"
