"""
Situation - terminal session controller for a change-set management service.
"""

__version__ = "0.1.0"
