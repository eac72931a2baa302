"""
Core UI Logic

Session state, focus handling and input dispatch for the terminal UI.
"""

# Import only SessionState to avoid circular imports with the services package
from .session_state import SessionState

# FocusStateMachine and InputDispatcher can be imported directly when needed
# from .input_dispatcher import InputDispatcher

__all__ = [
    "SessionState",
]
