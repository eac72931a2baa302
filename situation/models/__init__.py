"""
Data Models

Enumerations for the interaction state machine and Pydantic models for the
change-management service wire format.
"""
