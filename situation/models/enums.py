"""
Situation - Enumerations

String enums shared by configuration, session state and the dispatcher.
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Python logging levels accepted in configuration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ChangeSetStatus(str, Enum):
    """
    Change set status strings the views style.

    Draft, Applied, Abandoned, Failed and InProgress come from the service data
    model. Completed is not in that model and is listed only so a service that
    reports it is shown as a success. Unknown strings are kept verbatim.
    """
    DRAFT = "Draft"
    APPLIED = "Applied"
    ABANDONED = "Abandoned"
    FAILED = "Failed"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


class Mode(str, Enum):
    """Input mode. Exactly one is active."""
    NORMAL = "normal"
    ENTERING_CHANGE_SET_NAME = "entering_change_set_name"


class Focus(str, Enum):
    """UI region that owns keyboard input. Exactly one is active."""
    TOP_BAR = "top_bar"
    SCHEMA_LIST = "schema_list"
    CONTENT_AREA = "content_area"
    LOG_PANEL = "log_panel"
    CHANGE_SET_DROPDOWN = "change_set_dropdown"
    INPUT = "input"


class DropdownFocus(str, Enum):
    """Which trigger is highlighted while the top bar has focus."""
    WORKSPACE = "workspace"
    CHANGE_SET = "change_set"


class KeyCode(str, Enum):
    """Logical key codes produced by the terminal layer."""
    CHAR = "char"
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    OTHER = "other"
