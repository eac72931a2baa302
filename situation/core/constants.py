"""
Situation - Application Constants

This module defines application-wide constants: API paths, layout sizes
and the messages shown in the log panel.
"""

# ============================================================================
# Application Information
# ============================================================================

APP_NAME = "Situation"
APP_DESCRIPTION = "Terminal session controller for change-set management"
APP_VERSION = "0.1.0"

# ============================================================================
# API Paths
# ============================================================================

WHOAMI_PATH = "/whoami"
CHANGE_SETS_PATH = "/v1/w/{workspace_id}/change-sets"
CHANGE_SET_PATH = CHANGE_SETS_PATH + "/{change_set_id}"
MERGE_STATUS_PATH = CHANGE_SET_PATH + "/merge_status"
FORCE_APPLY_PATH = CHANGE_SET_PATH + "/force_apply"
SCHEMAS_PATH = CHANGE_SET_PATH + "/schema"
COMPONENTS_PATH = CHANGE_SET_PATH + "/components"
COMPONENT_PATH = COMPONENTS_PATH + "/{component_id}"

# Default request timeout in seconds
DEFAULT_API_TIMEOUT = 30

# ============================================================================
# Layout
# ============================================================================

LOG_VIEW_HEIGHT = 10
POLL_INTERVAL_MS = 100

TOP_BAR_WORKSPACE_PERCENT = 30
TOP_BAR_CHANGE_SET_PERCENT = 40
SCHEMA_LIST_PERCENT = 30

DROPDOWN_LIST_WIDTH = 50
DROPDOWN_MAX_ITEMS = 10

DROPDOWN_CLOSED_INDICATOR = "▶"
DROPDOWN_OPEN_INDICATOR = "▼"

# ============================================================================
# Log Messages
# ============================================================================

MSG_WORKSPACE_NOT_IMPLEMENTED = "Workspace selection not implemented."
MSG_NO_CHANGE_SETS = "No change sets to select."
MSG_NO_WORKSPACE_CREATE = "Cannot create: No workspace available."
MSG_NO_SELECTION_DELETE = "Cannot delete: No change set selected."
MSG_NO_SELECTION_APPLY = "Cannot apply: No change set selected."
MSG_NO_SELECTION_COMPONENTS = "Cannot fetch components: No change set selected."
MSG_NO_COMPONENT_SELECTED = "No component selected."
MSG_EMPTY_NAME = "Change set name cannot be empty."
MSG_CREATE_CANCELLED = "Change set creation cancelled."
MSG_NO_IDENTITY = "Cannot refresh change sets: Whoami data not available."

INPUT_PROMPT = "Enter Change Set Name (Esc: Cancel, Enter: Create):"

KEYBINDING_HELP = [
    ("--- Keybindings ---", "bold"),
    ("", None),
    ("Normal Mode (Dropdown Closed):", "underline"),
    ("  q          : Quit", None),
    ("  Tab        : Cycle Focus (Top Bar > Schemas > Details > Logs)", None),
    ("  Alt+w/c/s/l: Focus Workspace / Change Set / Schemas / Logs", None),
    ("  Left/Right : Switch Workspace <-> Change Set Trigger", None),
    ("  Enter/Space: Activate Focused Trigger (Open Dropdown)", None),
    ("  c          : Create Change Set (Enter Input Mode)", None),
    ("  d          : Delete Selected Change Set", None),
    ("  f          : Force Apply Selected Change Set", None),
    ("  k          : Scroll Logs Up", None),
    ("  j          : Scroll Logs Down", None),
    ("", None),
    ("Normal Mode (Change Set Dropdown Active):", "underline"),
    ("  Up Arrow   : Select Previous Item", None),
    ("  Down Arrow : Select Next Item", None),
    ("  Enter      : Confirm Selection & Close Dropdown", None),
    ("  Esc / Tab  : Close Dropdown", None),
    ("", None),
    ("ChangeSetName Input Mode:", "underline"),
    ("  Enter      : Submit Name & Create", None),
    ("  Esc        : Cancel Input", None),
    ("  Backspace  : Delete Character", None),
    ("  (any char) : Append Character", None),
]
