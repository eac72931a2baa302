"""
Terminal UI Components

Pane builders turning a session snapshot into styled text for the renderer.
"""

from .pane import Line, Pane, Span, Style
from .top_bar import TopBar
from .schema_list import SchemaList
from .content_area import ContentArea
from .log_panel import LogPanel
from .input_line import InputLine
from .changeset_dropdown import ChangeSetDropdown

__all__ = [
    "Line",
    "Pane",
    "Span",
    "Style",
    "TopBar",
    "SchemaList",
    "ContentArea",
    "LogPanel",
    "InputLine",
    "ChangeSetDropdown",
]
