"""
Schema List Component

Left column listing the schemas available in the selected change set.
"""

from ...models.enums import Focus
from ..core.session_state import SessionState
from .pane import Pane, Style, line


class SchemaList:
    """Schema list pane builder."""

    TITLE = "Schemas"

    @staticmethod
    def render(state: SessionState) -> Pane:
        lines = [
            line(schema.schema_name, Style.NORMAL if schema.installed else Style.MUTED)
            for schema in state.schemas
        ]
        return Pane(
            title=SchemaList.TITLE,
            lines=lines,
            focused=state.focus == Focus.SCHEMA_LIST,
            cursor=state.schema_index,
        )
