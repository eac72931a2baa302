"""
Content Area Component

Details pane: change set detail, merge status actions and the component list
for the selection, or the keybinding help when no detail is loaded.
"""

from typing import List

from ...core.constants import KEYBINDING_HELP
from ...models.enums import Focus
from ..core.session_state import SessionState
from .pane import Line, Pane, Span, Style, line, status_style


class ContentArea:
    """Details pane builder."""

    TITLE = "Details"

    @staticmethod
    def render(state: SessionState) -> Pane:
        focused = state.focus == Focus.CONTENT_AREA
        if not state.components_listed():
            return Pane(title=ContentArea.TITLE, lines=ContentArea.help_lines(), focused=focused)

        lines = ContentArea._detail_lines(state)
        lines.append(line(""))
        lines.extend(ContentArea._merge_status_lines(state))
        lines.append(line(""))

        cursor = None
        lines.append(line("Components:", Style.BOLD))
        if state.components is None:
            lines.append(line("  Components loading or unavailable."))
        elif not state.components:
            lines.append(line("  No components."))
        else:
            first_row = len(lines)
            for component in state.components:
                lines.append(line(f"  {component.display_name(state.schemas)}"))
            if state.component_index is not None:
                cursor = first_row + state.component_index
            lines.extend(ContentArea._domain_lines(state))

        return Pane(title=ContentArea.TITLE, lines=lines, focused=focused, cursor=cursor)

    @staticmethod
    def help_lines() -> List[Line]:
        styles = {"bold": Style.BOLD, "underline": Style.UNDERLINE, None: Style.NORMAL}
        return [line(text, styles[style]) for text, style in KEYBINDING_HELP]

    @staticmethod
    def _detail_lines(state: SessionState) -> List[Line]:
        detail = state.change_set_detail
        return [
            [Span("Change Set:", Style.BOLD), Span(f" {detail.name} ({detail.id})")],
            [Span("Status:", Style.BOLD), Span(f" {detail.status}", status_style(detail.status))],
        ]

    @staticmethod
    def _merge_status_lines(state: SessionState) -> List[Line]:
        merge_status = state.merge_status
        if merge_status is None:
            return [line("  Merge status loading or unavailable.")]

        lines = [line("Merge Status:", Style.BOLD)]
        if not merge_status.actions:
            lines.append(line("  No actions required."))
        for action in merge_status.actions:
            component_info = ""
            if action.component:
                component_info = f" - {action.component.name} ({action.component.id})"
            lines.append(line(f"  [{action.kind}] {action.state} {action.name}{component_info}"))
        return lines

    @staticmethod
    def _domain_lines(state: SessionState) -> List[Line]:
        # Domain properties are only known once the component detail is fetched
        component = state.get_selected_component()
        if component is None or not component.domain:
            return []
        lines = [line(""), line(f"Domain of {component.name or component.id}:", Style.BOLD)]
        for key, value in component.domain.items():
            lines.append(line(f"  {key}: {value}"))
        return lines
