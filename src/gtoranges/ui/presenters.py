from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.formatting import format_action_label, format_step
from ..core.hands import RANKS, grid
from ..features.navigation import NavigationController
from ..strategy.colors import NEUTRAL_COLOR, RaiseRankTable, color_for


def _text_color(background: str) -> str:
    """Black or white, whichever reads better on ``background``."""

    token = background.lstrip("#")
    try:
        red, green, blue = (int(token[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return "black"
    luminance = 0.299 * red + 0.587 * green + 0.114 * blue
    return "black" if luminance > 150 else "white"


class RichPresenter:
    def __init__(self, *, no_color: bool = False, console: Console | None = None):
        if console is not None:
            self.console = console
        elif no_color:
            self.console = Console(force_terminal=False, color_system=None)
        else:
            self.console = Console(force_terminal=True, color_system="auto")
        self.no_color = no_color

    def show_state(self, controller: NavigationController) -> None:
        state = controller.state
        bb = state.big_blind
        crumbs = " › ".join(format_step(step, bb, first=index == 0) for index, step in enumerate(state.history))
        self.console.rule(crumbs or state.phase.value.replace("_", " ").title())

        info = Table.grid(padding=(0, 1))
        info.add_column(style="bold cyan", justify="right")
        info.add_column(justify="left")
        info.add_row("Big blind", f"{bb:g}" if bb > 0 else "[dim]unknown[/]")
        if state.available_stacks:
            info.add_row("Stacks", ", ".join(f"{stack}bb" for stack in state.available_stacks))
        if state.stack_bb is not None:
            info.add_row("Stack", f"{state.stack_bb}bb")
        node = state.current_node
        if node is not None:
            info.add_row("Node", str(state.current_node_id))
            info.add_row("To act", node.player.name)
            info.add_row("Street", str(node.street))
        self.console.print(Panel(info, title="Navigator", border_style="magenta", expand=False))

        if node is not None and node.actions:
            table = Table(show_header=True, header_style="bold blue", box=box.SIMPLE_HEAVY)
            table.add_column("#", justify="right", style="cyan", no_wrap=True)
            table.add_column("Action", style="bold")
            table.add_column("Next node", justify="right")
            for index, action in enumerate(node.actions):
                table.add_row(str(index), format_action_label(action, bb), str(action.target))
            self.console.print(table)

    def show_grid(self, controller: NavigationController) -> None:
        table_colors = controller.raise_table()
        chart = Table(show_header=True, header_style="bold", box=box.SQUARE, padding=(0, 0), show_lines=False)
        chart.add_column("", style="bold", justify="center", no_wrap=True)
        for rank in RANKS:
            chart.add_column(rank, justify="center", no_wrap=True, min_width=5)
        for rank, row in zip(RANKS, grid(), strict=True):
            chart.add_row(rank, *(self._cell_text(controller, hand_id, table_colors) for hand_id in row))
        self.console.print(chart)
        self.show_legend(controller)

    def show_legend(self, controller: NavigationController) -> None:
        parts: list[Text] = []
        for entry in controller.legend():
            swatch = Text("  ", style=f"on {entry.color}") if not self.no_color else Text("")
            parts.append(Text.assemble(swatch, " ", entry.label))
        self.console.print(Text("   ").join(parts))

    def show_cell(self, controller: NavigationController, hand_id: str) -> None:
        cell = controller.cell(hand_id)
        table_colors = controller.raise_table()
        bb = controller.big_blind
        detail = Table(title=f"{hand_id}  weight {cell.hand_data.weight:.3f}", header_style="bold blue")
        detail.add_column("Action")
        detail.add_column("Freq", justify="right")
        detail.add_column("EV", justify="right")
        prioritized = controller.prioritized(hand_id)
        for entry in prioritized:
            color = color_for(entry.kind, entry.amount, table_colors)
            label = format_action_label(entry.action, bb)
            styled = label if self.no_color else f"[{color}]■[/] {label}"
            detail.add_row(styled, f"{entry.frequency * 100:.1f}%", f"{entry.ev:.3f}")
        if not prioritized:
            detail.add_row("[dim]no data[/]", "", "")
        self.console.print(detail)

    # --- helpers ---
    def _cell_text(self, controller: NavigationController, hand_id: str, table: RaiseRankTable) -> Text:
        prioritized = controller.prioritized(hand_id)
        caption = controller.caption(hand_id)
        body = hand_id if caption is None else f"{hand_id}\n{caption}%"
        if self.no_color:
            return Text(body)
        background = NEUTRAL_COLOR
        if prioritized:
            background = color_for(prioritized[0].kind, prioritized[0].amount, table)
        return Text(body, style=f"{_text_color(background)} on {background}")
