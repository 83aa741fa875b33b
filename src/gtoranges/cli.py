from __future__ import annotations

import argparse
import logging
import sys

from rich.markup import escape

from .config import AppConfig, configure_logging
from .core.hands import is_hand_id
from .core.models import Position
from .data.export import load_export_file
from .features.navigation import NavigationController, Phase
from .ui.presenters import RichPresenter

logger = logging.getLogger(__name__)


def _parse_path(raw: str | None) -> list[int]:
    if not raw:
        return []
    steps: list[int] = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            steps.append(int(token))
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid action index {token!r}") from None
    return steps


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gtoranges", description="Browse a preflop strategy export as a 13x13 chart")
    p.add_argument("export", help="Path to the JSON strategy export")
    p.add_argument("--stack", type=int, default=None, help="Stack depth in big blinds (default: first available)")
    p.add_argument(
        "--position",
        default="BB",
        help="Seat whose first decision opens the chart (EP, MP, LJ, HJ, CO, BU, SB, BB)",
    )
    p.add_argument("--path", type=_parse_path, default=[], help="Comma-separated action indices to follow, e.g. 2,1")
    p.add_argument("--hand", default=None, help="Show per-action frequencies and EVs for one hand, e.g. AKs")
    p.add_argument("--no-color", action="store_true", help="Disable colored output (default is colored)")
    p.add_argument("--log-level", default=None, help="Logging level (default from GTORANGES_LOG_LEVEL)")
    return p


def run(argv: list[str] | None = None, *, presenter: RichPresenter | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level or AppConfig.from_env().log_level)
    presenter = presenter or RichPresenter(no_color=args.no_color)

    try:
        payload = load_export_file(args.export)
    except (OSError, ValueError) as exc:
        presenter.console.print(f"[red]Cannot read export[/]: {escape(str(exc))}")
        return 1
    logger.debug("Loaded %d nodes from %s", len(payload.nodes), args.export)

    position = Position.parse(args.position)
    if position is None:
        presenter.console.print(f"[red]Unknown position[/]: {escape(args.position)}")
        return 1

    controller = NavigationController()
    controller.import_data(payload)
    stacks = controller.available_stacks
    stack = args.stack if args.stack is not None else (stacks[0] if stacks else 0)
    controller.select_stack(stack)
    controller.load_initial_root(position)
    if controller.phase is not Phase.AT_NODE:
        presenter.console.print(f"[red]No root node for {position.name}[/]")
        return 1

    for index in args.path:
        before = controller.state
        controller.choose_index(index)
        if controller.state is before:
            presenter.console.print(f"[yellow]Action {index} is not available here; stopping.[/]")
            break

    presenter.show_state(controller)
    presenter.show_grid(controller)
    if args.hand:
        if not is_hand_id(args.hand):
            presenter.console.print(f"[red]Unknown hand[/]: {escape(args.hand)}")
            return 1
        presenter.show_cell(controller, args.hand)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
