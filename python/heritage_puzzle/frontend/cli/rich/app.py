"""Rich terminal frontend: tables, colours, and panels.

Pieces are drawn as numbered cells (the number is the piece's home slot),
so the picture itself is replaced by its title and description.  Includes
the home menu, difficulty selection, campaigns, sign-in prompts, the
puzzle screen, and the victory screen.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from heritage_puzzle.backend.data import HISTORICAL_CAMPAIGNS
from heritage_puzzle.backend.engine.session import GameHost, PlaySession
from heritage_puzzle.backend.models import (
    Campaign,
    Grid,
    Topic,
    milestone_key,
    topic_key,
)
from heritage_puzzle.backend.storage import JsonFileStore
from heritage_puzzle.config import DIFFICULTIES, STORE_FILENAME
from heritage_puzzle.frontend.cli.input_handler import get_key, get_key_timeout

logger = logging.getLogger(__name__)

console = Console()


# -- helpers ------------------------------------------------------------------


def format_time(seconds: int | None) -> str:
    if seconds is None:
        return "--:--"
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}"


def _wait_any_key(message: str = "Press any key to go back.") -> None:
    console.print(Align.center(Text(f"\n  {message}\n", style="dim")))
    get_key()


# -- board rendering ----------------------------------------------------------


def _render_grid(
    grid: Grid,
    cursor: int | None = None,
    held: int | None = None,
    preview: bool = False,
) -> Table:
    """Return a Rich Table with one cell per slot.

    With *preview* set, the solved picture is shown instead of the
    current arrangement.
    """
    width = len(str(grid.size))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="yellow" if preview else "red",
        padding=(0, 1),
    )
    for _ in range(grid.difficulty):
        table.add_column(width=width + 2, justify="center")

    layout = list(range(grid.size)) if preview else grid.layout()
    rows: list[list[str]] = []
    for slot, piece_id in enumerate(layout):
        label = f"{piece_id + 1:>{width}}"
        if preview:
            style = "bold yellow"
        elif piece_id == held:
            style = "bold black on yellow"
        elif grid.is_piece_correct(piece_id):
            style = "bold green"
        else:
            style = "bold white"
        if slot == grid.hole and not preview:
            style += " underline"
        if slot == cursor and not preview:
            style += " reverse"
        if slot % grid.difficulty == 0:
            rows.append([])
        rows[-1].append(f"[{style}]{label}[/]")

    for cells in rows:
        table.add_row(*cells)
    return table


def _stats_text(session: PlaySession) -> Text:
    game = session.game
    stats = Text()
    stats.append("  Time: ", style="dim")
    stats.append(format_time(game.elapsed_seconds), style="bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(str(game.move_count), style="bold yellow")
    if session.best_time is not None:
        stats.append("    Best: ", style="dim")
        stats.append(format_time(session.best_time), style="bold green")
    return stats


# -- home screen --------------------------------------------------------------


def _draw_home(host: GameHost, status: str = "") -> None:
    console.clear()

    user = host.users.user
    who = Text()
    if user is None:
        who.append("Playing as guest", style="dim")
    else:
        who.append("Signed in as ", style="dim")
        who.append(user.name or user.email, style="bold cyan")
        if user.has_advantage:
            who.append("  ♛ Advantage", style="bold yellow")

    opts = Text()
    opts.append("  1", style="bold red")
    opts.append("  History    ")
    opts.append("2", style="bold yellow")
    opts.append("  Culture    ")
    opts.append("3", style="bold magenta")
    opts.append("  Campaigns    ")
    opts.append("4", style="bold cyan")
    opts.append("  Best times")

    account = Text()
    if user is None:
        account.append("L", style="bold cyan")
        account.append("  sign in   ", style="dim")
        account.append("N", style="bold cyan")
        account.append("  create account   ", style="dim")
    else:
        account.append("O", style="bold cyan")
        account.append("  sign out   ", style="dim")
        if not user.has_advantage:
            account.append("U", style="bold yellow")
            account.append("  upgrade   ", style="dim")
    account.append("Q", style="dim bold")
    account.append("  quit", style="dim")

    body = Group(
        Align.center(Text(
            "Discover Vietnam's rich history and vibrant culture", style="italic"
        )),
        Text(""),
        Align.center(who),
        Text(""),
        Align.center(opts),
        Text(""),
        Align.center(account),
    )

    panel = Panel(
        body,
        title="[bold]V I E T N A M   P U Z Z L E   H E R I T A G E[/bold]",
        border_style="red",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))


def _draw_best_times(host: GameHost) -> None:
    console.clear()

    table = Table(box=rich.box.ROUNDED, border_style="dim", title_style="bold cyan")
    table.add_column("Puzzle", style="bold")
    for d in DIFFICULTIES:
        table.add_column(f"{d}×{d}", justify="right", style="yellow")

    for topic in Topic:
        table.add_row(
            topic.value.title(),
            *(format_time(host.best_times.get(topic_key(topic, d))) for d in DIFFICULTIES),
        )
    for campaign in HISTORICAL_CAMPAIGNS:
        for milestone in campaign.milestones:
            times = [host.best_times.get(milestone_key(milestone.id, d)) for d in DIFFICULTIES]
            if any(t is not None for t in times):
                table.add_row(milestone.title, *(format_time(t) for t in times))

    panel = Panel(
        Align.center(table),
        title="[bold]BEST  TIMES[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    _wait_any_key()


# -- account prompts ----------------------------------------------------------


def _prompt_sign_in(host: GameHost, register: bool) -> str:
    """Ask for credentials and return a status message."""
    console.print()
    name = Prompt.ask("  Name (optional)", default="") if register else None
    email = Prompt.ask("  Email").strip()
    password = Prompt.ask("  Password", password=True)

    if register:
        ok = host.users.register(email, password, name)
    else:
        ok = host.users.login(email, password)
    if ok:
        return f"[green]Welcome, {name or email}![/green]"
    return "[red]Authentication failed. Please try again.[/red]"


def _upgrade(host: GameHost) -> str:
    if host.users.upgrade_to_advantage():
        return "[bold yellow]♛ Advantage unlocked: historical campaigns are open.[/bold yellow]"
    return "[yellow]Sign in before upgrading.[/yellow]"


# -- difficulty selection -----------------------------------------------------


def _choose_difficulty(title: str, best_for: Callable[[int], int | None]) -> int | None:
    """Let the player pick 2×2, 3×3 or 4×4.  Returns None on back."""
    index = 0
    while True:
        console.clear()

        sizes = Text()
        bests = Text()
        for i, d in enumerate(DIFFICULTIES):
            label = f" {d}×{d} "
            sizes.append("   ")
            if i == index:
                sizes.append(label, style="bold black on yellow")
            else:
                sizes.append(label, style="dim")
            bests.append("   ")
            bests.append(f"{format_time(best_for(d)):^{len(label)}}", style="green")

        body = Group(
            Text(""),
            Align.center(sizes),
            Align.center(bests),
            Text(""),
            Align.center(Text("← →  choose   Enter  play   Q  back", style="dim")),
        )
        panel = Panel(
            body,
            title=f"[bold]{title}[/bold]",
            border_style="yellow",
            padding=(1, 4),
        )
        console.print()
        console.print(Align.center(panel))

        key = get_key()
        if key == "left":
            index = max(0, index - 1)
        elif key == "right":
            index = min(len(DIFFICULTIES) - 1, index + 1)
        elif key in ("enter", "select"):
            return DIFFICULTIES[index]
        elif key in {str(d) for d in DIFFICULTIES}:
            return int(key)
        elif key == "quit":
            return None


# -- campaigns ----------------------------------------------------------------


def _draw_campaigns(host: GameHost) -> None:
    console.clear()
    table = Table(box=rich.box.ROUNDED, border_style="dim", show_lines=True)
    table.add_column("#", justify="right", style="bold magenta", width=3)
    table.add_column("Campaign")
    table.add_column("Progress", width=24)

    for campaign in HISTORICAL_CAMPAIGNS:
        progress = host.milestones.progress(campaign)
        heading = Text()
        heading.append(campaign.title, style="bold")
        heading.append(f"  {campaign.period}", style="dim")
        if progress.is_complete:
            heading.append("  ✔", style="bold green")
        bar = Group(
            ProgressBar(total=progress.total, completed=progress.completed, width=20),
            Text(f"{progress.completed}/{progress.total} milestones", style="dim"),
        )
        table.add_row(
            str(campaign.order),
            Group(heading, Text(campaign.description, style="italic")),
            bar,
        )

    panel = Panel(
        Align.center(table),
        title="[bold]HISTORICAL  CAMPAIGNS[/bold]",
        border_style="magenta",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("  1-4  open campaign   Q  back", style="dim")))


def _draw_milestones(host: GameHost, campaign: Campaign, status: str = "") -> None:
    console.clear()
    table = Table(box=rich.box.SIMPLE_HEAVY, show_header=False)
    table.add_column("#", justify="right", width=3)
    table.add_column("State", width=3)
    table.add_column("Milestone")

    for milestone in campaign.milestones:
        unlocked = host.milestones.is_unlocked(campaign, milestone)
        if host.milestones.is_completed(milestone.id):
            state = "[bold green]✔[/]"
        elif unlocked:
            state = "[bold yellow]▶[/]"
        else:
            state = "[dim]✖[/]"
        info = Text()
        info.append(milestone.title, style="bold" if unlocked else "dim")
        info.append("\n")
        if unlocked:
            info.append(milestone.description, style="italic")
        else:
            info.append("Complete previous milestone to unlock", style="dim")
        table.add_row(str(milestone.order), state, info)

    panel = Panel(
        Align.center(table),
        title=f"[bold]{campaign.title}[/bold]  [dim]{campaign.period}[/dim]",
        border_style="magenta",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(Text("  1-3  play milestone   Q  back", style="dim")))


def _milestone_loop(host: GameHost, campaign: Campaign) -> None:
    status = ""
    while True:
        _draw_milestones(host, campaign, status)
        status = ""
        key = get_key()
        if key == "quit":
            return
        if not key.isdigit():
            continue
        milestone = campaign.milestone_by_order(int(key))
        if milestone is None:
            continue
        if not host.milestones.is_unlocked(campaign, milestone):
            status = "[yellow]Complete the previous milestone to unlock this one.[/yellow]"
            continue
        difficulty = _choose_difficulty(
            milestone.title,
            lambda d: host.best_times.get(milestone_key(milestone.id, d)),
        )
        if difficulty is None:
            continue
        try:
            session = host.start_milestone(milestone.id, difficulty)
        except PermissionError as exc:
            status = f"[red]{exc}[/red]"
            continue
        _play(host, session, title=milestone.title)


def _campaign_loop(host: GameHost) -> str:
    """Browse campaigns.  Returns a status message for the home screen."""
    if not host.users.can_access_campaigns:
        if not host.users.is_authenticated:
            return "[yellow]Sign in and upgrade to Advantage to play historical campaigns.[/yellow]"
        return "[yellow]Press U to upgrade to Advantage and unlock historical campaigns.[/yellow]"

    while True:
        _draw_campaigns(host)
        key = get_key()
        if key == "quit":
            return ""
        if key.isdigit():
            for campaign in HISTORICAL_CAMPAIGNS:
                if campaign.order == int(key):
                    _milestone_loop(host, campaign)


# -- game screens -------------------------------------------------------------


def _controls_text() -> Text:
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  cursor   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  swap with hole   ", style="dim")
    controls.append("G", style="bold cyan")
    controls.append("  grab / drop   ", style="dim")
    controls.append("P", style="bold cyan")
    controls.append("  preview   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  shuffle   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")
    return controls


def _draw_game(
    session: PlaySession,
    title: str,
    cursor: int,
    held: int | None,
    status: str = "",
) -> None:
    console.clear()

    game = session.game
    d = game.difficulty
    preview = session.preview_visible
    board = _render_grid(game.grid, cursor, held, preview=preview)

    parts: list = [Align.center(board)]
    if preview and game.image is not None:
        parts.append(Text(""))
        parts.append(Align.center(Text(game.image.title, style="bold yellow")))

    panel = Panel(
        Group(*parts),
        title=f"[bold red]{title}  {d}×{d}[/bold red]",
        border_style="yellow" if preview else "red",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save cursor position right before the stats line so _update_time()
    # can later restore to this exact spot and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats_text(session)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls_text()))


def _update_time(session: PlaySession) -> None:
    """Overwrite just the stats line using the saved cursor position."""
    stats = _stats_text(session)
    try:
        tw = console.width
    except Exception:
        tw = 80
    pad = max(0, (tw - stats.cell_len) // 2)

    with console.capture() as capture:
        console.print(stats, end="")
    sys.stdout.write(f"\033[u\033[K{' ' * pad}{capture.get()}")
    sys.stdout.flush()


def _draw_victory(session: PlaySession, title: str) -> None:
    console.clear()

    game = session.game
    result = session.result
    if result is None:
        raise ValueError("Victory screen needs a completed session.")
    d = game.difficulty

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  You completed the puzzle!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    stats = Text()
    stats.append("  Time: ", style="dim")
    stats.append(format_time(result.elapsed_seconds), style="bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(str(result.moves), style="bold yellow")
    if result.is_new_best:
        stats.append("    \U0001f3c6 New best time!", style="bold magenta")
    else:
        stats.append("    Best: ", style="dim")
        stats.append(format_time(result.best_time), style="bold green")

    parts: list = [Align.center(_render_grid(game.grid)), Align.center(congrats), Align.center(stats)]
    if game.image is not None:
        parts.append(Text(""))
        parts.append(Align.center(Text(game.image.title, style="bold")))
        parts.append(Align.center(Text(game.image.description, style="italic")))
    if session.milestone_id is not None:
        parts.append(Text(""))
        parts.append(Align.center(Text("Milestone completed!", style="bold green")))

    panel = Panel(
        Group(*parts),
        title=f"[bold green]{title}  {d}×{d}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press R to play again, Q to go back.\n", style="dim"))
    )


# -- game loop ----------------------------------------------------------------


def _move_cursor(cursor: int, key: str, d: int) -> int:
    row, col = divmod(cursor, d)
    if key == "up":
        row = max(0, row - 1)
    elif key == "down":
        row = min(d - 1, row + 1)
    elif key == "left":
        col = max(0, col - 1)
    elif key == "right":
        col = min(d - 1, col + 1)
    return row * d + col


def _play(host: GameHost, session: PlaySession, title: str) -> None:
    """Run one puzzle screen until the player backs out."""
    cursor = 0
    held: int | None = None
    status = ""

    try:
        while True:
            if session.result is not None:
                _draw_victory(session, title)
                while True:
                    key = get_key()
                    if key in ("reshuffle", "quit"):
                        break
                if key == "quit":
                    return
                session.reshuffle()
                held = None
                continue

            game = session.game
            _draw_game(session, title, cursor, held, status)
            status = ""

            # Poll with a short timeout so the clock and preview keep updating.
            preview_was = session.preview_visible
            while True:
                key = get_key_timeout(0.25)
                if key is not None:
                    break
                if session.preview_visible != preview_was:
                    _draw_game(session, title, cursor, held)
                    preview_was = session.preview_visible
                if session.poll_tick():
                    _update_time(session)

            if key in ("up", "down", "left", "right"):
                cursor = _move_cursor(cursor, key, game.difficulty)
            elif key in ("select", "enter"):
                if held is not None:
                    game.move_by_target(held, cursor)
                    held = None
                else:
                    game.move_by_selection(game.grid.piece_at(cursor).id)
            elif key == "grab":
                if held is None:
                    held = game.grid.piece_at(cursor).id
                    status = f"[yellow]Holding piece {held + 1}: move and press G to drop.[/yellow]"
                else:
                    game.move_by_target(held, cursor)
                    held = None
            elif key == "preview":
                session.preview()
            elif key == "reshuffle":
                session.reshuffle()
                held = None
                status = "[yellow]Shuffled again![/yellow]"
            elif key == "quit":
                if held is not None:
                    held = None
                else:
                    return
    finally:
        host.end_session()


# -- home loop ----------------------------------------------------------------


def _home_loop(host: GameHost) -> None:
    status = ""
    while True:
        _draw_home(host, status)
        status = ""
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nTạm biệt!\n", style="bold red")))
            return
        elif key in ("1", "2"):
            topic = Topic.HISTORY if key == "1" else Topic.CULTURE
            difficulty = _choose_difficulty(
                topic.value.title(),
                lambda d: host.best_times.get(topic_key(topic, d)),
            )
            if difficulty is not None:
                _play(host, host.start_topic(topic, difficulty), title=topic.value.title())
        elif key == "3":
            status = _campaign_loop(host)
        elif key == "4":
            _draw_best_times(host)
        elif key == "l" and not host.users.is_authenticated:
            status = _prompt_sign_in(host, register=False)
        elif key == "n" and not host.users.is_authenticated:
            status = _prompt_sign_in(host, register=True)
        elif key == "o" and host.users.is_authenticated:
            host.users.logout()
            status = "[dim]Signed out.[/dim]"
        elif key == "u":
            status = _upgrade(host)


# -- public entry point -------------------------------------------------------


def run(data_dir: Path) -> None:
    """Launch the Rich CLI with interactive menu."""
    host = GameHost(JsonFileStore(data_dir / STORE_FILENAME))
    logger.info("Rich frontend started with data in %s", data_dir)
    _home_loop(host)
