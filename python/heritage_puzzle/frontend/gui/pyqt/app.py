"""PyQt6 GUI frontend.  Self-contained apart from the game backend.

Includes the home menu, difficulty selection, campaigns, gameplay with
click-to-swap and drag-and-drop, the victory screen, and best times.
No terminal interaction required.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

from PyQt6.QtCore import QMimeData, QPoint, Qt, QTimer
from PyQt6.QtGui import QDrag, QFont, QKeyEvent, QMouseEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from heritage_puzzle.backend.data import HISTORICAL_CAMPAIGNS, find_milestone
from heritage_puzzle.backend.engine.session import GameHost, PlaySession
from heritage_puzzle.backend.models import Campaign, Topic, milestone_key, topic_key
from heritage_puzzle.backend.storage import JsonFileStore
from heritage_puzzle.config import DATA_DIR, DIFFICULTIES, STORE_FILENAME

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Palette: lacquer red and gold on a dark ground
# ---------------------------------------------------------------------------
_BASE = "#1c1412"
_MANTLE = "#140e0c"
_SURFACE0 = "#3a2a25"
_SURFACE1 = "#4d3831"
_OVERLAY0 = "#8a7a70"
_TEXT = "#f3e9dc"
_SUBTEXT = "#c9b8a6"
_RED = "#c8102e"
_RED_H = "#e0324d"
_GOLD = "#ffcd00"
_GOLD_H = "#ffdb4d"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_JADE = "#3e8e7e"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_MIME_PIECE = "application/x-heritage-piece"


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    bold: bool = True,
    min_w: int = 0,
    min_h: int = 44,
    radius: int = 8,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold if bold else QFont.Weight.Normal))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:{radius}px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
        f" QPushButton:disabled {{ background:{_MANTLE}; color:{_OVERLAY0}; }}"
    )
    return btn


def _label(text: str, size: int, *, color: str = _TEXT, bold: bool = False) -> QLabel:
    lbl = QLabel(text)
    lbl.setFont(QFont("Helvetica", size, QFont.Weight.Bold if bold else QFont.Weight.Normal))
    lbl.setStyleSheet(f"color:{color};")
    lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
    lbl.setWordWrap(True)
    return lbl


def _fmt(secs: int | None) -> str:
    if secs is None:
        return "--:--"
    m, s = divmod(int(secs), 60)
    return f"{m}:{s:02d}"


class _Page(QWidget):
    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("page")


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _HomePage(_Page):
    """Topic choice, campaigns, best times, and the account buttons."""

    def __init__(self, host: GameHost) -> None:
        super().__init__()
        self._host = host

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(12)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label("Vietnam Puzzle Heritage", 30, color=_GOLD, bold=True))
        root.addWidget(_label(
            "Discover Vietnam's rich history and vibrant culture "
            "through beautiful jigsaw puzzles",
            13, color=_SUBTEXT,
        ))

        self._who = _label("", 12, color=_SUBTEXT)
        root.addWidget(self._who)
        root.addSpacerItem(QSpacerItem(0, 18))

        topics = QHBoxLayout()
        topics.setAlignment(Qt.AlignmentFlag.AlignCenter)
        topics.setSpacing(12)
        self.history_btn = _styled_btn(
            "HISTORY", bg=_RED, hover=_RED_H, font_size=16, min_w=180, min_h=60,
        )
        self.culture_btn = _styled_btn(
            "CULTURE", bg=_GOLD, hover=_GOLD_H, fg=_BASE, font_size=16, min_w=180, min_h=60,
        )
        topics.addWidget(self.history_btn)
        topics.addWidget(self.culture_btn)
        root.addLayout(topics)

        root.addSpacerItem(QSpacerItem(0, 6))
        self.campaigns_btn = _styled_btn("HISTORICAL CAMPAIGNS", bg=_JADE, min_w=372, font_size=13)
        root.addWidget(self.campaigns_btn, alignment=Qt.AlignmentFlag.AlignCenter)
        self.best_btn = _styled_btn("BEST TIMES", min_w=372, font_size=13)
        root.addWidget(self.best_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        root.addSpacerItem(QSpacerItem(0, 12))

        account = QHBoxLayout()
        account.setAlignment(Qt.AlignmentFlag.AlignCenter)
        account.setSpacing(8)
        self.sign_in_btn = _styled_btn("Sign in", font_size=12, min_h=36)
        self.register_btn = _styled_btn("Create account", font_size=12, min_h=36)
        self.sign_out_btn = _styled_btn("Sign out", font_size=12, min_h=36)
        self.upgrade_btn = _styled_btn(
            "♛ Upgrade", bg=_GOLD, hover=_GOLD_H, fg=_BASE, font_size=12, min_h=36,
        )
        for btn in (self.sign_in_btn, self.register_btn, self.sign_out_btn, self.upgrade_btn):
            account.addWidget(btn)
        root.addLayout(account)

        root.addSpacerItem(QSpacerItem(0, 8))
        self._status = _label("", 12, color=_GOLD)
        root.addWidget(self._status)

        self.refresh()

    def refresh(self, status: str = "") -> None:
        user = self._host.users.user
        if user is None:
            self._who.setText("Playing as guest")
        else:
            badge = "   ♛ Advantage" if user.has_advantage else ""
            self._who.setText(f"Signed in as {user.name or user.email}{badge}")
        signed_in = user is not None
        self.sign_in_btn.setVisible(not signed_in)
        self.register_btn.setVisible(not signed_in)
        self.sign_out_btn.setVisible(signed_in)
        self.upgrade_btn.setVisible(signed_in and not user.has_advantage)
        self._status.setText(status)


class _DifficultyPage(_Page):
    """Three grid sizes with the best time for each."""

    def __init__(
        self,
        title: str,
        best_for: Callable[[int], int | None],
        on_pick: Callable[[int], None],
    ) -> None:
        super().__init__()

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(12)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label(title, 26, bold=True))
        root.addWidget(_label("Select grid size", 15, color=_SUBTEXT))
        root.addSpacerItem(QSpacerItem(0, 12))

        hbox = QHBoxLayout()
        hbox.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hbox.setSpacing(14)
        for d in DIFFICULTIES:
            col = QVBoxLayout()
            btn = _styled_btn(
                f"{d}×{d}", bg=_RED, hover=_RED_H, min_w=96, min_h=64, font_size=18,
            )
            btn.clicked.connect(lambda _, dd=d: on_pick(dd))
            col.addWidget(btn)
            col.addWidget(_label(f"Best {_fmt(best_for(d))}", 11, color=_GREEN))
            hbox.addLayout(col)
        root.addLayout(hbox)

        root.addSpacerItem(QSpacerItem(0, 18))
        self.back_btn = _styled_btn("B A C K", min_w=200, font_size=13)
        root.addWidget(self.back_btn, alignment=Qt.AlignmentFlag.AlignCenter)


class _CampaignsPage(_Page):
    """Campaign list with milestone progress."""

    def __init__(self, host: GameHost, on_open: Callable[[Campaign], None]) -> None:
        super().__init__()

        root = QVBoxLayout(self)
        root.setSpacing(10)
        root.setContentsMargins(24, 20, 24, 16)
        root.addWidget(_label("HISTORICAL  CAMPAIGNS", 24, color=_GOLD, bold=True))

        for campaign in HISTORICAL_CAMPAIGNS:
            progress = host.milestones.progress(campaign)
            done = "  ✔" if progress.is_complete else ""
            btn = _styled_btn(
                f"{campaign.title}  ({campaign.period}){done}\n"
                f"{progress.completed}/{progress.total} milestones completed",
                font_size=12,
                min_h=58,
            )
            btn.setToolTip(campaign.description)
            btn.clicked.connect(lambda _, c=campaign: on_open(c))
            root.addWidget(btn)

        root.addSpacerItem(QSpacerItem(0, 10))
        self.back_btn = _styled_btn("B A C K", min_w=200, font_size=13)
        root.addWidget(self.back_btn, alignment=Qt.AlignmentFlag.AlignCenter)


class _MilestonesPage(_Page):
    """Milestones of one campaign; locked ones are disabled."""

    def __init__(
        self,
        host: GameHost,
        campaign: Campaign,
        on_pick: Callable[[str, int], None],
    ) -> None:
        super().__init__()

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(24, 20, 24, 16)
        root.addWidget(_label(campaign.title, 22, color=_GOLD, bold=True))
        root.addWidget(_label(campaign.period, 12, color=_SUBTEXT))

        for milestone in campaign.milestones:
            unlocked = host.milestones.is_unlocked(campaign, milestone)
            completed = host.milestones.is_completed(milestone.id)

            frame = QFrame()
            frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
            box = QVBoxLayout(frame)
            mark = "✔ " if completed else ("" if unlocked else "\U0001f512 ")
            box.addWidget(_label(f"{mark}{milestone.order}. {milestone.title}", 14, bold=True))
            if unlocked:
                box.addWidget(_label(milestone.description, 11, color=_SUBTEXT))
                sizes = QHBoxLayout()
                sizes.setAlignment(Qt.AlignmentFlag.AlignCenter)
                for d in DIFFICULTIES:
                    btn = _styled_btn(f"{d}×{d}", bg=_RED, hover=_RED_H, font_size=11, min_h=30)
                    btn.clicked.connect(lambda _, m=milestone.id, dd=d: on_pick(m, dd))
                    sizes.addWidget(btn)
                box.addLayout(sizes)
            else:
                box.addWidget(_label("Complete previous milestone to unlock", 11, color=_OVERLAY0))
            root.addWidget(frame)

        root.addSpacerItem(QSpacerItem(0, 10))
        self.back_btn = _styled_btn("B A C K", min_w=200, font_size=13)
        root.addWidget(self.back_btn, alignment=Qt.AlignmentFlag.AlignCenter)


class _Tile(QLabel):
    """One slot of the board.  Click selects; drag carries the piece id."""

    def __init__(self, page: _GamePage, slot: int, px: int) -> None:
        super().__init__()
        self._page = page
        self.slot = slot
        self._press: QPoint | None = None
        self.setFixedSize(px, px)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setFont(QFont("Helvetica", max(12, px // 4), QFont.Weight.Bold))
        self.setAcceptDrops(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    # -- mouse --

    def mousePressEvent(self, ev: QMouseEvent | None) -> None:  # noqa: N802
        if ev is not None and ev.button() == Qt.MouseButton.LeftButton:
            self._press = ev.position().toPoint()

    def mouseMoveEvent(self, ev: QMouseEvent | None) -> None:  # noqa: N802
        if ev is None or self._press is None:
            return
        if (ev.position().toPoint() - self._press).manhattanLength() < QApplication.startDragDistance():
            return
        self._press = None
        mime = QMimeData()
        mime.setData(_MIME_PIECE, str(self._page.piece_on(self.slot)).encode())
        drag = QDrag(self)
        drag.setMimeData(mime)
        drag.exec(Qt.DropAction.MoveAction)

    def mouseReleaseEvent(self, ev: QMouseEvent | None) -> None:  # noqa: N802
        if self._press is not None:
            self._press = None
            self._page.select(self.slot)

    # -- drop target --

    def dragEnterEvent(self, ev) -> None:  # noqa: N802
        if ev.mimeData().hasFormat(_MIME_PIECE):
            ev.acceptProposedAction()

    def dropEvent(self, ev) -> None:  # noqa: N802
        raw = bytes(ev.mimeData().data(_MIME_PIECE)).decode()
        ev.acceptProposedAction()
        self._page.drop(int(raw), self.slot)


class _GamePage(_Page):
    """The puzzle board with live stats, preview, and reshuffle."""

    def __init__(self, session: PlaySession, title: str, on_finished: Callable[[], None]) -> None:
        super().__init__()
        self.session = session
        self._on_finished = on_finished
        game = session.game
        d = game.difficulty

        tile_px = max(60, min(120, 420 // d))

        root = QVBoxLayout(self)
        root.setSpacing(6)
        root.setContentsMargins(16, 10, 16, 10)

        root.addWidget(_label(f"{title}  {d}×{d}", 17, bold=True))

        self._stats = _label("", 13, color=_GOLD)
        root.addWidget(self._stats)

        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        grid = QGridLayout(frame)
        grid.setSpacing(2)
        grid.setContentsMargins(8, 8, 8, 8)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        self._tiles: list[_Tile] = []
        for slot in range(d * d):
            tile = _Tile(self, slot, tile_px)
            grid.addWidget(tile, slot // d, slot % d)
            self._tiles.append(tile)

        self._caption = _label("", 12, color=_SUBTEXT)
        root.addWidget(self._caption)

        buttons = QHBoxLayout()
        buttons.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_btn = _styled_btn("\U0001f441 Preview", font_size=12)
        self.preview_btn.clicked.connect(self.preview)
        self.shuffle_btn = _styled_btn("Shuffle Again", font_size=12)
        self.shuffle_btn.clicked.connect(self.reshuffle)
        self.back_btn = _styled_btn("Back", font_size=12)
        buttons.addWidget(self.preview_btn)
        buttons.addWidget(self.shuffle_btn)
        buttons.addWidget(self.back_btn)
        root.addLayout(buttons)

        self._hint = _label(
            "Click a piece to swap it with the hole (last slot) or drag it onto any slot",
            11, color=_OVERLAY0,
        )
        root.addWidget(self._hint)

        # poll the session's ticker and preview window
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._poll)
        self._timer.start(200)
        self._preview_shown = False

        self._sync()

    # -- helpers --

    def piece_on(self, slot: int) -> int:
        return self.session.game.grid.piece_at(slot).id

    def _sync(self) -> None:
        grid = self.session.game.grid
        preview = self.session.preview_visible
        self._preview_shown = preview
        layout = list(range(grid.size)) if preview else grid.layout()
        for slot, piece_id in enumerate(layout):
            tile = self._tiles[slot]
            tile.setText(str(piece_id + 1))
            if preview:
                bg, fg = _GOLD, _BASE
            elif grid.is_piece_correct(piece_id):
                bg, fg = _GREEN, _BASE
            else:
                bg, fg = _RED, _TEXT
            border = f"3px dashed {_GOLD}" if slot == grid.hole and not preview else "none"
            tile.setStyleSheet(
                f"QLabel{{background:{bg};color:{fg};border:{border};border-radius:8px;}}"
            )
        image = self.session.game.image
        self._caption.setText(image.title if preview and image is not None else "")
        self._tick()

    def _tick(self) -> None:
        game = self.session.game
        text = f"Time: {_fmt(game.elapsed_seconds)}    Moves: {game.move_count}"
        if self.session.best_time is not None:
            text += f"    Best: {_fmt(self.session.best_time)}"
        self._stats.setText(text)

    def _poll(self) -> None:
        if self.session.poll_tick():
            self._tick()
        if self.session.preview_visible != self._preview_shown:
            self._sync()

    def _after_move(self) -> None:
        self._sync()
        if self.session.result is not None:
            self._timer.stop()
            self._on_finished()

    # -- actions --

    def select(self, slot: int) -> None:
        if self.session.game.move_by_selection(self.piece_on(slot)):
            self._after_move()

    def drop(self, piece_id: int, slot: int) -> None:
        if self.session.game.move_by_target(piece_id, slot):
            self._after_move()

    def preview(self) -> None:
        self.session.preview()
        self._sync()

    def reshuffle(self) -> None:
        self.session.reshuffle()
        self._timer.start(200)
        # a reshuffle can land on the solved layout
        self._after_move()

    def teardown(self) -> None:
        self._timer.stop()
        self.session.close()


class _VictoryPage(_Page):
    """Victory screen with stats, the picture's story, and navigation."""

    def __init__(self, session: PlaySession) -> None:
        super().__init__()
        result = session.result
        if result is None:
            raise ValueError("Victory page needs a completed session.")
        game = session.game
        d = game.difficulty

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(10)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label("★  C O M P L E T E  ★", 30, color=_GOLD, bold=True))
        if result.is_new_best:
            root.addWidget(_label("\U0001f3c6 New best time!", 16, color=_GREEN, bold=True))
        if session.milestone_id is not None:
            root.addWidget(_label("Milestone completed!", 14, color=_GREEN))

        root.addSpacerItem(QSpacerItem(0, 16))
        for txt, col in [
            (f"Grid:   {d}×{d}", _SUBTEXT),
            (f"Time:   {_fmt(result.elapsed_seconds)}", _GOLD),
            (f"Moves:  {result.moves}", _GOLD),
            (f"Best:   {_fmt(result.best_time)}", _GREEN),
        ]:
            root.addWidget(_label(txt, 18, color=col, bold=True))

        if game.image is not None:
            root.addSpacerItem(QSpacerItem(0, 12))
            root.addWidget(_label(game.image.title, 15, bold=True))
            root.addWidget(_label(game.image.description, 12, color=_SUBTEXT))

        root.addSpacerItem(QSpacerItem(0, 20))
        self.again_btn = _styled_btn(
            "PLAY AGAIN", bg=_RED, hover=_RED_H, font_size=16, min_w=240, min_h=50,
        )
        root.addWidget(self.again_btn, alignment=Qt.AlignmentFlag.AlignCenter)
        self.home_btn = _styled_btn("H O M E", min_w=240, font_size=13)
        root.addWidget(self.home_btn, alignment=Qt.AlignmentFlag.AlignCenter)


class _BestTimesPage(_Page):
    """Best-time table with a back button."""

    def __init__(self, host: GameHost) -> None:
        super().__init__()

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(24, 20, 24, 16)
        root.addWidget(_label("BEST  TIMES", 26, bold=True))

        content = QWidget()
        content.setObjectName("page")
        vbox = QVBoxLayout(content)
        vbox.setSpacing(2)
        vbox.setContentsMargins(10, 10, 10, 10)

        def _row(name: str, times: list[int | None]) -> None:
            cells = "   ".join(f"{d}×{d} {_fmt(t)}" for d, t in zip(DIFFICULTIES, times))
            vbox.addWidget(_label(f"{name}", 13, color=_GOLD, bold=True))
            vbox.addWidget(_label(cells, 12, color=_SUBTEXT))

        for topic in Topic:
            _row(topic.value.title(), [host.best_times.get(topic_key(topic, d)) for d in DIFFICULTIES])
        for campaign in HISTORICAL_CAMPAIGNS:
            for milestone in campaign.milestones:
                times = [host.best_times.get(milestone_key(milestone.id, d)) for d in DIFFICULTIES]
                if any(t is not None for t in times):
                    _row(milestone.title, times)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(content)
        scroll.setStyleSheet(f"QScrollArea {{ border:none; background:{_BASE}; }}")
        root.addWidget(scroll)

        self.back_btn = _styled_btn("B A C K", min_w=200, font_size=13)
        root.addWidget(self.back_btn, alignment=Qt.AlignmentFlag.AlignCenter)


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════


class _MainWindow(QMainWindow):
    def __init__(self, data_dir: Path) -> None:
        super().__init__()
        self._host = GameHost(JsonFileStore(data_dir / STORE_FILENAME))
        self._game_page: _GamePage | None = None
        self._title = ""

        self.setWindowTitle("Vietnam Puzzle Heritage")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(560, 680)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._home = _HomePage(self._host)
        self._home.history_btn.clicked.connect(lambda: self._choose_topic(Topic.HISTORY))
        self._home.culture_btn.clicked.connect(lambda: self._choose_topic(Topic.CULTURE))
        self._home.campaigns_btn.clicked.connect(self._show_campaigns)
        self._home.best_btn.clicked.connect(self._show_best_times)
        self._home.sign_in_btn.clicked.connect(lambda: self._sign_in(register=False))
        self._home.register_btn.clicked.connect(lambda: self._sign_in(register=True))
        self._home.sign_out_btn.clicked.connect(self._sign_out)
        self._home.upgrade_btn.clicked.connect(self._upgrade)
        self._stack.addWidget(self._home)
        self._stack.setCurrentWidget(self._home)

    # -- navigation ---

    def _swap_in(self, page: QWidget) -> None:
        """Show *page*, dropping whatever transient page was current."""
        old = self._stack.currentWidget()
        if old is self._game_page and old is not page:
            self._leave_game()
        self._stack.addWidget(page)
        self._stack.setCurrentWidget(page)
        if old is not None and old is not self._home and old is not page:
            self._stack.removeWidget(old)
            old.deleteLater()

    def _show_home(self, status: str = "") -> None:
        old = self._stack.currentWidget()
        self._leave_game()
        self._home.refresh(status)
        self._stack.setCurrentWidget(self._home)
        if old is not None and old is not self._home:
            self._stack.removeWidget(old)
            old.deleteLater()

    def _choose_topic(self, topic: Topic) -> None:
        page = _DifficultyPage(
            topic.value.title(),
            lambda d: self._host.best_times.get(topic_key(topic, d)),
            lambda d: self._start(self._host.start_topic(topic, d), topic.value.title()),
        )
        page.back_btn.clicked.connect(lambda: self._show_home())
        self._swap_in(page)

    def _show_campaigns(self) -> None:
        users = self._host.users
        if not users.can_access_campaigns:
            if not users.is_authenticated:
                self._show_home("Sign in and upgrade to Advantage to play historical campaigns.")
            else:
                self._show_home("Upgrade to Advantage to unlock historical campaigns.")
            return
        page = _CampaignsPage(self._host, self._show_milestones)
        page.back_btn.clicked.connect(lambda: self._show_home())
        self._swap_in(page)

    def _show_milestones(self, campaign: Campaign) -> None:
        page = _MilestonesPage(self._host, campaign, self._start_milestone)
        page.back_btn.clicked.connect(self._show_campaigns)
        self._swap_in(page)

    def _start_milestone(self, milestone_id: str, difficulty: int) -> None:
        try:
            session = self._host.start_milestone(milestone_id, difficulty)
        except PermissionError as exc:
            self._show_home(str(exc))
            return
        _, milestone = find_milestone(milestone_id)
        self._start(session, milestone.title)

    def _start(self, session: PlaySession, title: str) -> None:
        self._title = title
        if session.result is not None:
            # the shuffle landed on the solved layout
            self._game_page = None
            self._show_victory(session)
            return
        page = _GamePage(session, title, on_finished=lambda: self._show_victory(session))
        page.back_btn.clicked.connect(lambda: self._show_home())
        old = self._stack.currentWidget()
        self._stack.addWidget(page)
        self._stack.setCurrentWidget(page)
        if old is not None and old is not self._home:
            self._stack.removeWidget(old)
            old.deleteLater()
        self._game_page = page

    def _show_victory(self, session: PlaySession) -> None:
        page = _VictoryPage(session)
        page.again_btn.clicked.connect(lambda: self._replay(session))
        page.home_btn.clicked.connect(lambda: self._show_home())
        # the round is over; keep the session alive for "play again"
        self._game_page = None
        self._swap_in(page)

    def _replay(self, session: PlaySession) -> None:
        session.reshuffle()
        self._start(session, self._title)

    def _show_best_times(self) -> None:
        page = _BestTimesPage(self._host)
        page.back_btn.clicked.connect(lambda: self._show_home())
        self._swap_in(page)

    def _leave_game(self) -> None:
        if self._game_page is not None:
            self._game_page.teardown()
            self._game_page = None
        self._host.end_session()

    # -- account ---

    def _sign_in(self, register: bool) -> None:
        name = None
        if register:
            name, ok = QInputDialog.getText(self, "Join Vietnam Puzzle Heritage", "Name (optional):")
            if not ok:
                return
        email, ok = QInputDialog.getText(self, "Sign in", "Email:")
        if not ok:
            return
        password, ok = QInputDialog.getText(
            self, "Sign in", "Password:", QLineEdit.EchoMode.Password
        )
        if not ok:
            return
        users = self._host.users
        success = users.register(email, password, name) if register else users.login(email, password)
        if success:
            self._home.refresh(f"Welcome, {name or email}!")
        else:
            self._home.refresh("Authentication failed. Please try again.")

    def _sign_out(self) -> None:
        self._host.users.logout()
        self._home.refresh("Signed out.")

    def _upgrade(self) -> None:
        if self._host.users.upgrade_to_advantage():
            self._home.refresh("♛ Advantage unlocked: historical campaigns are open.")
        else:
            self._home.refresh("Sign in before upgrading.")

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        current = self._stack.currentWidget()

        if current is self._home:
            if key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
                self.close()
        elif current is self._game_page and self._game_page is not None:
            if key == Qt.Key.Key_P:
                self._game_page.preview()
            elif key == Qt.Key.Key_R:
                self._game_page.reshuffle()
            elif key == Qt.Key.Key_Escape:
                self._show_home()
        elif key == Qt.Key.Key_Escape:
            self._show_home()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, ev) -> None:  # noqa: N802
        self._leave_game()
        super().closeEvent(ev)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(data_dir: Path = DATA_DIR) -> None:
    """Launch the PyQt6 GUI (opens directly to the home menu)."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(data_dir)
    window.show()
    logger.info("PyQt frontend started with data in %s", data_dir)
    qapp.exec()
