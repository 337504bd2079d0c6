from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Header, Footer, Static, TabbedContent, TabPane, DataTable

from .database import build_database, load_config
from .errors import DetectionFailedError
from .log import logger
from .modals import ConfirmModal, FailureModal
from .session import DetectionSession, deselect_all, select_all

from .tabs import (
    input_tab,
    packages_tab,
    commands_tab,
    help_tab,
)

class BloatBusterApp(App):
    CSS = """
    Screen { background: $background; }
    Header { background: $panel; }
    Footer { background: $panel; }

    #paste { height: 1fr; min-height: 8; border: round $surface; margin: 0 1 1 1; }

    #pkg_row { height: 1fr; }
    #pkg_cat { width: 2fr; min-width: 30; height: 1fr; }
    #pkg_list { width: 4fr; height: 1fr; }
    #pkg_info { width: 2fr; min-width: 36; height: 1fr; overflow: auto; }

    #statusbar { height: auto; border: round $primary; background: $boost; padding: 0 2; margin: 0 1 1 1; }

    .topcard { height: auto; border: round $primary; background: $panel; padding: 1 2; margin: 0 1 1 1; }
    .infobox { border: round $primary; background: $boost; padding: 1 2; margin: 0 1 1 1; }
    .errorbox { height: auto; border: round $error; background: $boost; color: $error; padding: 1 2; margin: 0 1 1 1; }
    .codebox { height: auto; border: round $surface; background: $panel; color: $success; padding: 1 2; margin: 0 1 1 1; }
    .toolbar { height: auto; padding: 0 1; margin: 0 1 1 1; }
    .toolbar Button { margin: 0 1 0 0; }

    TabPane { overflow-y: auto; }
    DataTable { height: 1fr; border: round $surface; background: $panel; margin: 0 1 1 1; }
    Input { border: round $surface; background: $panel; margin: 0 1 1 1; }

    #modal { width: 92%; max-width: 120; height: auto; padding: 1 2; border: round $primary; background: $panel; }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("f1", "go_help", "Help"),
        ("f2", "go_input", "Input"),
        ("f3", "go_packages", "Packages"),
        ("f4", "go_commands", "Commands"),
        # the paste box binds ctrl+d itself
        Binding("ctrl+d", "detect", "Detect", priority=True),
        ("space", "toggle", "Toggle"),
        ("enter", "info", "Info"),
        ("plus", "group_on", "Group on"),
        ("minus", "group_off", "Group off"),
        ("ctrl+a", "select_all", "Select all"),
        ("ctrl+n", "deselect_all", "Clear all"),
        ("ctrl+z", "undo", "Undo"),
        ("ctrl+y", "redo", "Redo"),
    ]

    def __init__(self, data_path: Optional[str] = None, initial_text: str = ""):
        super().__init__()
        self.data_path = data_path
        self.cfg = load_config(data_path)
        self.session = DetectionSession(build_database(self.cfg))
        self.initial_text = initial_text

        self.group_idx = 0
        self.search_terms: Dict[str, str] = {}
        self.last_action = "Ready."

    # ---------- modal helpers ----------
    def confirm(
        self,
        title: str,
        question: str,
        on_yes: Callable[[], None],
        details: Sequence[str] = (),
        yes_label: str = "OK",
    ) -> None:
        def _cb(ok: Optional[bool]) -> None:
            if ok:
                on_yes()

        self.push_screen(ConfirmModal(title, question, details, yes_label=yes_label), callback=_cb)

    def show_failure(self, error: DetectionFailedError) -> None:
        self.push_screen(FailureModal(error))

    # ---------- basics ----------
    def set_last(self, msg: str) -> None:
        self.last_action = msg
        logger.debug("ui: %s", msg)
        self.update_status()

    def update_status(self) -> None:
        s = self.session.summary
        line = (
            f"Packages: {s.total}   "
            f"Bloatware: {s.bloatware}   Suspicious: {s.suspicious}   Safe: {s.system}   "
            f"Selected: {s.selected}/{s.total}   "
            f"Commands: {len(self.session.commands)}   "
            f"Last: {self.last_action}"
        )
        try:
            self.query_one("#statusbar", Static).update(line)
        except Exception:
            pass

    def mount_topcard(self, pane: TabPane, title: str, subtitle: str = "", keys: str = ""):
        lines = [f"[b]{title}[/b]"]
        if subtitle:
            lines.append(f"[dim]{subtitle}[/dim]")
        if keys:
            lines.append(f"[dim]{keys}[/dim]")
        return pane.mount(Static("\n".join(lines), classes="topcard"))

    @staticmethod
    def safe_cursor_row(tbl: DataTable) -> None:
        try:
            tbl.cursor_type = "row"  # type: ignore[attr-defined]
        except Exception:
            pass

    # ---------- app layout ----------
    def compose(self) -> ComposeResult:
        ui = self.cfg.get("ui", {}) or {}
        self.title = str(ui.get("title", "BloatBuster"))
        self.sub_title = str(ui.get("tagline", ""))
        yield Header(show_clock=True)
        yield Static("", id="statusbar")
        with TabbedContent(id="tabs"):
            yield TabPane("Input", id="tab_input")
            yield TabPane("Packages", id="tab_packages")
            yield TabPane("Commands", id="tab_commands")
            yield TabPane("Help", id="tab_help")
        yield Footer()

    async def on_mount(self) -> None:
        await self.build_all()
        self.query_one("#tabs", TabbedContent).active = "tab_input"
        self.update_status()

    async def clear_pane(self, pane_id: str) -> TabPane:
        pane = self.query_one(f"#{pane_id}", TabPane)
        await pane.remove_children()
        return pane

    async def build_all(self) -> None:
        # widgets are only queryable once their mount has been awaited
        await input_tab.build(self, await self.clear_pane("tab_input"))
        await packages_tab.build(self, await self.clear_pane("tab_packages"))
        await commands_tab.build(self, await self.clear_pane("tab_commands"))
        await help_tab.build(self, await self.clear_pane("tab_help"))

    def refresh_views(self) -> None:
        packages_tab.refresh(self)
        self.refresh_selection_views()

    def refresh_selection_views(self) -> None:
        # anything derived from the selection: summary, commands, status
        input_tab.refresh(self)
        commands_tab.refresh(self)
        self.update_status()

    # ---------- navigation actions ----------
    def _go(self, tab_id: str) -> None:
        self.query_one("#tabs", TabbedContent).active = tab_id

    def action_go_help(self) -> None: self._go("tab_help")
    def action_go_input(self) -> None: self._go("tab_input")
    def action_go_packages(self) -> None: self._go("tab_packages")
    def action_go_commands(self) -> None: self._go("tab_commands")

    def action_detect(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        input_tab.detect(self)

    # ---------- global dispatch ----------
    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        table_id = getattr(event.data_table, "id", "")
        if packages_tab.on_row_highlighted(self, event, table_id): return

    def on_input_changed(self, event) -> None:
        if packages_tab.on_input_changed(self, event): return

    async def on_button_pressed(self, event) -> None:
        bid = event.button.id
        if await input_tab.on_button(self, bid): return
        if await packages_tab.on_button(self, bid): return

    # ---------- key actions ----------
    def action_toggle(self) -> None:
        if packages_tab.action_toggle(self): return

    def action_info(self) -> None:
        if packages_tab.action_info(self): return

    def action_group_on(self) -> None:
        packages_tab.set_group(self, True)

    def action_group_off(self) -> None:
        packages_tab.set_group(self, False)

    def action_select_all(self) -> None:
        if self.session.apply(select_all):
            packages_tab.selection_changed(self, "All selected")

    def action_deselect_all(self) -> None:
        if self.session.apply(deselect_all):
            packages_tab.selection_changed(self, "Selection cleared")

    def action_undo(self) -> None:
        if self.session.undo():
            packages_tab.selection_changed(self, "Undo")
        else:
            self.set_last("Nothing to undo")

    def action_redo(self) -> None:
        if self.session.redo():
            packages_tab.selection_changed(self, "Redo")
        else:
            self.set_last("Nothing to redo")
