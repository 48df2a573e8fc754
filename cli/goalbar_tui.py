#!/usr/bin/env python3
"""GoalBar TUI — terminal goal progress tracker powered by Textual."""

from __future__ import annotations

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.timer import Timer
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    ProgressBar,
    Select,
    Static,
)

from goalbar import (
    AppController,
    GoalType,
    Incremented,
    ResetFlowState,
    Settings,
    Snapshot,
    configure_logging,
    goal_type_choices,
    language_choices,
    load_settings,
)
from goalbar.formatting import format_value


CSS = """
Screen {
    align: center middle;
}

#settings-menu {
    height: auto;
    width: 60;
    padding: 0 1;
    border: tall $primary-background-darken-2;
    display: none;
}

#settings-menu.-open { display: block; }

.menu-row { height: auto; }

.menu-label {
    width: 12;
    padding: 1 1 0 0;
    color: $text-muted;
}

.menu-row Input, .menu-row Select { width: 1fr; }

#main {
    height: auto;
    width: 60;
    padding: 1 2;
    border: tall $accent;
    opacity: 100%;
}

#main.-entering { opacity: 0%; }

#main.-add-pulse { border: tall $success; }

#main.-complete-pulse {
    border: double $warning;
    background: $warning 10%;
}

#main.-reset-shake {
    border: heavy $error;
    offset-x: 1;
}

#title {
    width: 100%;
    content-align: center middle;
    text-style: bold;
    color: $accent;
}

#progress-label {
    width: 100%;
    content-align: center middle;
    margin: 1 0 0 0;
}

#progress-bar { width: 100%; margin: 0 0 1 0; }

#add-row { height: auto; }

#pending-input { width: 1fr; }

#confirm-row {
    height: auto;
    margin: 1 0 0 0;
    display: none;
}

#confirm-row.-visible { display: block; }

#confirm-text { color: $warning; padding: 1 1 0 0; }
"""


# ── Timer adapter ──────────────────────────────────────────────


class _TextualHandle:
    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualScheduler:
    """Run animation timers on the app's own event loop."""

    def __init__(self, app: App) -> None:
        self._app = app

    def call_later(self, delay, callback) -> _TextualHandle:
        return _TextualHandle(self._app.set_timer(delay, callback))


# ── Main app ───────────────────────────────────────────────────


class GoalBarApp(App):
    """GoalBar — track progress toward a goal."""

    TITLE = "GoalBar"
    CSS = CSS

    BINDINGS = [
        Binding("a", "add", "Add"),
        Binding("m", "toggle_menu", "Menu"),
        Binding("r", "request_reset", "Reset"),
        Binding("y", "confirm_reset", "Yes"),
        Binding("n", "cancel_reset", "No"),
        Binding("escape", "blur_focus", "Back"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        controller: AppController | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self.controller = controller or AppController(self.settings, TextualScheduler(self))
        self._unsubscribe = None

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Show yes/no only while a reset is waiting for confirmation."""
        awaiting = self.controller.snapshot.reset_flow_state is ResetFlowState.AWAITING_CONFIRMATION
        if action in {"confirm_reset", "cancel_reset"}:
            return True if awaiting else None
        if action == "request_reset":
            return None if awaiting else True
        return True

    def compose(self) -> ComposeResult:
        snap = self.controller.snapshot
        t = self.controller.translate
        yield Header()
        yield Vertical(
            Horizontal(
                Label(t("goal"), id="goal-label", classes="menu-label"),
                Input(value=format(snap.goal, "g"), type="number", id="goal-input"),
                classes="menu-row",
            ),
            Horizontal(
                Label(t("changeType"), id="type-label", classes="menu-label"),
                Select(
                    goal_type_choices(snap.locale),
                    value=snap.type,
                    allow_blank=False,
                    id="type-select",
                ),
                classes="menu-row",
            ),
            Horizontal(
                Label(t("language"), id="language-label", classes="menu-label"),
                Select(
                    language_choices(),
                    value=snap.locale,
                    allow_blank=False,
                    id="language-select",
                ),
                classes="menu-row",
            ),
            id="settings-menu",
        )
        yield Vertical(
            Static(t("title"), id="title"),
            Static(self.controller.label(), id="progress-label"),
            ProgressBar(total=100, show_eta=False, id="progress-bar"),
            Horizontal(
                Input(placeholder=t("setCurrent"), type="number", id="pending-input"),
                Button(t("addProcess"), id="add-btn", variant="primary"),
                id="add-row",
            ),
            Button(t("resetProgress"), id="reset-btn", variant="error"),
            Horizontal(
                Static(t("confirmReset"), id="confirm-text"),
                Button(t("yes"), id="confirm-yes", variant="warning"),
                Button(t("no"), id="confirm-no"),
                id="confirm-row",
            ),
            id="main",
            classes="-entering",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe = self.controller.subscribe(self._render_snapshot)
        self._render_snapshot(self.controller.snapshot)
        self.controller.start()

    # ── Rendering ──────────────────────────────────────────────

    def _render_snapshot(self, snap: Snapshot) -> None:
        """Push one snapshot into the widgets. Never mutates the controller."""
        self.query_one("#progress-bar", ProgressBar).update(progress=snap.percent)
        self.query_one("#progress-label", Static).update(self.controller.label())

        flags = snap.animation_flags
        main = self.query_one("#main", Vertical)
        main.set_class(not flags.entry_revealed, "-entering")
        main.set_class(flags.add_pulse_active, "-add-pulse")
        main.set_class(flags.complete_pulse_active, "-complete-pulse")
        main.set_class(flags.reset_shake_active, "-reset-shake")

        awaiting = snap.reset_flow_state is ResetFlowState.AWAITING_CONFIRMATION
        self.query_one("#confirm-row", Horizontal).set_class(awaiting, "-visible")

        self.sub_title = f"{snap.percent}%  [{snap.type.value.upper()}]"
        if snap.complete:
            self.sub_title += f"  {self.controller.translate('complete')}"
        self._render_texts()
        self.refresh_bindings()

    def _render_texts(self) -> None:
        t = self.controller.translate
        self.query_one("#title", Static).update(t("title"))
        self.query_one("#goal-label", Label).update(t("goal"))
        self.query_one("#type-label", Label).update(t("changeType"))
        self.query_one("#language-label", Label).update(t("language"))
        self.query_one("#add-btn", Button).label = t("addProcess")
        self.query_one("#reset-btn", Button).label = t("resetProgress")
        self.query_one("#confirm-text", Static).update(t("confirmReset"))
        self.query_one("#confirm-yes", Button).label = t("yes")
        self.query_one("#confirm-no", Button).label = t("no")
        pending = self.query_one("#pending-input", Input)
        snap = self.controller.snapshot
        if snap.type is GoalType.CURRENCY:
            pending.placeholder = f"max {format_value(snap.max_pending, snap.type, snap.locale)}"
        else:
            pending.placeholder = t("setCurrent")

    # ── Input handlers ─────────────────────────────────────────

    @on(Input.Changed, "#goal-input")
    def _on_goal_change(self, event: Input.Changed) -> None:
        # an empty field is still being typed into; normalize on submit/blur
        if event.value.strip():
            self.controller.set_goal(event.value)

    @on(Input.Submitted, "#goal-input")
    def _on_goal_submit(self, event: Input.Submitted) -> None:
        self.controller.set_goal(event.value)
        event.input.value = format(self.controller.snapshot.goal, "g")

    @on(Input.Changed, "#pending-input")
    def _on_pending_change(self, event: Input.Changed) -> None:
        self.controller.set_pending_amount(event.value)

    @on(Input.Submitted, "#pending-input")
    def _on_pending_submit(self, event: Input.Submitted) -> None:
        self.action_add()

    @on(Select.Changed, "#type-select")
    def _on_type_change(self, event: Select.Changed) -> None:
        if event.value == self.controller.snapshot.type:
            return
        self.controller.set_type(event.value)
        self.query_one("#pending-input", Input).value = ""

    @on(Select.Changed, "#language-select")
    def _on_language_change(self, event: Select.Changed) -> None:
        self.controller.set_locale(str(event.value))

    @on(Button.Pressed)
    def _on_button(self, event: Button.Pressed) -> None:
        actions = {
            "add-btn": self.action_add,
            "reset-btn": self.action_request_reset,
            "confirm-yes": self.action_confirm_reset,
            "confirm-no": self.action_cancel_reset,
        }
        handler = actions.get(event.button.id or "")
        if handler is not None:
            handler()

    # ── Actions ────────────────────────────────────────────────

    def action_add(self) -> None:
        events = self.controller.commit_increment()
        if events:
            self.query_one("#pending-input", Input).value = ""
        for e in events:
            if isinstance(e, Incremented) and e.clamped:
                self.notify(
                    f"Added {format_value(e.applied, self.controller.snapshot.type, self.controller.locale)}",
                    severity="warning",
                )

    def action_toggle_menu(self) -> None:
        self.query_one("#settings-menu", Vertical).toggle_class("-open")

    def action_request_reset(self) -> None:
        self.controller.request_reset()

    def action_confirm_reset(self) -> None:
        self.controller.confirm_reset()

    def action_cancel_reset(self) -> None:
        self.controller.cancel_reset()

    def action_blur_focus(self) -> None:
        self.set_focus(None)

    def action_quit_app(self) -> None:
        # cancel animation timers while the loop is still running
        if self._unsubscribe is not None:
            self._unsubscribe()
        self.controller.close()
        self.exit()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    settings = load_settings()
    if settings.log_file:
        configure_logging(settings.log_level, settings.log_file)
    app = GoalBarApp(settings)
    app.run()


if __name__ == "__main__":
    main()
