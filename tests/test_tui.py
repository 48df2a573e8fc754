"""Tests for cli/goalbar_tui.py — the Textual renderer follows the controller."""

import asyncio

from textual.containers import Horizontal
from textual.widgets import ProgressBar

from cli.goalbar_tui import GoalBarApp


def test_tui_renders_commit_and_reset(workspace):
    async def run():
        app = GoalBarApp()
        async with app.run_test() as pilot:
            app.controller.set_pending_amount(40)
            app.action_add()
            await pilot.pause()
            assert app.controller.snapshot.current == 40
            assert app.controller.label() == "$40.00 / $100.00"
            assert app.query_one("#progress-bar", ProgressBar).progress == 40

            app.action_request_reset()
            await pilot.pause()
            assert app.query_one("#confirm-row", Horizontal).has_class("-visible")

            app.action_confirm_reset()
            await pilot.pause()
            assert app.controller.snapshot.current == 0
            assert not app.query_one("#confirm-row", Horizontal).has_class("-visible")

    asyncio.run(run())
