"""Tests for goalbar/controller.py — commands, derived completion, snapshots."""

from goalbar.controller import AppController, goal_type_choices
from goalbar.models import (
    Completed,
    EntryReady,
    GoalType,
    Incremented,
    Reset,
    ResetFlowState,
)
from goalbar.scheduling import ManualScheduler
from goalbar.settings import Settings


def _add(ctrl, amount):
    ctrl.set_pending_amount(amount)
    return ctrl.commit_increment()


def test_session_defaults(controller):
    snap = controller.snapshot
    assert snap.goal == 100
    assert snap.current == 0
    assert snap.type is GoalType.CURRENCY
    assert snap.percent == 0
    assert snap.pending_amount == 0
    assert snap.reset_flow_state is ResetFlowState.IDLE
    assert snap.animation_flags.add_pulse_active is False
    assert snap.locale == "en"


def test_settings_seed_session():
    ctrl = AppController(Settings(default_goal=12, default_type=GoalType.ELEMENTS, locale="es"))
    snap = ctrl.snapshot
    assert snap.goal == 12
    assert snap.type is GoalType.ELEMENTS
    assert snap.min_unit == 1.0
    assert snap.locale == "es"


def test_current_stays_within_bounds_and_percent_never_drops(controller):
    last_percent = 0
    for amount in [5, 0, -3, "abc", 12.345, 40, 0.01, 33.3, 99, 7]:
        _add(controller, amount)
        snap = controller.snapshot
        assert 0 <= snap.current <= snap.goal
        assert snap.percent >= last_percent
        last_percent = snap.percent
    assert controller.snapshot.current == 100


def test_zero_pending_commit_changes_nothing(controller):
    _add(controller, 30)
    controller.set_pending_amount(0)
    assert controller.commit_increment() == []
    assert controller.snapshot.current == 30


def test_commit_clamps_and_reports_applied_delta(controller):
    _add(controller, 90)
    events = _add(controller, 50)
    assert controller.snapshot.current == 100
    assert isinstance(events[0], Incremented)
    assert events[0].applied == 10
    assert events[0].requested == 50
    assert events[0].clamped is True


def test_completion_fires_exactly_once(controller):
    events = _add(controller, 100)
    assert [type(e) for e in events] == [Incremented, Completed]
    assert controller.is_complete() is True
    assert _add(controller, 0) == []
    more = _add(controller, 5)
    assert [type(e) for e in more] == [Incremented]
    assert more[0].applied == 0


def test_lowering_goal_under_progress_completes(controller):
    _add(controller, 50)
    events = controller.set_goal(40)
    assert events == [Completed(current=50, goal=40)]
    snap = controller.snapshot
    assert snap.current == 50
    assert snap.percent == 100
    assert controller.set_goal(200) == []
    assert controller.snapshot.complete is False
    assert controller.set_goal(50) == [Completed(current=50, goal=50)]


def test_bad_goal_normalizes(controller):
    controller.set_goal("abc")
    assert controller.snapshot.goal == 1
    controller.set_goal(-10)
    assert controller.snapshot.goal == 1
    controller.set_goal("250")
    assert controller.snapshot.goal == 250


def test_set_type_clears_pending(controller):
    controller.set_pending_amount(5)
    assert controller.snapshot.pending_amount == 5
    controller.set_type("elements")
    snap = controller.snapshot
    assert snap.type is GoalType.ELEMENTS
    assert snap.pending_amount == 0
    assert snap.goal == 100


def test_reset_gate(controller):
    _add(controller, 40)
    assert controller.confirm_reset() == []
    assert controller.snapshot.current == 40

    controller.request_reset()
    assert controller.request_reset() == []
    controller.cancel_reset()
    snap = controller.snapshot
    assert snap.current == 40
    assert snap.reset_flow_state is ResetFlowState.IDLE


def test_confirmed_reset_zeroes_without_completion(controller, scheduler):
    _add(controller, 100)
    scheduler.advance(2)
    controller.request_reset()
    assert controller.snapshot.reset_flow_state is ResetFlowState.AWAITING_CONFIRMATION
    events = controller.confirm_reset()
    assert events == [Reset(previous=100)]
    snap = controller.snapshot
    assert snap.current == 0
    assert snap.percent == 0
    assert snap.reset_flow_state is ResetFlowState.IDLE
    assert snap.animation_flags.reset_shake_active is True
    assert snap.animation_flags.complete_pulse_active is False


def test_listener_sees_finished_state(controller):
    seen = []
    controller.subscribe(seen.append)
    _add(controller, 100)
    # one notification for set_pending_amount, one for the commit
    assert len(seen) == 2
    snap = seen[-1]
    assert snap.current == 100
    assert snap.percent == 100
    assert snap.complete is True
    assert snap.pending_amount == 0
    assert snap.animation_flags.add_pulse_active is True
    assert snap.animation_flags.complete_pulse_active is True


def test_listener_notified_on_timer_expiry(controller, scheduler):
    seen = []
    controller.subscribe(seen.append)
    _add(controller, 10)
    seen.clear()
    scheduler.advance(0.7)
    assert len(seen) == 1
    assert seen[0].animation_flags.add_pulse_active is False


def test_noop_command_does_not_notify(controller):
    seen = []
    unsubscribe = controller.subscribe(seen.append)
    controller.set_pending_amount(0)
    controller.cancel_reset()
    assert seen == []
    unsubscribe()
    _add(controller, 5)
    assert seen == []


def test_start_fires_entry_once(controller, scheduler):
    assert controller.start() == [EntryReady()]
    assert controller.start() == []
    assert controller.snapshot.animation_flags.entry_revealed is False
    scheduler.advance(0.25)
    assert controller.snapshot.animation_flags.entry_revealed is True


def test_close_cancels_pending_timers():
    scheduler = ManualScheduler()
    ctrl = AppController(Settings(), scheduler)
    seen = []
    ctrl.subscribe(seen.append)
    ctrl.start()
    _add(ctrl, 100)
    seen.clear()
    ctrl.close()
    assert scheduler.pending() == 0
    scheduler.advance(5)
    assert seen == []


def test_locale_switch(controller):
    controller.set_goal(20000)
    _add(controller, 1234.5)
    assert controller.label() == "$1,234.50 / $20,000.00"
    controller.set_locale("es-MX")
    assert controller.locale == "es"
    assert controller.label() == "$1234,50 / $20.000,00"
    assert controller.translate("addProcess") == "Agregar Progreso"
    controller.set_locale("klingon")
    assert controller.locale == "en"


def test_goal_type_choices():
    assert goal_type_choices("es") == [
        ("Dinero", GoalType.CURRENCY),
        ("Elementos", GoalType.ELEMENTS),
    ]
