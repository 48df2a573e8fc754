"""Tests for goalbar/staging.py — pending amount and commit clamping."""

import pytest

from goalbar.models import GoalType, Incremented, PendingIncrement, ProgressModel
from goalbar.staging import commit, normalize_amount, set_pending_amount


@pytest.mark.parametrize("raw", [0, -1, "", "x", None, float("inf"), float("nan")])
def test_bad_pending_amount_becomes_zero(raw):
    assert normalize_amount(raw, GoalType.CURRENCY) == 0.0


def test_elements_pending_amount_is_whole():
    assert set_pending_amount(2.6, GoalType.ELEMENTS).amount == 3.0
    assert set_pending_amount(0.4, GoalType.ELEMENTS).amount == 0.0


def test_currency_pending_amount_kept_as_entered():
    assert set_pending_amount("0.005", GoalType.CURRENCY).amount == 0.005


def test_commit_zero_is_noop():
    model = ProgressModel(goal=100, current=40)
    new_model, pending, events = commit(model, PendingIncrement(0))
    assert new_model == model
    assert pending.amount == 0
    assert events == []


def test_commit_applies_and_clears_pending():
    model, pending, events = commit(ProgressModel(goal=100, current=10), PendingIncrement(25.5))
    assert model.current == 35.5
    assert pending.amount == 0
    assert events == [Incremented(requested=25.5, applied=25.5)]
    assert events[0].clamped is False


def test_commit_clamps_to_goal():
    model, _, events = commit(ProgressModel(goal=100, current=90), PendingIncrement(50))
    assert model.current == 100
    assert events[0].requested == 50
    assert events[0].applied == 10
    assert events[0].clamped is True


def test_commit_currency_rounding():
    model, _, events = commit(ProgressModel(goal=100, current=10.005), PendingIncrement(0.005))
    assert model.current == 10.01
    assert events[0].applied == 0.005
    assert events[0].clamped is False


def test_commit_at_goal_applies_nothing():
    model, pending, events = commit(ProgressModel(goal=100, current=100), PendingIncrement(5))
    assert model.current == 100
    assert pending.amount == 0
    assert events == [Incremented(requested=5, applied=0.0, clamped=True)]


def test_commit_never_lowers_progress_above_goal():
    model, _, events = commit(ProgressModel(goal=50, current=80), PendingIncrement(5))
    assert model.current == 80
    assert events[0].applied == 0.0


def test_commit_elements():
    start = ProgressModel(goal=10, current=4, type=GoalType.ELEMENTS)
    model, _, events = commit(start, set_pending_amount(3, GoalType.ELEMENTS))
    assert model.current == 7
    assert events[0].applied == 3


def test_commit_below_currency_unit_applies_nothing():
    model, _, events = commit(ProgressModel(goal=100, current=10), PendingIncrement(0.004))
    assert model.current == 10.0
    assert events == [Incremented(requested=0.004, applied=0.0, clamped=False)]


def test_commit_reports_rounded_delta_after_type_switch():
    start = ProgressModel(goal=100, current=10.5, type=GoalType.ELEMENTS)
    model, _, events = commit(start, set_pending_amount(1, GoalType.ELEMENTS))
    assert model.current == 12.0
    assert events[0].requested == 1.0
    assert events[0].applied == 1.5
    assert events[0].clamped is False
