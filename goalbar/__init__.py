"""GoalBar core library — progress state machine and its collaborators.

Public API re-exports for convenient imports:
    from goalbar import AppController, GoalType, format_value, ...
"""

# Models
from goalbar.models import (
    GoalType,
    ResetFlowState,
    ProgressModel,
    PendingIncrement,
    AnimationFlags,
    SessionState,
    Snapshot,
    Event,
    EntryReady,
    Incremented,
    Completed,
    ResetRequested,
    ResetCancelled,
    Reset,
)

# Transitions
from goalbar.progress import (
    set_goal,
    set_type,
    percent_complete,
    is_complete,
    remaining,
    round_to_unit,
)
from goalbar.staging import set_pending_amount, commit
from goalbar.reset import request_reset, confirm_reset, cancel_reset

# Timers & animation
from goalbar.scheduling import Scheduler, TimerHandle, AsyncioScheduler, ManualScheduler
from goalbar.animation import AnimationController, AnimationDurations

# Presentation helpers
from goalbar.formatting import format_value, progress_label
from goalbar.i18n import translate, available_locales, normalize_locale, language_choices, resources

# Settings
from goalbar.settings import Settings, load_settings, configure_logging

# Controller
from goalbar.controller import AppController, goal_type_choices
