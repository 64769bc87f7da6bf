"""
engine/
-------
Interaction, animation & recording layer.

    from engine import Workspace, Mode, AnimationScheduler, Recorder
"""

from engine.interaction import (
    Mode,
    InteractionState,
    InteractionMachine,
    ClickAction,
    ClickOutcome,
)
from engine.scheduler import (
    Frame,
    FrameKind,
    SearchListener,
    RecordingListener,
    AnimationScheduler,
    SchedulerState,
    build_frames,
    dispatch,
)
from engine.recorder  import Recorder, RunMetrics
from engine.workspace import Workspace

__all__ = [
    "Mode",
    "InteractionState",
    "InteractionMachine",
    "ClickAction",
    "ClickOutcome",
    "Frame",
    "FrameKind",
    "SearchListener",
    "RecordingListener",
    "AnimationScheduler",
    "SchedulerState",
    "build_frames",
    "dispatch",
    "Recorder",
    "RunMetrics",
    "Workspace",
]
