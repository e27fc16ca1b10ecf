"""Timer presets and practice modes offered when setting up a session."""

from __future__ import annotations

from typing import List

from .models import PracticeMode, TimerPreset

TIMER_PRESETS: List[TimerPreset] = [
    TimerPreset(id="gesture-30", name="30 seconds", duration=30, description="Quick gesture sketches"),
    TimerPreset(id="gesture-60", name="1 minute", duration=60, description="Basic gesture drawing"),
    TimerPreset(id="gesture-120", name="2 minutes", duration=120, description="Detailed gestures"),
    TimerPreset(id="study-300", name="5 minutes", duration=300, description="Quick studies"),
    TimerPreset(id="study-600", name="10 minutes", duration=600, description="Focused practice"),
    TimerPreset(id="study-900", name="15 minutes", duration=900, description="Detailed studies"),
    TimerPreset(id="study-1800", name="30 minutes", duration=1800, description="Long-form practice"),
    TimerPreset(id="unlimited", name="No Timer", duration=0, description="Practice at your own pace"),
]

PRACTICE_MODES: List[PracticeMode] = [
    PracticeMode(
        id="gesture",
        name="Gesture Drawing",
        description="Quick, loose sketches capturing movement and flow",
        icon="🏃",
        suggested_duration=60,
    ),
    PracticeMode(
        id="construction",
        name="Construction",
        description="Focus on basic shapes and structure",
        icon="📐",
        suggested_duration=300,
    ),
    PracticeMode(
        id="detailed",
        name="Detailed Study",
        description="Careful observation and rendering",
        icon="🔍",
        suggested_duration=900,
    ),
    PracticeMode(
        id="memory",
        name="Memory Drawing",
        description="Draw from recall without references",
        icon="🧠",
        suggested_duration=180,
    ),
    PracticeMode(
        id="speed",
        name="Speed Sketching",
        description="Quick captures focusing on essentials",
        icon="⚡",
        suggested_duration=30,
    ),
    PracticeMode(
        id="analytical",
        name="Analytical Drawing",
        description="Break down forms and relationships",
        icon="🔬",
        suggested_duration=600,
    ),
]

__all__ = ["PRACTICE_MODES", "TIMER_PRESETS"]
