"""
Gesture session that turns button and motion events into completed gestures.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from ..gestures.pattern import Pattern
from ..gestures.recognizer import PatternRecognizer, RecognitionResult
from ..utils.gesture_utils import ShiftSample
from ..utils.logger import PatternLogger

logger = logging.getLogger(__name__)

MODES = ('idle', 'record', 'recognize')


@dataclass
class SessionOutcome:
    """What happened when a gesture was completed."""
    status: str
    message: str
    pattern: Optional[Pattern] = None
    recognition: Optional[RecognitionResult] = None


class GestureSession:
    """
    Collects air motion between button press and release.

    In ``record`` mode a released gesture is stored under the pending
    pattern name; in ``recognize`` mode it is compared against the store.
    Motion is ignored while idle or while the button is up. Event handlers
    may be called from a device thread.
    """

    def __init__(self, recognizer: PatternRecognizer, logger: Optional[PatternLogger] = None):
        self.recognizer = recognizer
        self.logger = logger

        # State management
        self.mode = 'idle'
        self.pattern_name = ''
        self.is_button_pressed = False
        self.recorded_shifts: List[ShiftSample] = []
        self.last_outcome: Optional[SessionOutcome] = None

        self.state_lock = threading.Lock()

    def set_mode(self, mode: str, pattern_name: str = ''):
        """Switch mode and drop any partially recorded gesture."""
        if mode not in MODES:
            raise ValueError(f"Unknown mode '{mode}', expected one of {MODES}")
        with self.state_lock:
            self.mode = mode
            self.pattern_name = pattern_name
            self.is_button_pressed = False
            self.recorded_shifts = []

    def set_pattern_name(self, name: str):
        with self.state_lock:
            self.pattern_name = name

    def on_button_pressed(self):
        with self.state_lock:
            if self.mode == 'idle':
                return
            self.is_button_pressed = True
            self.recorded_shifts = []

    def on_air_motion(self, dx: float, dy: float):
        with self.state_lock:
            if self.is_button_pressed:
                self.recorded_shifts.append(ShiftSample(dx, dy))

    def on_button_released(self) -> Optional[SessionOutcome]:
        """Finish the current gesture and record or recognize it."""
        with self.state_lock:
            if not self.is_button_pressed:
                return None
            self.is_button_pressed = False
            shifts = self.recorded_shifts
            self.recorded_shifts = []
            mode = self.mode
            name = self.pattern_name

        if mode == 'record':
            outcome = self._record(name, shifts)
        else:
            outcome = self._recognize(shifts)

        self.last_outcome = outcome
        return outcome

    def _record(self, name: str, shifts: List[ShiftSample]) -> SessionOutcome:
        if not name.strip():
            return SessionOutcome('error', "Please enter pattern name")
        if not shifts:
            return SessionOutcome('empty', "Pattern is empty")

        try:
            pattern = self.recognizer.record(name, shifts)
        except ValueError as e:
            logger.warning("Could not record '%s': %s", name, e)
            return SessionOutcome('error', f"Error saving pattern: {e}")

        if self.logger:
            self.logger.log_recorded(name, pattern)

        with self.state_lock:
            self.pattern_name = ''
        return SessionOutcome('saved', f"Pattern '{name}' saved successfully", pattern)

    def _recognize(self, shifts: List[ShiftSample]) -> SessionOutcome:
        if not shifts:
            return SessionOutcome('empty', "Pattern is empty")

        pattern = self.recognizer.make_pattern(shifts)
        if self.logger:
            self.logger.log_gesture(len(shifts), pattern)

        if pattern.is_empty:
            return SessionOutcome('empty', "Pattern is empty after processing", pattern)

        result = self.recognizer.recognize(pattern)
        if self.logger:
            self.logger.log_recognition(result)

        if result.is_recognized:
            return SessionOutcome('recognized', f"Recognized: {result.recognized_name}",
                                  pattern, result)
        return SessionOutcome('unknown', "Unknown pattern", pattern, result)
