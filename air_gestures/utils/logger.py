"""
Logging utilities for air gestures and recognition results.
"""

import datetime
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class PatternLogger:
    """Handles logging of built patterns and recognition outcomes."""

    def __init__(self, debug_file: Optional[str] = 'air_gesture_debug.log'):
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning("Could not open debug file %s: %s", debug_file, e)

    def _timestamp(self) -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def _write(self, message: str):
        if self.debug_file:
            self.debug_file.write(f"[{self._timestamp()}] {message}\n")
            self.debug_file.flush()

    def log_gesture(self, shift_count: int, pattern: Any):
        """Log a completed gesture and the pattern built from it."""
        if pattern.is_empty:
            logger.info("Gesture of %d shifts produced an empty pattern", shift_count)
        else:
            logger.info("Gesture of %d shifts: directions %s", shift_count, pattern.directions)
        self._write(f"gesture shifts={shift_count} pattern={pattern!r}")

    def log_recorded(self, name: str, pattern: Any):
        logger.info("Recorded pattern '%s' with %d segments", name, len(pattern))
        self._write(f"recorded name={name} pattern={pattern!r}")

    def log_recognition(self, result: Any):
        """Log a recognition result and every similarity that led to it."""
        if result.is_recognized:
            logger.info("Recognized '%s' (similarity %.3f)",
                        result.recognized_name, result.similarity_score)
        else:
            logger.info("Pattern not recognized (threshold %.2f)", result.threshold)

        for name, similarity in result.all_similarities:
            logger.debug("   %s: %.3f", name, similarity)
        self._write(f"recognition best={result.best_match} all={result.all_similarities}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
