#!/usr/bin/env python3
"""Air Pattern Demo with Visual Feedback.

The mouse stands in for a motion stylus: holding the left button is the
stylus button and the relative mouse motion, scaled by the window size,
is the air-motion delta. Gestures are recorded under a typed name or
recognized against the stored patterns.
"""

import logging
from typing import List, Tuple

import pygame

from air_gestures.core.session import GestureSession
from air_gestures.gestures.recognizer import PatternRecognizer
from air_gestures.storage.pattern_store import PatternStore
from air_gestures.utils.logger import PatternLogger

WIDTH, HEIGHT = 1200, 800


class AirPatternDemo:
    """Interactive demo for recording and recognizing air patterns."""

    def __init__(self, store_file: str = "air_patterns.json") -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Air Pattern Demo")

        self.pattern_logger = PatternLogger()
        self.recognizer = PatternRecognizer(store=PatternStore(store_file))
        self.session = GestureSession(self.recognizer, self.pattern_logger)

        self.trail: List[Tuple[int, int]] = []
        self.name_input = ""
        self.status = "Idle. F1: record, F2: recognize"
        self.result = ""

        # Colors
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.RED = (255, 0, 0)
        self.GREEN = (0, 160, 0)
        self.GRAY = (128, 128, 128)

        # Fonts
        self.font = pygame.font.Font(None, 42)
        self.small_font = pygame.font.Font(None, 30)

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.trail = [event.pos]
                    self.session.on_button_pressed()
                elif event.type == pygame.MOUSEMOTION and self.session.is_button_pressed:
                    self.trail.append(event.pos)
                    rel_x, rel_y = event.rel
                    # Screen y grows downwards; air motion y grows upwards
                    self.session.on_air_motion(rel_x / WIDTH, -rel_y / HEIGHT)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    self.finish_gesture()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return
                    self.handle_key(event)

            self.draw()
            clock.tick(60)

    def handle_key(self, event) -> None:
        if event.key == pygame.K_F1:
            self.session.set_mode('record', self.name_input)
            self.status = "Record mode. Type a name, then hold the button and draw."
        elif event.key == pygame.K_F2:
            self.session.set_mode('recognize')
            self.status = "Recognize mode. Hold the button and draw."
        elif event.key == pygame.K_F3:
            self.session.set_mode('idle')
            self.status = "Idle."
        elif event.key == pygame.K_DELETE:
            self.delete_pattern()
        elif event.key == pygame.K_BACKSPACE:
            self.name_input = self.name_input[:-1]
            self.session.set_pattern_name(self.name_input)
        elif event.unicode and event.unicode.isprintable():
            self.name_input += event.unicode
            self.session.set_pattern_name(self.name_input)

    def finish_gesture(self) -> None:
        """Hand the finished gesture to the session and show the outcome."""
        outcome = self.session.on_button_released()
        if outcome is None:
            return
        self.result = outcome.message
        if outcome.status == 'saved':
            self.name_input = ""
        elif outcome.recognition is not None and outcome.recognition.is_recognized:
            self.result += f" ({outcome.recognition.similarity_score:.2f})"

    def delete_pattern(self) -> None:
        name = self.name_input.strip()
        if not name:
            self.result = "Type the name of the pattern to delete"
        elif self.recognizer.delete(name):
            self.result = f"Pattern '{name}' deleted"
            self.name_input = ""
        else:
            self.result = f"Pattern '{name}' not found"

    def draw(self) -> None:
        """Render the UI and the current trail."""
        self.screen.fill(self.WHITE)
        lines = [
            "F1: Record   F2: Recognize   F3: Idle   DEL: Delete typed name   ESC: Quit",
            f"Mode: {self.session.mode}",
            f"Name: {self.name_input}",
            self.status,
            "Stored: " + ", ".join(self.recognizer.pattern_names()),
        ]
        y = 10
        for line in lines:
            self.screen.blit(self.small_font.render(line, True, self.BLACK), (10, y))
            y += 30

        if len(self.trail) > 1:
            pygame.draw.lines(self.screen, self.RED, False, self.trail, 4)

        if self.result:
            self.screen.blit(self.font.render(self.result, True, self.GREEN), (10, HEIGHT - 60))
        pygame.display.flip()

    def close(self) -> None:
        self.pattern_logger.close()
        pygame.quit()


def main() -> None:
    """Entry point for the demo."""
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    demo = AirPatternDemo()
    try:
        demo.run()
    except KeyboardInterrupt:
        pass
    finally:
        demo.close()


if __name__ == "__main__":
    main()
