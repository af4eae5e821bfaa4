"""
Window Renderer
===============

Presents frames in a pygame window. Requires the `window` extra:

    pip install riscz[window]

Each cell is drawn as a pixel_size x pixel_size rectangle (80 by default,
giving a 1280 x 1280 window). Presentation is capped at `fps` frames per
second, which also caps the tick rate since ticks and frames alternate.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from .display import SCREEN_SIZE, Frame, pixel_rgb


DEFAULT_PIXEL_SIZE = 80
DEFAULT_FPS = 60


class WindowRenderer:
    """
    pygame-backed frame renderer.

    present() returns False once the window has been closed, which ends the
    run after the current tick.
    """

    def __init__(
        self,
        title: str = "RISC-Z",
        pixel_size: int = DEFAULT_PIXEL_SIZE,
        fps: int = DEFAULT_FPS,
    ):
        """
        Open the window.

        Args:
            title: Window caption
            pixel_size: Window pixels per cell edge
            fps: Frame cap (0 disables pacing)
        """
        if pixel_size < 1:
            raise ValueError(f"pixel_size must be at least 1, got {pixel_size}")

        self.pixel_size = pixel_size
        self.fps = fps

        pygame.init()
        pygame.display.set_caption(title)
        self._surface = pygame.display.set_mode(
            (SCREEN_SIZE * pixel_size, SCREEN_SIZE * pixel_size)
        )
        self._clock = pygame.time.Clock()
        self._open = True

    def present(self, frame: Frame) -> bool:
        if not self._open:
            return False

        if any(event.type == pygame.QUIT for event in pygame.event.get()):
            self._open = False
            return False

        self._surface.fill((0, 0, 0))
        size = self.pixel_size
        for row in range(SCREEN_SIZE):
            for col in range(SCREEN_SIZE):
                pygame.draw.rect(
                    self._surface,
                    pixel_rgb(frame.value_at(row, col)),
                    (col * size, row * size, size, size),
                )
        pygame.display.flip()

        if self.fps:
            self._clock.tick(self.fps)
        return True

    def close(self) -> None:
        if pygame.get_init():
            pygame.quit()
        self._open = False
