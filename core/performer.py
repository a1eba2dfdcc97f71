"""
Hush — Live Window

Runs the animation in a resizable pygame window at a fixed target rate.
Each frame, in order:
  1. Handle window events (close, resize, save key)
  2. Apply a pending resize before anything is drawn
  3. Sample the pointer once and step the scene
  4. Composite + display (and export, if S was pressed)

Hotkeys:
  S      = save the current frame as hush-responsive.png
  Close  = exit
"""

import logging

try:
    import pygame
except ImportError:
    pygame = None

from core.image_io import export_frame
from core.render import build_session
from core.scene import SceneConfig, resize_scene, step_scene


class HushPerformer:
    """Single-threaded frame loop: nothing runs between or during frames.

    Args:
        config: Scene configuration (size, seed, fps, font, texture).
        output_dir: Where exported frames are written.
    """

    def __init__(self, config: SceneConfig, output_dir="."):
        if pygame is None:
            raise RuntimeError("pygame required for the live window. Install: pip install pygame")

        self.config = config
        self.fps = config.fps
        self.output_dir = output_dir
        self.state, self.compositor = build_session(config)
        self.running = True
        self.last_export = None

        self._pending_size = None
        self._export_requested = False

        # Display
        self._screen = None
        self._clock = None

    def init_display(self):
        """Initialize pygame window."""
        pygame.init()
        self._screen = pygame.display.set_mode((self.state.width, self.state.height), pygame.RESIZABLE)
        pygame.display.set_caption("Hush")
        self._clock = pygame.time.Clock()

    def _handle_pygame_events(self):
        """Collect events; resize and export are applied inside the next step."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                # Only the last size of a drag matters
                self._pending_size = (event.w, event.h)

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_s:
                self._export_requested = True

    def _pointer(self):
        """Pointer position in pixels, or None while it is outside the window."""
        if not pygame.mouse.get_focused():
            return None
        return pygame.mouse.get_pos()

    def _apply_resize(self):
        if self._pending_size is None:
            return
        w, h = self._pending_size
        self._pending_size = None
        if (w, h) == (self.state.width, self.state.height) or w <= 0 or h <= 0:
            return
        self.state = resize_scene(self.state, w, h)
        if self._screen is not None:
            self._screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)

    def step(self, pointer=None):
        """Advance and render one frame. Returns the (H, W, 3) RGB frame."""
        self._apply_resize()
        self.state = step_scene(self.state, pointer)
        frame = self.compositor.render(self.state)

        if self._export_requested:
            self._export_requested = False
            self.export(frame)
        return frame

    def export(self, frame):
        """Save `frame`; failures are logged and the loop keeps running."""
        try:
            self.last_export = export_frame(frame, self.output_dir)
            print(f"  Saved: {self.last_export}")
        except Exception:
            logging.exception("Frame export failed")

    def _render_to_screen(self, frame):
        """Display frame in pygame window."""
        surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))
        pygame.display.flip()

    def run(self):
        """Main loop until the window is closed."""
        self.init_display()

        print("\n  Hush")
        print("  " + "─" * 40)
        print(f"  {self.state.width}x{self.state.height} @ {self.fps}fps  seed {self.state.params.seed}")
        print("  Hover a hush to fade it.  S=Save frame  Close window=Exit")
        print()

        try:
            while self.running:
                self._handle_pygame_events()
                if not self.running:
                    break
                frame = self.step(self._pointer())
                self._render_to_screen(frame)
                self._clock.tick(self.fps)

        except KeyboardInterrupt:
            print("\n  [INTERRUPTED]")
        finally:
            self._cleanup()

    def _cleanup(self):
        """Clean up resources."""
        if pygame and pygame.get_init():
            pygame.quit()
