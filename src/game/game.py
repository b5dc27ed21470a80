# src/game/game.py
import sys, argparse, logging
from typing import Optional
import pygame
from pygame import K_SPACE, K_ESCAPE
from .config import (
    WIDTH, HEIGHT, FPS, WINDOW_TITLE, BEST_SCORE_FILE,
    REVEAL_DELAY_MS, FADE_TRIGGER_MS,
)
from .world import World, Phase, activate, step, finish_run, resize
from .highscore import BestScoreStore
from .scheduler import Scheduler, PygameScheduler
from .ui import SummaryPanel, StartButton
from .render import Renderer

logger = logging.getLogger(__name__)


class Game:
    """
    Frame driver and end-of-run sequencing.

    tick(): step -> draw -> request next frame, until the run ends. Then the
    best score is recorded, the overlay is drawn once, panel and button are
    hidden, and a one-shot reveal is queued on the scheduler.
    """

    def __init__(self, world: World, scheduler: Scheduler,
                 store: Optional[BestScoreStore] = None,
                 renderer: Optional[Renderer] = None):
        self.world = world
        self.scheduler = scheduler
        self.store = store
        self.renderer = renderer
        self.panel = SummaryPanel()
        self.button = StartButton(label="Start")
        self.run_id = 0
        if self.renderer is not None:
            self.renderer.draw_scene(world)

    # -------------------- Input --------------------

    def activate(self) -> None:
        """SPACE / tap: flap while running, otherwise reset and start."""
        if self.world.phase is Phase.RUNNING:
            activate(self.world)
            return
        self.start()

    def click(self, pos) -> bool:
        """Start button. Returns True if the click was consumed."""
        if self.world.phase is Phase.RUNNING or not self.button.hit(pos, self._size()):
            return False
        self.start()
        return True

    def start(self) -> None:
        if self.world.phase is Phase.RUNNING:
            return
        self.panel.hide()
        self.button.visible = False
        activate(self.world)
        self.run_id += 1
        self.tick()

    def resize(self, width: int, height: int,
               surface: Optional[pygame.Surface] = None) -> None:
        resize(self.world, width, height)
        if self.renderer is None:
            return
        if surface is None:
            surface = pygame.display.get_surface()
        if surface is not None:
            self.renderer.set_target(surface)
        # a live run redraws on its next tick; a frozen one needs it now
        if self.world.phase is not Phase.RUNNING:
            self.renderer.draw_scene(self.world)
            if self.world.phase is Phase.GAME_OVER:
                self.renderer.draw_game_over(self.world)

    # -------------------- Loop --------------------

    def tick(self) -> None:
        if self.world.phase is not Phase.RUNNING:
            return
        ended = step(self.world)
        if self.renderer is not None:
            self.renderer.draw_scene(self.world)
        if ended:
            self._end_run()
            return
        self.scheduler.request_frame(self.tick)

    def _end_run(self) -> None:
        finish_run(self.world, self.store)
        if self.renderer is not None:
            self.renderer.draw_game_over(self.world)
        self.panel.hide()
        self.button.visible = False
        self.button.label = "Restart"
        run_id = self.run_id
        self.scheduler.call_later(REVEAL_DELAY_MS, lambda: self._reveal(run_id))

    def _reveal(self, run_id: int) -> None:
        if run_id != self.run_id or self.world.phase is Phase.RUNNING:
            logger.debug("Skipping summary reveal for run %d (now on run %d)", run_id, self.run_id)
            return
        self.panel.reveal(self.world.last_score, self.world.best_score)
        self.button.visible = True
        self.scheduler.call_later(FADE_TRIGGER_MS, lambda: self._fade(run_id))

    def _fade(self, run_id: int) -> None:
        if run_id == self.run_id:
            self.panel.begin_fade(self.scheduler.now_ms())

    def present(self) -> None:
        if self.renderer is not None:
            self.renderer.compose(self.world, self.panel, self.button, self.scheduler.now_ms())

    def _size(self):
        return (self.world.width, self.world.height)


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description=WINDOW_TITLE)
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for pipe/cloud placement. Omit for a random seed.")
    p.add_argument("--best-file", type=str, default=str(BEST_SCORE_FILE),
                   help="JSON file holding the best score.")
    p.add_argument("--width", type=int, default=WIDTH)
    p.add_argument("--height", type=int, default=HEIGHT)
    p.add_argument("--debug", action="store_true", help="Verbose logging.")
    return p.parse_args(argv)


def _finger_pos(event, size):
    return int(event.x * size[0]), int(event.y * size[1])


def handle_event(game: Game, event) -> bool:
    """Dispatch one pygame event. Returns False when the window should close."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == K_ESCAPE:
            return False
        if event.key == K_SPACE:
            game.activate()
    elif event.type == pygame.VIDEORESIZE:
        game.resize(event.w, event.h)
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        # touches also arrive as FINGERDOWN; don't count them twice
        if getattr(event, "touch", False):
            return True
        if not game.click(event.pos):
            game.activate()
    elif event.type == pygame.FINGERDOWN:
        if not game.click(_finger_pos(event, game._size())):
            game.activate()
    return True


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    store = BestScoreStore(args.best_file)
    best = store.load()
    logger.info("Best score so far: %d (%s)", best, store.path)

    pygame.init()
    try:
        pygame.display.set_caption(WINDOW_TITLE)
        screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
        clock = pygame.time.Clock()

        world = World(width=args.width, height=args.height, seed=args.seed, best_score=best)
        game = Game(world, PygameScheduler(), store, Renderer(screen))

        running = True
        while running:
            clock.tick(FPS)
            for event in pygame.event.get():
                if not handle_event(game, event):
                    running = False
                    break
            game.scheduler.pump()
            game.present()
            pygame.display.flip()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        raise
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(run())
