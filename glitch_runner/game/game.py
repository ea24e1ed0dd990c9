# glitch_runner/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_UP, K_DOWN, K_RETURN, K_ESCAPE, K_r, K_n
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT, COLOR_FG
from .render import SceneRenderer
from .session import GameSession

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Glitch Runner: jump and crouch past the obstacles.")
    p.add_argument("--seed", type=int, default=None,
                   help="Session seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    p.add_argument("--hud", action="store_true", help="Show seed / speed / frame overlay")
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals GameSession to randomize
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Glitch Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    hud_font = pygame.font.SysFont("monospace", 14)

    session = GameSession(seed=launch_seed)
    renderer = SceneRenderer()
    logger.info("starting session (seed=%s)", session.seed)

    def new_session(seed_spec):
        # a fresh session loses the high score; carry it over
        high = session.difficulty.high_score
        fresh = GameSession(seed=seed_spec)
        fresh.difficulty.high_score = high
        logger.info("new session (seed=%s)", fresh.seed)
        return fresh

    while True:
        clock.tick(FPS)

        # Commands land strictly between ticks
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in (K_SPACE, K_UP):
                    session.request_jump()
                elif event.key == K_DOWN:
                    session.set_crouch(True)
                elif event.key == K_RETURN:
                    session.request_restart()
                elif event.key == K_r and not session.playing:
                    # Replay the SAME seed
                    session = new_session(session.seed)
                elif event.key == K_n and not session.playing:
                    session = new_session(None)
            if event.type == pygame.KEYUP and event.key == K_DOWN:
                session.set_crouch(False)
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if session.playing:
                    session.request_jump()
                else:
                    session.request_restart()

        session.tick()
        snap = session.snapshot()

        # --- Render ---
        renderer.draw(screen, snap)
        if args.hud:
            hud = f"Seed: {snap.seed}   Speed: {snap.scroll_speed:.3f}   Frame: {snap.frame}"
            screen.blit(hud_font.render(hud, True, COLOR_FG), (20, 72))
        pygame.display.flip()


def main():
    run()


if __name__ == "__main__":
    main()
