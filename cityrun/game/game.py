# cityrun/game/game.py
import sys, argparse, logging
from typing import Optional
import pygame
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT, JUMP_KEYS, PAUSE_KEYS
from .render import Scenery, render_frame
from .sim import (
    on_frame, request_jump, request_pause_toggle, request_start, request_restart,
    request_resume, request_menu,
)
from .state import GameState, RunStatus, new_game_state

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=WIDTH)
    p.add_argument("--height", type=int, default=HEIGHT)
    p.add_argument("--debug", action="store_true", help="DEBUG logging (spawns, ignored input)")
    return p.parse_args(argv)


def resolve_seed(arg: Optional[int]) -> Optional[int]:
    """None -> SEED_DEFAULT; -1 -> random (None)."""
    if arg is None:
        return SEED_DEFAULT
    if arg == -1:
        return None
    return arg


def command_for_key(key_name: str, unicode: str = "") -> Optional[str]:
    """Map a pygame key name (and typed char) to a command name."""
    if key_name in JUMP_KEYS or unicode in JUMP_KEYS:
        return "jump"
    if key_name in PAUSE_KEYS or unicode in PAUSE_KEYS:
        return "pause"
    if key_name in ("return", "enter"):
        return "start"
    if key_name == "r":
        return "restart"
    if key_name in ("m", "escape"):
        return "menu"
    return None


def dispatch(state: GameState, command: Optional[str]):
    """Apply a command in the current status; anything else is ignored."""
    if command == "jump":
        request_jump(state)
    elif command == "pause":
        request_pause_toggle(state)
    elif command == "start" and state.status is RunStatus.IDLE:
        request_start(state)
    elif command == "restart" and state.status is RunStatus.GAME_OVER:
        request_restart(state)
    elif command == "menu" and state.status is not RunStatus.RUNNING:
        request_menu(state)


def dispatch_pointer(state: GameState):
    """Click/tap: jump while playing, otherwise start, restart or resume from the overlay."""
    if state.status is RunStatus.RUNNING:
        request_jump(state)
    elif state.status is RunStatus.IDLE:
        request_start(state)
    elif state.status is RunStatus.GAME_OVER:
        request_restart(state)
    elif state.status is RunStatus.PAUSED:
        request_resume(state)


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    seed = resolve_seed(args.seed)
    state = new_game_state(args.width, args.height, seed=seed)
    logger.info("launching %dx%d, seed=%s", args.width, args.height, seed)

    pygame.init()
    pygame.display.set_caption("City Run")
    screen = pygame.display.set_mode((args.width, args.height))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 20)
    scenery = Scenery()

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                dispatch(state, command_for_key(pygame.key.name(event.key), event.unicode))
            # touches also arrive as emulated mouse clicks; take them once, as FINGERDOWN
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
                dispatch_pointer(state)
            if event.type == pygame.FINGERDOWN:
                dispatch_pointer(state)

        # Frozen states still render and keep the loop going.
        on_frame(state)

        render_frame(screen, font, scenery, state)
        pygame.display.flip()


if __name__ == "__main__":
    run()
