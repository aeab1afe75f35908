from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Optional, Sequence

import pygame

from ttrys.game import Game, GameConfig, GameMode
from ttrys.game.levels import NUM_LEVELS
from .renderer import Renderer

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1


def key_bindings(game: Game) -> Dict[int, Callable[[], None]]:
    return {
        pygame.K_LEFT: game.on_left,
        pygame.K_RIGHT: game.on_right,
        pygame.K_DOWN: game.on_down,
        pygame.K_UP: game.on_rotate_clockwise,
        pygame.K_x: game.on_rotate_clockwise,
        pygame.K_z: game.on_rotate_counterclockwise,
        pygame.K_p: game.toggle_pause,
        pygame.K_ESCAPE: game.quit,
        pygame.K_q: game.quit,
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttrys", description="Play TTrYs in a pygame window.")
    p.add_argument("--mode", choices=["a", "b"], default="a",
                   help="a: empty board, b: start with the bottom rows partly filled")
    p.add_argument("--level", type=int, default=1, help=f"starting level (1-{NUM_LEVELS})")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=16, help="milliseconds between clock ticks")
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        mode=GameMode(args.mode),
        initial_level=args.level - 1,
        random_seed=args.seed,
    )


def run(config: GameConfig, tick_ms: int = 16, cell_size: int = 28) -> Game:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = Game(config)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("TTrYs")
        bindings = key_bindings(game)
        pygame.time.set_timer(TICK_EVENT, tick_ms)

        while not game.wants_to_quit:
            # Keyboard and timer events are handled one at a time, in order
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.quit()
                elif event.type == TICK_EVENT:
                    game.on_tick()
                elif event.type == pygame.KEYDOWN:
                    handler = bindings.get(event.key)
                    if handler is not None:
                        handler()
                if game.wants_to_quit:
                    break

            renderer.draw(screen, game)
            clock.tick(60)

        logger.info("session over: score=%d lines=%d level=%d",
                    game.stats.score, game.stats.rows_cleared, game.level.number)
        return game
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
    game = run(config, tick_ms=args.tick_ms, cell_size=args.cell_size)
    print(f"Final score: {game.stats.score}  lines: {game.stats.rows_cleared}  level: {game.level.number}")


if __name__ == "__main__":  # pragma: no cover
    main()
