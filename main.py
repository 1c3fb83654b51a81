import argparse
import logging
import sys

import pygame

from tetris_config import CONFIG, clamp_speed_factor
from tetris_game import TetrisGame
from tetris_input import InputDispatcher
from tetris_layout import compute_dims
from tetris_overlay import Overlay, Toast
from tetris_render import RenderAssets

logger = logging.getLogger("tetris")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Background Tetris")
    p.add_argument("--speed", type=float, default=CONFIG["SPEED_FACTOR"], help="Speed factor (0.2-2.0 on the slider)")
    p.add_argument("--seed", type=int, default=CONFIG["SEED"], help="Seed for the piece generator")
    p.add_argument("--cell-size", type=int, default=CONFIG["CELL_SIZE"])
    p.add_argument("--log-level", default=CONFIG["LOG_LEVEL"], choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main(argv=None):
    args = parse_args(argv)
    CONFIG["SPEED_FACTOR"] = clamp_speed_factor(args.speed)
    CONFIG["SEED"] = args.seed
    CONFIG["CELL_SIZE"] = args.cell_size
    CONFIG["LOG_LEVEL"] = args.log_level
    logging.basicConfig(level=getattr(logging, args.log_level), format='[TETRIS] %(asctime)s %(name)s - %(message)s')

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 48)
    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    game = TetrisGame(speed_factor=CONFIG["SPEED_FACTOR"], seed=CONFIG["SEED"])
    inputs = InputDispatcher(game)
    overlay = Overlay(game)
    toast = Toast()
    game.on_level_up(lambda lvl: toast.show("Level Up!", f"You've reached level {lvl}!", 2000))
    game.on_game_over(lambda score: toast.show("Game Over!", f"Final Score: {score}", 3000))
    game.start()

    while True:
        dt = clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                game.stop()
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key == pygame.K_F1:
                    overlay.toggle(); continue
                if overlay.active:
                    overlay.handle(e); continue
                if e.key == pygame.K_r:
                    game.reset(); continue
            inputs.handle_event(e)

        if not overlay.active:
            game.update(dt)
        toast.update(dt)

        render.draw(screen, game.snapshot())
        toast.draw(screen, font)
        overlay.draw(screen, font, dims.total_w, dims.total_h)
        pygame.display.flip()


if __name__ == '__main__':
    main()
