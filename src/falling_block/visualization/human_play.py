from __future__ import annotations

import argparse
from typing import Callable, Dict

import pygame

from falling_block.game import FallingBlockGame, GameConfig, GamePhase
from falling_block.session import PlayerSession
from falling_block.utils.logging import setup_logger
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Callable[[FallingBlockGame], object]] = {
    pygame.K_LEFT: lambda g: g.move(-1, 0),
    pygame.K_RIGHT: lambda g: g.move(1, 0),
    pygame.K_DOWN: lambda g: g.move(0, 1),
    pygame.K_UP: lambda g: g.rotate(),
    pygame.K_SPACE: lambda g: g.rotate(),
    pygame.K_RETURN: lambda g: g.hard_drop(),
    pygame.K_p: lambda g: g.toggle_pause(),
    pygame.K_r: lambda g: g.start(),
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block game with the keyboard")
    p.add_argument("--player", type=str, default="player")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", type=str, default="info")
    return p


def run(session: PlayerSession, seed: int | None = None, cell_size: int = 28) -> None:
    game = FallingBlockGame(GameConfig(random_seed=seed))
    game.add_game_over_listener(session.submit_score)
    renderer = Renderer(cell_size=cell_size)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption(f"Falling Block - {session.username}")

        last_fall = pygame.time.get_ticks()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        continue
                    command = KEY_TO_COMMAND.get(event.key)
                    if command is not None:
                        command(game)
                        if event.key == pygame.K_r:
                            last_fall = pygame.time.get_ticks()

            # Gravity only runs while the game is live
            now = pygame.time.get_ticks()
            if game.phase is GamePhase.RUNNING:
                if now - last_fall >= game.drop_interval_ms:
                    game.tick()
                    last_fall = now
            else:
                last_fall = now

            renderer.draw(screen, game.snapshot(), high_score=session.high_score)
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    log = setup_logger(name="falling_block", use_rich=True, level=args.log_level)
    session = PlayerSession(username=args.player)
    run(session, seed=args.seed, cell_size=args.cell_size)
    log.info("%s: %d game(s), high score %d", session.username, session.games_played, session.high_score)


if __name__ == "__main__":  # pragma: no cover
    main()
