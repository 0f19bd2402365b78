#!/usr/bin/env python3
"""
runner_client.py

pygame front end: input, fixed-timestep simulation and rendering.
Uses the modular game core: constants, data_models, game_engine, score_client.
"""

import argparse
import logging
from typing import Optional

import pygame

from .constants import (
    GAME_WIDTH, GAME_HEIGHT, RENDER_FPS
)
from .data_models import GamePhase
from .game_engine import GameEngine
from .game_loop import TickScheduler
from .highscore import HighScoreStore
from .score_client import DEFAULT_API_URL, LeaderboardSync, ScoreClient

BACKGROUND = (49, 46, 129)
PLAYER_COLOR = (250, 204, 21)
OBSTACLE_COLOR = (239, 68, 68)
WHITE = (255, 255, 255)
MUTED = (200, 200, 200)
ALERT = (255, 120, 120)


# ----------------- Game Client (input / rendering) -----------------

class MusicRunnerClient:
    def __init__(self, player_name: str, api_url: str = DEFAULT_API_URL,
                 high_score_path: Optional[str] = None):
        pygame.init()
        self.player_name = player_name
        self.screen = pygame.display.set_mode((GAME_WIDTH, GAME_HEIGHT))
        pygame.display.set_caption(f"Music Runner: {player_name}")

        self.score_client = ScoreClient(api_url)
        self.sync = LeaderboardSync(self.score_client, player_name)

        # --- Game Logic ---
        self.engine = GameEngine(
            high_scores=HighScoreStore(high_score_path),
            on_game_over=self.sync.submit,
        )
        self.session = self.engine.new_session()
        self.scheduler = TickScheduler()
        self.jump_requested = False

        self.clock = pygame.time.Clock()
        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)

    def run(self):
        """The main client execution loop."""
        self.sync.refresh()

        running = True
        while running:
            delta_time = self.clock.tick(RENDER_FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif (event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE) \
                        or event.type == pygame.MOUSEBUTTONDOWN:
                    self._on_action()

            # --- Fixed Timestep ---
            for _ in range(self.scheduler.advance(delta_time)):
                jump = self.jump_requested
                self.jump_requested = False
                self.engine.tick(self.session, jump=jump)

            self._draw_game()

        self.score_client.close()
        pygame.quit()

    def _on_action(self):
        phase = self.session.phase
        if phase == GamePhase.PLAYING:
            self.jump_requested = True
            return

        self.sync.clear_message()
        self.scheduler.reset()
        if phase == GamePhase.MENU:
            self.engine.start(self.session)
        else:
            self.engine.restart(self.session)

    def _draw_game(self):
        """Renders the session using pygame."""
        screen = self.screen
        screen.fill(BACKGROUND)
        session = self.session

        # Obstacles: a column above and below the gap
        for obstacle in session.obstacles:
            pygame.draw.rect(screen, OBSTACLE_COLOR,
                             (obstacle.x, 0, obstacle.width, obstacle.gap_y))
            pygame.draw.rect(screen, OBSTACLE_COLOR,
                             (obstacle.x, obstacle.gap_end, obstacle.width,
                              GAME_HEIGHT - obstacle.gap_end))

        if session.phase != GamePhase.MENU:
            player = session.player
            pygame.draw.rect(screen, PLAYER_COLOR,
                             (player.x, player.y, player.width, player.height),
                             border_radius=int(player.width // 2))

        # HUD
        score_text = self.large_font.render(f"Score: {session.score}", True, WHITE)
        screen.blit(score_text, (16, 16))
        best_text = self.font.render(f"Best: {session.high_score}", True, MUTED)
        screen.blit(best_text, (16, 56))

        # Leaderboard
        leaderboard, message = self.sync.snapshot()
        lb_title = self.large_font.render("Top Scores", True, WHITE)
        screen.blit(lb_title, (GAME_WIDTH - 220, 16))
        if not leaderboard:
            empty = self.font.render("No scores yet. Be the first!", True, MUTED)
            screen.blit(empty, (GAME_WIDTH - 220, 56))
        for i, entry in enumerate(leaderboard):
            txt = self.font.render(f"#{i+1} {entry['name']}  {entry['score']}", True, WHITE)
            screen.blit(txt, (GAME_WIDTH - 220, 56 + i * 24))

        if session.phase == GamePhase.MENU:
            self._draw_banner("Ready to Play?", "Press SPACE to start, SPACE to jump")
        elif session.phase == GamePhase.GAME_OVER:
            detail = f"Final Score: {session.final_score}"
            if session.new_high_score:
                detail += "  (new best!)"
            self._draw_banner("Game Over!", detail + "  |  SPACE to play again")

        if message:
            msg = self.font.render(message, True, ALERT)
            screen.blit(msg, (GAME_WIDTH // 2 - msg.get_width() // 2, GAME_HEIGHT - 60))

        instr = self.font.render("Space / Click = Jump | Esc = Quit", True, MUTED)
        screen.blit(instr, (10, GAME_HEIGHT - 30))

        pygame.display.flip()

    def _draw_banner(self, title: str, detail: str):
        title_surf = self.large_font.render(title, True, WHITE)
        detail_surf = self.font.render(detail, True, MUTED)
        self.screen.blit(title_surf, (GAME_WIDTH // 2 - title_surf.get_width() // 2, GAME_HEIGHT // 2 - 40))
        self.screen.blit(detail_surf, (GAME_WIDTH // 2 - detail_surf.get_width() // 2, GAME_HEIGHT // 2))


def main():
    parser = argparse.ArgumentParser(description="Music Runner")
    parser.add_argument("--name", help="Name shown on the leaderboard")
    parser.add_argument("--api-url", default=DEFAULT_API_URL, help="Leaderboard server URL")
    parser.add_argument("--high-score-file", help="Where the local best score is kept")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    name = (args.name or input("Enter your name: ")).strip()
    while not name:
        name = input("Please enter your name: ").strip()

    client = MusicRunnerClient(name, api_url=args.api_url, high_score_path=args.high_score_file)
    client.run()


if __name__ == "__main__":
    main()
