from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PlayerSession:
    """Explicit player context handed to drivers instead of global user state.

    Register ``submit_score`` as a game-over listener; storing sessions
    between runs is left to the caller.
    """

    username: str
    high_score: int = 0
    games_played: int = 0

    def submit_score(self, score: int) -> bool:
        self.games_played += 1
        if score > self.high_score:
            self.high_score = int(score)
            return True
        return False
