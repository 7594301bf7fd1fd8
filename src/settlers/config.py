"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Mapping

from settlers.engine.board import Board, random_board, starter_board

BOARD_LAYOUTS = ("starter", "random")


@dataclass(frozen=True)
class ServerConfig:
    host: str = "localhost"
    port: int = 3030
    board_layout: str = "starter"
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        env = os.environ if environ is None else environ
        layout = env.get("SETTLERS_BOARD", "starter").lower()
        if layout not in BOARD_LAYOUTS:
            raise ValueError(f"SETTLERS_BOARD must be one of {BOARD_LAYOUTS}, got {layout!r}")
        seed = env.get("SETTLERS_SEED")
        return cls(
            host=env.get("SERVER_HOST", "localhost"),
            port=int(env.get("SERVER_PORT", "3030")),
            board_layout=layout,
            seed=int(seed) if seed else None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    def board_factory(self) -> Callable[[], Board]:
        if self.board_layout == "random":
            return lambda: random_board(seed=self.seed)
        return starter_board
