import logging
import random

import numpy as np
import pytest

from settlers.config import ServerConfig
from settlers.engine.board import starter_board
from settlers.log import ActionPollFilter
from settlers.utils.repro import seed_everything


def test_defaults():
    config = ServerConfig.from_env({})
    assert config == ServerConfig()
    assert config.port == 3030
    assert config.board_factory()() == starter_board()


def test_environment_overrides():
    config = ServerConfig.from_env(
        {
            "SERVER_HOST": "0.0.0.0",
            "SERVER_PORT": "8080",
            "SETTLERS_BOARD": "Random",
            "SETTLERS_SEED": "42",
            "LOG_LEVEL": "debug",
        }
    )
    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.board_layout == "random"
    assert config.seed == 42
    assert config.log_level == "DEBUG"

    factory = config.board_factory()
    assert factory() == factory()
    assert len(factory().tiles) == 19


def test_unknown_board_layout_is_rejected():
    with pytest.raises(ValueError):
        ServerConfig.from_env({"SETTLERS_BOARD": "hexagonal"})


def test_action_polls_are_filtered_from_access_logs():
    poll_filter = ActionPollFilter()

    def record(message):
        return logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, message, (), None)

    assert not poll_filter.filter(record('127.0.0.1 - "GET /actions?since=3 HTTP/1.1" 200'))
    assert poll_filter.filter(record('127.0.0.1 - "POST /actions HTTP/1.1" 200'))


def test_seed_everything_repeats_global_draws():
    seed_everything(7)
    first = (random.random(), float(np.random.rand()))
    seed_everything(7)
    assert (random.random(), float(np.random.rand())) == first
