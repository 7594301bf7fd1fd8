"""HTTP relay for the world action log.

Peers POST actions and poll ``/actions?since=N``; the relay assigns the single
global order every peer applies. It also keeps its own replica so ``/state``
can serve snapshots to renderers that join late.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException

from settlers.config import ServerConfig
from settlers.engine.actions import WORLD_TOPIC, ActionDecodeError, decode_action, encode_action
from settlers.log import configure_logging
from settlers.session import ActionBus, GameSession, serialize_state
from settlers.utils.repro import seed_everything

logger = logging.getLogger(__name__)

RELAY_USER_ID = "relay"

app = FastAPI(title="Settlers relay")

_config = ServerConfig.from_env()
_state_lock = threading.Lock()


def _new_session() -> GameSession:
    if _config.seed is not None:
        seed_everything(_config.seed)
    return GameSession(RELAY_USER_ID, bus=ActionBus(), board_factory=_config.board_factory())


_session: GameSession = _new_session()


@app.get("/state")
def get_state() -> Dict[str, Any]:
    with _state_lock:
        return serialize_state(_session)


@app.get("/actions")
def get_actions(since: int = 0) -> List[Dict[str, Any]]:
    with _state_lock:
        return _session.bus.actions_since(since)


@app.post("/actions")
def post_action(payload: Dict[str, Any]) -> Dict[str, Any]:
    try:
        envelope = decode_action(payload)
    except ActionDecodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if envelope.topic != WORLD_TOPIC:
        raise HTTPException(status_code=400, detail=f"unknown topic: {envelope.topic!r}")
    with _state_lock:
        log = _session.bus.log
        index = next((i for i, e in enumerate(log) if e.action_id == envelope.action_id), None)
        if index is None:
            _session.bus.dispatch(envelope)
            index = len(log) - 1
    return {"index": index, "action": encode_action(envelope)}


@app.post("/reset")
def reset_game() -> Dict[str, Any]:
    global _session
    with _state_lock:
        _session = _new_session()
        logger.info("relay session reset")
        return serialize_state(_session)


def main() -> None:
    import uvicorn

    configure_logging(_config.log_level)
    uvicorn.run(app, host=_config.host, port=_config.port)


if __name__ == "__main__":
    main()
