"""
main.py — Algorithm Step Visualizer Flask App
==============================================
JSON API in front of the algorithm registry, the engines and the
playback store.  Rendering is the client's job: every response carries
plain step dictionaries (AlgorithmStep.to_dict()).

Routes:
  GET  /api/algorithms               – registry listing (?category= filter)
  POST /api/run                      – {algorithm, input} → {steps, metrics, pseudocode}
  POST /api/pathfinding/compare      – grid input → one row per grid variant
  POST /api/playback/<action>        – play | pause | forward | backward | reset | speed | goto
  GET  /api/playback/state           – index / status / speed / current step

State management:
  Each browser session gets a PlaybackStore loaded with its latest run.
  Stores live in process memory, keyed by a token kept in the Flask
  session, least recently used evicted past MAX_SESSIONS.  The client
  polls /api/playback/state; each poll ticks the store, so a PLAYING
  store advances one step per elapsed interval.

Environment:
  LOG_LEVEL         – logging level (default INFO)
  MAX_INPUT_LENGTH  – cap on array / operation / adjacency / edge counts,
                      hash table size and grid dimensions (default 200)
  MAX_SESSIONS      – playback stores kept in memory (default 256)
  SECRET_KEY        – session signing key (random per process if unset)
"""

import os
import secrets
from collections import OrderedDict
from dataclasses import asdict
from typing import Any, Dict

from flask import Flask, jsonify, request, session

from algorithms import get_algorithm, list_algorithms, algorithms_by_category
from algorithms.exceptions import InputValidationError, UnknownAlgorithmError, VisualizerError
from engine import PlaybackStore, Recorder, compare_pathfinding
from utils.logger import get_logger, init_logger

logger = get_logger(__name__)

MAX_INPUT_LENGTH: int = int(os.getenv("MAX_INPUT_LENGTH", "200"))
MAX_SESSIONS:     int = int(os.getenv("MAX_SESSIONS", "256"))

app = Flask(__name__)
app.secret_key = os.getenv("SECRET_KEY") or secrets.token_hex(32)

# session token → PlaybackStore, least recently used first
_PLAYBACK: "OrderedDict[str, PlaybackStore]" = OrderedDict()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_store() -> PlaybackStore:
    """PlaybackStore for the current session, created on first use.

    At most MAX_SESSIONS stores are kept; the least recently used one is
    dropped to make room, and its session starts over with an empty store.
    """
    token = session.get("playback")
    if token is not None and token in _PLAYBACK:
        _PLAYBACK.move_to_end(token)
        return _PLAYBACK[token]

    token = secrets.token_hex(16)
    session["playback"] = token
    _PLAYBACK[token] = PlaybackStore()
    while len(_PLAYBACK) > MAX_SESSIONS:
        _PLAYBACK.popitem(last=False)
        logger.debug("playback_session_evicted", sessions=len(_PLAYBACK))
    return _PLAYBACK[token]


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InputValidationError("Request body must be a JSON object")
    return data


# ---------------------------------------------------------------------------
# Input adaptation (JSON → engine input)
# ---------------------------------------------------------------------------
def _node_id(value: Any) -> Any:
    """JSON object keys are always strings; "3" and 3 name the same node."""
    if isinstance(value, str) and value.lstrip("-").isdigit():
        return int(value)
    return value


def _adapt_graph(raw: Any) -> Any:
    if not isinstance(raw, dict) or not isinstance(raw.get("adjacency"), dict):
        return raw
    adjacency = {}
    for node, neighbours in raw["adjacency"].items():
        if isinstance(neighbours, list):
            neighbours = [
                {**n, "to": _node_id(n.get("to"))} if isinstance(n, dict)
                else [_node_id(n[0]), n[1]] if isinstance(n, list) and len(n) == 2
                else _node_id(n)
                for n in neighbours
            ]
        adjacency[_node_id(node)] = neighbours
    return {**raw, "adjacency": adjacency, "start": _node_id(raw.get("start"))}


def _check_size(category: str, raw: Any) -> None:
    """Refuse inputs that would produce unreasonably many steps."""
    limit = MAX_INPUT_LENGTH
    if isinstance(raw, list):
        sized = {"input": raw}
    elif isinstance(raw, dict):
        sized = {k: raw[k] for k in ("array", "operations", "adjacency") if k in raw}
        if category == "pathfinding":
            for dim in ("rows", "cols"):
                if isinstance(raw.get(dim), int) and raw[dim] > limit:
                    raise InputValidationError(f"Grid {dim} exceeds the limit of {limit}")
        if category == "data-structure" and isinstance(raw.get("size"), int) and raw["size"] > limit:
            raise InputValidationError(f"Hash table size exceeds the limit of {limit}")
        if isinstance(raw.get("adjacency"), dict):
            edges = sum(len(n) for n in raw["adjacency"].values() if isinstance(n, (list, dict)))
            if edges > limit:
                raise InputValidationError(f"'adjacency' lists {edges} edges, the limit is {limit}")
    else:
        return
    for name, value in sized.items():
        if isinstance(value, (list, dict)) and len(value) > limit:
            raise InputValidationError(f"'{name}' has {len(value)} entries, the limit is {limit}")


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
@app.errorhandler(VisualizerError)
def handle_visualizer_error(e: VisualizerError):
    logger.warning("request_failed", path=request.path, error=str(e), kind=type(e).__name__)
    return jsonify({"error": str(e)}), 400


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    category = request.args.get("category")
    algos = algorithms_by_category(category) if category else list_algorithms()
    return jsonify({"algorithms": [a.to_dict() for a in algos]})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _body()
    algo_key = data.get("algorithm")
    info = get_algorithm(algo_key) if isinstance(algo_key, str) else None
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm '{algo_key}'")
    if "input" not in data:
        raise InputValidationError("Request needs an 'input' field")

    raw = data["input"]
    _check_size(info.category, raw)
    if info.category == "graph":
        raw = _adapt_graph(raw)

    rec = Recorder()
    rec.start(info.key, raw)
    rec.run_to_completion()

    store = get_store()
    store.set_steps(rec.steps)

    exported = rec.export()
    return jsonify({
        "algorithm":  info.key,
        "steps":      exported["steps"],
        "metrics":    exported["metrics"],
        "pseudocode": exported["pseudocode"],
    })


@app.route("/api/pathfinding/compare", methods=["POST"])
def api_pathfinding_compare():
    data = _body()
    _check_size("pathfinding", data)
    rows = compare_pathfinding(data)
    return jsonify({"rows": [asdict(r) for r in rows]})


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@app.route("/api/playback/<action>", methods=["POST"])
def api_playback(action: str):
    store = get_store()
    data = _body()

    if action == "play":
        store.play()
    elif action == "pause":
        store.pause()
    elif action == "forward":
        store.step_forward()
    elif action == "backward":
        store.step_backward()
    elif action == "reset":
        store.reset()
    elif action == "speed":
        speed = data.get("speed")
        if isinstance(speed, bool) or not isinstance(speed, (int, float)):
            raise InputValidationError("'speed' must be a number")
        store.set_speed(speed)
    elif action == "goto":
        index = data.get("index")
        if isinstance(index, bool) or not isinstance(index, int):
            raise InputValidationError("'index' must be an integer")
        store.set_current_step_index(index)
    else:
        return jsonify({"error": f"Unknown playback action '{action}'"}), 404

    return jsonify(store.to_dict())


@app.route("/api/playback/state", methods=["GET"])
def api_playback_state():
    store = get_store()
    store.tick()
    return jsonify(store.to_dict())


if __name__ == "__main__":
    init_logger()
    logger.info("server_starting", port=5000, max_input_length=MAX_INPUT_LENGTH)
    app.run(debug=True, host="0.0.0.0", port=5000)
