from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

SCORING_CONFIG_PATH = Path(__file__).resolve().parent / "scoring.yaml"


@lru_cache(maxsize=1)
def get_scoring_config() -> dict[str, Any]:
    """Rubric bands, star weights and classification markers shipped with the package."""
    try:
        parsed = yaml.safe_load(SCORING_CONFIG_PATH.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Cannot read scoring config '{SCORING_CONFIG_PATH}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{SCORING_CONFIG_PATH}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Scoring config '{SCORING_CONFIG_PATH}' must be a mapping at the top level.")
    return parsed


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Look up a dotted key such as 'match.robotic.threshold'."""
    node: Any = get_scoring_config()
    for key in path.split(".") if path else ():
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node if path else default


def get_threshold_bands(path: str) -> list[dict[str, Any]]:
    """Score bands under `path`, highest `min_score` first.

    The lowest band should start at 0 so every score in range lands somewhere.
    """
    bands = get_scoring_value(path)
    if not isinstance(bands, list) or not bands:
        raise RuntimeError(f"Scoring config '{path}' must be a non-empty list of bands.")
    for band in bands:
        if not isinstance(band, dict) or "min_score" not in band:
            raise RuntimeError(f"Every band under '{path}' needs a 'min_score'.")
    return sorted(bands, key=lambda band: float(band["min_score"]), reverse=True)
