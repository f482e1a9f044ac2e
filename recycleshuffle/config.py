import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass
class ShuffleConfig:
    randomness: float = 0.05
    buffer: int = 4
    min_rec: float = 0.2
    seed: int | None = None


@dataclass
class SimulationConfig:
    songs: int = 10
    plays: int = 1000
    repetitions: int = 1


@dataclass
class Settings:
    shuffle: ShuffleConfig = field(default_factory=ShuffleConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)


def _load_file(path: Path) -> Dict[str, Any]:
    text = path.read_text()
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    return json.loads(text)


def _parse_shuffle(raw: Dict[str, Any]) -> ShuffleConfig:
    seed = raw.get("seed")
    return ShuffleConfig(
        randomness=float(raw.get("randomness", 0.05)),
        buffer=int(raw.get("buffer", 4)),
        min_rec=float(raw.get("min_rec", 0.2)),
        seed=None if seed is None else int(seed),
    )


def _parse_simulation(raw: Dict[str, Any]) -> SimulationConfig:
    return SimulationConfig(
        songs=int(raw.get("songs", 10)),
        plays=int(raw.get("plays", 1000)),
        repetitions=int(raw.get("repetitions", 1)),
    )


def load_settings(path: str | Path | None = None) -> Settings:
    if path is None:
        return Settings()
    path = Path(path)
    data = _load_file(path)
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a mapping")

    return Settings(
        shuffle=_parse_shuffle(data.get("shuffle") or {}),
        simulation=_parse_simulation(data.get("simulation") or {}),
    )
