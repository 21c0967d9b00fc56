# data class for benchmark game configuration
from dataclasses import dataclass, fields
import json
from pathlib import Path


@dataclass
class GameConfig:
    width: int = 11
    height: int = 11
    game_type: str = "standard"
    timeout: int = 500
    old_name: str = "old"
    old_url: str = "http://localhost:8001"
    new_name: str = "new"
    new_url: str = "http://localhost:8000"
    cli_path: str = "rules/battlesnake"
    output_dir: str = "benchmarks"

    def __post_init__(self):
        if self.old_name == self.new_name:
            raise ValueError("Both snakes need distinct names to tell the winner apart")


def load_game_config(path="benchmark_config.json", **overrides):
    """
    Load a GameConfig from a JSON file. Keys mirror the GameConfig fields; overrides
    that are not None win over the file.
    """
    config_path = Path(path)
    try:
        with open(config_path) as f:
            config = json.load(f)
        known = {field.name for field in fields(GameConfig)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown keys {sorted(unknown)}")
        config.update({key: value for key, value in overrides.items() if value is not None})
        return GameConfig(**config)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path}: {e}")
    except FileNotFoundError:
        raise ValueError(f"File not found: {config_path}")
    except Exception as e:
        raise ValueError(f"Error loading {config_path}: {e}")
