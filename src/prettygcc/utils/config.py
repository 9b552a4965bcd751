import json
import sys
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "compiler": "g++",
    "diagnostics_flag": "-fdiagnostics-format=json",
    "highlight": True,
    "theme": "monokai",
    "propagate_exit_code": True,
    "log_file": None,
}

# Lets the wrapper front gcc, g++-13, ... without editing the config file
COMPILER_ENV_VAR = "PRETTYGCC_COMPILER"


class ConfigManager:
    """
    Loads ~/.prettygcc/config.json on top of DEFAULT_CONFIG.
    """

    def __init__(self):
        self.config_dir = Path.home() / ".prettygcc"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        config = DEFAULT_CONFIG.copy()
        try:
            if self.config_file.exists():
                with open(self.config_file, "r") as f:
                    user_config = json.load(f)
                if isinstance(user_config, dict):
                    config.update(user_config)
        except (OSError, ValueError) as e:
            # Unreadable or corrupt config should never stop a build
            print(f"Warning: Ignoring unreadable config {self.config_file}: {e}", file=sys.stderr)

        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()
