"""Runner configuration.

Settings are resolved in order: defaults, YAML config file,
environment variables, then command-line options.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .runner.process import DEFAULT_BROWSER_BINARY
from .steps.schema import FailurePolicy
from .transport.http_client import DEFAULT_BASE_URL

CONFIG_ENV_VAR = "AGELUM_CONFIG"

ENV_OVERRIDES = {
    "AGELUM_URL": "base_url",
    "AGELUM_REPO": "repo",
    "AGELUM_BROWSER_BIN": "browser_binary",
}


def default_config_path() -> Path:
    return Path.home() / ".agelum" / "config.yaml"


@dataclass
class RunnerConfig:
    """Configuration for talking to the step source and running steps."""
    base_url: str = DEFAULT_BASE_URL
    repo: Optional[str] = None
    browser_binary: str = DEFAULT_BROWSER_BINARY
    request_timeout: float = 30.0
    failure_policy: FailurePolicy = FailurePolicy.CONTINUE

    def __post_init__(self):
        self.failure_policy = FailurePolicy(self.failure_policy)
        self.request_timeout = float(self.request_timeout)
        if self.request_timeout <= 0:
            raise ValueError(
                f"request_timeout must be positive, got {self.request_timeout}"
            )

    def with_overrides(self, **overrides: Any) -> "RunnerConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[dict[str, str]] = None,
) -> RunnerConfig:
    """Load configuration from file and environment.

    Args:
        config_path: YAML file to read. Defaults to $AGELUM_CONFIG or
            ~/.agelum/config.yaml. A missing default file is ignored.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Resolved RunnerConfig.

    Raises:
        FileNotFoundError: If an explicitly given config file is missing.
        ValueError: If the file is malformed or holds invalid values.
    """
    environ = os.environ if environ is None else environ

    explicit = config_path is not None or CONFIG_ENV_VAR in environ
    if config_path is None:
        config_path = Path(environ.get(CONFIG_ENV_VAR) or default_config_path())
    config_path = Path(config_path).expanduser()

    values: dict[str, Any] = {}
    if config_path.exists():
        values.update(_read_config_file(config_path))
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    for env_name, field_name in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            values[field_name] = value.strip()

    return RunnerConfig(**values)


def _read_config_file(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")

    known = {f.name for f in fields(RunnerConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    return data
