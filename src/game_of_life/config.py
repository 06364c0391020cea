"""
Configuration loaded from ``life_config.toml``.

Every section is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

import importlib
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from game_of_life.errors import ConfigError

CONFIG_FILE = "life_config.toml"


@dataclass
class ImplementationConfig:
    name: str
    module: str
    class_name: str
    description: str = ""
    enabled: bool = True

    def load(self) -> Callable[[int, int], Any]:
        """Import the model class named by this entry."""
        try:
            module = importlib.import_module(self.module)
            return getattr(module, self.class_name)
        except (ImportError, AttributeError) as e:
            raise ConfigError(
                f"cannot load implementation {self.name!r} "
                f"({self.module}.{self.class_name}): {e}"
            ) from e


DEFAULT_IMPLEMENTATIONS = [
    ImplementationConfig("python", "game_of_life.model", "Model", "Pure Python, flat list"),
    ImplementationConfig("numpy", "game_of_life.model_np", "ModelNP", "NumPy with np.roll"),
]


@dataclass
class HarnessConfig:
    data_dir: str = "tests/data"
    pattern: str = "*.txt"
    implementation: str = "python"


@dataclass
class ServerConfig:
    host: str = "localhost"
    port: int = 8081
    read_timeout: float = 30.0
    directory: str = "."


@dataclass
class VerifyConfig:
    rows: int = 64
    cols: int = 64
    generations: int = 100
    seed: int = 42


@dataclass
class OutputConfig:
    log_level: str = "INFO"
    log_file: str | None = None


@dataclass
class Config:
    harness: HarnessConfig = field(default_factory=HarnessConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    verify: VerifyConfig = field(default_factory=VerifyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    implementations: list[ImplementationConfig] = field(
        default_factory=lambda: list(DEFAULT_IMPLEMENTATIONS)
    )

    def enabled_implementations(self) -> list[ImplementationConfig]:
        return [impl for impl in self.implementations if impl.enabled]

    def implementation(self, name: str) -> ImplementationConfig:
        for impl in self.implementations:
            if impl.name == name:
                return impl
        known = ", ".join(impl.name for impl in self.implementations)
        raise ConfigError(f"unknown implementation {name!r} (known: {known})")


# Annotations are strings under `from __future__ import annotations`
FIELD_TYPES = {
    "str": (str,),
    "int": (int,),
    "float": (int, float),
    "bool": (bool,),
    "str | None": (str, type(None)),
}


def _section(name: str, cls, values: dict[str, Any]):
    try:
        section = cls(**values)
    except TypeError as e:
        raise ConfigError(f"invalid [{name}] settings: {e}") from e
    for f in fields(cls):
        value = getattr(section, f.name)
        allowed = FIELD_TYPES[f.type]
        if not isinstance(value, allowed) or (isinstance(value, bool) and bool not in allowed):
            raise ConfigError(f"[{name}] {f.name} must be {f.type}, got {value!r}")
    return section


def _implementations(entries: list[dict[str, Any]]) -> list[ImplementationConfig]:
    implementations = []
    for entry in entries:
        try:
            implementations.append(
                ImplementationConfig(
                    name=entry["name"],
                    module=entry["module"],
                    class_name=entry["class"],
                    description=entry.get("description", ""),
                    enabled=bool(entry.get("enabled", True)),
                )
            )
        except KeyError as e:
            raise ConfigError(f"implementation entry missing key {e}") from e
        impl = implementations[-1]
        if not all(isinstance(v, str) for v in (impl.name, impl.module, impl.class_name)):
            raise ConfigError(f"implementation entry name, module and class must be strings: {entry!r}")
    return implementations


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from ``path``.

    With no path, ``life_config.toml`` in the working directory is used when
    present and the built-in defaults otherwise. An explicit path that does
    not exist is an error.
    """
    if path is None:
        path = Path(CONFIG_FILE)
        if not path.exists():
            logger.debug(f"{CONFIG_FILE} not found, using defaults")
            return Config()
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"{path} not found")

    try:
        with open(path, "rb") as f:
            cfg = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    config = Config(
        harness=_section("harness", HarnessConfig, cfg.get("harness", {})),
        server=_section("server", ServerConfig, cfg.get("server", {})),
        verify=_section("verify", VerifyConfig, cfg.get("verify", {})),
        output=_section("output", OutputConfig, cfg.get("output", {})),
    )
    if "implementations" in cfg:
        config.implementations = _implementations(cfg["implementations"])
    logger.debug(f"Loaded config from {path}")
    return config
