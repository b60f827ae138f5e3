from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pastebin.domain.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("config.yml")
DEFAULT_HOST = "0.0.0.0"


class _ServerSection(BaseModel):
    port: str = Field(min_length=1)

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_str(cls, v: object) -> object:
        # `port: 8080` in YAML parses as an int.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class _StorageSection(BaseModel):
    tmp_path: str = Field(min_length=1)


class _RandomSection(BaseModel):
    string_length: int = Field(ge=0)


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["text", "json"]


class _LogSection(BaseModel):
    level: LogLevel = "INFO"
    format: LogFormat = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v


class _ConfigFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    server: _ServerSection
    storage: _StorageSection
    random: _RandomSection
    log: _LogSection = Field(default_factory=_LogSection)


@dataclass(frozen=True)
class AppConfig:
    port: str
    storage_root: Path
    id_length: int
    log_level: str = "INFO"
    log_format: str = "text"

    def listen_address(self) -> tuple[str, int]:
        """Split ``port`` ("8080", ":8080" or "host:8080") into host and port."""
        host, sep, port = self.port.rpartition(":")
        if not sep:
            host, port = "", self.port
        try:
            number = int(port)
        except ValueError:
            raise ConfigError(f"invalid server.port: {self.port!r}") from None
        if not 0 < number < 65536:
            raise ConfigError(f"invalid server.port: {self.port!r}")
        return host or DEFAULT_HOST, number


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    try:
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping")

    try:
        parsed = _ConfigFile.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e

    return AppConfig(
        port=parsed.server.port,
        storage_root=Path(parsed.storage.tmp_path),
        id_length=parsed.random.string_length,
        log_level=parsed.log.level,
        log_format=parsed.log.format,
    )
