"""Shared configuration loader for irisgov."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlparse

import yaml


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_PATH = Path.home() / ".irisgov.yaml"
DEFAULT_LCD_HOST = "127.0.0.1"
DEFAULT_LCD_PORT = 1317
DEFAULT_GAS = 200000


@dataclass
class GovConfig:
    """Connection and signing settings for one command invocation.

    ``node_home`` is the directory under which per-node parameter snapshots
    live (``<node_home>/<path>/config/params.json``).
    """

    node_home: Path = field(default_factory=Path.home)
    host: str = DEFAULT_LCD_HOST
    port: int = DEFAULT_LCD_PORT
    use_https: bool = False
    chain_id: str | None = None
    key_name: str | None = None
    password: str | None = None
    gas: int = DEFAULT_GAS
    fee: str | None = None
    generate_only: bool = False

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_https else "http"
        return f"{scheme}://{self.host}:{self.port}"


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML mapping")
    return loaded


def _section(file_config: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = file_config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Expected '{name}' to be a mapping in {path}")
    return section


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    return None


def _coerce_int(raw: Any, *, name: str, source: str) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid {name} in {source}: {raw}") from exc


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def _parse_endpoint(raw: str | None) -> tuple[str | None, int | None, bool | None]:
    if not raw:
        return None, None, None
    parsed = urlparse(raw)
    if not parsed.scheme or not parsed.hostname:
        raise ConfigurationError(f"Invalid LCD endpoint URL: {raw}")
    try:
        port = parsed.port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in LCD endpoint URL: {raw}") from exc
    use_https = parsed.scheme.lower() == "https"
    return parsed.hostname, port, use_https


def load_gov_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> GovConfig:
    """Load configuration from overrides, ``IRISGOV_*`` variables, and YAML.

    Precedence is overrides, then environment, then the YAML file, then the
    defaults on :class:`GovConfig`.  An explicitly named config file must
    exist; the default ``~/.irisgov.yaml`` is optional.
    """

    env_map = os.environ if env is None else env
    path = Path(config_path).expanduser() if config_path is not None else DEFAULT_CONFIG_PATH
    file_config = _load_config_file(path, required=config_path is not None)
    node_section = _section(file_config, "node", path)
    tx_section = _section(file_config, "tx", path)
    override_map = {k: v for k, v in (overrides or {}).items() if v is not None}

    endpoint_host, endpoint_port, endpoint_https = _parse_endpoint(
        _first_value(
            override_map.get("endpoint"),
            env_map.get("IRISGOV_NODE"),
            node_section.get("endpoint"),
        )
    )

    node_home = _first_value(
        override_map.get("node_home"),
        env_map.get("IRISGOV_HOME"),
        node_section.get("home"),
    )
    gas = _first_value(
        _coerce_int(override_map.get("gas"), name="gas", source="overrides"),
        _coerce_int(env_map.get("IRISGOV_GAS"), name="gas", source="environment"),
        _coerce_int(tx_section.get("gas"), name="gas", source=f"{path} tx.gas"),
        DEFAULT_GAS,
    )
    if gas <= 0:
        raise ConfigurationError(f"Gas limit must be positive, got {gas}")

    return GovConfig(
        node_home=Path(node_home).expanduser() if node_home else Path.home(),
        host=_first_value(endpoint_host, node_section.get("host"), DEFAULT_LCD_HOST),
        port=_first_value(
            endpoint_port,
            _coerce_int(node_section.get("port"), name="port", source=f"{path} node.port"),
            DEFAULT_LCD_PORT,
        ),
        use_https=bool(
            _first_value(endpoint_https, _coerce_bool(node_section.get("use_https")), False)
        ),
        chain_id=_first_value(
            override_map.get("chain_id"),
            env_map.get("IRISGOV_CHAIN_ID"),
            node_section.get("chain_id"),
        ),
        key_name=_first_value(
            override_map.get("key_name"), env_map.get("IRISGOV_FROM"), tx_section.get("from")
        ),
        password=_first_value(
            override_map.get("password"),
            env_map.get("IRISGOV_PASSWORD"),
            tx_section.get("password"),
        ),
        gas=gas,
        fee=_first_value(override_map.get("fee"), env_map.get("IRISGOV_FEE"), tx_section.get("fee")),
        generate_only=bool(
            _first_value(
                _coerce_bool(override_map.get("generate_only")),
                _coerce_bool(env_map.get("IRISGOV_GENERATE_ONLY")),
                _coerce_bool(tx_section.get("generate_only")),
                False,
            )
        ),
    )
