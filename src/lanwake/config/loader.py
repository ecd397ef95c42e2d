"""YAML host inventory loader and validator."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from lanwake.core.address import is_valid_mac
from lanwake.core.errors import InvalidPort
from lanwake.core.transport import DEFAULT_BROADCAST, DEFAULT_PORT, DEFAULT_TIMEOUT, validate_port
from lanwake.core.wol import WakeRequest

DEFAULT_WORKERS = 4


@dataclass
class Host:
    """A named wake target from the inventory."""

    name: str
    mac_address: str
    broadcast_ip: str = DEFAULT_BROADCAST
    port: int = DEFAULT_PORT
    interface: Optional[str] = None
    description: str = ""

    def to_request(self) -> WakeRequest:
        return WakeRequest(
            self.mac_address,
            ip_address=self.broadcast_ip,
            port=self.port,
            interface=self.interface,
        )


def load_config(path: Path) -> Optional[dict[str, Any]]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Parsed configuration dictionary, or None if file is empty

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    with open(path) as f:
        result: Optional[dict[str, Any]] = yaml.safe_load(f)
        return result


def _is_port(value: Any) -> bool:
    try:
        validate_port(value)
    except InvalidPort:
        return False
    return True


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _is_address(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_config(config: dict[str, Any]) -> list[str]:
    """
    Validate a loaded configuration dictionary.

    Returns:
        List of validation error messages (empty list = valid)
    """
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config root must be a YAML mapping"]

    settings = config.get("settings", {}) or {}
    if not isinstance(settings, dict):
        errors.append("'settings' must be a mapping")
        settings = {}
    if "broadcast_ip" in settings and not _is_address(settings["broadcast_ip"]):
        errors.append(
            f"settings: broadcast_ip must be a non-empty string, got {settings['broadcast_ip']!r}"
        )
    if "port" in settings and not _is_port(settings["port"]):
        errors.append(f"settings: invalid port {settings['port']!r}")
    if "timeout" in settings and not _is_positive_number(settings["timeout"]):
        errors.append(f"settings: timeout must be a positive number, got {settings['timeout']!r}")
    workers = settings.get("workers")
    if workers is not None and (isinstance(workers, bool) or not isinstance(workers, int) or workers < 1):
        errors.append(f"settings: workers must be a positive integer, got {workers!r}")

    hosts = config.get("hosts")
    if hosts is None:
        return errors

    if not isinstance(hosts, list):
        errors.append("'hosts' must be a list")
        return errors

    seen: set[str] = set()
    for i, host in enumerate(hosts):
        prefix = f"hosts[{i}]"
        if not isinstance(host, dict):
            errors.append(f"{prefix}: must be a mapping")
            continue
        for field in ("name", "mac_address"):
            if not host.get(field):
                errors.append(f"{prefix}: missing required field '{field}'")
        name = host.get("name")
        if name:
            if name in seen:
                errors.append(f"{prefix}: duplicate host name '{name}'")
            seen.add(name)
        mac = host.get("mac_address", "")
        if mac and not is_valid_mac(mac):
            errors.append(f"{prefix}: invalid mac_address '{mac}'")
        if "port" in host and not _is_port(host["port"]):
            errors.append(f"{prefix}: invalid port {host['port']!r}")
        for field in ("broadcast_ip", "interface"):
            if field in host and not _is_address(host[field]):
                errors.append(
                    f"{prefix}: {field} must be a non-empty string, got {host[field]!r}"
                )

    return errors


def hosts_from_config(config: dict[str, Any]) -> list[Host]:
    """
    Construct a list of Host objects from a validated config dict.

    Host-level values override the ``settings`` defaults.

    Args:
        config: Parsed and validated config dictionary

    Returns:
        List of Host instances
    """
    settings = config.get("settings", {}) or {}
    default_broadcast = settings.get("broadcast_ip", DEFAULT_BROADCAST)
    default_port = settings.get("port", DEFAULT_PORT)

    hosts: list[Host] = []
    for raw in config.get("hosts", []) or []:
        hosts.append(
            Host(
                name=str(raw["name"]),
                mac_address=raw["mac_address"],
                broadcast_ip=raw.get("broadcast_ip", default_broadcast),
                port=int(raw.get("port", default_port)),
                interface=raw.get("interface"),
                description=raw.get("description", ""),
            )
        )
    return hosts


def runtime_settings(config: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Return the effective send settings (timeout, workers) with defaults filled in."""
    settings = (config or {}).get("settings", {}) or {}
    return {
        "broadcast_ip": settings.get("broadcast_ip", DEFAULT_BROADCAST),
        "port": settings.get("port", DEFAULT_PORT),
        "timeout": float(settings.get("timeout", DEFAULT_TIMEOUT)),
        "workers": int(settings.get("workers", DEFAULT_WORKERS)),
    }


def find_host(hosts: list[Host], name: str) -> Optional[Host]:
    return next((h for h in hosts if h.name == name), None)
