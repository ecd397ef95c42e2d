"""Atomic YAML config write-back for lanwake."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from lanwake.config.loader import Host

CONFIG_MODE = 0o600


def host_to_raw(host: Host) -> dict[str, Any]:
    """Serialize a Host back to the raw YAML dict format the loader expects."""
    d: dict[str, Any] = {
        "name": host.name,
        "mac_address": host.mac_address,
        "broadcast_ip": host.broadcast_ip,
        "port": host.port,
    }
    if host.interface:
        d["interface"] = host.interface
    if host.description:
        d["description"] = host.description
    return d


def write_config(path: Path, config: dict[str, Any]) -> None:
    """
    Atomically replace the inventory at *path* with *config*.

    The document is serialised before anything touches the disk, then
    written to a hidden sibling and moved into place with os.replace. The
    result is owner read/write only (0600); notification settings may hold
    Pushover credentials.

    Args:
        path: Destination config.yaml path.
        config: Full config dict (settings + hosts).

    Raises:
        yaml.YAMLError: If *config* holds values safe_dump cannot represent
        OSError: If the file cannot be written; the old inventory is kept
    """
    text = yaml.safe_dump(config, default_flow_style=False, allow_unicode=True, sort_keys=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.chmod(tmp, CONFIG_MODE)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def build_config_dict(
    hosts: list[Host],
    settings: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Build a full config dict from hosts + settings.

    Args:
        hosts: Current Host list.
        settings: Raw settings dict (broadcast_ip, port, timeout, notifications …).

    Returns:
        Config dict ready for write_config().
    """
    result: dict[str, Any] = {}
    if settings:
        result["settings"] = settings
    result["hosts"] = [host_to_raw(h) for h in hosts]
    return result
