"""Command-line interface for lanwake."""

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click

from lanwake import __version__

DEFAULT_CONFIG = Path.home() / ".config" / "lanwake" / "config.yaml"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_cfg(config: str, required: bool = True) -> tuple[dict, list]:
    """Load and validate the inventory; a missing file is fatal only if *required*."""
    from lanwake.config.loader import hosts_from_config, load_config, validate_config

    path = Path(config)
    if not path.exists():
        if not required:
            return {}, []
        click.echo(f"Config file not found: {path}", err=True)
        sys.exit(1)
    raw = load_config(path)
    if not raw:
        if not required:
            return {}, []
        click.echo("Config file is empty.", err=True)
        sys.exit(1)
    errors = validate_config(raw)
    if errors:
        click.echo("Config validation errors:", err=True)
        for e in errors:
            click.echo(f"  • {e}", err=True)
        sys.exit(1)
    return raw, hosts_from_config(raw)


def _load_raw(config: str) -> dict[str, Any]:
    """Load the config for editing; a missing or empty file yields an empty dict."""
    from lanwake.config.loader import load_config

    path = Path(config)
    if not path.exists():
        return {}
    return load_config(path) or {}


# ── Root group ────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=__version__, prog_name="lanwake")
@click.option(
    "--config",
    "-c",
    default=str(DEFAULT_CONFIG),
    envvar="LANWAKE_CONFIG",
    show_default=True,
    help="Path to lanwake config.yaml",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config: str, verbose: bool) -> None:
    """Send Wake-on-LAN magic packets."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# ── wake command ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--ip",
    "-i",
    "ip_address",
    help="Destination address or IPv4 network (CIDR) [default: host config or 255.255.255.255]",
)
@click.option("--port", "-p", type=int, help="UDP port [default: host config or 9]")
@click.option("--interface", help="Local source IP to send from")
@click.option("--workers", "-w", type=click.IntRange(min=1), help="Parallel sends")
@click.option("--notify/--no-notify", default=True, help="Send configured notifications")
@click.pass_context
def wake(
    ctx: click.Context,
    targets: tuple[str, ...],
    ip_address: Optional[str],
    port: Optional[int],
    interface: Optional[str],
    workers: Optional[int],
    notify: bool,
) -> None:
    """Wake each TARGET (a configured host name or a MAC address).

    A successful send only means the packet left this machine; Wake-on-LAN
    has no acknowledgement.
    """
    from lanwake.config.loader import find_host, runtime_settings
    from lanwake.core.batch import wake_many
    from lanwake.core.wol import WakeRequest
    from lanwake.notifications.notify import log_result, send_notification

    raw, hosts = _load_cfg(ctx.obj["config"], required=False)
    settings = runtime_settings(raw)

    overrides: dict[str, Any] = {}
    if ip_address is not None:
        overrides["ip_address"] = ip_address
    if port is not None:
        overrides["port"] = port
    if interface is not None:
        overrides["interface"] = interface

    requests = []
    for target in targets:
        host = find_host(hosts, target)
        if host is not None:
            request = host.to_request()
        else:
            request = WakeRequest(
                target, ip_address=settings["broadcast_ip"], port=settings["port"]
            )
        requests.append(dataclasses.replace(request, **overrides))

    results = wake_many(
        requests,
        timeout=settings["timeout"],
        max_workers=workers or settings["workers"],
        reporter=log_result,
    )

    for target, result in zip(targets, results):
        label = target if target == result.mac_address else f"{target} ({result.mac_address})"
        if result.success:
            click.echo(f"✓  {label} → {result.ip_address}:{result.port}")
        else:
            click.echo(f"✗  {label}: {result.error}", err=True)

    if notify and raw:
        send_notification(results, raw)

    if not all(r.success for r in results):
        sys.exit(2)


# ── packet command ────────────────────────────────────────────────────────────


@main.command()
@click.argument("mac_address")
def packet(mac_address: str) -> None:
    """Print the magic packet for MAC_ADDRESS as a hex dump."""
    from lanwake.core.address import parse_mac
    from lanwake.core.errors import InvalidAddressFormat
    from lanwake.core.packet import build_magic_packet, format_packet

    try:
        address = parse_mac(mac_address)
    except InvalidAddressFormat as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)
    data = build_magic_packet(address)
    click.echo(f"Magic packet for {address} ({len(data)} bytes)")
    click.echo(format_packet(data))


# ── hosts group ───────────────────────────────────────────────────────────────


@main.group()
def hosts() -> None:
    """Manage the host inventory."""


@hosts.command("list")
@click.pass_context
def hosts_list(ctx: click.Context) -> None:
    """List all configured hosts."""
    _, host_objs = _load_cfg(ctx.obj["config"])
    if not host_objs:
        click.echo("No hosts configured.")
        return
    click.echo(f"{'NAME':<20} {'MAC ADDRESS':<19} {'DESTINATION':<22} {'DESCRIPTION'}")
    click.echo("─" * 80)
    for h in host_objs:
        dest = f"{h.broadcast_ip}:{h.port}"
        click.echo(f"{h.name:<20} {h.mac_address:<19} {dest:<22} {h.description}")


@hosts.command("add")
@click.argument("name")
@click.argument("mac_address")
@click.option("--ip", "-i", "broadcast_ip", help="Destination address for this host")
@click.option("--port", "-p", type=click.IntRange(1, 65535), help="UDP port for this host")
@click.option("--interface", help="Local source IP to send from")
@click.option("--description", "-d", default="", help="Free-form description")
@click.pass_context
def hosts_add(
    ctx: click.Context,
    name: str,
    mac_address: str,
    broadcast_ip: Optional[str],
    port: Optional[int],
    interface: Optional[str],
    description: str,
) -> None:
    """Add a host (or replace one with the same NAME)."""
    from lanwake.config.loader import Host, hosts_from_config, runtime_settings, validate_config
    from lanwake.config.writer import build_config_dict, write_config
    from lanwake.core.address import parse_mac
    from lanwake.core.errors import InvalidAddressFormat

    try:
        address = parse_mac(mac_address)
    except InvalidAddressFormat as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)

    raw = _load_raw(ctx.obj["config"])
    if raw:
        errors = validate_config(raw)
        if errors:
            click.echo("Config validation errors:", err=True)
            for e in errors:
                click.echo(f"  • {e}", err=True)
            sys.exit(1)
    settings = runtime_settings(raw)
    host_objs = [h for h in hosts_from_config(raw) if h.name != name]
    host_objs.append(
        Host(
            name=name,
            mac_address=str(address),
            broadcast_ip=broadcast_ip or settings["broadcast_ip"],
            port=port or settings["port"],
            interface=interface,
            description=description,
        )
    )
    write_config(Path(ctx.obj["config"]), build_config_dict(host_objs, raw.get("settings")))
    click.echo(f"Saved host '{name}' ({address})")


@hosts.command("remove")
@click.argument("name")
@click.pass_context
def hosts_remove(ctx: click.Context, name: str) -> None:
    """Remove the host called NAME."""
    from lanwake.config.writer import build_config_dict, write_config

    raw, host_objs = _load_cfg(ctx.obj["config"])
    remaining = [h for h in host_objs if h.name != name]
    if len(remaining) == len(host_objs):
        click.echo(f"Host '{name}' not found.", err=True)
        sys.exit(1)
    write_config(Path(ctx.obj["config"]), build_config_dict(remaining, raw.get("settings")))
    click.echo(f"Removed host '{name}'")


# ── serve command ─────────────────────────────────────────────────────────────


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind host")
@click.option("--port", default=8000, show_default=True, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the lanwake HTTP API server."""
    import uvicorn

    from lanwake.api.routes import create_app

    app = create_app(config_path=ctx.obj["config"])
    click.echo(f"Starting lanwake API at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
