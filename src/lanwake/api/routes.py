"""FastAPI routes for the lanwake HTTP API."""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import BackgroundTasks, FastAPI
from fastapi.responses import JSONResponse

from lanwake import __version__
from lanwake.api.models import (
    BatchWakeRequest,
    BatchWakeResponse,
    HostResponse,
    StatusResponse,
    WakeResultResponse,
    WakeTarget,
)
from lanwake.config.loader import Host
from lanwake.core.wol import WakeRequest, WakeResult

logger = logging.getLogger(__name__)


class UnknownHost(LookupError):
    """Raised when a request names a host missing from the inventory."""


def create_app(config_path: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config_path: Path to lanwake config.yaml. If None, uses the default location.

    Returns:
        FastAPI application instance
    """
    from lanwake.config.loader import (
        find_host,
        hosts_from_config,
        load_config,
        runtime_settings,
        validate_config,
    )

    _config_path = (
        Path(config_path) if config_path else Path.home() / ".config/lanwake/config.yaml"
    )

    app = FastAPI(
        title="lanwake",
        version=__version__,
        description="Wake-on-LAN magic packet sender",
    )

    # ── App state ─────────────────────────────────────────────────────────────
    app.state.config_path = _config_path
    app.state.raw_config = {}
    app.state.hosts = []
    app.state.settings = runtime_settings(None)
    app.state.last_results = {}

    if _config_path.exists():
        raw = load_config(_config_path) or {}
        errors = validate_config(raw)
        if errors:
            logger.warning("Config validation errors: %s", errors)
        else:
            app.state.raw_config = raw
            app.state.hosts = hosts_from_config(raw)
            app.state.settings = runtime_settings(raw)
            logger.info("Loaded %d host(s) from %s", len(app.state.hosts), _config_path)
    else:
        logger.warning("Config not found at %s; only raw MAC addresses can be woken", _config_path)

    # ── Helpers ────────────────────────────────────────────────────────────────

    def _host_to_response(h: Host) -> HostResponse:
        return HostResponse(
            name=h.name,
            mac_address=h.mac_address,
            broadcast_ip=h.broadcast_ip,
            port=h.port,
            interface=h.interface,
            description=h.description,
        )

    def _result_to_response(r: WakeResult) -> WakeResultResponse:
        return WakeResultResponse(
            mac_address=r.mac_address,
            ip_address=r.ip_address,
            port=r.port,
            success=r.success,
            timestamp=r.timestamp,
            error=r.error,
            error_type=r.error_type,
        )

    def _to_request(target: WakeTarget) -> WakeRequest:
        settings = app.state.settings
        if target.host:
            host = find_host(app.state.hosts, target.host)
            if host is None:
                raise UnknownHost(target.host)
            request = host.to_request()
        elif target.mac_address:
            request = WakeRequest(
                target.mac_address,
                ip_address=settings["broadcast_ip"],
                port=settings["port"],
            )
        else:
            raise ValueError("Either 'host' or 'mac_address' is required")

        overrides: dict[str, Any] = {}
        if target.ip_address is not None:
            overrides["ip_address"] = target.ip_address
        if target.port is not None:
            overrides["port"] = target.port
        if target.interface is not None:
            overrides["interface"] = target.interface
        return dataclasses.replace(request, **overrides)

    def _record(result: WakeResult) -> None:
        from lanwake.notifications.notify import log_result

        log_result(result)
        app.state.last_results[result.mac_address] = result

    # ── JSON API ───────────────────────────────────────────────────────────────

    @app.get("/status", response_model=StatusResponse)
    async def get_status() -> StatusResponse:
        return StatusResponse(
            version=__version__,
            hosts=[_host_to_response(h) for h in app.state.hosts],
            recorded_results=len(app.state.last_results),
        )

    @app.get("/hosts", response_model=list[HostResponse])
    async def get_hosts() -> list[HostResponse]:
        return [_host_to_response(h) for h in app.state.hosts]

    # Plain ``def`` so the blocking socket send runs in the threadpool
    @app.post("/wake", response_model=None)
    def post_wake(target: WakeTarget, background_tasks: BackgroundTasks) -> JSONResponse:
        from lanwake.core.errors import TransmissionFailed, WakeError
        from lanwake.core.wol import wake_request
        from lanwake.notifications.notify import send_notification

        try:
            request = _to_request(target)
        except UnknownHost as exc:
            return JSONResponse({"error": f"Host '{exc}' not found"}, status_code=404)
        except ValueError as exc:
            return JSONResponse({"error": str(exc)}, status_code=422)

        status_code = 200
        try:
            result = wake_request(request, timeout=app.state.settings["timeout"])
        except TransmissionFailed as exc:
            result = WakeResult.failed(request, exc)
            status_code = 502
        except WakeError as exc:
            result = WakeResult.failed(request, exc)
            status_code = 422

        _record(result)
        if app.state.raw_config:
            background_tasks.add_task(send_notification, [result], app.state.raw_config)
        return JSONResponse(
            _result_to_response(result).model_dump(mode="json"), status_code=status_code
        )

    @app.post("/wake/batch", response_model=BatchWakeResponse)
    def post_wake_batch(
        body: BatchWakeRequest, background_tasks: BackgroundTasks
    ) -> Any:
        from lanwake.core.batch import wake_many
        from lanwake.notifications.notify import send_notification

        try:
            requests = [_to_request(t) for t in body.targets]
        except UnknownHost as exc:
            return JSONResponse({"error": f"Host '{exc}' not found"}, status_code=404)
        except ValueError as exc:
            return JSONResponse({"error": str(exc)}, status_code=422)

        results = wake_many(
            requests,
            timeout=app.state.settings["timeout"],
            max_workers=app.state.settings["workers"],
            reporter=_record,
        )
        if app.state.raw_config:
            background_tasks.add_task(send_notification, results, app.state.raw_config)
        sent = sum(1 for r in results if r.success)
        return BatchWakeResponse(
            results=[_result_to_response(r) for r in results],
            sent=sent,
            failed=len(results) - sent,
        )

    @app.get("/results/{mac_address}", response_model=None)
    async def get_result(mac_address: str) -> JSONResponse:
        from lanwake.core.address import parse_mac
        from lanwake.core.errors import InvalidAddressFormat

        try:
            key = str(parse_mac(mac_address))
        except InvalidAddressFormat as exc:
            return JSONResponse({"error": str(exc)}, status_code=422)
        result = app.state.last_results.get(key)
        if result is None:
            return JSONResponse({"error": f"No result found for {key}"}, status_code=404)
        return JSONResponse(_result_to_response(result).model_dump(mode="json"))

    return app
