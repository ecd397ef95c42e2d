"""Result reporting: logging and push notifications (ntfy.sh, Pushover)."""

import logging
from typing import Any, Sequence

import httpx

from lanwake.core.wol import WakeResult

logger = logging.getLogger(__name__)


def log_result(result: WakeResult) -> None:
    """Reporter for wake_many(): log one line per result."""
    if result.success:
        logger.info(
            "Magic packet for %s accepted for %s:%s", result.mac_address, result.ip_address, result.port
        )
    else:
        logger.warning(
            "Wake failed for %s (%s): %s", result.mac_address, result.error_type, result.error
        )


def send_notification(results: Sequence[WakeResult], config: dict[str, Any]) -> None:
    """
    Send a summary of a wake batch to the configured notification channels.

    Dispatches to:
      - ntfy.sh (if notifications.ntfy_topic is set)
      - Pushover (if notifications.pushover_token + pushover_user are set)

    Args:
        results: WakeResults from a batch
        config: Full config dict (reads config["settings"]["notifications"])
    """
    notif_config = (config.get("settings") or {}).get("notifications", {})
    if not notif_config or not results:
        return

    subject = _build_subject(results)
    body = _build_body(results)
    success = all(r.success for r in results)

    ntfy_topic = notif_config.get("ntfy_topic")
    if ntfy_topic:
        _send_ntfy(
            topic=ntfy_topic,
            title=subject,
            message=body,
            success=success,
            server=notif_config.get("ntfy_server", "https://ntfy.sh"),
        )

    pushover_token = notif_config.get("pushover_token")
    pushover_user = notif_config.get("pushover_user")
    if pushover_token and pushover_user:
        _send_pushover(
            token=pushover_token, user=pushover_user, title=subject, message=body, success=success
        )


# ── Formatters ────────────────────────────────────────────────────────────────


def _build_subject(results: Sequence[WakeResult]) -> str:
    failed = sum(1 for r in results if not r.success)
    # ntfy sends the title as an HTTP header, so keep it ASCII
    if not failed:
        return f"lanwake SENT: {len(results)} target(s)"
    return f"lanwake FAILED: {failed} of {len(results)} target(s)"


def _build_body(results: Sequence[WakeResult]) -> str:
    lines = []
    for r in results:
        if r.success:
            lines.append(f"✓ {r.mac_address} via {r.ip_address}:{r.port}")
        else:
            lines.append(f"✗ {r.mac_address}: {r.error}")
    lines.append(f"Sent at: {results[0].timestamp.isoformat()}")
    # Magic packets are never acknowledged
    lines.append("Delivery to the target is not confirmed.")
    return "\n".join(lines)


# ── Channels ──────────────────────────────────────────────────────────────────

PUSHOVER_URL = "https://api.pushover.net/1/messages.json"


def _post(channel: str, url: str, **kwargs: Any) -> bool:
    """POST one notification; HTTP and transport errors are logged, not raised."""
    try:
        httpx.post(url, timeout=10, **kwargs).raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("Failed to send %s notification: %s", channel, exc)
        return False
    logger.info("%s notification sent", channel)
    return True


def _send_ntfy(
    topic: str,
    title: str,
    message: str,
    success: bool,
    server: str = "https://ntfy.sh",
) -> bool:
    return _post(
        "ntfy",
        f"{server.rstrip('/')}/{topic}",
        content=message.encode("utf-8"),
        headers={
            "Title": title,
            "Priority": "default" if success else "high",
            "Tags": "alarm_clock" if success else "warning",
        },
    )


def _send_pushover(token: str, user: str, title: str, message: str, success: bool) -> bool:
    # Pushover priority 1 bypasses the recipient's quiet hours
    data = {
        "token": token,
        "user": user,
        "title": title,
        "message": message,
        "priority": "0" if success else "1",
    }
    return _post("Pushover", PUSHOVER_URL, data=data)
