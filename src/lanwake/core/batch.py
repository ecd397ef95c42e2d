"""Batch wake orchestration."""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional, Union

from lanwake.core.errors import InvalidAddressFormat, WakeError
from lanwake.core.transport import DEFAULT_BROADCAST, DEFAULT_PORT, DEFAULT_TIMEOUT
from lanwake.core.wol import Sender, WakeRequest, WakeResult, wake_request

Entry = Union[WakeRequest, str, tuple]
Reporter = Callable[[WakeResult], Any]


def coerce_request(
    entry: Entry,
    default_ip: str = DEFAULT_BROADCAST,
    default_port: int = DEFAULT_PORT,
) -> WakeRequest:
    """
    Turn a batch entry into a WakeRequest.

    Accepts a WakeRequest, a bare MAC string, or a ``(mac, ip, port)`` tuple
    where trailing items may be omitted and None means "use the default".

    Raises:
        InvalidAddressFormat: For any other entry shape
    """
    if isinstance(entry, WakeRequest):
        return entry
    if isinstance(entry, str):
        return WakeRequest(entry, ip_address=default_ip, port=default_port)
    if isinstance(entry, (tuple, list)) and 1 <= len(entry) <= 3:
        mac, ip, port = (list(entry) + [None, None])[:3]
        return WakeRequest(
            mac,
            ip_address=default_ip if ip is None else ip,
            port=default_port if port is None else port,
        )
    raise InvalidAddressFormat(entry, "expected a MAC string, WakeRequest or (mac, ip, port)")


def wake_many(
    entries: Iterable[Entry],
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    max_workers: int = 1,
    reporter: Optional[Reporter] = None,
    sender: Optional[Sender] = None,
) -> list[WakeResult]:
    """
    Wake several targets, one WakeResult per entry in input order.

    Each entry is coerced, parsed, built and sent independently, so one bad
    entry does not abort the batch. Expected failures (WakeError) become
    failed results; anything else propagates. At most one send per entry.

    Args:
        entries: WakeRequests, MAC strings or (mac, ip, port) tuples
        timeout: Socket timeout per send
        max_workers: Thread pool size; 1 sends sequentially
        reporter: Called once per result, in input order
        sender: Replacement for send_packet (same signature)

    Returns:
        List of WakeResult aligned with *entries*
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    entries = list(entries)

    def _one(entry: Entry) -> WakeResult:
        try:
            request = coerce_request(entry)
        except InvalidAddressFormat as exc:
            return WakeResult.failed(WakeRequest(repr(entry)), exc)
        try:
            return wake_request(request, timeout=timeout, sender=sender)
        except WakeError as exc:
            return WakeResult.failed(request, exc)

    if max_workers == 1 or len(entries) < 2:
        results = []
        for entry in entries:
            result = _one(entry)
            if reporter:
                reporter(result)
            results.append(result)
        return results

    # Executor.map yields in submission order regardless of completion order
    with ThreadPoolExecutor(max_workers=min(max_workers, len(entries))) as pool:
        results = list(pool.map(_one, entries))
    if reporter:
        for result in results:
            reporter(result)
    return results
