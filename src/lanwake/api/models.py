"""Pydantic request/response models for the lanwake API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class WakeTarget(BaseModel):
    """Either a configured host name or a raw MAC address, plus optional overrides."""

    host: Optional[str] = None
    mac_address: Optional[str] = None
    ip_address: Optional[str] = None
    port: Optional[int] = None
    interface: Optional[str] = None


class BatchWakeRequest(BaseModel):
    targets: list[WakeTarget]


class HostResponse(BaseModel):
    name: str
    mac_address: str
    broadcast_ip: str
    port: int
    interface: Optional[str]
    description: str


class WakeResultResponse(BaseModel):
    mac_address: str
    ip_address: str
    port: int
    success: bool
    timestamp: datetime
    error: Optional[str]
    error_type: Optional[str]


class BatchWakeResponse(BaseModel):
    results: list[WakeResultResponse]
    sent: int
    failed: int


class StatusResponse(BaseModel):
    version: str
    hosts: list[HostResponse]
    recorded_results: int
