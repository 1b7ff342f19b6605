from __future__ import annotations

from typing import Optional, Protocol

from .model import Device


class DeviceRepository(Protocol):
    def get_by_id(self, device_id: int) -> Optional[Device]:
        raise NotImplementedError

    def get_by_mac(self, device_mac: str) -> Optional[Device]:
        raise NotImplementedError

    def create(self, *, device_mac: str, description: str) -> Device:
        raise NotImplementedError
