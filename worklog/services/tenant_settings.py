from __future__ import annotations

from typing import Mapping

TRUTHY = {"1", "true", "yes", "y", "on"}


def coerce_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().casefold() in TRUTHY
    return False


class TenantSettings:
    """Read-only view over one company's settings, keyed by setting name."""

    def __init__(self, company_id: int, values: Mapping[str, object] | None = None) -> None:
        self.company_id = company_id
        self._values = dict(values or {})

    def get(self, key: str) -> bool:
        return coerce_flag(self._values.get(key))

    def raw(self, key: str) -> object | None:
        return self._values.get(key)

    def as_dict(self) -> dict[str, object]:
        return dict(self._values)
