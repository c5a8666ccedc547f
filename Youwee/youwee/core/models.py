from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(slots=True)
class AppConfig:
    schema_version: int
    lock_timeout_seconds: float
    forward_timeout_ms: int
    single_instance_enabled: bool


@dataclass(frozen=True, slots=True)
class ExternalOpenUrlPayload:
    urls: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_urls(cls, urls: Iterable[str]) -> ExternalOpenUrlPayload:
        return cls(urls=tuple(str(url) for url in urls))

    def is_empty(self) -> bool:
        return not self.urls

    def to_dict(self) -> dict[str, object]:
        return {"urls": list(self.urls)}
