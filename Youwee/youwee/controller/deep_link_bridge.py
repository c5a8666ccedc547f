from __future__ import annotations

from collections.abc import Iterable

from PySide6.QtCore import QObject, Signal

from ..core.deep_links import extract_links_from_arguments
from ..core.models import ExternalOpenUrlPayload
from .pending_links import PendingLinkQueue


class DeepLinkBridge(QObject):
    externalOpenUrl = Signal(object)
    logChanged = Signal(str)

    def __init__(self, queue: PendingLinkQueue, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._queue = queue
        self._listener_ready = False

    @property
    def queue(self) -> PendingLinkQueue:
        return self._queue

    def is_listener_ready(self) -> bool:
        return self._listener_ready

    def set_listener_ready(self, ready: bool) -> None:
        self._listener_ready = bool(ready)
        if self._listener_ready:
            self.flush()

    def handle_arguments(self, args: Iterable[object] | None) -> list[str]:
        links = extract_links_from_arguments(args)
        if not links:
            return []
        self._queue.enqueue(links)
        self.logChanged.emit(f"[deep-link] Received {len(links)} link(s) from activation.")
        if self._listener_ready:
            self.flush()
        return links

    def enqueue_links(self, urls: Iterable[str] | None) -> None:
        self._queue.enqueue(list(urls or ()))
        if self._listener_ready:
            self.flush()

    def consume_pending_links(self) -> list[str]:
        return self._queue.take_all()

    def flush(self) -> ExternalOpenUrlPayload | None:
        if not self._listener_ready:
            return None
        urls = self._queue.take_all()
        if not urls:
            return None
        payload = ExternalOpenUrlPayload.from_urls(urls)
        self.externalOpenUrl.emit(payload)
        return payload
