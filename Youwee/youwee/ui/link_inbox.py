from __future__ import annotations

from PySide6.QtWidgets import QLabel, QListWidget, QPlainTextEdit, QVBoxLayout, QWidget

from ..controller.deep_link_bridge import DeepLinkBridge
from ..core.config import APP_NAME
from ..core.models import ExternalOpenUrlPayload


class LinkInboxWindow(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._bridge: DeepLinkBridge | None = None
        self.setWindowTitle(APP_NAME)
        self.resize(640, 420)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(8)
        self.title_label = QLabel("Incoming links", self)
        self.link_list = QListWidget(self)
        self.console_output = QPlainTextEdit(self)
        self.console_output.setReadOnly(True)
        self.console_output.setMaximumHeight(140)
        layout.addWidget(self.title_label)
        layout.addWidget(self.link_list, 1)
        layout.addWidget(self.console_output)

    def attach(self, bridge: DeepLinkBridge) -> None:
        if self._bridge is bridge:
            return
        self._bridge = bridge
        bridge.logChanged.connect(self.append_log)
        bridge.externalOpenUrl.connect(self.on_external_open_url)
        pending = bridge.consume_pending_links()
        if pending:
            self.append_log(f"Restored {len(pending)} link(s) received before startup finished.")
            self.add_links(pending)
        bridge.set_listener_ready(True)

    def detach(self) -> None:
        bridge = self._bridge
        if bridge is None:
            return
        self._bridge = None
        bridge.set_listener_ready(False)
        try:
            bridge.logChanged.disconnect(self.append_log)
            bridge.externalOpenUrl.disconnect(self.on_external_open_url)
        except (RuntimeError, TypeError):
            return

    def on_external_open_url(self, payload: ExternalOpenUrlPayload) -> None:
        self.add_links(payload.urls)

    def add_links(self, urls) -> None:
        for url in urls:
            value = str(url or "").strip()
            if value:
                self.link_list.addItem(value)

    def links(self) -> list[str]:
        return [self.link_list.item(index).text() for index in range(self.link_list.count())]

    def append_log(self, text: str) -> None:
        value = str(text or "").strip()
        if not value:
            return
        self.console_output.appendPlainText(value)
        self.console_output.verticalScrollBar().setValue(self.console_output.verticalScrollBar().maximum())

    def closeEvent(self, event) -> None:
        self.detach()
        super().closeEvent(event)
