from __future__ import annotations

import json
from collections.abc import Callable, Sequence

from PySide6.QtCore import QByteArray, QObject, Signal
from PySide6.QtNetwork import QLocalServer, QLocalSocket

from ..core.config import INSTANCE_SERVER_NAME

MAX_ARGV_MESSAGE_BYTES = 256 * 1024
PROBE_TIMEOUT_MS = 300


def encode_argv_message(argv: Sequence[object]) -> bytes:
    values = [str(item) for item in argv or () if item is not None]
    return json.dumps({"argv": values}).encode("utf-8")


def decode_argv_message(data: bytes | bytearray | None) -> list[str]:
    raw = bytes(data or b"")
    if not raw or len(raw) > MAX_ARGV_MESSAGE_BYTES:
        return []
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeError, json.JSONDecodeError, ValueError):
        return []
    if not isinstance(payload, dict):
        return []
    argv = payload.get("argv")
    if not isinstance(argv, list):
        return []
    return [item for item in argv if isinstance(item, str)]


def forward_arguments(
    argv: Sequence[object],
    *,
    server_name: str = INSTANCE_SERVER_NAME,
    timeout_ms: int = 1500,
) -> bool:
    socket = QLocalSocket()
    try:
        socket.connectToServer(server_name)
        if not socket.waitForConnected(int(timeout_ms)):
            return False
        socket.write(QByteArray(encode_argv_message(argv)))
        socket.flush()
        # flush() usually drains the whole message; only wait on what is still queued.
        if socket.bytesToWrite() > 0 and not socket.waitForBytesWritten(int(timeout_ms)):
            return False
        return True
    finally:
        if socket.state() == QLocalSocket.LocalSocketState.ConnectedState:
            socket.disconnectFromServer()
            if socket.state() != QLocalSocket.LocalSocketState.UnconnectedState:
                socket.waitForDisconnected(int(timeout_ms))
        else:
            socket.abort()


class SingleInstanceGuard(QObject):
    argumentsReceived = Signal(list)

    def __init__(
        self,
        server_name: str = INSTANCE_SERVER_NAME,
        *,
        on_arguments: Callable[[list[str]], None] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._server_name = str(server_name or "").strip() or INSTANCE_SERVER_NAME
        self._server: QLocalServer | None = None
        self._buffers: dict[int, bytearray] = {}
        if on_arguments is not None:
            self.argumentsReceived.connect(on_arguments)

    @property
    def server_name(self) -> str:
        return self._server_name

    def is_primary(self) -> bool:
        return self._server is not None and self._server.isListening()

    def acquire(self) -> bool:
        if self.is_primary():
            return True
        probe = QLocalSocket()
        probe.connectToServer(self._server_name)
        if probe.waitForConnected(PROBE_TIMEOUT_MS):
            probe.disconnectFromServer()
            return False
        probe.abort()
        # Nobody answered; a crashed instance may have left its socket file behind.
        QLocalServer.removeServer(self._server_name)
        server = QLocalServer(self)
        server.newConnection.connect(self._on_new_connection)
        if not server.listen(self._server_name):
            # No peer answered; run unguarded.
            server.deleteLater()
            return True
        self._server = server
        return True

    def release(self) -> None:
        if self._server is None:
            return
        try:
            self._server.close()
        except Exception:
            pass
        self._server.deleteLater()
        self._server = None
        self._buffers.clear()

    def _on_new_connection(self) -> None:
        if self._server is None:
            return
        while self._server.hasPendingConnections():
            socket = self._server.nextPendingConnection()
            if socket is None:
                break
            key = id(socket)
            self._buffers[key] = bytearray()
            socket.readyRead.connect(lambda s=socket, k=key: self._on_ready_read(s, k))
            socket.disconnected.connect(lambda s=socket, k=key: self._on_disconnected(s, k))
            if socket.bytesAvailable() > 0:
                self._on_ready_read(socket, key)

    def _on_ready_read(self, socket: QLocalSocket, key: int) -> None:
        buffer = self._buffers.get(key)
        if buffer is None:
            return
        buffer.extend(bytes(socket.readAll().data()))
        if len(buffer) > MAX_ARGV_MESSAGE_BYTES:
            self._buffers.pop(key, None)
            socket.abort()

    def _on_disconnected(self, socket: QLocalSocket, key: int) -> None:
        if socket.bytesAvailable() > 0:
            self._on_ready_read(socket, key)
        buffer = self._buffers.pop(key, None)
        socket.deleteLater()
        if not buffer:
            return
        argv = decode_argv_message(buffer)
        if argv:
            self.argumentsReceived.emit(argv)
