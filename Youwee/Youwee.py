"""
Youwee - Deep link intake for the Youwee downloader

Copyright 2026 Youwee contributors

This program is licensed under the GNU General Public License v3.0
See the LICENSE file in the project root for the full license text.

SPDX-License-Identifier: GPL-3.0-or-later
"""
from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from youwee.controller.deep_link_bridge import DeepLinkBridge
from youwee.controller.pending_links import PendingLinkQueue
from youwee.controller.single_instance import SingleInstanceGuard, forward_arguments
from youwee.core.config import APP_NAME, APP_VERSION, INSTANCE_SERVER_NAME, default_config, load_or_create_config


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv if argv is None else argv)
    app = QApplication.instance() or QApplication(args)
    app.setApplicationName(APP_NAME)
    app.setApplicationDisplayName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_NAME)

    try:
        config = load_or_create_config()
    except RuntimeError:
        config = default_config()

    pending_queue = PendingLinkQueue(lock_timeout_seconds=config.lock_timeout_seconds)
    bridge = DeepLinkBridge(pending_queue)
    activation_args = args[1:]

    instance_guard = SingleInstanceGuard(INSTANCE_SERVER_NAME, on_arguments=bridge.handle_arguments)
    if config.single_instance_enabled and not instance_guard.acquire():
        if forward_arguments(
            activation_args,
            server_name=INSTANCE_SERVER_NAME,
            timeout_ms=config.forward_timeout_ms,
        ):
            return 0
        # The running instance did not take the links; start standalone with them.

    try:
        bridge.handle_arguments(activation_args)

        from youwee.ui.link_inbox import LinkInboxWindow

        window = LinkInboxWindow()
        window.show()
        window.attach(bridge)
        return app.exec()
    finally:
        instance_guard.release()


if __name__ == "__main__":
    raise SystemExit(main())
