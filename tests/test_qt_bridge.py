"""Tests for the Qt signal transport."""

from __future__ import annotations

from typing import Any

import pytest
from PySide6 import QtCore

from inkwell.ui import create_qt_renderer
from inkwell.ui.bootstrap import create_renderer
from inkwell.ui.infrastructure import QtHostBridge
from inkwell.ui.models.commands import CommandTag


@pytest.fixture(scope="module")
def qapp():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def _outbound(bridge: QtHostBridge) -> list[tuple[str, Any]]:
    received: list[tuple[str, Any]] = []
    bridge.outbound.connect(lambda command, content: received.append((command, content)))
    return received


def test_send_emits_outbound(qapp) -> None:
    bridge = QtHostBridge()
    received = _outbound(bridge)

    bridge.send("get-paths", {})

    assert received == [("get-paths", {})]


def test_deliver_reaches_the_router(qapp, tree_payload: dict) -> None:
    bridge = QtHostBridge()
    outbound = _outbound(bridge)
    renderer = create_renderer(bridge)
    bridge.connect_dispatcher(renderer.handle_message)

    bridge.deliver("paths", tree_payload)
    bridge.deliver("quicklook", {"hash": 6})

    assert renderer.context.path_index.node_count == 6
    assert outbound == [("file-get-quicklook", 6)]


def test_renderer_init_over_bridge(qapp) -> None:
    bridge = QtHostBridge()
    outbound = _outbound(bridge)
    create_renderer(bridge).init()
    assert [command for command, _ in outbound][-2:] == ["get-paths", "typo-request-lang"]


class TestCreateQtRenderer:
    """Tests for the Qt bootstrap path."""

    def test_inbound_is_connected(self, qapp, tree_payload: dict) -> None:
        renderer, bridge = create_qt_renderer()

        bridge.deliver("paths", tree_payload)
        bridge.deliver("dir-set-current", {"hash": 4})

        assert renderer.context.path_index.node_count == 6
        assert renderer.context.session.get_current_folder() is renderer.context.path_index.find(4)

    def test_requests_travel_on_the_given_bridge(self, qapp) -> None:
        bridge = QtHostBridge()
        outbound = _outbound(bridge)

        renderer, returned = create_qt_renderer(bridge)
        bridge.deliver(CommandTag.DIR_OPEN.value)

        assert returned is bridge
        assert renderer.context.path_index.root is None
        assert outbound == [("dir-open", {})]

    def test_bad_message_does_not_break_the_signal(self, qapp, ui) -> None:
        renderer, bridge = create_qt_renderer(ui=ui)

        bridge.deliver("paths", {"name": "no hash"})
        bridge.deliver("zoom-in")

        assert renderer.context.path_index.root is None
        ui.editor.zoom.assert_called_once_with(1)
