# Copyright 2025 Inkwell contributors
# SPDX-License-Identifier: Apache-2.0

"""
Infrastructure Layer - Adapters between the renderer and the host process.

- HostChannel / HostRequests: the outbound request surface
- RecordingHostChannel: in-memory channel for replay and tests
- QtHostBridge: Qt signal transport connected to the command router
"""

from __future__ import annotations

from inkwell.ui.infrastructure.host_channel import (
    HostChannel,
    HostRequests,
    OutboundRequest,
    RecordingHostChannel,
)
from inkwell.ui.infrastructure.qt_bridge import QtHostBridge

__all__: list[str] = [
    "HostChannel",
    "HostRequests",
    "OutboundRequest",
    "RecordingHostChannel",
    "QtHostBridge",
]
