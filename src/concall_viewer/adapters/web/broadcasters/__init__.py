"""Broadcasters for web adapter."""

from concall_viewer.adapters.web.broadcasters.state_broadcaster import StateBroadcaster

__all__ = ["StateBroadcaster"]
