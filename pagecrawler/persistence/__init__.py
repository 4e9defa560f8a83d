"""Snapshot persistence for exported event logs."""

from .snapshot import read_snapshot, write_snapshot

__all__ = ["read_snapshot", "write_snapshot"]
