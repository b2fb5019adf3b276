"""Realtime infrastructure (Socket.IO fan-out of change events)."""
