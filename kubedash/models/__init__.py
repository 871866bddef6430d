"""Data models for KubeDash: records, snapshots, store and UI state."""
