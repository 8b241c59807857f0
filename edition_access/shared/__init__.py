"""Shared utilities and telemetry (no domain logic)."""
