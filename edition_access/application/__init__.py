"""Application layer: ports, DTOs, and the access engine services."""
