"""Application layer: DTOs, service wiring and use cases."""
