"""Application layer: ports, DTOs, services and use cases."""
