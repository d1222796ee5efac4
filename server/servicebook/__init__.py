"""Workshop service-record tooling."""
