"""Application layer: service orchestrators over the batch store."""
