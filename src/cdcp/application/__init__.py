"""Application layer: use-case services, patching and ports."""
