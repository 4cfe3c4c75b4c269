"""House Plants HTTP layer."""
