"""House Plants API — plants, rooms and watering history per user."""
