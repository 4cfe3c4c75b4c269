"""House Plants API routers."""
