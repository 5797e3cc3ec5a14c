"""Flask 视图层."""
