"""viewkit 路由模块."""
