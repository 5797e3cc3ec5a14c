"""工具模块(日志、表单提交边界)."""
