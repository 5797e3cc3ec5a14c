"""viewkit 共享内核(异常定义等),不依赖 Flask."""
