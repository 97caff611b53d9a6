"""服务入口 -- python -m intendhooks.gateway

启动前先加载 .env（已存在的环境变量优先），
监听地址由 INTENDHOOKS_HOST / INTENDHOOKS_PORT 配置，默认 127.0.0.1:8000。
"""

import uvicorn
from intendhooks.core.config import get_bind_host, get_bind_port, load_env_file


def main() -> None:
    """加载 .env 后启动 uvicorn"""
    load_env_file()
    uvicorn.run(
        "intendhooks.gateway.main:app",
        host=get_bind_host(),
        port=get_bind_port(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
