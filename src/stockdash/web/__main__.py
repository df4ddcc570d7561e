"""
启动 Web 服务: python -m stockdash.web
"""

import uvicorn

from stockdash.web.config import WebConfig


def main() -> None:
    config = WebConfig.from_env()
    uvicorn.run(
        "stockdash.web.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
    )


if __name__ == "__main__":
    main()
