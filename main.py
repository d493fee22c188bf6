import sys

if sys.platform != "win32":
    try:
        import uvloop

        uvloop.install()
        print("uvloop enabled.")
    except ImportError:
        print("uvloop not found, using the default asyncio event loop.")

import asyncio
import logging

import uvicorn

from api.main import app as fastapi_app
from shared.config import get_config

logger = logging.getLogger(__name__)


async def main():
    config = get_config()

    logging.basicConfig(
        level=config.logging.level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    api_config = config.api
    uvicorn_config = uvicorn.Config(
        app=fastapi_app,
        host=api_config.host,
        port=api_config.port,
        log_level=config.logging.level.lower(),
        ssl_keyfile=api_config.ssl_key_path if api_config.enable_ssl else None,
        ssl_certfile=api_config.ssl_cert_path if api_config.enable_ssl else None,
    )
    server = uvicorn.Server(uvicorn_config)

    logger.info(f"Anime Companion API listening on {api_config.host}:{api_config.port}")
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped.")
