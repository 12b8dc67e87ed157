import logging
from typing import Optional

import uvicorn
from dotenv import load_dotenv

from weather_gateway.app import create_app
from weather_gateway.config import Config

logger = logging.getLogger("weather_gateway")


def configure_logging(config: Config) -> None:
    """Log to logs/weather_gateway.log and to the console"""
    config.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = config.log_dir / "weather_gateway.log"

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(),
        ],
    )


def main(config: Optional[Config] = None) -> None:
    load_dotenv()
    config = config or Config()
    configure_logging(config)

    app = create_app(config)
    logger.info(f"Listening for requests on http://{config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
