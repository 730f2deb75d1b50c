import copy
from typing import Any

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from chainvault.app import App
from chainvault.config import Config
from chainvault.web.server import create_fastapi_app


def uvicorn_log_config(debug: bool) -> dict[str, Any]:
    """Uvicorn's logging config with timestamped formats; access lines only in debug."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s %(levelprefix)s %(message)s"
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s %(levelprefix)s %(client_addr)s "%(request_line)s" %(status_code)s'
    log_config["loggers"]["uvicorn.access"]["level"] = "INFO" if debug else "WARNING"
    return log_config


def run_server(app: App, config: Config) -> None:
    uvicorn.run(
        create_fastapi_app(app, config),
        host=config.host,
        port=config.port,
        log_config=uvicorn_log_config(config.debug),
    )
