"""Application entry point for the ChainVault backend server."""

from chainvault.app import App
from chainvault.config import Config
from chainvault.logging import setup_logging
from chainvault.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
