"""Main entry point for Project Manager application."""

import logging
import sys

from pmapp.ui.application import create_application

logger = logging.getLogger(__name__)


def main() -> None:
    """
    Run the Project Manager application.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app, _window = create_application()
    exit_code = app.exec()
    logger.info("Project Manager exited")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
