"""
Main entry point for BALLRUNNER.

Runs the pygame simulator or a headless session depending on
BALLRUNNER_ENV.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from ballrunner.config.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the simulator version."""
    from ballrunner.simulator.window import SimulatorWindow

    window = SimulatorWindow(settings=settings)
    await window.run()


def run_headless(settings: Settings) -> dict:
    """Run one session without a window."""
    from ballrunner.headless import HeadlessRunner

    return HeadlessRunner(settings=settings).run()


def main() -> None:
    """Main entry point."""
    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("BALLRUNNER starting...")

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        elif settings.is_headless:
            logger.info("Running in headless mode")
            run_headless(settings)
        else:
            logger.error(f"Unknown environment: {settings.env}")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("BALLRUNNER stopped")


if __name__ == "__main__":
    main()
