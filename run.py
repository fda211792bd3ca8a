"""
Application Runner

This script is the entry point of a preview run inside a CI job.
Use: python run.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path to enable 'eas_preview' module imports
project_root = Path(__file__).parent.absolute()
sys.path.insert(0, str(project_root))

from eas_preview.logging_config import get_logger, setup_logging
from eas_preview.processor import PreviewProcessorError, process_preview


def main() -> int:
    """Render and post the preview comment, returning the exit status."""
    setup_logging()
    logger = get_logger("run")

    try:
        asyncio.run(process_preview())
    except PreviewProcessorError as e:
        logger.error("Preview comment was not delivered", error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
