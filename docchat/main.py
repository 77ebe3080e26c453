"""Command line entry point: ``docchat``.

RUN_MODE=integrated (default) serves the API and the chat page from one
uvicorn process. RUN_MODE=separate starts the API on port 8000 and the
page on port 8080 as two child processes.
"""

import logging
import os
import subprocess
import sys

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

SEPARATE_COMMANDS = [
    ["-m", "uvicorn", "docchat.api.app:app", "--host", os.getenv("HOST", "0.0.0.0"), "--port", "8000"],
    ["-m", "docchat.ui.chat_page"],
]


def run_integrated() -> None:
    import uvicorn
    from nicegui import ui

    from docchat.api.app import create_app
    from docchat.ui.chat_page import chat_page  # noqa: F401 - registers the page

    app = create_app()
    ui.run_with(
        app,
        title="Document Chat",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "docchat-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Serving chat page and API (/docs) on port {port}")
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run API and page as child processes until the API exits or Ctrl+C."""
    procs = [subprocess.Popen([sys.executable, *args]) for args in SEPARATE_COMMANDS]
    try:
        procs[0].wait()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        for proc in procs:
            proc.terminate()
            proc.wait()


def main() -> None:
    if os.getenv("RUN_MODE", "integrated").lower() == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
