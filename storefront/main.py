"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the storefront page (port 8080).
Port 8000 is left to the product backend (PRODUCTS_API_URL).
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Port 8000 belongs to the product backend
DEFAULT_API_PORT = "8001"
DEFAULT_UI_PORT = "8080"


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles the chat relay routes, NiceGUI handles the page.
    Both accessible on the same port.
    """
    import uvicorn
    from nicegui import ui

    from storefront.api.app import create_app
    from storefront.ui.store_page import store_page  # noqa: F401 - Registers the page

    app = create_app()
    port = int(os.getenv("PORT", DEFAULT_UI_PORT))

    ui.run_with(
        app,
        title="Simple Shop",
        favicon="🛒",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "storefront-secret"),
    )

    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")
    logger.info(f"Storefront available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def separate_mode_commands() -> tuple[list[str], list[str]]:
    """Build the API and UI server commands for separate mode.

    Returns:
        The uvicorn command for the API and the command for the NiceGUI page.
    """
    api_command = [
        sys.executable,
        "-m",
        "uvicorn",
        "storefront.api.app:app",
        "--host",
        os.getenv("HOST", "0.0.0.0"),
        "--port",
        os.getenv("API_PORT", DEFAULT_API_PORT),
        "--reload",
    ]
    ui_command = [sys.executable, "-c", "from storefront.ui.store_page import main; main()"]
    return api_command, ui_command


def run_separate() -> None:
    """Run FastAPI and NiceGUI as separate servers.

    FastAPI on API_PORT (default 8001), NiceGUI on PORT (default 8080).
    Both stay clear of the product backend on port 8000.
    Useful when the page talks to the relay over CHAT_MODE=relay.
    """
    import asyncio
    import subprocess

    api_command, ui_command = separate_mode_commands()

    async def run_servers() -> None:
        logger.info(f"Starting FastAPI on http://localhost:{api_command[-2]}")
        logger.info(f"Starting NiceGUI on http://localhost:{os.getenv('PORT', DEFAULT_UI_PORT)}")

        fastapi_proc = subprocess.Popen(api_command)
        nicegui_proc = subprocess.Popen(ui_command)

        try:
            while True:
                await asyncio.sleep(1)
                if fastapi_proc.poll() is not None or nicegui_proc.poll() is not None:
                    break
        except KeyboardInterrupt:
            logger.info("Shutting down servers...")
        finally:
            fastapi_proc.terminate()
            nicegui_proc.terminate()
            fastapi_proc.wait()
            nicegui_proc.wait()

    asyncio.run(run_servers())


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on one port).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Storefront Assistant in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
