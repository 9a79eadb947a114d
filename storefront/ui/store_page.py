"""NiceGUI storefront page: product grid plus the floating chat assistant."""

import os

from nicegui import ui

from storefront.agent.clients import build_chat_client
from storefront.agent.config import get_chat_config
from storefront.catalog.products import ProductCatalog, ProductTile
from storefront.chat.controller import ChatController
from storefront.ui.chat_widget import ChatWidget

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .product-tile {
        border: 1px solid #ccc;
        border-radius: 10px;
        box-shadow: 0 2px 5px rgba(0, 0, 0, 0.1);
        text-align: center;
    }

    .chat-widget {
        max-height: 400px;
        border-radius: 10px;
        overflow: hidden;
        box-shadow: 0 4px 12px rgba(0, 0, 0, 0.2);
        z-index: 1000;
    }

    .header { background: #7b61ff; }

    .message-user > div:first-child {
        background: #7b61ff;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-model > div:first-child {
        background: #f1f1f1;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-error > div:first-child {
        background: #fee2e2;
        color: #991b1b;
        border-radius: 18px;
    }

    .send-btn { background: #7b61ff !important; color: white !important; }

    /* Markdown styling */
    .message-model strong { font-weight: 600; }
    .message-model em { font-style: italic; }
    .message-model p + p { margin-top: 0.5rem; }
    .message-model code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-model a { color: #4f46e5; }
</style>
"""


def render_tile(tile: ProductTile) -> None:
    with ui.card().classes("product-tile w-full p-3 items-center gap-1"):
        ui.image(tile.image_url).classes("w-full h-48 rounded-lg").props("fit=cover")
        ui.label(tile.name).classes("text-lg font-semibold")
        ui.label(tile.description).classes("text-sm text-gray-600")
        ui.label(tile.price_text).classes("font-bold text-green-700")


@ui.page("/")
def store_page() -> None:
    """Main storefront page."""
    ui.add_head_html(CUSTOM_CSS)
    catalog = ProductCatalog()
    chat_config = get_chat_config()

    def render_grid() -> None:
        grid_container.clear()
        with grid_container:
            tiles = catalog.tiles()
            if not tiles:
                ui.label("No products found").classes("text-gray-500")
                return
            with ui.grid(columns=catalog.config.columns).classes("w-full gap-5"):
                for tile in tiles:
                    render_tile(tile)

    async def load_products() -> None:
        await catalog.load()
        render_grid()

    # === Product grid ===
    with ui.column().classes("w-full p-5 items-center"):
        ui.label("Simple Shop").classes("text-3xl font-bold")
        grid_container = ui.column().classes("w-full mt-5")
    render_grid()
    ui.timer(0.1, load_products, once=True)

    # === Chat widget ===
    async def handle_send() -> None:
        await controller.send(widget.input_value)

    def handle_cancel() -> None:
        controller.cancel()

    widget = ChatWidget(on_send=handle_send, on_cancel=handle_cancel)
    controller = ChatController(
        build_chat_client(chat_config),
        widget,
        stream_timeout=chat_config.stream_timeout,
    )
    controller.initialize()


def main() -> None:
    ui.run(title="Simple Shop", port=int(os.getenv("PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()
