"""NiceGUI chat interface backed by the session API."""

import logging
import os
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

import httpx
from nicegui import events, ui

from docchat.agent.session import ERROR_REPLY
from docchat.parsing.document_parser import ACCEPTED_TYPES

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    # Escape HTML entities first
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-indigo-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*]+)\*", r"<em>\1</em>", text)

    text = re.sub(
        r"\[([^\]]+)\]\(([^)]+)\)",
        r'<a href="\2" class="text-indigo-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list(text, r"^[-*]\s+", '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>")
    text = _wrap_list(text, r"^\d+\.\s+", '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>")

    return text.replace("\n", "<br>")


def _wrap_list(text: str, marker: str, open_tag: str, close_tag: str) -> str:
    """Turn consecutive lines starting with ``marker`` into one HTML list."""
    in_list = False
    result = []
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(close_tag)
                in_list = False
            result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f9fafb; min-height: 100vh; }

    .panel {
        background: white;
        border-radius: 8px;
        box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1);
    }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 8px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #111827;
        border-radius: 8px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #4f46e5;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .file-dot { width: 8px; height: 8px; background: #4f46e5; border-radius: 50%; }

    .message-assistant strong { font-weight: 600; }
    .message-assistant em { font-style: italic; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


class PageState:
    """UI state of one browser page."""

    def __init__(self) -> None:
        self.session_id: str | None = None
        self.files: list[str] = []
        self.messages: list[dict] = []
        self.is_busy: bool = False
        self.on_busy_change: Callable[[bool], None] | None = None

    def add_message(self, role: str, content: str) -> None:
        self.messages.append({
            "role": role,
            "content": content,
            "time": datetime.now().strftime("%I:%M %p"),
        })

    def _set_busy(self, busy: bool) -> None:
        self.is_busy = busy
        if self.on_busy_change is not None:
            self.on_busy_change(busy)

    @contextmanager
    def processing(self) -> Iterator[None]:
        """Mark the page busy for the duration of the block.

        The page is always returned to idle, whatever the block raises.
        """
        self._set_busy(True)
        try:
            yield
        finally:
            self._set_busy(False)


async def _request(method: str, path: str, **kwargs: Any) -> httpx.Response:
    """Call the API. No timeout: a slow model keeps the page waiting."""
    async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=None) as client:
        response = await client.request(method, path, **kwargs)
        response.raise_for_status()
        return response


async def create_session() -> str:
    response = await _request("POST", "/sessions")
    return response.json()["session_id"]


async def upload_documents(session_id: str, files: list[tuple[str, bytes, str]]) -> dict:
    response = await _request(
        "POST",
        f"/sessions/{session_id}/documents",
        files=[("files", file) for file in files],
    )
    return response.json()


async def send_chat(session_id: str, message: str) -> str:
    response = await _request(
        "POST", f"/sessions/{session_id}/chat", json={"message": message}
    )
    return response.json()["reply"]["content"]


async def reset_session(session_id: str) -> None:
    await _request("POST", f"/sessions/{session_id}/reset")


async def delete_session(session_id: str) -> None:
    await _request("DELETE", f"/sessions/{session_id}")


async def release_session(state: PageState) -> None:
    """Delete the page's API session, if it ever created one."""
    if state.session_id is None:
        return
    session_id, state.session_id = state.session_id, None
    try:
        await delete_session(session_id)
    except httpx.HTTPError as exc:
        logger.warning(f"Could not delete session {session_id}: {exc}")


def scroll_to_latest(area: ui.scroll_area) -> None:
    area.scroll_to(percent=1.0)


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    state = PageState()

    messages_scroll: ui.scroll_area
    messages_container: ui.column
    files_container: ui.column
    input_field: ui.input
    send_btn: ui.button
    uploader: ui.upload

    async def ensure_session() -> str:
        if state.session_id is None:
            state.session_id = await create_session()
        return state.session_id

    async def on_page_closed() -> None:
        await release_session(state)

    def set_busy(busy: bool) -> None:
        if busy:
            send_btn.disable()
            input_field.disable()
        else:
            send_btn.enable()
            input_field.enable()
        refresh_messages()

    def render_message(msg: dict) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[80%] gap-1"):
                with ui.element("div").classes(f"p-3 {bubble}"):
                    if is_user:
                        content = msg["content"].replace("\n", "<br>")
                    else:
                        content = markdown_to_html(msg["content"])
                    ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
                ui.label(msg["time"]).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def render_busy_indicator() -> None:
        with ui.row().classes("w-full justify-start"):
            with ui.element("div").classes("message-assistant p-3"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not state.messages and not state.is_busy:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Ask a question about your documents").classes(
                        "text-lg text-gray-400"
                    )
            for msg in state.messages:
                render_message(msg)
            if state.is_busy:
                render_busy_indicator()
        scroll_to_latest(messages_scroll)

    def refresh_files() -> None:
        files_container.clear()
        if not state.files:
            return
        with files_container:
            ui.label("Uploaded Files").classes("text-sm font-medium text-gray-900")
            for name in state.files:
                with ui.row().classes("items-center gap-2"):
                    ui.element("div").classes("file-dot")
                    ui.label(name).classes("text-sm text-gray-600")

    async def handle_upload(e: events.MultiUploadEventArguments) -> None:
        if state.is_busy:
            ui.notify("Please wait for the current request to finish", type="warning")
            uploader.reset()
            return

        try:
            with state.processing():
                files = [(f.name, await f.read(), f.content_type) for f in e.files]
                state.files.extend(name for name, _, _ in files)
                refresh_files()
                session_id = await ensure_session()
                await upload_documents(session_id, files)
        except httpx.HTTPError as exc:
            # Document failures do not reach the transcript
            logger.error(f"Error processing files: {exc}")
        finally:
            uploader.reset()

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if not text or state.is_busy:
            return

        input_field.value = ""
        state.add_message("user", text)

        with state.processing():
            try:
                session_id = await ensure_session()
                reply = await send_chat(session_id, text)
            except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
                logger.error(f"Chat request failed: {exc}")
                ui.notify(f"Request failed: {exc}", type="negative")
                reply = ERROR_REPLY
            state.add_message("assistant", reply)

    async def new_chat() -> None:
        if state.is_busy:
            return
        if state.session_id is not None:
            try:
                await reset_session(state.session_id)
            except httpx.HTTPError as exc:
                ui.notify(f"Could not start a new chat: {exc}", type="negative")
                return
        state.files.clear()
        state.messages.clear()
        refresh_files()
        refresh_messages()

    accept = ",".join([*ACCEPTED_TYPES, *ACCEPTED_TYPES.values()])

    # === UI Layout ===
    with ui.column().classes("w-full min-h-screen gap-0"):
        # Header
        with ui.row().classes("w-full bg-white shadow-sm px-8 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("psychology").classes("text-indigo-600 text-3xl")
                ui.label("Document Chat").classes("text-2xl font-bold text-gray-900")
            ui.button(icon="add", on_click=new_chat).props("flat round color=indigo")

        with ui.row().classes("w-full max-w-7xl mx-auto p-6 gap-6 items-start no-wrap"):
            # Upload panel
            with ui.column().classes("panel p-6 w-1/3 gap-4"):
                ui.label("Upload Documents").classes("text-lg font-medium text-gray-900")
                uploader = (
                    ui.upload(
                        multiple=True,
                        auto_upload=True,
                        on_multi_upload=handle_upload,
                        label="Drag & drop files here, or click to select files",
                    )
                    .props(f'accept="{accept}" flat bordered')
                    .classes("w-full")
                )
                files_container = ui.column().classes("w-full gap-2")

            # Chat panel
            with ui.column().classes("panel w-2/3 gap-0").style("height: 600px"):
                messages_scroll = ui.scroll_area().classes("flex-grow w-full")
                with messages_scroll, ui.column().classes("w-full p-4"):
                    messages_container = ui.column().classes("w-full gap-4")

                with ui.row().classes("w-full p-4 gap-4 items-center border-t no-wrap"):
                    input_field = (
                        ui.input(placeholder="Ask a question about your documents...")
                        .props("outlined dense")
                        .classes("flex-grow")
                        .on("keydown.enter", send_message)
                    )
                    send_btn = (
                        ui.button(icon="send", on_click=send_message)
                        .props("unelevated color=indigo")
                    )

    state.on_busy_change = set_busy
    ui.context.client.on_delete(on_page_closed)
    refresh_messages()


def main() -> None:
    ui.run(title="Document Chat", port=8080, reload=False)


if __name__ == "__main__":
    main()
