"""NiceGUI chat interface for the problem solver."""

import os

from nicegui import events, ui

from problem_solver.ui.client import ChatAPIClient
from problem_solver.ui.conversation import ConversationStore, Message, PendingAttachment
from problem_solver.ui.formatting import markdown_to_html

MODEL_OPTIONS = {"flash": "Flash", "pro": "Pro"}

# Enter sends; Shift+Enter keeps its default and inserts a newline.
ENTER_KEY_JS = """(e) => {
    if (e.key !== "Enter") return;
    if (!e.shiftKey) e.preventDefault();
    emit({shiftKey: e.shiftKey});
}"""

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/katex@0.16.11/dist/katex.min.css">
<script defer src="https://cdn.jsdelivr.net/npm/katex@0.16.11/dist/katex.min.js"></script>
<script defer src="https://cdn.jsdelivr.net/npm/katex@0.16.11/dist/contrib/auto-render.min.js"></script>
<script>
    window.renderMath = () => {
        if (!window.renderMathInElement) return;
        renderMathInElement(document.body, {
            delimiters: [
                {left: '$$', right: '$$', display: true},
                {left: '$', right: '$', display: false},
            ],
            throwOnError: false,
        });
    };
</script>
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #0f172a; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.3);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #0ea5e9 0%, #6366f1 100%); }

    .message-user {
        background: linear-gradient(135deg, #0ea5e9 0%, #6366f1 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar-user { background: linear-gradient(135deg, #0ea5e9 0%, #6366f1 100%); }
    .avatar-assistant { background: #475569; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #6366f1;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #6366f1; }

    .send-btn { background: linear-gradient(135deg, #0ea5e9 0%, #6366f1 100%) !important; }

    .message-assistant strong { font-weight: 600; }
    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-assistant a { color: #4f46e5; }
    .katex-display { overflow-x: auto; overflow-y: hidden; }
</style>
"""


def is_send_keypress(args: dict | None) -> bool:
    """True for a plain Enter, False when Shift is held."""
    return not (args or {}).get("shiftKey", False)


@ui.page("/")
def chat_page() -> None:
    """Landing screen followed by the problem-solving workbench."""
    ui.add_head_html(CUSTOM_CSS)
    store = ConversationStore()
    api_client = ChatAPIClient()

    messages_container: ui.column
    send_btn: ui.button
    attachment_row: ui.row
    upload: ui.upload

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "engineering"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_message(msg: Message) -> None:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if msg.attachment_name:
                        with ui.row().classes("items-center gap-1 text-xs opacity-80"):
                            ui.icon("attach_file").classes("text-sm")
                            ui.label(msg.attachment_name)
                    if is_user:
                        ui.label(msg.text).classes("text-sm whitespace-pre-wrap")
                    else:
                        ui.html(markdown_to_html(msg.text), sanitize=False).classes(
                            "text-sm leading-relaxed"
                        )
                ui.label(msg.time).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_thinking_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label("Solving...").classes("text-sm text-gray-500 italic")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for msg in store.messages:
                render_message(msg)
            if store.awaiting_response:
                render_thinking_indicator()
        ui.run_javascript("window.renderMath && window.renderMath()")

    def refresh_attachment() -> None:
        attachment_row.clear()
        attachment = store.pending_attachment
        attachment_row.set_visibility(attachment is not None)
        if attachment is None:
            return
        with attachment_row:
            ui.icon("description").classes("text-indigo-500")
            ui.label(attachment.name).classes("text-xs text-gray-600")
            ui.button(icon="close", on_click=remove_attachment).props("flat round dense size=sm")

    def remove_attachment() -> None:
        store.clear_attachment()
        upload.reset()
        refresh_attachment()

    async def on_upload(e: events.UploadEventArguments) -> None:
        store.select_attachment(
            PendingAttachment(
                content=await e.file.read(),
                mime_type=e.file.content_type or "application/octet-stream",
                name=e.file.name,
            )
        )
        upload.reset()
        refresh_attachment()

    async def send_message() -> None:
        if store.awaiting_response:
            return

        def on_sent() -> None:
            send_btn.disable()
            refresh_messages()
            refresh_attachment()

        await store.send(store.draft or "", api_client, on_sent=on_sent)
        send_btn.enable()
        refresh_messages()
        refresh_attachment()

    async def on_enter(e: events.GenericEventArguments) -> None:
        if is_send_keypress(e.args):
            await send_message()

    def new_chat() -> None:
        store.reset()
        refresh_messages()
        refresh_attachment()

    def open_workbench() -> None:
        landing.set_visibility(False)
        workbench.set_visibility(True)

    # === Landing ===
    with ui.column().classes(
        "w-full min-h-screen items-center justify-center gap-6 text-center"
    ) as landing:
        ui.icon("engineering").classes("text-7xl text-sky-400")
        ui.label("Engineering Problem Solver").classes("text-4xl font-semibold text-white")
        ui.label(
            "Step-by-step solutions with formulas, from your questions, PDFs and sketches."
        ).classes("text-lg text-slate-300")
        ui.button("Open workbench", icon="arrow_forward", on_click=open_workbench).props(
            "unelevated"
        ).classes("send-btn text-white")

    # === Workbench ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8") as workbench,
        ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("engineering").classes("text-white text-3xl")
                ui.label("Problem Solver").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                ui.toggle(MODEL_OPTIONS).bind_value(store, "model").props(
                    "dense rounded unelevated toggle-color=white color=indigo-9 text-color=white"
                )
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Pending attachment
        attachment_row = ui.row().classes("w-full px-4 pt-2 items-center gap-2")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            upload = (
                ui.upload(on_upload=on_upload, auto_upload=True, max_files=1)
                .props('accept=".pdf,image/*" flat dense hide-upload-btn')
                .classes("w-40")
            )
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                (
                    ui.textarea(placeholder="Describe your engineering problem...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .bind_value(store, "draft")
                    .on("keydown", on_enter, js_handler=ENTER_KEY_JS)
                )
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
            )

    workbench.set_visibility(False)
    refresh_messages()
    refresh_attachment()


def main() -> None:
    ui.run(title="Problem Solver", port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()
