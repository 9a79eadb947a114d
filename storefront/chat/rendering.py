"""HTML rendering for chat messages.

Model replies are lightweight Markdown and are converted to a restricted tag
subset. User and error messages are shown verbatim. All text is escaped
before any tag is produced, so nothing in a message can inject markup.
"""

import html
import re
from urllib.parse import urlparse

from storefront.models.schemas import ChatMessage, ChatRole

_ALLOWED_LINK_SCHEMES = {"", "http", "https", "mailto"}

_PRE_CLASSES = "bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"
_CODE_CLASSES = "bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs"
_LIST_CLASSES = {
    "ul": "list-disc list-inside my-2 space-y-1",
    "ol": "list-decimal list-inside my-2 space-y-1",
}

_TOKEN = re.compile(r"\x00(\d+)\x00")
_INLINE_CODE = re.compile(r"`([^`\n]+)`")
_LINK = re.compile(r"\[([^\]\n]+)\]\(([^)\s]+)\)")
_BOLD = re.compile(r"\*\*(.+?)\*\*|(?<!\w)__(.+?)__(?!\w)")
_ITALIC = re.compile(r"\*([^*\n]+)\*|(?<!\w)_([^_\n]+)_(?!\w)")
_HEADING = re.compile(r"^(#{1,6})\s+(.*)$")
_UNORDERED_ITEM = re.compile(r"^[-*+]\s+(.*)$")
_ORDERED_ITEM = re.compile(r"^\d+[.)]\s+(.*)$")


def escape_text(text: str) -> str:
    """Escape text for verbatim display, keeping line breaks."""
    return html.escape(text).replace("\n", "<br>")


def _safe_href(url: str) -> str | None:
    if urlparse(url).scheme.lower() not in _ALLOWED_LINK_SCHEMES:
        return None
    return html.escape(url, quote=True)


def _inline(text: str) -> str:
    """Convert inline Markdown (code, links, bold, italic) in one line."""
    stash: list[str] = []

    def keep(fragment: str) -> str:
        stash.append(fragment)
        return f"\x00{len(stash) - 1}\x00"

    def code(match: re.Match[str]) -> str:
        return keep(f'<code class="{_CODE_CLASSES}">{html.escape(match.group(1))}</code>')

    def link(match: re.Match[str]) -> str:
        label = html.escape(match.group(1))
        href = _safe_href(match.group(2))
        if href is None:
            return keep(label)
        return keep(
            f'<a href="{href}" class="text-blue-600 underline" target="_blank" '
            f'rel="noopener noreferrer">{label}</a>'
        )

    text = _INLINE_CODE.sub(code, text)
    text = _LINK.sub(link, text)
    text = html.escape(text)
    text = _BOLD.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", text)
    text = _ITALIC.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", text)
    # Link labels may hold stashed code spans, so restore until none remain
    while _TOKEN.search(text):
        text = _TOKEN.sub(lambda m: stash[int(m.group(1))], text)
    return text


def markdown_to_html(text: str) -> str:
    """Convert model-authored Markdown to HTML for chat display.

    Supports: paragraphs, headings, bold, italic, inline code, code blocks,
    links, ordered and unordered lists. An unterminated code fence is rendered
    as code so that a partially streamed block displays sensibly.
    """
    lines = text.replace("\x00", "").replace("\r\n", "\n").split("\n")
    out: list[str] = []
    paragraph: list[str] = []
    fence: list[str] | None = None
    list_tag: str | None = None

    def flush_paragraph() -> None:
        if paragraph:
            out.append(f"<p>{'<br>'.join(paragraph)}</p>")
            paragraph.clear()

    def close_list() -> None:
        nonlocal list_tag
        if list_tag:
            out.append(f"</{list_tag}>")
            list_tag = None

    def emit_fence(body: list[str]) -> None:
        code = html.escape("\n".join(body))
        out.append(f'<pre class="{_PRE_CLASSES}"><code>{code}</code></pre>')

    for line in lines:
        stripped = line.strip()

        if fence is not None:
            if stripped.startswith("```"):
                emit_fence(fence)
                fence = None
            else:
                fence.append(line)
            continue

        if stripped.startswith("```"):
            flush_paragraph()
            close_list()
            fence = []
            continue

        item = _UNORDERED_ITEM.match(stripped) or _ORDERED_ITEM.match(stripped)
        if item:
            flush_paragraph()
            tag = "ul" if _UNORDERED_ITEM.match(stripped) else "ol"
            if list_tag != tag:
                close_list()
                out.append(f'<{tag} class="{_LIST_CLASSES[tag]}">')
                list_tag = tag
            out.append(f"<li>{_inline(item.group(1))}</li>")
            continue

        close_list()

        if not stripped:
            flush_paragraph()
            continue

        heading = _HEADING.match(stripped)
        if heading:
            flush_paragraph()
            level = len(heading.group(1))
            out.append(f"<h{level}>{_inline(heading.group(2))}</h{level}>")
            continue

        paragraph.append(_inline(stripped))

    if fence is not None:
        emit_fence(fence)
    flush_paragraph()
    close_list()

    return "".join(out)


def render_message(message: ChatMessage) -> str:
    """Render a transcript entry as HTML.

    Only model messages are interpreted as Markdown.
    """
    if message.role == ChatRole.MODEL:
        return markdown_to_html(message.text)
    return escape_text(message.text)
