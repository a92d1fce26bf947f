"""Markdown rendering for assistant answers.

LaTeX spans (``$...$`` and ``$$...$$``) are left untouched so KaTeX can
render them in the browser.
"""

import re

# Block math first so "$$" is never read as two inline delimiters.
_MATH_PATTERN = re.compile(r"\$\$[\s\S]+?\$\$|\$[^$\n]+?\$")
_PLACEHOLDER = "\x00MATH{}\x00"
_PLACEHOLDER_PATTERN = re.compile(r"\x00MATH(\d+)\x00")
_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_ALLOWED_LINK_SCHEMES = ("http://", "https://", "mailto:")


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _render_link(match: re.Match[str]) -> str:
    """Render a markdown link, or just its text when the URL is not web or mail."""
    label, url = match.group(1), match.group(2).strip()
    if not url.lower().startswith(_ALLOWED_LINK_SCHEMES):
        return label
    href = url.replace('"', "&quot;").replace("'", "&#x27;")
    return f'<a href="{href}" class="text-blue-600 underline" target="_blank">{label}</a>'


def _render_lists(text: str, item_pattern: str, tag: str, classes: str) -> str:
    lines = text.split("\n")
    in_list = False
    result = []
    for line in lines:
        stripped = line.strip()
        if re.match(item_pattern, stripped):
            if not in_list:
                result.append(f'<{tag} class="{classes}">')
                in_list = True
            item = re.sub(item_pattern, "", stripped)
            result.append(f"<li>{item}</li>")
        else:
            if in_list:
                result.append(f"</{tag}>")
                in_list = False
            result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists, headings.
    Math spans are HTML-escaped but otherwise preserved verbatim.
    """
    math_spans: list[str] = []

    def stash(match: re.Match[str]) -> str:
        math_spans.append(match.group(0))
        return _PLACEHOLDER.format(len(math_spans) - 1)

    text = _MATH_PATTERN.sub(stash, text)
    text = _escape(text)

    # Code blocks (```code```)
    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )

    # Inline code (`code`)
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    # Headings (### text)
    text = re.sub(
        r"^#{1,6}\s+(.+)$",
        r'<div class="font-semibold mt-2">\1</div>',
        text,
        flags=re.MULTILINE,
    )

    # Bold (**text** or __text__)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)

    # Italic (*text* or _text_)
    text = re.sub(r"(?<![\w*])\*([^*\n]+)\*(?!\w)", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    # Links [text](url)
    text = _LINK_PATTERN.sub(_render_link, text)

    text = _render_lists(text, r"^[-*]\s+", "ul", "list-disc list-inside my-2 space-y-1")
    text = _render_lists(text, r"^\d+\.\s+", "ol", "list-decimal list-inside my-2 space-y-1")

    # Line breaks (preserve newlines as <br>)
    text = text.replace("\n", "<br>")

    return _PLACEHOLDER_PATTERN.sub(lambda m: _escape(math_spans[int(m.group(1))]), text)
