"""
export.py
Writes codeified lines out as an editor-looking HTML page or as plain text.
"""

import html

from bs4 import BeautifulSoup

THEME_CSS = """
body { margin: 0; background: #1e1e1e; color: #d4d4d4; }
pre { margin: 0; padding: 12px 0; font-family: Consolas, "Courier New", monospace; }
.line { display: flex; }
.ln { color: #858585; min-width: 4em; padding-right: 1.5em; text-align: right; user-select: none; }
.code { white-space: pre; }
.wrap .code { white-space: pre-wrap; word-break: break-word; }
.code-image { max-width: 60%; vertical-align: top; }
.text-vscode-keyword { color: #569cd6; }
.text-vscode-control { color: #c586c0; }
.text-vscode-function { color: #dcdcaa; }
.text-vscode-variable { color: #9cdcfe; }
.text-vscode-property { color: #9cdcfe; }
.text-vscode-class { color: #4ec9b0; }
.text-vscode-type { color: #4ec9b0; }
.text-vscode-number { color: #b5cea8; }
.text-vscode-string { color: #ce9178; }
.text-vscode-comment { color: #6a9955; }
.text-vscode-decorator { color: #dcdcaa; }
.text-vscode-bracket-1 { color: #ffd700; }
.text-vscode-bracket-2 { color: #da70d6; }
.text-vscode-bracket-3 { color: #179fff; }
"""


def render_html(lines, title: str = "index.ts", font_size: int = 14, word_wrap: bool = True) -> str:
    out = []
    out.append("<!DOCTYPE html>")
    out.append('<html><head><meta charset="utf-8">')
    out.append(f"<title>{html.escape(title)}</title>")
    out.append(f"<style>{THEME_CSS}</style>")
    out.append("</head>")
    out.append(f'<body><pre class="{"wrap" if word_wrap else "nowrap"}" style="font-size: {int(font_size)}px">')
    for line in lines:
        out.append(
            f'<div class="line"><span class="ln">{line.line_number}</span>'
            f'<span class="code">{line.content}</span></div>'
        )
    out.append("</pre></body></html>")
    return "\n".join(out)


def render_plain(lines) -> str:
    """Line-numbered text with the highlight markup stripped."""
    out = []
    for line in lines:
        text = BeautifulSoup(line.content, "html.parser").get_text() if line.content else ""
        out.append(f"{line.line_number:>5}  {text}".rstrip())
    return "\n".join(out) + "\n"
