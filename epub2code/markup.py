"""
markup.py
Syntax-highlight spans. Text passed here must already be escaped.
"""

PREFIX = "text-vscode-"
INDENT = "  "


def span(role: str, text: str) -> str:
    return f'<span class="{PREFIX}{role}">{text}</span>'


def kw(text):
    return span("keyword", text)


def ctrl(text):
    return span("control", text)


def fn(text):
    return span("function", text)


def var(text):
    return span("variable", text)


def prop(text):
    return span("property", text)


def cls(text):
    return span("class", text)


def typ(text):
    return span("type", text)


def num(text):
    return span("number", str(text))


def string(text):
    return span("string", text)


def comment(text):
    return span("comment", text)


def bracket(text, level=1):
    return span(f"bracket-{level}", text)


def decorator(text):
    return span("decorator", text)


def indent(line: str, depth: int = 1) -> str:
    return INDENT * depth + line if line else line
