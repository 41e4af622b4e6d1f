"""
renderers.py
Disguise renderers: each turns one chunk of prose into lines of highlighted
pseudocode. Renderers never number lines; the engine does that.

Every renderer embeds the whole chunk, escaped and possibly wrapped, in
string literals or comments. Wrapping only ever breaks at spaces, so no word
of the chunk is split or dropped.
"""

import re
from enum import Enum

from .config import CodeifierSettings
from .keywords import Keywords
from .markup import (
    bracket, cls, comment, ctrl, decorator, fn, indent, kw, num, prop,
    string, typ, var,
)
from .names import NameSynthesizer
from .text import escape_comment, escape_string, split_by_sentences, wrap_line


class StructureKind(str, Enum):
    # single statement
    CONST = "const"
    LET = "let"
    CONSOLE_LOG = "console-log"
    FUNCTION_CALL = "function-call"
    INLINE_COMMENT = "inline-comment"
    TYPE_ALIAS = "type-alias"
    STRING_LITERAL = "string-literal"
    # block
    TEMPLATE = "template"
    FUNCTION = "function"
    ASYNC_FUNCTION = "async-function"
    ARROW_FUNCTION = "arrow-function"
    GENERIC_FUNCTION = "generic-function"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    NAMESPACE = "namespace"
    METHOD = "method"
    BLOCK_COMMENT = "block-comment"
    # control flow
    CONDITIONAL = "conditional"
    TRY_CATCH = "try-catch"
    FOR_LOOP = "for-loop"
    CLASS_METHOD = "class-method"
    # list
    ARRAY = "array"
    # structural / meta
    IMPORT = "import"
    EXPORT = "export"
    DECORATOR_CLASS = "decorator-class"


class RenderContext:
    def __init__(self, keywords: Keywords, names: NameSynthesizer, settings: CodeifierSettings = None):
        self.keywords = keywords
        self.names = names
        self.settings = settings or CodeifierSettings()

    def wrap(self, escaped: str) -> list:
        return wrap_line(escaped, self.settings.wrap_width, self.settings.wrap_threshold)

    def variable(self, suffix: str = "") -> str:
        return self.names.variable_name(self.keywords, suffix)

    def function(self, prefix: str = None) -> str:
        return self.names.function_name(self.keywords, prefix)

    def type(self, suffix: str = "") -> str:
        return self.names.type_name(self.keywords, suffix)


# -----------------------
# Line builders
# -----------------------

def _string_lines(head: str, text: str, tail: str, ctx: RenderContext, depth: int = 0, quote: str = '"') -> list:
    """A string literal after `head`, continued with + when it wraps."""
    parts = ctx.wrap(escape_string(text))
    if len(parts) == 1:
        return [indent(head + string(f"{quote}{parts[0]}{quote}") + tail, depth)]

    lines = [indent(head + string(f"{quote}{parts[0]} {quote}") + " +", depth)]
    for part in parts[1:-1]:
        lines.append(indent(string(f"{quote}{part} {quote}") + " +", depth + 1))
    lines.append(indent(string(f"{quote}{parts[-1]}{quote}") + tail, depth + 1))
    return lines


def _comment_lines(text: str, ctx: RenderContext, depth: int = 0, lead: str = "// ") -> list:
    return [indent(comment(lead + part), depth) for part in ctx.wrap(escape_comment(text))]


def _call(name: str, args: str = "") -> str:
    return fn(name) + bracket("(") + args + bracket(")")


def _open(head: str, depth: int = 0) -> str:
    return indent(f"{head} " + bracket("{", 3), depth)


def _close(depth: int = 0, tail: str = "") -> str:
    return indent(bracket("}", 3) + tail, depth)


def _this(name: str) -> str:
    return kw("this") + "." + prop(name)


def _await_line(text: str, name: str, ctx: RenderContext, depth: int = 1) -> list:
    head = ctrl("await") + " " + fn(name) + bracket("(")
    return _string_lines(head, text, bracket(")") + ";", ctx, depth)


def _console_error(depth: int) -> str:
    return indent(var("console") + "." + _call("error", var("error")) + ";", depth)


# -----------------------
# Single statement family
# -----------------------

def render_const(text, ctx):
    head = f"{kw('const')} {var(ctx.variable('Text'))} = "
    return _string_lines(head, text, ";", ctx)


def render_let(text, ctx):
    head = f"{kw('let')} {var(ctx.variable('Value'))} = "
    return _string_lines(head, text, ";", ctx)


def render_string_literal(text, ctx):
    head = f"{kw('const')} {var(ctx.variable('Message'))} = "
    return _string_lines(head, text, ";", ctx)


def render_console_log(text, ctx):
    head = var("console") + "." + fn("log") + bracket("(")
    return _string_lines(head, text, bracket(")") + ";", ctx)


def render_function_call(text, ctx):
    head = fn(ctx.function()) + bracket("(")
    return _string_lines(head, text, bracket(")") + ";", ctx)


def render_inline_comment(text, ctx):
    return _comment_lines(text, ctx)


def render_type_alias(text, ctx):
    parts = ctx.wrap(escape_comment(text))
    alias = f"{kw('type')} {typ(ctx.type())} = {typ('string')}; "
    lines = [alias + comment("// " + parts[0])]
    lines.extend(comment("// " + part) for part in parts[1:])
    return lines


# -----------------------
# Block family
# -----------------------

def render_template(text, ctx):
    name = ctx.variable("Template")
    lines = [f"{kw('const')} {var(name)} = " + string("`")]
    lines.append(indent(string("&lt;" + cls("div") + " " + prop("className") + "=" + f'"{name.lower()}"' + "&gt;")))
    lines.extend(indent(string(part), 2) for part in ctx.wrap(escape_string(text)))
    lines.append(indent(string("&lt;/" + cls("div") + "&gt;")))
    lines.append(string("`") + ";")
    return lines


def render_function(text, ctx):
    lines = [_open(kw("function") + " " + _call(ctx.function()))]
    lines.extend(_string_lines(ctrl("return") + " ", text, ";", ctx, depth=1))
    lines.append(_close())
    return lines


def render_async_function(text, ctx):
    outer = ctx.function()
    inner = ctx.function(prefix="fetch")
    lines = [_open(f"{ctrl('async')} {kw('function')} " + _call(outer))]
    lines.append(_open(kw("try"), 1))
    head = f"{kw('const')} {var(ctx.variable('Result'))} = {ctrl('await')} " + fn(inner) + bracket("(")
    lines.extend(_string_lines(head, text, bracket(")") + ";", ctx, depth=2))
    lines.append(indent(bracket("}", 3) + f" {kw('catch')} " + bracket("(") + var("error") + bracket(")") + " " + bracket("{", 3), 1))
    lines.append(_console_error(2))
    lines.append(_close(1))
    lines.append(_close())
    return lines


def render_arrow_function(text, ctx):
    head = f"{kw('const')} {fn(ctx.function())} = " + bracket("()") + " =&gt;"
    lines = [_open(head)]
    lines.extend(_string_lines(ctrl("return") + " ", text, ";", ctx, depth=1))
    lines.append(_close(tail=";"))
    return lines


def render_generic_function(text, ctx):
    generic = bracket("&lt;") + typ("T") + bracket("&gt;")
    params = bracket("(") + var("input") + ": " + typ("T") + bracket(")")
    head = kw("function") + " " + fn(ctx.function()) + generic + params + ": " + typ("string")
    lines = [_open(head)]
    lines.extend(_string_lines(ctrl("return") + " ", text, ";", ctx, depth=1))
    lines.append(_close())
    return lines


def render_class(text, ctx):
    lines = [_open(kw("class") + " " + cls(ctx.type()))]
    lines.append(_open(_call("constructor"), 1))
    lines.extend(_string_lines(_this(ctx.variable()) + " = ", text, ";", ctx, depth=2))
    lines.append(_close(1))
    lines.append(_close())
    return lines


PROPERTY_TYPES = ("string", "number", "boolean")


def render_interface(text, ctx):
    lines = [_open(kw("interface") + " " + cls(ctx.type("Props")))]
    for i, member in enumerate(ctx.names.member_names(ctx.keywords, limit=4)):
        optional = "?" if i == 3 else ""
        lines.append(indent(prop(member) + optional + ": " + typ(PROPERTY_TYPES[i % len(PROPERTY_TYPES)]) + ";"))
    lines.append(_close())
    lines.extend(_comment_lines(text, ctx))
    return lines


def render_enum(text, ctx):
    lines = [_open(kw("enum") + " " + cls(ctx.type("Kind")))]
    for i, member in enumerate(ctx.names.member_names(ctx.keywords, limit=4)):
        lines.append(indent(prop(member[:1].upper() + member[1:]) + " = " + num(i) + ","))
    lines.append(_close())
    lines.extend(_comment_lines(text, ctx))
    return lines


def render_namespace(text, ctx):
    lines = [_open(kw("namespace") + " " + cls(ctx.type()))]
    head = f"{kw('export')} {kw('const')} {var(ctx.variable())} = "
    lines.extend(_string_lines(head, text, ";", ctx, depth=1))
    lines.append(_close())
    return lines


def render_method(text, ctx):
    field_name = ctx.variable()
    lines = [_open(_call(ctx.function(prefix="set"), var("value")))]
    lines.extend(_string_lines(_this(field_name) + " = " + var("value") + " ?? ", text, ";", ctx, depth=1))
    lines.append(indent(ctrl("return") + " " + kw("this") + ";"))
    lines.append(_close())
    return lines


def render_block_comment(text, ctx):
    lines = [comment("/**")]
    lines.extend(_comment_lines(text, ctx, lead=" * "))
    lines.append(comment(" * @see " + ctx.function()))
    lines.append(comment(" */"))
    return lines


# -----------------------
# Control flow family
# -----------------------

def render_conditional(text, ctx):
    groups = split_by_sentences(text, ctx.settings.sentence_groups)
    name = ctx.variable()
    lines = [_open(ctrl("if") + " " + bracket("(") + var(name) + bracket(")"))]
    lines.extend(_string_lines(ctrl("return") + " ", groups[0], ";", ctx, depth=1))
    for group in groups[1:]:
        lines.append(bracket("}", 3) + " " + ctrl("else") + " " + bracket("{", 3))
        lines.extend(_string_lines(ctrl("return") + " ", group, ";", ctx, depth=1))
    lines.append(_close())
    return lines


def render_try_catch(text, ctx):
    name = ctx.function()
    lines = [_open(kw("try"))]
    for group in split_by_sentences(text, ctx.settings.sentence_groups):
        lines.extend(_await_line(group, name, ctx))
    lines.append(bracket("}", 3) + f" {kw('catch')} " + bracket("(") + var("error") + bracket(")") + " " + bracket("{", 3))
    lines.append(_console_error(1))
    lines.append(_close())
    return lines


def render_for_loop(text, ctx):
    name = ctx.function()
    head = ctrl("for") + " " + bracket("(") + kw("const") + " " + var("item") + " " + kw("of") + " " + var(ctx.variable("Items")) + bracket(")")
    lines = [_open(head)]
    for group in split_by_sentences(text, ctx.settings.sentence_groups):
        lines.extend(_await_line(group, name, ctx))
    lines.append(_close())
    return lines


def render_class_method(text, ctx):
    name = ctx.function()
    lines = [_open(ctrl("async") + " " + _call("execute"))]
    for group in split_by_sentences(text, ctx.settings.sentence_groups):
        lines.extend(_await_line(group, name, ctx))
    lines.append(_close())
    return lines


# -----------------------
# List family
# -----------------------

LIST_MARKER_SPLIT_RE = re.compile(r"\s+(?=(?:\d+[.)]|[•·▪◦*–-])\s)")
LIST_SEPARATOR_SPLIT_RE = re.compile(r"(?<=[,;])\s+")


def split_list_items(text: str, limit: int = 3) -> list:
    """Split on leading markers, else after , and ; ; overflow merges into the last item."""
    t = text.strip()
    items = [i for i in LIST_MARKER_SPLIT_RE.split(t) if i.strip()]
    if len(items) < 2:
        items = [i for i in LIST_SEPARATOR_SPLIT_RE.split(t) if i.strip()]
    if len(items) < 2:
        return [t]
    if len(items) > limit:
        items = items[:limit - 1] + [" ".join(items[limit - 1:])]
    return items


def render_array(text, ctx):
    lines = [f"{kw('const')} {var(ctx.variable('List'))} = " + bracket("[", 2)]
    for item in split_list_items(text, ctx.settings.max_list_items):
        lines.extend(_string_lines("", item, ",", ctx, depth=1))
    lines.append(bracket("]", 2) + ";")
    return lines


# -----------------------
# Structural / meta family
# -----------------------

def _import_line(ctx) -> str:
    name = ctx.type()
    return (
        kw("import") + " " + bracket("{", 2) + " " + cls(name) + " " + bracket("}", 2)
        + " " + kw("from") + " " + string(f'"./{name.lower()}"') + ";"
    )


def render_import(text, ctx):
    return [_import_line(ctx)] + _comment_lines(text, ctx)


def render_export(text, ctx):
    head = f"{kw('export')} {kw('const')} {var(ctx.variable())} = "
    return _string_lines(head, text, ";", ctx)


def render_decorator_class(text, ctx):
    name = ctx.type()
    lines = [decorator("@Component") + bracket("(") + bracket("{", 2)]
    lines.append(indent(prop("selector") + ": " + string(f'"app-{name.lower()}"') + ","))
    lines.extend(_string_lines(prop("template") + ": ", text, ",", ctx, depth=1))
    lines.append(bracket("}", 2) + bracket(")"))
    lines.append(f"{kw('export')} {kw('class')} {cls(name + 'Component')} " + bracket("{}", 3))
    return lines


def scaffold_import(ctx) -> str:
    """Chapter-opening import; carries no chunk text."""
    return _import_line(ctx)


def scaffold_export(ctx) -> str:
    """Chapter-closing export; carries no chunk text."""
    return f"{kw('export')} {kw('default')} {cls(ctx.type())};"


RENDERERS = {
    StructureKind.CONST: render_const,
    StructureKind.LET: render_let,
    StructureKind.CONSOLE_LOG: render_console_log,
    StructureKind.FUNCTION_CALL: render_function_call,
    StructureKind.INLINE_COMMENT: render_inline_comment,
    StructureKind.TYPE_ALIAS: render_type_alias,
    StructureKind.STRING_LITERAL: render_string_literal,
    StructureKind.TEMPLATE: render_template,
    StructureKind.FUNCTION: render_function,
    StructureKind.ASYNC_FUNCTION: render_async_function,
    StructureKind.ARROW_FUNCTION: render_arrow_function,
    StructureKind.GENERIC_FUNCTION: render_generic_function,
    StructureKind.CLASS: render_class,
    StructureKind.INTERFACE: render_interface,
    StructureKind.ENUM: render_enum,
    StructureKind.NAMESPACE: render_namespace,
    StructureKind.METHOD: render_method,
    StructureKind.BLOCK_COMMENT: render_block_comment,
    StructureKind.CONDITIONAL: render_conditional,
    StructureKind.TRY_CATCH: render_try_catch,
    StructureKind.FOR_LOOP: render_for_loop,
    StructureKind.CLASS_METHOD: render_class_method,
    StructureKind.ARRAY: render_array,
    StructureKind.IMPORT: render_import,
    StructureKind.EXPORT: render_export,
    StructureKind.DECORATOR_CLASS: render_decorator_class,
}


def render(kind: StructureKind, text: str, ctx: RenderContext) -> list:
    return RENDERERS[kind](text, ctx)
