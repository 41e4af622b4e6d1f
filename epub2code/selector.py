"""
selector.py
Picks the disguise for each chunk: length-banded menus, a few kinds that
unlock once the chapter has some body, and a short history window so the
same disguise does not show up twice in a row.
"""

from collections import deque
from dataclasses import dataclass, field

from .classify import DIALOGUE, LIST, QUESTION
from .config import HISTORY_SIZE
from .names import pick
from .renderers import StructureKind as K

# (exclusive upper bound on chunk length, menu)
LENGTH_BANDS = (
    (50, (K.INLINE_COMMENT, K.CONST, K.LET, K.CONSOLE_LOG, K.FUNCTION_CALL, K.TYPE_ALIAS)),
    (100, (K.CONST, K.LET, K.CONSOLE_LOG, K.FUNCTION_CALL, K.INLINE_COMMENT,
           K.ARROW_FUNCTION, K.FUNCTION, K.TEMPLATE)),
    (200, (K.FUNCTION, K.ARROW_FUNCTION, K.GENERIC_FUNCTION, K.METHOD, K.TEMPLATE,
           K.FOR_LOOP, K.TRY_CATCH, K.DECORATOR_CLASS, K.NAMESPACE, K.BLOCK_COMMENT)),
    (None, (K.CLASS, K.INTERFACE, K.ENUM, K.ASYNC_FUNCTION, K.TRY_CATCH, K.CLASS_METHOD,
            K.BLOCK_COMMENT, K.NAMESPACE, K.FOR_LOOP, K.DECORATOR_CLASS)),
)

# kind -> usage count at which it joins every menu
UNLOCK_THRESHOLDS = {
    K.IMPORT: 2,
    K.TYPE_ALIAS: 4,
    K.EXPORT: 8,
}

ONE_SHOT_KINDS = (K.IMPORT, K.EXPORT)

DIRECT_ROUTES = {
    DIALOGUE: K.STRING_LITERAL,
    LIST: K.ARRAY,
    QUESTION: K.CONDITIONAL,
}


@dataclass
class EngineState:
    line_number: int = 1
    history: deque = field(default_factory=lambda: deque(maxlen=HISTORY_SIZE))
    usage_count: int = 0
    has_emitted_import: bool = False
    has_emitted_export: bool = False

    def recent(self, window: int) -> list:
        return list(self.history)[-window:]


def band_menu(length: int) -> tuple:
    for limit, menu in LENGTH_BANDS:
        if limit is None or length < limit:
            return menu
    return LENGTH_BANDS[-1][1]


class StructureSelector:
    def __init__(self, state: EngineState, rng, window: int = 5):
        self.state = state
        self.rng = rng
        self.window = window

    def eligible(self, length: int) -> list:
        menu = list(band_menu(length))
        for kind, threshold in UNLOCK_THRESHOLDS.items():
            if kind in menu or self.state.usage_count < threshold:
                continue
            if kind is K.IMPORT and self.state.has_emitted_import:
                continue
            if kind is K.EXPORT and self.state.has_emitted_export:
                continue
            menu.append(kind)
        return menu

    def select(self, length: int, text_type: str) -> K:
        """
        Dialogue, list and question chunks route straight to their renderer
        and only count toward usage. Narrative chunks draw from the eligible
        menu minus the recent window (or the whole menu if that empties it).
        """
        if text_type in DIRECT_ROUTES:
            self.state.usage_count += 1
            return DIRECT_ROUTES[text_type]

        menu = self.eligible(length)
        recent = self.state.recent(self.window)
        candidates = [k for k in menu if k not in recent] or menu

        kind = pick(self.rng, candidates)
        self.record(kind)
        return kind

    def record(self, kind: K):
        self.state.history.append(kind)
        self.state.usage_count += 1
        if kind is K.IMPORT:
            self.state.has_emitted_import = True
        elif kind is K.EXPORT:
            self.state.has_emitted_export = True
