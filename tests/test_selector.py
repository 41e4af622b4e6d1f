import random
from collections import deque

import pytest

from epub2code.classify import DIALOGUE, LIST, NARRATIVE, QUESTION
from epub2code.renderers import StructureKind as K
from epub2code.selector import LENGTH_BANDS, EngineState, StructureSelector, band_menu


class TestBands:

    @pytest.mark.parametrize("length,index", [(0, 0), (49, 0), (50, 1), (99, 1), (100, 2), (199, 2), (200, 3), (5000, 3)])
    def test_band_boundaries(self, length, index):
        assert band_menu(length) == LENGTH_BANDS[index][1]

    def test_short_band_is_single_line_forms(self):
        assert set(band_menu(10)) == {
            K.INLINE_COMMENT, K.CONST, K.LET, K.CONSOLE_LOG, K.FUNCTION_CALL, K.TYPE_ALIAS,
        }

    def test_long_band_favours_blocks(self):
        assert K.CLASS in band_menu(250)
        assert K.CONST not in band_menu(250)


class TestEligibility:

    def test_import_unlocks_then_is_one_shot(self):
        state = EngineState(usage_count=2)
        selector = StructureSelector(state, random.Random(0))
        assert K.IMPORT in selector.eligible(10)
        selector.record(K.IMPORT)
        assert state.has_emitted_import
        assert K.IMPORT not in selector.eligible(10)

    def test_type_alias_joins_long_band(self):
        state = EngineState(usage_count=3)
        selector = StructureSelector(state, random.Random(0))
        assert K.TYPE_ALIAS not in selector.eligible(250)
        state.usage_count = 4
        assert K.TYPE_ALIAS in selector.eligible(250)

    def test_export_unlocks_late(self):
        state = EngineState(usage_count=7)
        selector = StructureSelector(state, random.Random(0))
        assert K.EXPORT not in selector.eligible(120)
        state.usage_count = 8
        assert K.EXPORT in selector.eligible(120)
        state.has_emitted_export = True
        assert K.EXPORT not in selector.eligible(120)


class TestSelect:

    def test_recent_window_excluded(self, fixed_rng):
        state = EngineState()
        state.history.extend([K.CONST, K.LET, K.CONSOLE_LOG, K.FUNCTION_CALL, K.INLINE_COMMENT])
        selector = StructureSelector(state, fixed_rng([0.0]))
        assert selector.select(10, NARRATIVE) is K.TYPE_ALIAS
        assert state.history[-1] is K.TYPE_ALIAS
        assert state.usage_count == 1

    def test_only_last_window_consulted(self, fixed_rng):
        state = EngineState()
        state.history.extend([K.INLINE_COMMENT, K.CONST, K.LET, K.CONSOLE_LOG, K.FUNCTION_CALL, K.TYPE_ALIAS])
        selector = StructureSelector(state, fixed_rng([0.0]))
        assert selector.select(10, NARRATIVE) is K.INLINE_COMMENT

    def test_empty_candidates_fall_back_to_menu(self, fixed_rng):
        state = EngineState()
        state.history.extend(band_menu(10))
        selector = StructureSelector(state, fixed_rng([0.0]), window=10)
        assert selector.select(10, NARRATIVE) is band_menu(10)[0]

    @pytest.mark.parametrize("text_type,kind", [
        (DIALOGUE, K.STRING_LITERAL), (LIST, K.ARRAY), (QUESTION, K.CONDITIONAL),
    ])
    def test_direct_routes(self, text_type, kind):
        state = EngineState()
        selector = StructureSelector(state, random.Random(0))
        assert selector.select(30, text_type) is kind
        assert list(state.history) == []
        assert state.usage_count == 1

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("length", [10, 70, 150, 400])
    def test_no_repeat_inside_window(self, seed, length):
        state = EngineState()
        selector = StructureSelector(state, random.Random(seed))
        kinds = [selector.select(length, NARRATIVE) for _ in range(60)]
        for i, kind in enumerate(kinds):
            assert kind not in kinds[max(0, i - 5):i]

    def test_history_is_bounded(self):
        state = EngineState(history=deque(maxlen=10))
        selector = StructureSelector(state, random.Random(3))
        for _ in range(40):
            selector.select(150, NARRATIVE)
        assert len(state.history) == 10
        assert state.recent(5) == list(state.history)[-5:]
