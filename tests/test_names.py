import random

from epub2code.keywords import Keywords, extract_keywords
from epub2code.names import FUNCTION_PREFIXES, NameSynthesizer, pick


def test_variable_prefers_proper_noun():
    names = NameSynthesizer(random.Random(0))
    kw = extract_keywords("Alice walked into the garden")
    assert names.variable_name(kw, "Text") == "aliceText"


def test_variable_falls_through_to_noun_then_verb():
    names = NameSynthesizer(random.Random(0))
    assert names.variable_name(Keywords(nouns=["garden"], verbs=["walked"])) == "garden"
    assert names.variable_name(Keywords(verbs=["walked"])) == "walked"
    assert names.variable_name(Keywords(all_words=["into"])) == "into"


def test_function_name_with_prefix():
    names = NameSynthesizer(random.Random(0))
    assert names.function_name(Keywords(nouns=["garden"]), prefix="render") == "renderGarden"


def test_function_prefix_from_rng(fixed_rng):
    names = NameSynthesizer(fixed_rng([0.0, 0.99]))
    kw = Keywords(nouns=["garden"])
    assert names.function_name(kw) == "handleGarden"
    assert names.function_name(kw) == "setGarden"


def test_type_name_pascal_case():
    names = NameSynthesizer(random.Random(0))
    assert names.type_name(Keywords(nouns=["garden"]), "Props") == "GardenProps"
    assert names.type_name(Keywords(proper_nouns=["LONDON"])) == "London"


def test_fallbacks():
    names = NameSynthesizer(random.Random(0))
    empty = Keywords()
    assert names.variable_name(empty) == "content"
    assert names.function_name(empty) == "process"
    assert names.type_name(empty) == "Content"


def test_member_names_unique():
    names = NameSynthesizer(random.Random(0))
    kw = Keywords(nouns=["door", "room"], verbs=["opened"], all_words=["door", "key"])
    assert names.member_names(kw, limit=4) == ["door", "room", "opened", "key"]


def test_pick_stays_in_range(fixed_rng):
    rng = fixed_rng([0.0, 0.5, 0.999999])
    assert [pick(rng, FUNCTION_PREFIXES) for _ in range(3)] == ["handle", "format", "set"]
