"""Configuration values for the unit tests."""

from pathlib import Path

import pytest

from ipatrie.rule_objects import Rule, RuleProcessor
from ipatrie.stepper import OrthographyStepper, Stepper, WordStepper
from ipatrie.translator import Translator
from ipatrie.trie import Trie


@pytest.fixture(scope="session")
def data_dir():
    """Directory with the dummy resources of the "en" language."""
    return Path(__file__).parent / "data"


@pytest.fixture
def word_trie():
    """Trie with a small English pronunciation dictionary selected."""
    trie = Trie()
    trie.create_dictionary("en")
    trie.add_word("the", "/ðə/, /ði/")
    trie.add_word("cat", "/kæt/")
    trie.add_word("category", "/ˈkætəˌɡɔri/")
    trie.add_word("hello", "/həˈloʊ/")
    trie.add_word("world", "/wɜrld/")
    trie.add_word("new", "/nju/")
    trie.add_word("new york", "/nu ˈjɔrk/")
    return trie


@pytest.fixture
def map_trie():
    """Trie with a grapheme to phoneme map selected."""
    trie = Trie()
    trie.create_dictionary("en")
    for grapheme, phoneme in [
        ("a", "æ"), ("c", "k"), ("ch", "tʃ"), ("d", "d"),
        ("n", "n"), ("s", "s"), ("t", "t"), ("z", "z"),
    ]:
        trie.add_word(grapheme, phoneme)
    return trie


@pytest.fixture
def rule_fixture():
    """Dummy rule to be used in tests."""
    return Rule(
        to_replace="s",
        replacement="z",
        prefix="#",
        suffix="::vowel::",
        char_groups={"::vowel::": "a|e|i|o|u"},
    )


@pytest.fixture
def preprocessor():
    """Rules that rewrite a word before the map is applied."""
    return RuleProcessor(
        rules=["s -> z / # _ (::vowel::)"],
        char_groups={"::vowel::": "a|e|i|o|u"},
        name="test_preprocessor",
    )


@pytest.fixture
def postprocessor():
    """Rules that rewrite a transcription after the map is applied."""
    return RuleProcessor(rules=["d -> t / _ #"], name="test_postprocessor")


@pytest.fixture
def stepper_obj(map_trie):
    """Plain stepper over the map trie."""
    return Stepper(map_trie)


@pytest.fixture
def orthography_stepper(map_trie, preprocessor, postprocessor):
    return OrthographyStepper(
        map_trie, preprocessor=preprocessor, postprocessor=postprocessor)


@pytest.fixture
def word_stepper(word_trie):
    """Word stepper without orthographic fallback."""
    return WordStepper(word_trie)


@pytest.fixture
def translator_obj(data_dir):
    """Instance of the class object we want to test.

    Tests that make use of this fixture will need to be updated
    if the files in tests/data are changed.
    """
    return Translator(data_dir)
