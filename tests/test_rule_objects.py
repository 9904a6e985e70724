"""Test suite for Rule and RuleProcessor classes and helper functions."""
import logging

import pytest
from schema import SchemaError

from ipatrie import rule_objects
from ipatrie.rule_objects import Rule, RuleProcessor


def test_rule_pattern(rule_fixture):
    # then
    assert rule_fixture.prefix == "^"
    assert rule_fixture.suffix == "(?:a|e|i|o|u)"
    assert rule_fixture.pattern == (
        "(?P<prefix>^)(?P<target>s)(?P<suffix>(?:a|e|i|o|u))")


@pytest.mark.parametrize(
    "word,expected",
    [
        ("sand", "zand"),
        ("sun", "zun"),
        ("ask", "ask"),
        ("pest", "pest"),
        ("stop", "stop"),
    ]
)
def test_rule_apply(rule_fixture, word, expected):
    # when
    result = rule_fixture.apply(word)
    # then
    assert result == expected


def test_rule_apply_all_matches():
    # given
    rule = Rule("a", "o", prefix="b")
    # when
    result = rule.apply("baba")
    # then
    assert result == "bobo"


def test_rule_deletion():
    # given
    rule = Rule.from_line("r -> 0 / e _ #")
    # when
    result = rule.apply("vater")
    # then
    assert rule.replacement == ""
    assert result == "vate"
    assert rule.apply("vaterland") == "vaterland"


@pytest.mark.parametrize(
    "line,expected",
    [
        ("a -> b / _", Rule("a", "b")),
        ("a -> b", Rule("a", "b")),
        ("s -> z / # _", Rule("s", "z", prefix="#")),
        ("d -> t / _ #", Rule("d", "t", suffix="#")),
        ("r -> ə / [äeioöuü]h? _ #", Rule("r", "ə", "[äeioöuü]h?", "#")),
    ]
)
def test_rule_from_line(line, expected):
    # when
    result = Rule.from_line(line)
    # then
    assert result == expected


def test_rule_from_line_expands_groups_before_split():
    # given
    char_groups = {"::front_vowel::": "e|i"}
    # when
    result = Rule.from_line("e -> i / _ (::front_vowel::)", char_groups)
    # then
    assert result.prefix == ""
    assert result.suffix == "((?:e|i))"
    assert result.apply("bee") == "bie"


@pytest.mark.parametrize("line", ["not a rule", "a => b / _", ""])
def test_rule_from_line_raises_error(line):
    with pytest.raises(ValueError):
        Rule.from_line(line)


def test_rule_invalid_pattern():
    with pytest.raises(ValueError):
        Rule("[", "x")


def test_rule_dict_round_trip(rule_fixture):
    # when
    rule_dict = rule_fixture.to_dict()
    result = Rule.from_dict(rule_dict)
    # then
    assert rule_dict == {
        "to_replace": "s",
        "replacement": "z",
        "prefix": "^",
        "suffix": "(?:a|e|i|o|u)",
    }
    assert result == rule_fixture


def test_rule_from_dict_invalid():
    with pytest.raises(SchemaError):
        Rule.from_dict({"to_replace": "", "replacement": "x"})


@pytest.mark.parametrize("to_replace,expected", [("a", True), ("", False)])
def test_rule_is_valid(to_replace, expected):
    # given
    rule = Rule(to_replace, "b")
    # then
    assert rule.is_valid == expected


def test_rule_str():
    # given
    rule = Rule("r", "0", prefix="e", suffix="#")
    # then
    assert str(rule) == "r -> 0 / e _ $"


def test_processor_applies_rules_in_order():
    # given
    processor = RuleProcessor(rules=["a -> b / _", "b -> c / _"])
    # when
    result = processor.process("a")
    # then
    assert len(processor) == 2
    assert result == "c"


def test_processor_without_rules():
    # given
    processor = RuleProcessor()
    # then
    assert processor.process("word") == "word"


def test_processor_add_rule(rule_fixture):
    # given
    processor = RuleProcessor(name="test")
    # when
    processor.add_rule(rule_fixture)
    processor.add_rule({"to_replace": "d", "replacement": "t", "prefix": "", "suffix": "$"})
    # then
    assert processor.rules[0] is rule_fixture
    assert processor.process("sand") == "zant"


@pytest.mark.parametrize(
    "rule,error",
    [
        (42, ValueError),
        ("not a rule", ValueError),
        (Rule("", "x"), ValueError),
        ({"to_replace": "a"}, SchemaError),
    ]
)
def test_processor_add_rule_raises_error(rule, error):
    # given
    processor = RuleProcessor()
    # when
    with pytest.raises(error):
        processor.add_rule(rule)
    # then
    assert len(processor) == 0


def test_processor_skips_invalid_rules(caplog):
    # when
    with caplog.at_level(logging.ERROR):
        processor = RuleProcessor(rules=["[ -> x / _", "a -> b / _", {"to_replace": ""}])
    # then
    assert len(processor) == 1
    assert "Skipping invalid rule" in caplog.text


def test_processor_invalid_char_groups():
    with pytest.raises(SchemaError):
        RuleProcessor(char_groups={"vowel": "a|e"})


RULE_FILE = """# German final devoicing
::vowel:: = a|ä|e|i|o|ö|u|ü
::consonant:: = b|d|g|k|l|m|n|p|r|s|t

s -> z / # _ (::vowel::)
d -> t / _ #|(::consonant::)(::vowel::)
#r -> 0 / a _ #
"""


def test_parse_character_groups():
    # when
    result = rule_objects.parse_character_groups(RULE_FILE)
    # then
    assert result == {
        "::vowel::": "a|ä|e|i|o|ö|u|ü",
        "::consonant::": "b|d|g|k|l|m|n|p|r|s|t",
    }


def test_find_rule_lines():
    # when
    result = rule_objects.find_rule_lines(RULE_FILE)
    # then
    assert result == [
        "s -> z / # _ (::vowel::)",
        "d -> t / _ #|(::consonant::)(::vowel::)",
    ]


@pytest.mark.parametrize(
    "word,expected",
    [
        ("sand", "zant"),
        ("bad", "bat"),
        ("abendrot", "abentrot"),
        ("ader", "ader"),
    ]
)
def test_processor_from_text(word, expected):
    # given
    processor = RuleProcessor.from_text(RULE_FILE, name="de_preprocessor")
    # when
    result = processor.process(word)
    # then
    assert len(processor) == 2
    assert result == expected


def test_load_rule_processor(data_dir):
    # when
    result = rule_objects.load_rule_processor(
        data_dir / "rules" / "preprocessors" / "en.txt", name="en_preprocessor")
    # then
    assert result.name == "en_preprocessor"
    assert len(result) == 1
    assert result.char_groups == {"::vowel::": "a|e|i|o|u"}


def test_load_rule_processor_missing_file(tmp_path, caplog):
    # when
    with caplog.at_level(logging.WARNING):
        result = rule_objects.load_rule_processor(tmp_path / "missing.txt")
    # then
    assert len(result) == 0
    assert result.process("word") == "word"
    assert "Couldn't read" in caplog.text
