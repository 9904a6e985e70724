"""Test suite for the SSML rendering."""

import pytest

from ipatrie import ssml
from ipatrie.stepper import FallbackWord
from ipatrie.trie import CharNode


@pytest.fixture
def cat_node():
    node = CharNode("t")
    node.word = "cat"
    node.add_phonetic("/kæt/")
    return node


@pytest.mark.parametrize(
    "text,expected",
    [
        ("a & b", "a &amp; b"),
        ("<b>", "&lt;b&gt;"),
        ("'single' \"double\"", "&apos;single&apos; &quot;double&quot;"),
        ("&lt;", "&amp;lt;"),
        ("plain", "plain"),
    ]
)
def test_escape_ssml(text, expected):
    assert ssml.escape_ssml(text) == expected


def test_phoneme_tag():
    # when
    result = ssml.phoneme_tag("/ˈkætəˌɡɔri/")
    # then
    assert result == "<phoneme alphabet='ipa' ph='ˈkætəˌɡɔri'/>"


def test_render_ssml(cat_node):
    # given
    tokens = [cat_node] + list(" & friends")
    # when
    result = ssml.render_ssml(tokens)
    # then
    assert result == (
        '<speak><prosody rate="85%">'
        "<phoneme alphabet='ipa' ph='kæt'/> &amp; friends"
        "</prosody></speak>"
    )


def test_render_ssml_breaks(cat_node):
    # given
    tokens = [cat_node, "\n", "\n", cat_node, "\n", cat_node, "\n"]
    # when
    result = ssml.render_ssml(tokens, prosody=100)
    # then
    tag = "<phoneme alphabet='ipa' ph='kæt'/>"
    assert result == (
        '<speak><prosody rate="100%">'
        f'{tag}<break strength="strong"/>{tag}<break strength="weak"/>{tag}'
        "</prosody></speak>"
    )


@pytest.mark.parametrize(
    "token,expected",
    [
        (FallbackWord("d&d"), "d&amp;d"),
        (FallbackWord("sand", "/zænt/"), "<phoneme alphabet='ipa' ph='zænt'/>"),
        ("<", "&lt;"),
    ]
)
def test_render_token_ssml(token, expected):
    assert ssml.render_token_ssml(token) == expected


@pytest.mark.parametrize(
    "language,gender,expected",
    [
        ("de", "male", "Hans"),
        ("de", "female", "Vicki"),
        ("fr_FR", "female", "Celine"),
        ("en_US", "male", "Joey"),
        ("es_ES", "female", "Lucia"),
        ("xx", "male", "Brian"),
        ("xx", "female", "Emma"),
        ("de", "other", "Hans"),
    ]
)
def test_get_voice(language, gender, expected):
    assert ssml.get_voice(language, gender) == expected
