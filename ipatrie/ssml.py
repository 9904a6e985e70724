"""Render scan results as SSML for a text-to-speech service."""

from typing import Iterable

from .constants import (
    DEFAULT_PROSODY,
    DEFAULT_VOICE_LANGUAGE,
    LINE_BREAK,
    PARAGRAPH_BREAK,
    PHONEME_TEMPLATE,
    PHONETIC_DELIMITER,
    SSML_ESCAPES,
    SSML_TEMPLATE,
    VOICES,
)
from .trie import CharNode


def escape_ssml(text: str) -> str:
    """Escape the characters that are reserved in SSML markup."""
    for char, entity in SSML_ESCAPES:
        text = text.replace(char, entity)
    return text


def phoneme_tag(phonetic: str) -> str:
    cleaned = escape_ssml(phonetic.replace(PHONETIC_DELIMITER, ""))
    return PHONEME_TEMPLATE.format(phonetic=cleaned)


def render_token_ssml(token) -> str:
    """Dictionary matches and converted words become phoneme tags.

    Literal characters are escaped, and so are words that were not converted.
    """
    if isinstance(token, CharNode):
        return phoneme_tag(token.primary_phonetic)
    if isinstance(token, str):
        return escape_ssml(token)
    if token.phonetic is None:
        return escape_ssml(token.word)
    return phoneme_tag(token.phonetic)


def render_ssml(tokens: Iterable, prosody: int = DEFAULT_PROSODY) -> str:
    """Create an SSML document from the result tokens of a stepper.

    Blank lines become strong pauses and line breaks weak ones.
    """
    body = "".join(render_token_ssml(token) for token in tokens).strip()
    body = body.replace("\n\n", PARAGRAPH_BREAK).replace("\n", LINE_BREAK)
    return SSML_TEMPLATE.format(prosody=prosody, body=body)


def get_voice(language: str, gender: str = "male") -> str:
    """Pick a speech synthesis voice for a language."""
    voices = VOICES.get(language, VOICES[DEFAULT_VOICE_LANGUAGE])
    return voices.get(gender, voices["male"])
