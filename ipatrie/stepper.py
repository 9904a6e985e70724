"""Longest-match scanning of text against a character trie.

A stepper walks its text one character at a time down the trie levels.
Whenever the walk passes the end of a dictionary word, that node and cursor
position are remembered. When the walk can't continue, the remembered match
is emitted and the cursor goes back to just after it, so the longest word
that fits is preferred over a longer path that led nowhere.
Text that matched nothing is handled by the stepper subclasses.
"""

import logging
import unicodedata
from typing import List, NamedTuple, Optional, Union

from .constants import (
    DEFAULT_PROSODY,
    PHONETIC_DELIMITER,
    TEXT_PADDING,
    WORD_DELIMITER,
)
from .rule_objects import RuleProcessor
from .ssml import render_ssml
from .trie import CharNode, Trie, lookup


def is_letter(char: str) -> bool:
    """Whether a character is part of a word: a letter or a combining mark."""
    return bool(char) and unicodedata.category(char)[0] in ("L", "M")


def char_at(text: str, index: int) -> str:
    """The character at index, or an empty string outside the text."""
    return text[index] if 0 <= index < len(text) else ""


def strip_delimiters(phonetic: str) -> str:
    return phonetic.strip(PHONETIC_DELIMITER)


class FallbackWord(NamedTuple):
    """A word that isn't in the dictionary.

    ``phonetic`` is None unless the word went through orthographic conversion.
    """
    word: str
    phonetic: Optional[str] = None


Token = Union[CharNode, FallbackWord, str]


def render_token(token: Token, delimiter: str = WORD_DELIMITER) -> str:
    """Turn a result token into its output text."""
    if isinstance(token, CharNode):
        return strip_delimiters(token.primary_phonetic)
    if isinstance(token, FallbackWord):
        text = token.word if token.phonetic is None else token.phonetic
        return f"{delimiter}{text}{delimiter}"
    return token


class BoundaryPolicy:
    """Where a trie match may start and end. Anywhere, by default."""

    def may_start(self, text: str, cursor: int) -> bool:
        return True

    def may_end(self, text: str, cursor: int) -> bool:
        return True


class WordBoundaries(BoundaryPolicy):
    """Matches must start and end at the edges of words."""

    def may_start(self, text: str, cursor: int) -> bool:
        return not is_letter(char_at(text, cursor - 1))

    def may_end(self, text: str, cursor: int) -> bool:
        return not is_letter(char_at(text, cursor + 1))


class Stepper:
    """Cursor-based scanning engine over the root level of a trie.

    The stepper keeps the dictionary that was selected in the trie when it
    was created. Its cursor and results belong to one text at a time, and
    ``clear()`` must be called before scanning an unrelated text.

    Parameters
    ----------
    trie: Trie
        Trie with the dictionary to scan against selected
    """
    boundaries = BoundaryPolicy()

    def __init__(self, trie: Trie):
        if trie.root_level is None:
            raise ValueError("Select a dictionary in the trie before scanning")
        self.dictionary = trie.current_dictionary
        self._root_level = trie.root_level
        self.clear()

    def __repr__(self):
        return "{}(dictionary={!r}, cursor={!r})".format(
            self.__class__.__name__, self.dictionary, self.cursor
        )

    @property
    def text(self) -> Optional[str]:
        """The lower-cased text, padded with a space at both ends."""
        return self._text

    @text.setter
    def text(self, text):
        self._text = (
            f"{TEXT_PADDING}{text.lower()}{TEXT_PADDING}"
            if isinstance(text, str) else None
        )

    @property
    def last_phonetics(self) -> Optional[List[str]]:
        """Transcriptions of the current best match, if any."""
        if self._last_node_with_result is None:
            return None
        return self._last_node_with_result.phonetics

    @property
    def result_text(self) -> str:
        return "".join(render_token(token) for token in self.result)

    @property
    def result_raw(self) -> List[dict]:
        """The result tokens, with all transcription variants of each match."""
        raw = []
        for token in self.result:
            if isinstance(token, CharNode):
                raw.append({"word": token.word, "phonetics": token.phonetics})
            elif isinstance(token, FallbackWord):
                raw.append({"word": token.word, "fallback": token.phonetic})
            else:
                raw.append({"char": token})
        return raw

    def to_ssml(self, prosody: int = DEFAULT_PROSODY) -> str:
        """Render the result as SSML, with phoneme tags for the transcriptions."""
        return render_ssml(self.result, prosody=prosody)

    def reset(self):
        """Restart the trie walk from the root, keeping the cursor."""
        self._current_level = self._root_level
        self._last_node_with_result = None
        self._found_chars = False

    def clear(self):
        """Forget the text, the cursor and all results."""
        self._text = None
        self.cursor = 0
        self.result: List[Token] = []
        self._last_result_cursor = None
        self._last_added_cursor = 0
        self.reset()

    def translate_text(self, text: str) -> str:
        """Scan a text from the start and return the trimmed result."""
        if not isinstance(text, str):
            raise TypeError(f"Text must be a string, not {type(text).__name__}")
        self.clear()
        self.text = text
        self.run()
        return self.result_text.strip()

    def run(self):
        """Scan the text from the cursor position to the end.

        The position just past the text never continues a trie path,
        so pending matches and unmatched text are always emitted.
        """
        if not isinstance(self._text, str):
            raise ValueError("Set some text before running")
        text = self._text
        while self.cursor <= len(text):
            node = lookup(self._current_level, char_at(text, self.cursor))
            if node is not None and (
                    self._found_chars or self.boundaries.may_start(text, self.cursor)):
                self._descend(node)
            elif self._last_node_with_result is not None:
                self._emit_match()
            else:
                self._emit_unmatched(self._last_added_cursor, self.cursor + 1)
                self._last_added_cursor = self.cursor + 1
                self.cursor += 1
                self.reset()

    def _descend(self, node: CharNode):
        self._found_chars = True
        self._current_level = node.children
        if node.word is not None and self.boundaries.may_end(self._text, self.cursor):
            self._last_node_with_result = node
            self._last_result_cursor = self.cursor
        self.cursor += 1

    def _emit_match(self):
        logging.debug(
            "Matched %r at position %s", self._last_node_with_result.word,
            self._last_result_cursor)
        self.result.append(self._last_node_with_result)
        self.cursor = self._last_result_cursor + 1
        self._last_added_cursor = self.cursor
        self.reset()

    def _emit_unmatched(self, start: int, end: int):
        """Pass the unmatched characters through as they are."""
        self.result.extend(self._text[start:end])


class OrthographyStepper(Stepper):
    """Converts a single word with a grapheme to phoneme map.

    Every position in the word may start a match. The word is rewritten by
    the preprocessor before the map is applied, and the joined transcription
    is rewritten by the postprocessor.
    """

    def __init__(
            self,
            trie: Trie,
            preprocessor: RuleProcessor = None,
            postprocessor: RuleProcessor = None,
    ):
        super().__init__(trie)
        self.preprocessor = preprocessor
        self.postprocessor = postprocessor

    @property
    def result_text(self) -> str:
        result = super().result_text.strip()
        if self.postprocessor is not None:
            result = self.postprocessor.process(result)
        return result

    def to_ssml(self, prosody: int = DEFAULT_PROSODY) -> str:
        """Render the postprocessed transcription as a single phoneme tag."""
        transcription = self.result_text
        tokens = [FallbackWord((self._text or "").strip(), transcription)] if transcription else []
        return render_ssml(tokens, prosody=prosody)

    def run(self):
        if isinstance(self._text, str) and self.preprocessor is not None and self.cursor == 0:
            word = self._text[len(TEXT_PADDING):-len(TEXT_PADDING)]
            self.text = self.preprocessor.process(word)
        super().run()


class WordStepper(Stepper):
    """Scans running text for whole dictionary words.

    Runs of letters that are not in the dictionary are handed to the
    orthography stepper, if there is one, and emitted between delimiters.
    """
    boundaries = WordBoundaries()

    def __init__(
            self,
            trie: Trie,
            orthography_stepper: OrthographyStepper = None,
            delimiter: str = WORD_DELIMITER,
    ):
        self.orthography_stepper = orthography_stepper
        self.delimiter = delimiter
        super().__init__(trie)

    @property
    def result_text(self) -> str:
        return "".join(render_token(token, self.delimiter) for token in self.result)

    def clear(self):
        super().clear()
        self._current_word = ""

    def _emit_unmatched(self, start: int, end: int):
        """Pass non-letters through, and collect letters into words."""
        for index in range(start, min(end, len(self._text))):
            char = self._text[index]
            if not is_letter(char):
                self.result.append(char)
                continue
            self._current_word += char
            if not is_letter(char_at(self._text, index + 1)):
                self.result.append(self._convert(self._current_word))
                self._current_word = ""

    def _convert(self, word: str) -> FallbackWord:
        if self.orthography_stepper is None:
            return FallbackWord(word)
        phonetic = self.orthography_stepper.translate_text(word)
        self.orthography_stepper.clear()
        logging.debug("Converted %r to %r by orthography", word, phonetic)
        return FallbackWord(word, phonetic)
