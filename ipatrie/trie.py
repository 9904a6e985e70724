"""Character tries mapping words to their phonetic transcriptions."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .utils import load_dictionary_frame, make_list


class CharNode:
    """One character position in a trie.

    A node that ends a dictionary entry knows the complete word and
    holds one or more transcriptions of it, in insertion order.
    """

    def __init__(self, char: str):
        self.char = char
        self.word: Optional[str] = None
        self.children: Dict[str, "CharNode"] = {}
        self._phonetics: Dict[str, None] = {}

    def __repr__(self):
        return "{}(char={!r}, word={!r}, phonetics={!r})".format(
            self.__class__.__name__, self.char, self.word, self.phonetics
        )

    @property
    def phonetics(self) -> List[str]:
        """All transcriptions of the word, in the order they were added."""
        return list(self._phonetics)

    @property
    def primary_phonetic(self) -> Optional[str]:
        """The first transcription that was added for the word."""
        return next(iter(self._phonetics), None)

    def add_phonetic(self, phonetic: str):
        self._phonetics.setdefault(phonetic, None)


Level = Dict[str, CharNode]


def lookup(level: Level, char: str) -> Optional[CharNode]:
    """Find the node continuing a trie path with the given character."""
    return level.get(char)


class Trie:
    """A collection of character tries, one per dictionary.

    All word operations work on the currently selected dictionary.
    Dictionaries are loaded once and cached by their identifier.
    """

    def __init__(self):
        self.dictionaries: Dict[str, Level] = {}
        self.current_dictionary: Optional[str] = None

    def __repr__(self):
        return "{}(dictionaries={!r}, current_dictionary={!r})".format(
            self.__class__.__name__,
            list(self.dictionaries),
            self.current_dictionary,
        )

    @property
    def root_level(self) -> Optional[Level]:
        """First level of characters in the selected dictionary."""
        return self.dictionaries.get(self.current_dictionary)

    def has_dictionary(self, dictionary_id: str) -> bool:
        return dictionary_id in self.dictionaries

    def select(self, dictionary_id: str):
        self.current_dictionary = dictionary_id

    def create_dictionary(self, dictionary_id: str) -> bool:
        """Select a dictionary, and create it if it doesn't exist yet.

        Returns
        -------
        bool
            True if a new, empty dictionary was created.
        """
        self.select(dictionary_id)
        if self.has_dictionary(dictionary_id):
            return False
        self.dictionaries[dictionary_id] = {}
        return True

    def add_word(self, word: str, phonetics: Union[str, Iterable[str]]):
        """Insert a word and its transcriptions in the selected dictionary.

        Parameters
        ----------
        word: str
        phonetics: str or Iterable[str]
            Either one or more comma-separated transcriptions,
            or a collection of transcriptions.
            Adding a word again adds to its existing transcriptions.
        """
        level = self.root_level
        if level is None:
            raise ValueError(f"No dictionary is selected, can't add {word!r}")
        if not word:
            raise ValueError("Can't add an empty word to the dictionary")
        options = make_list(phonetics)
        if not options:
            raise ValueError(f"No transcription given for {word!r}")
        node = None
        for char in word:
            node = lookup(level, char)
            if node is None:
                node = level[char] = CharNode(char)
            level = node.children
        for phonetic in options:
            node.add_phonetic(phonetic)
        node.word = word

    def find_char_node(self, word: str) -> Optional[CharNode]:
        """Find the node ending the given word, if it is in the dictionary.

        Paths that are only prefixes of longer words are not matches.
        """
        level = self.root_level
        if level is None or not word:
            return None
        node = None
        for char in word:
            node = lookup(level, char)
            if node is None:
                return None
            level = node.children
        return node if node.word is not None else None

    def find_phonetics(self, word: str) -> Optional[List[str]]:
        node = self.find_char_node(word)
        return node.phonetics if node is not None else None

    def word_count(self, dictionary_id: str = None) -> int:
        """Count the words in a dictionary, by default the selected one."""
        if dictionary_id is None:
            dictionary_id = self.current_dictionary
        stack = list(self.dictionaries.get(dictionary_id, {}).values())
        count = 0
        while stack:
            node = stack.pop()
            count += node.word is not None
            stack.extend(node.children.values())
        return count

    def load_dictionary(self, dictionary_id: str, file_path: Union[str, Path]) -> int:
        """Select a dictionary, and fill it from a tab-separated file.

        Dictionaries that are already loaded are not read again.
        A file that can't be read leaves the dictionary empty.

        Returns
        -------
        int
            The number of lines that were inserted.
        """
        if not self.create_dictionary(dictionary_id):
            logging.debug("Dictionary %s is already loaded", dictionary_id)
            return 0
        try:
            dictionary_df = load_dictionary_frame(file_path)
        except (OSError, UnicodeDecodeError) as error:
            logging.warning(
                "Couldn't load dictionary %s from %s: %s. "
                "Continuing with an empty dictionary.",
                dictionary_id, file_path, error)
            return 0
        inserted = 0
        for word, phonetic in dictionary_df.itertuples(index=False, name=None):
            try:
                self.add_word(word.lower(), phonetic)
            except ValueError as error:
                logging.debug("Skipping line %r: %s", word, error)
                continue
            inserted += 1
        logging.info(
            "Loaded %s entries into dictionary %s from %s",
            inserted, dictionary_id, file_path)
        return inserted
