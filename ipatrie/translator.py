"""Translate text to IPA with dictionaries, orthography maps and rules."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .constants import (
    DATA_DIR,
    DEFAULT_PROSODY,
    DICTIONARY_DIR,
    MAP_DIR,
    POSTPROCESSOR,
    PREPROCESSOR,
    RESOURCE_SUFFIX,
    RULES_DIR,
    WORD_DELIMITER,
    language_schema,
    phase_schema,
)
from .rule_objects import RuleProcessor, load_rule_processor
from .stepper import OrthographyStepper, WordStepper
from .trie import Trie


class Translator:
    """Loads the resources of each language once, and translates texts.

    The word dictionaries, orthography maps and rule processors are cached
    per language and shared by all translations. Each translation gets
    its own steppers.

    Parameters
    ----------
    data_dir: str or Path
        Directory with the translations, maps and rules directories
    delimiter: str
        Wraps words that are not in the dictionary
    """

    def __init__(self, data_dir: Union[str, Path] = DATA_DIR, delimiter: str = WORD_DELIMITER):
        self.data_dir = Path(data_dir)
        self.delimiter = delimiter
        self.dictionaries = Trie()
        self.maps = Trie()
        self.rule_processors: Dict[Tuple[str, str], RuleProcessor] = {}

    def __repr__(self):
        return "{}(data_dir={!r}, delimiter={!r})".format(
            self.__class__.__name__, str(self.data_dir), self.delimiter
        )

    def resource_path(self, directory: Union[str, Path], language: str) -> Path:
        return self.data_dir / directory / f"{language}{RESOURCE_SUFFIX}"

    def load_dictionary(self, language: str) -> int:
        """Load the word dictionary of a language, unless it is loaded."""
        language = language_schema.validate(language)
        return self.dictionaries.load_dictionary(
            language, self.resource_path(DICTIONARY_DIR, language))

    def load_map(self, language: str) -> int:
        """Load the orthography map of a language, unless it is loaded."""
        language = language_schema.validate(language)
        return self.maps.load_dictionary(
            language, self.resource_path(MAP_DIR, language))

    def load_rules(self, language: str, phase: str) -> RuleProcessor:
        """Load the pre- or postprocessor rules of a language, unless they are loaded."""
        language = language_schema.validate(language)
        phase = phase_schema.validate(phase)
        key = (language, phase)
        if key not in self.rule_processors:
            self.rule_processors[key] = load_rule_processor(
                self.resource_path(Path(RULES_DIR) / f"{phase}s", language),
                name=f"{language}_{phase}",
            )
        return self.rule_processors[key]

    def load_language(self, language: str):
        """Load every resource a translation into the language needs."""
        self.load_dictionary(language)
        self.load_map(language)
        for phase in (PREPROCESSOR, POSTPROCESSOR):
            self.load_rules(language, phase)

    def orthography_stepper(self, language: str) -> OrthographyStepper:
        self.load_language(language)
        self.maps.select(language)
        return OrthographyStepper(
            self.maps,
            preprocessor=self.load_rules(language, PREPROCESSOR),
            postprocessor=self.load_rules(language, POSTPROCESSOR),
        )

    def word_stepper(self, language: str) -> WordStepper:
        """Create a word stepper for the language, with orthographic fallback."""
        orthography_stepper = self.orthography_stepper(language)
        self.dictionaries.select(language)
        return WordStepper(
            self.dictionaries,
            orthography_stepper=orthography_stepper,
            delimiter=self.delimiter,
        )

    def translate(self, language: str, text: str) -> str:
        """Transcribe a text in the given language to IPA."""
        stepper = self.word_stepper(language)
        result = stepper.translate_text(text)
        stepper.clear()
        return result

    def translate_ssml(self, language: str, text: str, prosody: int = DEFAULT_PROSODY) -> str:
        """Transcribe a text and render it as SSML with phoneme tags."""
        stepper = self.word_stepper(language)
        stepper.translate_text(text)
        ssml = stepper.to_ssml(prosody=prosody)
        stepper.clear()
        return ssml

    def lookup(self, language: str, word: str) -> Optional[List[str]]:
        """All dictionary transcriptions of a word, or None if it isn't there."""
        self.load_dictionary(language)
        self.dictionaries.select(language)
        return self.dictionaries.find_phonetics(word.lower())

    def process_rules(self, language: str, word: str, phase: str = PREPROCESSOR) -> str:
        """Rewrite a word with the pre- or postprocessor rules of a language."""
        return self.load_rules(language, phase).process(word)


def translate(language_code: str, text: str, data_dir: Union[str, Path] = DATA_DIR) -> str:
    """Transcribe a text with the resources in data_dir."""
    logging.debug("Translate text in %s with resources from %s", language_code, data_dir)
    return Translator(data_dir).translate(language_code, text)
