"""Transcribe text to the International Phonetic Alphabet."""

from .rule_objects import Rule, RuleProcessor
from .stepper import OrthographyStepper, Stepper, WordStepper
from .translator import Translator, translate
from .trie import CharNode, Trie
