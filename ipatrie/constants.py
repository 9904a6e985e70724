"""Constant values used by ipatrie.

* Validation schemas for configuration, language codes, rules
and character groups.
* Resource layout and patterns for parsing rule files.
* SSML templates and the voice table for speech synthesis.
"""
import re
from pathlib import Path

import pandera as pa
from pandera import Column, DataFrameSchema, Check
from schema import Schema, And, Or, Regex, Optional

# Resource layout below the data directory
DATA_DIR = "data"
DICTIONARY_DIR = "translations"
MAP_DIR = "maps"
RULES_DIR = "rules"
RESOURCE_SUFFIX = ".txt"

PREPROCESSOR = "preprocessor"
POSTPROCESSOR = "postprocessor"
PHASES = (PREPROCESSOR, POSTPROCESSOR)

# Scanning and rendering
WORD_DELIMITER = "/"
"""Wraps words that were not found in the dictionary."""

PHONETIC_DELIMITER = "/"
"""Encloses transcriptions in the dictionary files."""

PHONETIC_SEPARATOR = ","
"""Separates alternative transcriptions of the same word."""

TEXT_PADDING = " "

# Rule syntax
DELETION_MARKER = "0"
BOUNDARY_MARKER = "#"
START_ANCHOR = "^"
END_ANCHOR = "$"

CHAR_GROUP_PATTERN = re.compile(r"^(::\w+::)[ \t]*=[ \t]*(\S+)[ \t]*$", re.MULTILINE)
RULE_LINE_PATTERN = re.compile(
    r"^([^\s#:]\S*)[ \t]+->[ \t]+(\S+)[ \t]+/[ \t]+(.*?)[ \t]*$", re.MULTILINE
)
RULE_PARTS_PATTERN = re.compile(
    r"^\s*(?P<to_replace>\S+)\s+->\s+(?P<replacement>\S+)"
    r"(?:\s+/\s*(?P<context>.*?))?\s*$"
)
CONTEXT_SPLIT_PATTERN = re.compile(r"\s?_\s?")

RULE_TEMPLATE = "(?P<prefix>{prefix})(?P<target>{to_replace})(?P<suffix>{suffix})"

# Define validation Schemas
language_schema = Schema(Regex(r"^[A-Za-z]{2,3}(_[A-Za-z]{2})?$"))

phase_schema = Schema(Or(*PHASES))

char_group_schema = Schema({Optional(Regex(r"^::\w+::$")): And(str, len)})

rule_schema = Schema({
    "to_replace": And(str, len),
    "replacement": str,
    "prefix": str,
    "suffix": str,
})

config_schema = Schema(
    {
        "data_dir": And(Or(str, Path), lambda path: str(path) != ""),
        "output_dir": And(Or(str, Path), lambda path: str(path) != ""),
        "delimiter": str,
        "prosody": And(int, lambda rate: 20 <= rate <= 200),
    },
    ignore_extra_keys=True,
)

DICTIONARY_COLUMNS = ["word", "phonetic"]

dictionary_schema = DataFrameSchema(
    {
        "word": Column(pa.String, Check.str_length(min_value=1), coerce=True),
        "phonetic": Column(pa.String, Check.str_length(min_value=1), coerce=True),
    },
    drop_invalid_rows=True,
)

# SSML output
DEFAULT_PROSODY = 85
SSML_TEMPLATE = '<speak><prosody rate="{prosody}%">{body}</prosody></speak>'
PHONEME_TEMPLATE = "<phoneme alphabet='ipa' ph='{phonetic}'/>"
PARAGRAPH_BREAK = '<break strength="strong"/>'
LINE_BREAK = '<break strength="weak"/>'
SSML_ESCAPES = (
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)

VOICES = {
    "de": {"male": "Hans", "female": "Vicki"},
    "fr_FR": {"male": "Mathieu", "female": "Celine"},
    "en_UK": {"male": "Brian", "female": "Emma"},
    "en_US": {"male": "Joey", "female": "Kimberly"},
    "es_ES": {"male": "Enrique", "female": "Lucia"},
}
DEFAULT_VOICE_LANGUAGE = "en_UK"

OUTPUT_COLUMNS = ["text", "transcription"]
TRANSLATION_PREFIX = "transcriptions"
