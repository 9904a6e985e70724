import logging
import re
from functools import reduce
from pathlib import Path
from typing import Dict, List, Union

from schema import SchemaError

from .constants import (
    BOUNDARY_MARKER,
    CHAR_GROUP_PATTERN,
    CONTEXT_SPLIT_PATTERN,
    DELETION_MARKER,
    END_ANCHOR,
    RULE_LINE_PATTERN,
    RULE_PARTS_PATTERN,
    RULE_TEMPLATE,
    START_ANCHOR,
    char_group_schema,
    rule_schema,
)
from .utils import read_resource


def expand_char_groups(context: str, char_groups: Dict[str, str] = None) -> str:
    """Replace character group names with a group of their alternatives."""
    for name, alternatives in (char_groups or {}).items():
        context = context.replace(name, f"(?:{alternatives})")
    return context


class Rule:
    """Context-sensitive rewrite rule for words or transcriptions.

    A rule replaces the ``to_replace`` pattern with ``replacement``
    wherever it is preceded by ``prefix`` and followed by ``suffix``.
    The contexts may refer to character groups by name, e.g. ``::vowel::``,
    and ``#`` marks the start of the word in the prefix
    and the end of the word in the suffix.
    A ``0`` in the replacement deletes the matched text.
    """
    def __init__(
            self,
            to_replace: str,
            replacement: str,
            prefix: str = "",
            suffix: str = "",
            char_groups: dict = None,
    ):
        self.to_replace = to_replace
        self.replacement = replacement.replace(DELETION_MARKER, "")
        self.prefix = expand_char_groups(prefix, char_groups).replace(
            BOUNDARY_MARKER, START_ANCHOR)
        self.suffix = expand_char_groups(suffix, char_groups).replace(
            BOUNDARY_MARKER, END_ANCHOR)
        try:
            self.regex = re.compile(
                RULE_TEMPLATE.format(
                    prefix=self.prefix,
                    to_replace=self.to_replace,
                    suffix=self.suffix,
                )
            )
        except re.error as error:
            raise ValueError(f"Invalid rule pattern in {self!r}: {error}") from error

    @classmethod
    def from_line(cls, line: str, char_groups: dict = None):
        """Parse a rule of the form ``PATTERN -> REPLACEMENT / PREFIX _ SUFFIX``.

        Character groups are expanded before the context is split
        at the ``_`` marker, so group names may contain underscores.
        """
        parts = RULE_PARTS_PATTERN.match(line)
        if parts is None:
            raise ValueError(f"Not a rule: {line!r}")
        context = expand_char_groups(parts.group("context") or "", char_groups)
        prefix, suffix = (
            part.strip() for part in
            (CONTEXT_SPLIT_PATTERN.split(context, maxsplit=1) + [""])[:2]
        )
        return cls(parts.group("to_replace"), parts.group("replacement"), prefix, suffix)

    @classmethod
    def from_dict(cls, rule_dict: dict):
        """Instantiate a Rule object from a valid rule dictionary.

        Parameters
        ----------
        rule_dict: dict
            Format is {"to_replace": str, "replacement": str, "prefix": str, "suffix": str}
        """
        return cls(**rule_schema.validate(rule_dict))

    def to_dict(self):
        """Create a well-formed rule dict."""
        rule_dict = {
            "to_replace": self.to_replace,
            "replacement": self.replacement,
            "prefix": self.prefix,
            "suffix": self.suffix,
        }
        return rule_schema.validate(rule_dict)

    def __repr__(self):
        instance_repr = (
            "{}(to_replace={!r}, replacement={!r}, prefix={!r}, suffix={!r})"
        ).format(
            self.__class__.__name__,
            self.to_replace,
            self.replacement,
            self.prefix,
            self.suffix,
        )
        return instance_repr

    def __str__(self):
        return f"{self.to_replace} -> {self.replacement or DELETION_MARKER} / {self.prefix} _ {self.suffix}"

    def __eq__(self, other):
        return isinstance(other, Rule) and repr(self) == repr(other)

    @property
    def pattern(self) -> str:
        """The compiled contextual pattern."""
        return self.regex.pattern

    @property
    def is_valid(self):
        """Whether or not the rule is valid."""
        try:
            self.to_dict()
        except SchemaError:
            return False
        return True

    def _substitute(self, match):
        return match.group("prefix") + self.replacement + match.group("suffix")

    def apply(self, word: str) -> str:
        """Rewrite every non-overlapping match in the word, left to right."""
        return self.regex.sub(self._substitute, word)


class RuleProcessor:
    """An ordered collection of rules, applied one after the other."""
    def __init__(
            self,
            rules: list = None,
            char_groups: dict = None,
            name: str = None,
    ):
        self.name = name
        self.char_groups: Dict[str, str] = char_group_schema.validate(
            {} if char_groups is None else char_groups)
        self._rules: List[Rule] = []

        if rules is not None:
            self.add_multiple_rules(rules)

    @classmethod
    def from_text(cls, text: str, name: str = None):
        """Create a processor from the contents of a rule file."""
        return cls(
            rules=find_rule_lines(text),
            char_groups=parse_character_groups(text),
            name=name,
        )

    def __repr__(self):
        return "{}(name={!r}, rules={!r}, char_groups={!r})".format(
            self.__class__.__name__, self.name, self.rules, self.char_groups
        )

    def __len__(self):
        return len(self._rules)

    @property
    def rules(self):
        """Rules in the order they are applied."""
        return self._rules

    def add_rule(self, rule: Union[Rule, dict, str]):
        """Add a rule to the end of the processing order.

        Parameters
        ----------
        rule: Rule, dict or str
            A Rule instance, a rule dict, or a line in the rule file format.
        """
        if isinstance(rule, str):
            rule = Rule.from_line(rule, self.char_groups)
        elif isinstance(rule, dict):
            rule = Rule.from_dict(rule)
        elif not isinstance(rule, Rule):
            raise ValueError(f"Invalid rule: {rule!r}")
        if not rule.is_valid:
            raise ValueError(f"Invalid rule: {rule!r}")
        self._rules.append(rule)
        logging.debug("Adding %s to %s", rule, self.name)

    def add_multiple_rules(self, rule_list):
        """Add a collection of rules, skipping the invalid ones."""
        for rule in rule_list:
            try:
                self.add_rule(rule)
            except (ValueError, SchemaError) as error:
                logging.error("Skipping invalid rule %r: %s", rule, error)

    def process(self, word: str) -> str:
        """Apply each rule to the output of the previous one."""
        if not self._rules:
            return word
        return reduce(lambda text, rule: rule.apply(text), self._rules, word)


def parse_character_groups(text: str) -> Dict[str, str]:
    """Find the ``::name:: = a|b|c`` character group definitions in a rule file."""
    return {name: alternatives for name, alternatives in CHAR_GROUP_PATTERN.findall(text)}


def find_rule_lines(text: str) -> List[str]:
    """Find the rule lines in a rule file."""
    return [match.group(0) for match in RULE_LINE_PATTERN.finditer(text)]


def load_rule_processor(file_path: Union[str, Path], name: str = None) -> RuleProcessor:
    """Load a rule file into a RuleProcessor.

    A missing or unreadable file gives a processor without rules.
    """
    logging.debug("Loading rules from %s", file_path)
    text = read_resource(file_path)
    if text is None:
        return RuleProcessor(name=name)
    processor = RuleProcessor.from_text(text, name=name)
    logging.info("Loaded %s rules from %s", len(processor), file_path)
    return processor
