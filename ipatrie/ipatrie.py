"""Command line interface to transcribe text to IPA."""

import logging
import pathlib
import pprint

import click
from schema import SchemaError

from .constants import (
    DATA_DIR,
    DEFAULT_PROSODY,
    PHASES,
    PREPROCESSOR,
    TRANSLATION_PREFIX,
    WORD_DELIMITER,
    config_schema,
)
from .ssml import get_voice
from .translator import Translator
from .utils import (
    ensure_path_exists,
    load_config,
    set_logging_config,
    write_translations,
)

CFG = {
    'data_dir': DATA_DIR,
    'output_dir': 'data/output',
    'delimiter': WORD_DELIMITER,
    'prosody': DEFAULT_PROSODY,
}
CONFIG_FILE = load_config("./config.py")
CFG.update(CONFIG_FILE)
CONTEXT_SETTINGS = dict(
    help_option_names=['-h', '--help'],
)


def resolve_settings(config_file, options: dict) -> dict:
    """Combine the default config, a config file and the given CLI options."""
    settings = dict(CFG)
    if config_file is not None:
        settings.update(load_config(config_file))
    settings.update(
        {name: value for name, value in options.items() if value is not None})
    return config_schema.validate(settings)


def report_invalid_language(language, error):
    logging.error("Invalid language code %s: %s", language, error)
    click.secho(f"Invalid language code {language}: {error}", fg="red", err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config-file",
    type=click.Path(resolve_path=True, exists=True, dir_okay=False, path_type=pathlib.Path),
    help="Load configuration values from the given .py file.",
)
@click.option(
    "-d",
    "--data-dir",
    type=click.Path(resolve_path=True, file_okay=False, path_type=pathlib.Path),
    help="Directory with the translations, maps and rules of each language.",
)
@click.option(
    "--delimiter",
    type=str,
    help="Characters to wrap words with that are not in the dictionary.",
)
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(resolve_path=True, file_okay=False, path_type=pathlib.Path),
    help="The directory path that files are written to.",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    help="Save all logging messages to the given file.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Print logging messages to the console. "
         "-v is informative, -vv is detailed (for debugging)."
)
@click.pass_context
def main(ctx, config_file, data_dir, delimiter, output_dir, log_file, verbose):
    """Transcribe text to the International Phonetic Alphabet.

    Words are looked up in the dictionary of the language. Words that are
    not in the dictionary are converted with the orthography map and the
    rules of the language, and wrapped in the delimiter.

    Default values are specified in the config.py file.
    If provided, CLI arguments override the default values from the config.
    """
    set_logging_config(verbose, logfile=log_file)
    logging.info("START LOG")
    settings = resolve_settings(
        config_file,
        {"data_dir": data_dir, "delimiter": delimiter, "output_dir": output_dir},
    )
    if verbose:
        click.secho("Configuration values:", fg="yellow", err=True)
        click.echo(pprint.pformat(settings), err=True)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["translator"] = Translator(
        data_dir=settings["data_dir"], delimiter=settings["delimiter"])


@main.command("translate")
@click.argument("language")
@click.argument("text", nargs=-1)
@click.option(
    "-f",
    "--file",
    "files",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    multiple=True,
    help="Transcribe the contents of the given text file(s).",
)
@click.option(
    "--outfile",
    type=str,
    help="Also write the texts and transcriptions as csv to this file in the output directory.",
)
@click.pass_obj
def translate_text(obj, language, text, files, outfile):
    """Transcribe TEXT, or the given files, in LANGUAGE."""
    translator = obj["translator"]
    texts = [(" ".join(text), None)] if text else []
    for file_path in files:
        try:
            texts.append((file_path.read_text(encoding="utf-8"), file_path))
        except (OSError, UnicodeDecodeError) as error:
            logging.error("Skipping file %s: %s", file_path, error)
            click.secho(f"Skipping {file_path}: {error}", fg="red", err=True)
    if not texts:
        raise click.UsageError("Give some TEXT or at least one --file to transcribe.")

    rows = []
    for source, file_path in texts:
        try:
            result = translator.translate(language, source)
        except (SchemaError, TypeError, ValueError) as error:
            logging.error("Couldn't transcribe %s: %s", file_path or "text", error)
            click.secho(f"Couldn't transcribe {file_path or 'text'}: {error}", fg="red", err=True)
            continue
        if file_path is not None:
            click.secho(f"{file_path.name}", fg="cyan")
        click.echo(result)
        rows.append((source, result))

    if outfile:
        output_dir = ensure_path_exists(obj["settings"]["output_dir"])
        write_translations(output_dir / f"{TRANSLATION_PREFIX}_{outfile}", rows)


@main.command("ssml")
@click.argument("language")
@click.argument("text", nargs=-1, required=True)
@click.option(
    "-p",
    "--prosody",
    type=click.IntRange(20, 200),
    help="Speech rate in percent of the normal rate.",
)
@click.option(
    "-g",
    "--gender",
    type=click.Choice(["male", "female"]),
    default="male",
    help="Gender of the suggested voice.",
)
@click.pass_obj
def translate_ssml(obj, language, text, prosody, gender):
    """Transcribe TEXT in LANGUAGE to SSML with IPA phoneme tags."""
    translator = obj["translator"]
    if prosody is None:
        prosody = obj["settings"]["prosody"]
    try:
        ssml = translator.translate_ssml(language, " ".join(text), prosody=prosody)
    except SchemaError as error:
        report_invalid_language(language, error)
        return
    click.secho(f"Voice: {get_voice(language, gender)}", fg="cyan", err=True)
    click.echo(ssml)


@main.command("lookup")
@click.argument("language")
@click.argument("words", nargs=-1, required=True)
@click.pass_obj
def lookup_words(obj, language, words):
    """Print all dictionary transcriptions of WORDS in LANGUAGE."""
    translator = obj["translator"]
    for word in words:
        try:
            phonetics = translator.lookup(language, word)
        except SchemaError as error:
            report_invalid_language(language, error)
            return
        if phonetics is None:
            click.secho(f"{word}\t-", fg="yellow")
        else:
            click.echo(f"{word}\t{', '.join(phonetics)}")


@main.command("rules")
@click.argument("language")
@click.argument("words", nargs=-1, required=True)
@click.option(
    "--phase",
    type=click.Choice(PHASES),
    default=PREPROCESSOR,
    help="Which of the rule sets of the language to apply.",
)
@click.pass_obj
def apply_rules(obj, language, words, phase):
    """Rewrite WORDS with the rules of LANGUAGE."""
    translator = obj["translator"]
    for word in words:
        try:
            result = translator.process_rules(language, word, phase)
        except SchemaError as error:
            report_invalid_language(language, error)
            return
        click.echo(f"{word}\t{result}")
