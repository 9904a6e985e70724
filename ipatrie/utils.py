"""Utility functions for ipatrie"""

import csv
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Union, Iterable, Dict, Optional

import pandas as pd

from .constants import (
    DICTIONARY_COLUMNS,
    OUTPUT_COLUMNS,
    PHONETIC_SEPARATOR,
    dictionary_schema,
)


def ensure_path_exists(path):
    """Make sure a directory exists and is a Path object."""
    path_obj = Path(path)
    path_obj.mkdir(exist_ok=True, parents=True)
    return path_obj


def resolve_rel_path(file_rel_path: Union[str, Path]) -> Path:
    """Resolve the full path from a potential relative path to the local or parent directory."""

    full_path = Path(file_rel_path).resolve()
    if not full_path.exists():
        full_path = Path.cwd().parent / file_rel_path
    return full_path


def load_module_from_path(file_path):
    """Use importlib to load a module from a .py file path."""
    module_path = resolve_rel_path(file_path)
    assert module_path.suffix == ".py", (
            f"Inappropriate file type: {module_path.suffix} ({file_path})")
    module_name = module_path.stem

    spec = importlib.util.spec_from_file_location(module_name, module_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def load_module_dict(module_path) -> Dict:
    """Load a dict of the public variables defined in a python module, ``{var_name:value}``."""
    module = load_module_from_path(module_path)
    module_dict = module.__dict__
    return {
        key: value for key, value in module_dict.items()
        if value and not key.startswith("_")
    }


def load_config(filename):
    """Load variable names (lower case) and their values as a dict from a .py file."""
    try:
        return {k.lower(): v for k, v in load_module_dict(filename).items()}
    except FileNotFoundError:
        return {}


def read_resource(file_path: Union[str, Path]) -> Optional[str]:
    """Read a text resource, or return None if it can't be read."""
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        logging.warning("Couldn't read %s: %s", file_path, error)
        return None


def load_dictionary_frame(file_path: Union[str, Path]) -> pd.DataFrame:
    """Load a tab-separated word/phonetic resource into a DataFrame.

    Lines with an empty word or phonetic field are dropped by the
    dictionary schema. Fields beyond the second are ignored.

    Raises
    ------
    OSError, UnicodeDecodeError
        If the file can't be read.
    """
    try:
        dictionary_df = pd.read_csv(
            file_path,
            sep="\t",
            header=None,
            names=DICTIONARY_COLUMNS,
            usecols=[0, 1],
            index_col=False,
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            dtype=str,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=DICTIONARY_COLUMNS)
    dictionary_df = dictionary_df.fillna("").apply(lambda column: column.str.strip())
    if dictionary_df.empty:
        return dictionary_df
    valid_df = dictionary_schema.validate(dictionary_df, lazy=True)
    dropped = len(dictionary_df) - len(valid_df)
    if dropped:
        logging.debug("Skipped %s malformed lines in %s", dropped, file_path)
    return valid_df


def make_list(value, separator=PHONETIC_SEPARATOR):
    """Turn a string, list or other collection into a list.

    Strings are split on the separator, and empty items are dropped.
    """
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [v.strip() for v in value.split(separator) if v.strip()]
    return list(value)


def write_translations(output_file: Union[str, Path], data: Iterable, delimiter: str = ","):
    """Write source texts and their transcriptions to a csv file.

    Parameters
    ----------
    output_file: str or Path
        Name of the file to write data to
    data: Iterable[tuple] or pd.DataFrame
        Pairs of (text, transcription)
    delimiter: str
        character to separate items in a row
    """
    logging.info("Write transcriptions to %s", output_file)
    if isinstance(data, pd.DataFrame):
        data.to_csv(output_file, header=True, index=False, sep=delimiter)
    else:
        with open(output_file, 'w', encoding="utf-8", newline='') as csvfile:
            out_writer = csv.writer(csvfile, delimiter=delimiter)
            out_writer.writerow(OUTPUT_COLUMNS)
            out_writer.writerows(data)


def log_level(verbosity: int):
    """Calculate the log level given by the number of -v flags.

    0 = logging.WARNING (30)
    1 = logging.INFO (20)
    2 = logging.DEBUG (10)
    """
    return (3 - verbosity) * 10 if verbosity in (0, 1, 2) else 10


def set_logging_config(verbose=0, logfile=None):
    """Configure logging level and destination based on user input.

    Everything is logged to the logfile, if given.
    The console only gets messages at the level given by verbose.
    """
    logging.basicConfig(
        level=logging.DEBUG if logfile else log_level(verbose),
        format=(
            "%(asctime)s | %(levelname)s "
            "| %(module)s-%(funcName)s-%(lineno)04d | %(message)s"),
        datefmt='%Y-%m-%d %H:%M',
        filename=logfile,
        filemode='a')

    if verbose and logfile:
        # define a Handler which writes log messages to stderr
        console = logging.StreamHandler()
        console.setLevel(log_level(verbose))
        formatter = logging.Formatter(
            '%(asctime)-10s | %(levelname)s | %(message)s')
        console.setFormatter(formatter)
        logging.getLogger('').addHandler(console)

    return verbose
