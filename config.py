"""Configure the resources and output of the IPA transcriptions."""

DATA_DIR = "data"
"""Path to the folder with the language resources.

Word dictionaries are read from translations/<language>.txt,
orthography maps from maps/<language>.txt
and rewrite rules from rules/preprocessors/<language>.txt
and rules/postprocessors/<language>.txt.
"""

OUTPUT_DIR = "data/output"
"""Path to the output folder for csv files with transcriptions"""

DELIMITER = "/"
"""Characters that surround words that were not found in the dictionary"""

PROSODY = 85
"""Speech rate of the SSML output, in percent of the normal rate."""
