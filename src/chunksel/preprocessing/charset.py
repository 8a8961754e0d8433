"""Charset handling for pattern literals and lattice input."""

import codecs
import logging
from typing import Dict, Tuple

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

# Charset identifiers used by the pipeline mapped to Python codec names.
CHARSET_ALIASES: Dict[str, str] = {
    "UTF8": "utf-8",
    "UTF-8": "utf-8",
    "EUC-JP": "euc_jp",
    "EUC_JP": "euc_jp",
    "EUCJP": "euc_jp",
    "CP932": "cp932",
    "SHIFT-JIS": "shift_jis",
    "SHIFT_JIS": "shift_jis",
    "SJIS": "shift_jis",
    "ASCII": "ascii",
    "UTF16": "utf-16",
    "UTF-16": "utf-16",
}


def resolve_charset(name: str) -> str:
    """Return the Python codec name for a pipeline charset identifier.

    Raises
    ------
    ConfigurationError
        If the charset is not known to Python's codec registry
    """
    key = str(name).strip().upper()
    candidate = CHARSET_ALIASES.get(key, str(name).strip())
    try:
        return codecs.lookup(candidate).name
    except LookupError:
        raise ConfigurationError(f"Unknown charset: {name}")


class CharsetNormalizer:
    """Best-effort conversion of text into the pipeline's internal charset.

    Text stays a ``str`` internally; conversion checks that it survives a
    round trip through the target codec so that literals compare equal to
    input decoded from that charset.

    Parameters
    ----------
    to_charset : str
        Target charset identifier (e.g. "UTF-8", "EUC-JP")
    """

    def __init__(self, to_charset: str = "UTF-8"):
        self.charset = to_charset
        self.codec = resolve_charset(to_charset)

    def convert(self, text: str) -> Tuple[str, bool]:
        """Convert ``text``; returns the text and whether conversion succeeded."""
        try:
            converted = text.encode(self.codec).decode(self.codec)
        except UnicodeError as e:
            logger.debug("Cannot represent %r in %s: %s", text, self.codec, e)
            return text, False
        return converted, True
