from .charset import CharsetNormalizer, resolve_charset
from .lattice_reader import LatticeReader
from .format_converters import sentence_to_dict, write_jsonl

__all__ = ["CharsetNormalizer", "resolve_charset", "LatticeReader", "sentence_to_dict", "write_jsonl"]
