"""Command line feature extraction for chunked lattice files."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from .config import SelectorConfig, load_config
from .errors import ConfigurationError, FeatureOverflowError
from .preprocessing.format_converters import write_jsonl
from .preprocessing.lattice_reader import LatticeReader
from .rules.feature_extractor import ChunkFeatureVectorizer
from .rules.selector import Selector
from .utils.statistics import FeatureStatistics
from .utils.validators import SentenceValidator

logger = logging.getLogger(__name__)


def extract_features(input_file: str, config: SelectorConfig, output_file: Optional[str] = None,
                     stats_file: Optional[str] = None, matrix_file: Optional[str] = None) -> int:
    """
    Run head/function selection over a lattice file.

    Args:
        input_file: Path to chunked lattice input
        config: Selector configuration
        output_file: Optional JSONL output path
        stats_file: Optional path for feature statistics
        matrix_file: Optional .npz path for the chunk feature matrix; the
            column names go to the same path with a .vocab.json suffix

    Returns:
        Number of sentences that could not be processed
    """
    reader = LatticeReader(posset=config.posset, charset=config.charset)
    validator = SentenceValidator()
    stats_calculator = FeatureStatistics()

    print(f"Loading sentences from {input_file}...")
    sentences = reader.read_file(input_file)
    print(f"Loaded {len(sentences)} sentences")

    validation_results = validator.validate_corpus(sentences)
    if validation_results['invalid_sentences'] > 0:
        print(f"Warning: {validation_results['invalid_sentences']} "
              f"invalid sentences found")

    failed = 0
    processed = []
    with Selector() as selector:
        selector.open(config)
        for sentence in tqdm(sentences, desc="Selecting"):
            try:
                ok = selector.parse(sentence)
            except FeatureOverflowError as e:
                logger.warning("Rejected sentence: %s", e)
                ok = False
            if ok:
                processed.append(sentence)
            else:
                failed += 1

    if output_file:
        print(f"Saving features to {output_file}")
        write_jsonl(processed, output_file)

    if stats_file:
        stats = stats_calculator.compute_statistics(processed)
        stats_calculator.save_statistics(stats, stats_file)
        print(f"Saved statistics to {stats_file}")
        stats_calculator.print_summary(stats)

    if matrix_file:
        matrix = ChunkFeatureVectorizer().fit_transform(processed)
        vocab_file = str(Path(matrix_file).with_suffix(".vocab.json"))
        matrix.save(matrix_file, vocab_file)
        print(f"Saved {matrix.X.shape[0]}x{matrix.X.shape[1]} feature matrix to {matrix_file}")

    return failed


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``chunksel-extract``."""
    parser = argparse.ArgumentParser(
        description='Select chunk head/function tokens and emit dependency features'
    )
    parser.add_argument('input', help='Chunked lattice file')
    parser.add_argument('--config', help='YAML configuration file')
    parser.add_argument('--posset', choices=['IPA', 'JUMAN'], help='Tagset of the input')
    parser.add_argument('--charset', help='Charset of the input and patterns')
    parser.add_argument('--output', '-o', help='JSONL output file')
    parser.add_argument('--stats', help='Write feature statistics to this JSON file')
    parser.add_argument('--matrix', help='Write the sparse chunk feature matrix to this .npz file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(args.config) if args.config else SelectorConfig()
        if args.posset:
            config.posset = args.posset
        if args.charset:
            config.charset = args.charset
        failed = extract_features(args.input, config, args.output, args.stats, args.matrix)
    except ConfigurationError as e:
        print(f"Fatal configuration error: {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if failed:
        print(f"Warning: {failed} sentences were rejected")
    return 0


if __name__ == '__main__':
    sys.exit(main())
