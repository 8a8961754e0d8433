"""Format converter module for exporting processed sentences."""

import json
import logging
from typing import Dict, Iterable

from ..tree import Sentence

logger = logging.getLogger(__name__)


def sentence_to_dict(sentence: Sentence) -> Dict:
    """Convert a processed sentence to a JSON-serializable dictionary."""
    return {
        'posset': sentence.posset.name,
        'output_layer': sentence.output_layer.name,
        'charset': sentence.charset,
        'tokens': [
            {
                'id': j,
                'surface': token.surface,
                'normalized_surface': token.normalized_surface,
                'feature': token.feature,
                'ne': token.ne,
            }
            for j, token in enumerate(sentence.tokens)
        ],
        'chunks': [
            {
                'id': i,
                'token_pos': chunk.token_pos,
                'token_size': chunk.token_size,
                'link': chunk.link,
                'head_pos': chunk.head_pos,
                'func_pos': chunk.func_pos,
                'features': list(chunk.feature_list),
            }
            for i, chunk in enumerate(sentence.chunks)
        ],
    }


def write_jsonl(sentences: Iterable[Sentence], output_path: str) -> int:
    """Write one JSON object per sentence; returns the number written."""
    count = 0
    with open(output_path, 'w', encoding='utf-8') as f:
        for sentence in sentences:
            f.write(json.dumps(sentence_to_dict(sentence), ensure_ascii=False))
            f.write('\n')
            count += 1

    logger.info("Wrote %d sentences to %s", count, output_path)
    return count
