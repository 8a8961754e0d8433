"""Validation utilities for chunked sentences."""

from typing import Dict, List

from ..tree import Sentence


class SentenceValidator:
    """Check that chunk ranges and tokens are usable by the selector."""

    def check_chunk_ranges(self, sentence: Sentence) -> List[str]:
        """Return problems with the sentence's chunk ranges."""
        issues = []
        n_tokens = sentence.token_size()
        expected_pos = 0

        for i, chunk in enumerate(sentence.chunks):
            if chunk.token_size <= 0:
                issues.append(f"Chunk {i} has no tokens")
                continue
            if chunk.token_pos < 0 or chunk.token_end > n_tokens:
                issues.append(
                    f"Chunk {i} covers tokens {chunk.token_pos}-{chunk.token_end - 1} "
                    f"outside 0-{n_tokens - 1}"
                )
            if chunk.token_pos < expected_pos:
                issues.append(f"Chunk {i} overlaps the previous chunk")
            expected_pos = chunk.token_end

        return issues

    def validate_sentence(self, sentence: Sentence) -> Dict:
        """Validate a single sentence."""
        issues = self.check_chunk_ranges(sentence)

        for j, token in enumerate(sentence.tokens):
            if not token.surface:
                issues.append(f"Token {j} has an empty surface")
            if not token.feature_list:
                issues.append(f"Token {j} has no POS fields")

        return {'valid': len(issues) == 0, 'issues': issues}

    def validate_corpus(self, sentences: List[Sentence]) -> Dict:
        """Validate every sentence of a corpus."""
        results = [self.validate_sentence(s) for s in sentences]
        valid_count = sum(1 for r in results if r['valid'])
        invalid_sentences = [
            {'index': i, 'issues': r['issues']}
            for i, r in enumerate(results) if not r['valid']
        ]

        return {
            'total_sentences': len(sentences),
            'valid_sentences': valid_count,
            'invalid_sentences': len(sentences) - valid_count,
            'validation_rate': valid_count / len(sentences) if sentences else 0,
            'issues': invalid_sentences
        }
