"""Statistics over generated chunk features."""

import json
from collections import Counter
from typing import Dict, List

from ..tree import Sentence


class FeatureStatistics:
    """Compute feature statistics for processed sentences and save to JSON."""

    def compute_statistics(self, sentences: List[Sentence]) -> Dict:
        """Summarize chunk counts, feature names and head/function offsets."""
        chunks = [chunk for s in sentences for chunk in s.chunks]
        chunks_per_sentence = [s.chunk_size() for s in sentences]
        features_per_chunk = [chunk.feature_list_size for chunk in chunks]
        feature_names = [
            feat.split(':', 1)[0]
            for chunk in chunks
            for feat in chunk.feature_list
        ]

        return {
            'total_sentences': len(sentences),
            'total_chunks': len(chunks),
            'total_tokens': sum(s.token_size() for s in sentences),
            'chunk_stats': {
                'avg_chunks': sum(chunks_per_sentence) / len(chunks_per_sentence) if chunks_per_sentence else 0,
                'min_chunks': min(chunks_per_sentence) if chunks_per_sentence else 0,
                'max_chunks': max(chunks_per_sentence) if chunks_per_sentence else 0,
            },
            'feature_stats': {
                'avg_features': sum(features_per_chunk) / len(features_per_chunk) if features_per_chunk else 0,
                'min_features': min(features_per_chunk) if features_per_chunk else 0,
                'max_features': max(features_per_chunk) if features_per_chunk else 0,
            },
            'feature_name_distribution': dict(Counter(feature_names)),
            'head_offset_distribution': dict(Counter(chunk.head_pos for chunk in chunks)),
            'func_offset_distribution': dict(Counter(chunk.func_pos for chunk in chunks)),
        }

    def save_statistics(self, stats: Dict, output_path: str) -> None:
        """Save statistics to JSON file."""
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(stats, f, indent=2, ensure_ascii=False)

    def print_summary(self, stats: Dict) -> None:
        """Print a formatted summary of statistics."""
        print(f"\n{'='*60}\nCHUNK FEATURE STATISTICS\n{'='*60}")
        print(f"\nSentences: {stats['total_sentences']}")
        print(f"Chunks: {stats['total_chunks']}")
        print(f"Tokens: {stats['total_tokens']}")

        chunk_stats = stats['chunk_stats']
        print(f"\nChunks per sentence: {chunk_stats['avg_chunks']:.2f} "
              f"(range {chunk_stats['min_chunks']}-{chunk_stats['max_chunks']})")

        feat = stats['feature_stats']
        print(f"Features per chunk: {feat['avg_features']:.2f} "
              f"(range {feat['min_features']}-{feat['max_features']})")

        total = sum(stats['feature_name_distribution'].values())
        print("\nFeature Distribution:")
        for name, count in sorted(stats['feature_name_distribution'].items(), key=lambda x: x[1], reverse=True):
            print(f"  {name}: {count} ({count/total*100:.2f}%)")

        print(f"\n{'='*60}\n")
