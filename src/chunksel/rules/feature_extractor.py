"""Sparse vectorization of chunk feature tokens.

The selector emits ``NAME:VALUE`` strings per chunk. This module maps them
onto column indices so a downstream classifier can consume one row per
chunk.
"""

import json
import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np
from scipy.sparse import csr_matrix, save_npz

from ..tree import Sentence

logger = logging.getLogger(__name__)


@dataclass
class FeatureVocab:
    """Feature strings in column order.

    Attributes
    ----------
    features : List[str]
        Feature string for every column
    index : Dict[str, int]
        Column of every feature string
    """

    features: List[str] = field(default_factory=list)
    index: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_features(cls, features: Iterable[str]) -> "FeatureVocab":
        vocab = cls()
        for feat in features:
            vocab.add(feat)
        return vocab

    def add(self, feature: str) -> int:
        """Return the column of ``feature``, appending it if new."""
        idx = self.index.get(feature)
        if idx is None:
            idx = self.index[feature] = len(self.features)
            self.features.append(feature)
        return idx

    def get(self, feature: str) -> Optional[int]:
        return self.index.get(feature)

    def name(self, idx: int) -> Optional[str]:
        if 0 <= idx < len(self.features):
            return self.features[idx]
        return None

    def by_feature_name(self) -> Dict[str, List[str]]:
        """Group vocabulary entries by the part before ``:``."""
        groups: Dict[str, List[str]] = defaultdict(list)
        for feat in self.features:
            groups[feat.split(":", 1)[0]].append(feat)
        return dict(groups)

    def save(self, path: Union[str, Path]) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.features, f, ensure_ascii=False, indent=2)

    def __contains__(self, feature: str) -> bool:
        return feature in self.index

    def __len__(self) -> int:
        return len(self.features)


@dataclass
class FeatureMatrix:
    """Chunk feature matrix with its vocabulary.

    Attributes
    ----------
    X : csr_matrix
        Sparse binary matrix (n_chunks x n_features)
    vocab : FeatureVocab
        Feature vocabulary
    chunk_ids : List[Tuple[int, int]]
        (sentence index, chunk index) for every row
    """

    X: csr_matrix
    vocab: FeatureVocab
    chunk_ids: List[Tuple[int, int]]

    def save(self, matrix_path: Union[str, Path], vocab_path: Optional[Union[str, Path]] = None) -> None:
        """Write the matrix as ``.npz`` and, optionally, the column names as JSON."""
        save_npz(matrix_path, self.X)
        if vocab_path is not None:
            self.vocab.save(vocab_path)
        logger.info("Saved %dx%d feature matrix to %s", self.X.shape[0], self.X.shape[1], matrix_path)


class ChunkFeatureVectorizer:
    """Build a feature vocabulary over processed sentences and vectorize chunks.

    Parameters
    ----------
    min_feature_freq : int
        Minimum frequency for a feature to be included
    """

    def __init__(self, min_feature_freq: int = 1):
        self.min_feature_freq = min_feature_freq

        self.vocab = FeatureVocab()
        self._feature_counts: Counter = Counter()
        self._fitted = False

    def fit(self, sentences: List[Sentence]) -> "ChunkFeatureVectorizer":
        """Count chunk features and keep the frequent ones.

        Parameters
        ----------
        sentences : List[Sentence]
            Sentences already processed by the selector

        Returns
        -------
        ChunkFeatureVectorizer
            Self
        """
        for sentence in sentences:
            for chunk in sentence.chunks:
                for feat in chunk.feature_list:
                    self._feature_counts[feat] += 1

        self.vocab = FeatureVocab.from_features(
            feat for feat, count in self._feature_counts.items() if count >= self.min_feature_freq
        )

        self._fitted = True
        return self

    def transform(self, sentences: List[Sentence]) -> FeatureMatrix:
        """Vectorize every chunk of ``sentences``.

        Features outside the vocabulary are dropped.

        Parameters
        ----------
        sentences : List[Sentence]
            Sentences already processed by the selector

        Returns
        -------
        FeatureMatrix
            One row per chunk, in sentence then chunk order
        """
        if not self._fitted:
            raise RuntimeError("Must call fit() before transform()")

        rows, cols, data = [], [], []
        chunk_ids = []

        for sent_idx, sentence in enumerate(sentences):
            for chunk_idx, chunk in enumerate(sentence.chunks):
                row_idx = len(chunk_ids)
                for col_idx in sorted({self.vocab.get(f) for f in chunk.feature_list} - {None}):
                    rows.append(row_idx)
                    cols.append(col_idx)
                    data.append(1.0)
                chunk_ids.append((sent_idx, chunk_idx))

        X = csr_matrix(
            (data, (rows, cols)),
            shape=(len(chunk_ids), len(self.vocab)),
            dtype=np.float32,
        )

        return FeatureMatrix(X=X, vocab=self.vocab, chunk_ids=chunk_ids)

    def fit_transform(self, sentences: List[Sentence]) -> FeatureMatrix:
        """Fit and transform in one step."""
        self.fit(sentences)
        return self.transform(sentences)

    def get_feature_name(self, idx: int) -> Optional[str]:
        """Get feature name by index."""
        return self.vocab.name(idx)

    def get_feature_stats(self) -> Dict[str, int]:
        """Count vocabulary entries per feature name."""
        return {name: len(feats) for name, feats in self.vocab.by_feature_name().items()}
