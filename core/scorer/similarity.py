#!/usr/bin/env python3
"""
Text Similarity - term-frequency cosine similarity between two texts.

Each text is its own single-document corpus: a term's weight is how often it
occurs in that text. Vectors are built over the union vocabulary of both texts.
"""

import re
import logging
from collections import Counter
from typing import List

import numpy as np

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r'[a-z0-9]+(?:\.[a-z0-9]+)*[+#]*')


def tokenize(text: str) -> List[str]:
    """Lower-case word tokens; keeps tokens like "c++", "c#" and "node.js" whole."""
    if not text:
        return []
    return _TOKEN_RE.findall(text.lower())


def text_similarity(text_a: str, text_b: str) -> float:
    """
    Cosine similarity of two texts' term-frequency vectors.

    Returns:
        Similarity in [0, 1]; 0 when either text is empty or has no terms
    """
    if not text_a or not text_b:
        return 0.0

    counts_a = Counter(tokenize(text_a))
    counts_b = Counter(tokenize(text_b))
    if not counts_a or not counts_b:
        return 0.0

    vocabulary = sorted(set(counts_a) | set(counts_b))
    vec_a = np.array([counts_a.get(term, 0) for term in vocabulary], dtype=np.float64)
    vec_b = np.array([counts_b.get(term, 0) for term in vocabulary], dtype=np.float64)

    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    similarity = float(vec_a @ vec_b / (norm_a * norm_b))
    return max(0.0, min(1.0, similarity))
