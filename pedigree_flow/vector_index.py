"""
Lightweight TF-IDF index for FAQ lookups (no external embedding service).
"""

import re
import unicodedata
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Dict, Any, Sequence

import numpy as np

from .text_utils import THAI_CHAR_RE

SPLIT_RE = re.compile(r"[\s\-_.,;:!?()\[\]{}'\"]+")

THAI_COMMON_PARTICLES = [
    "ของ", "ที่", "ใน", "และ", "หรือ", "จะ", "ได้", "มี", "ให้", "กับ",
    "เป็น", "จาก", "แต่", "ถ้า", "เมื่อ", "คือ", "โดย", "ซึ่ง", "ก็", "นี้",
]

ENGLISH_STOPWORDS = {
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "can", "this", "that", "these",
    "those", "i", "you", "he", "she", "it", "we", "they", "what", "which",
    "who", "when", "where", "why", "how", "all", "each", "every", "both",
    "few", "more", "most", "other", "some", "such", "no", "not", "only",
}


def tokenize(text: str) -> List[str]:
    """Lowercased word tokens; Thai runs are split once around a common particle."""
    normalized = unicodedata.normalize("NFKC", text or "").lower()
    expanded: List[str] = []
    for token in filter(None, SPLIT_RE.split(normalized)):
        if THAI_CHAR_RE.search(token):
            for particle in THAI_COMMON_PARTICLES:
                if particle in token and len(token) > len(particle):
                    expanded.extend(p for p in token.split(particle) if p)
                    break
            else:
                expanded.append(token)
        else:
            expanded.append(token)
    return [
        t for t in expanded
        if len(t) > 1 and t not in ENGLISH_STOPWORDS and t not in THAI_COMMON_PARTICLES
    ]


def term_frequency(tokens: Sequence[str]) -> Dict[str, float]:
    """Raw counts divided by the most frequent term's count."""
    counts = Counter(tokens)
    if not counts:
        return {}
    peak = max(counts.values())
    return {t: c / peak for t, c in counts.items()}


@dataclass
class SearchHit:
    id: str
    score: float
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)


class TfidfIndex:
    """
    Immutable TF-IDF index.

    The vocabulary and IDF weights are computed once from the full document
    set, so every stored vector and every query share the same weighting.
    """

    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self.ids: List[str] = [str(d["id"]) for d in documents]
        self.contents: List[str] = [d.get("content") or "" for d in documents]
        self.metadata: List[Dict[str, Any]] = [dict(d.get("metadata") or {}) for d in documents]

        doc_tokens = [tokenize(c) for c in self.contents]
        self.vocabulary: Dict[str, int] = {
            term: i for i, term in enumerate(sorted({t for toks in doc_tokens for t in toks}))
        }

        n_docs = len(doc_tokens)
        self.idf = np.ones(len(self.vocabulary), dtype=np.float64)
        if n_docs and self.vocabulary:
            df = np.zeros(len(self.vocabulary), dtype=np.float64)
            for toks in doc_tokens:
                for term in set(toks):
                    df[self.vocabulary[term]] += 1
            self.idf = np.log(n_docs / np.maximum(df, 1)) + 1.0

        self.matrix = np.zeros((n_docs, len(self.vocabulary)), dtype=np.float64)
        for row, toks in enumerate(doc_tokens):
            self.matrix[row] = self._weigh(term_frequency(toks))
        norms = np.linalg.norm(self.matrix, axis=1, keepdims=True)
        self.matrix = np.divide(self.matrix, norms, out=np.zeros_like(self.matrix), where=norms > 0)

    def __len__(self) -> int:
        return len(self.ids)

    def _weigh(self, tf: Dict[str, float]) -> np.ndarray:
        vec = np.zeros(len(self.vocabulary), dtype=np.float64)
        for term, weight in tf.items():
            idx = self.vocabulary.get(term)
            if idx is not None:
                vec[idx] = weight
        return vec * self.idf

    def search(self, query: str, top_k: int = 5) -> List[SearchHit]:
        """Cosine similarity against every document; hits with a positive score, best first."""
        if not self.ids or not self.vocabulary:
            return []
        qvec = self._weigh(term_frequency(tokenize(query)))
        qnorm = float(np.linalg.norm(qvec))
        if qnorm == 0.0:
            return []
        scores = self.matrix @ (qvec / qnorm)
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [
            SearchHit(id=self.ids[i], score=float(scores[i]), content=self.contents[i], metadata=self.metadata[i])
            for i in order if scores[i] > 0
        ]
