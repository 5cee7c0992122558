"""Sparse TF-IDF term vectors (scikit-learn weighting) and softmax calibration."""

import math
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

TEMPERATURE_FLOOR = 1e-4


class TermVector(Mapping[str, float]):
    """
    Immutable sparse token -> weight vector.

    Vectors produced by a fitted TfidfModel are L2-normalized (norm 1) or empty (norm 0).
    """

    __slots__ = ("_weights",)

    def __init__(self, weights: Mapping[str, float] | None = None) -> None:
        self._weights: Mapping[str, float] = MappingProxyType(dict(weights or {}))

    def __getitem__(self, token: str) -> float:
        return self._weights[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f"TermVector({dict(self._weights)!r})"

    @property
    def norm(self) -> float:
        return math.sqrt(sum(w * w for w in self._weights.values()))

    def dot(self, other: "TermVector") -> float:
        """Dot product; iterates the sparser side. Equals cosine for normalized vectors."""
        small, big = (self, other) if len(self) <= len(other) else (other, self)
        big_weights = big._weights
        total = 0.0
        for token, weight in small._weights.items():
            other_weight = big_weights.get(token)
            if other_weight is not None:
                total += weight * other_weight
        return total


EMPTY_VECTOR = TermVector()

_EMPTY_IDF: Mapping[str, float] = MappingProxyType({})


def _pretokenized(tokens: Sequence[str]) -> Sequence[str]:
    """Analyzer for documents that are already token lists."""
    return tokens


def _rows_to_vectors(matrix, features: Sequence[str]) -> list[TermVector]:
    vectors: list[TermVector] = []
    for row in range(matrix.shape[0]):
        start, end = matrix.indptr[row], matrix.indptr[row + 1]
        if start == end:
            vectors.append(EMPTY_VECTOR)
            continue
        vectors.append(
            TermVector(
                {features[col]: float(weight) for col, weight in zip(matrix.indices[start:end], matrix.data[start:end])}
            )
        )
    return vectors


@dataclass(frozen=True)
class TfidfModel:
    """
    Fitted TF-IDF weighting.

    - idf(t) = ln((N + 1) / (df(t) + 1)) + 1 (smooth_idf)
    - tf'(t) = 1 + ln(count) (sublinear_tf)
    - rows L2-normalized; tokens outside the vocabulary are dropped

    `vectorizer` is None when the corpus had no tokens at all (every vector is empty).
    """

    vectorizer: TfidfVectorizer | None
    features: tuple[str, ...]
    idf: Mapping[str, float]

    def vectorize(self, tokens: Sequence[str]) -> TermVector:
        """TF-IDF vector of one token list under the fitted vocabulary."""
        if self.vectorizer is None or not tokens:
            return EMPTY_VECTOR
        return _rows_to_vectors(self.vectorizer.transform([list(tokens)]), self.features)[0]


def fit_tfidf(docs: Sequence[Sequence[str]]) -> tuple[TfidfModel, list[TermVector]]:
    """
    Fit TF-IDF weights over tokenized documents.

    Each token counts once per document for document frequency.

    Returns:
        (model, one vector per document in input order)
    """
    docs = [list(doc) for doc in docs]
    if not any(docs):
        # TfidfVectorizer refuses an empty vocabulary
        return TfidfModel(vectorizer=None, features=(), idf=_EMPTY_IDF), [EMPTY_VECTOR] * len(docs)

    vectorizer = TfidfVectorizer(
        analyzer=_pretokenized,
        lowercase=False,
        token_pattern=None,
        sublinear_tf=True,
        smooth_idf=True,
        norm="l2",
    )
    matrix = vectorizer.fit_transform(docs).tocsr()
    features = tuple(vectorizer.get_feature_names_out().tolist())
    idf = MappingProxyType(dict(zip(features, vectorizer.idf_.tolist(), strict=True)))

    model = TfidfModel(vectorizer=vectorizer, features=features, idf=idf)
    return model, _rows_to_vectors(matrix, features)


def softmax(scores: Sequence[float], temperature: float) -> list[float]:
    """
    Temperature-scaled softmax (max-shifted for numerical stability).

    Temperature is clamped to TEMPERATURE_FLOOR. If the exponentials sum to
    zero every probability is zero.
    """
    if len(scores) == 0:
        return []
    t = max(float(temperature), TEMPERATURE_FLOOR)
    arr = np.asarray(scores, dtype=float)
    exps = np.exp((arr - arr.max()) / t)
    total = float(exps.sum())
    if total == 0:
        return [0.0] * len(scores)
    return (exps / total).tolist()
