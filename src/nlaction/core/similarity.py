"""Vector similarity used for every ranking decision."""

from __future__ import annotations

import math
from collections.abc import Sequence

EPSILON = 1e-9


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    The epsilon in the denominator keeps all-zero vectors at 0.0 instead of
    dividing by zero.

    Raises:
        ValueError: If the vectors have different lengths.
    """
    dot_product = sum(x * y for x, y in zip(a, b, strict=True))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))
    return dot_product / (norm_a * norm_b + EPSILON)
