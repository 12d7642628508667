"""
Content hashing used to recognise a question across imports.
"""

import hashlib
from typing import Iterable

OPTION_DELIMITER = "|"


def compute_hash(question_text: str, option_texts: Iterable[str]) -> str:
    """SHA-256 hex digest of the normalized question text and option texts.

    Option texts are sorted before joining, so option order, labels and
    correctness flags never change the hash.
    """
    normalized_text = question_text.strip().lower()
    normalized_options = OPTION_DELIMITER.join(
        sorted(text.strip().lower() for text in option_texts)
    )
    payload = normalized_text + normalized_options
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
