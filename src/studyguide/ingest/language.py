"""Best-effort identification of the language a course is written in."""
from __future__ import annotations

import logging
from typing import Optional

from langdetect import DetectorFactory, LangDetectException, detect_langs

LOGGER = logging.getLogger(__name__)
DetectorFactory.seed = 0


class LanguageDetector:
    """Identify the dominant language of extracted course text.

    Only a leading sample is inspected. ``None`` is returned for empty text
    and when langdetect's best guess falls below ``min_probability``.
    """

    def __init__(self, sample_chars: int = 5000, min_probability: float = 0.5) -> None:
        self.sample_chars = sample_chars
        self.min_probability = min_probability

    def detect(self, text: str) -> Optional[str]:
        sample = text[: self.sample_chars].strip()
        if not sample:
            return None
        try:
            candidates = detect_langs(sample)
        except LangDetectException as exc:
            LOGGER.info("Language of a %s character sample is undetermined: %s", len(sample), exc)
            return None

        best = candidates[0]
        if best.prob < self.min_probability:
            LOGGER.debug("Discarding low confidence language guess %s (%.2f)", best.lang, best.prob)
            return None
        return best.lang
