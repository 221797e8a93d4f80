"""Language identification for extracted article text."""

from __future__ import annotations

import logging
from typing import Protocol

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

logger = logging.getLogger("webcollate")

# langdetect is randomized unless seeded.
DetectorFactory.seed = 0

DEFAULT_LANGUAGE = "en"

LANGUAGE_TAGS = {
    "ar": "ar",
    "bg": "bg",
    "ca": "ca",
    "cs": "cs",
    "da": "da",
    "de": "de",
    "el": "el",
    "en": "en",
    "es": "es",
    "et": "et",
    "fi": "fi",
    "fr": "fr",
    "he": "he",
    "hr": "hr",
    "hu": "hu",
    "id": "id",
    "it": "it",
    "ja": "ja",
    "ko": "ko",
    "lt": "lt",
    "lv": "lv",
    "nl": "nl",
    "no": "nb",
    "pl": "pl",
    "pt": "pt",
    "ro": "ro",
    "ru": "ru",
    "sk": "sk",
    "sl": "sl",
    "sv": "sv",
    "tr": "tr",
    "uk": "uk",
    "vi": "vi",
    "zh-cn": "zh-Hans",
    "zh-tw": "zh-Hant",
}


class LanguageClassifier(Protocol):
    def classify(self, text: str) -> str:
        ...


class NgramLanguageClassifier:
    """Maps langdetect's n-gram guess to a language tag, English when unsure."""

    def __init__(self, min_confidence: float = 0.7) -> None:
        self.min_confidence = min_confidence

    def classify(self, text: str) -> str:
        if not text or not text.strip():
            return DEFAULT_LANGUAGE
        try:
            guesses = detect_langs(text)
        except LangDetectException as exc:
            logger.debug("Language detection found no signal: %s", exc)
            return DEFAULT_LANGUAGE
        if not guesses:
            return DEFAULT_LANGUAGE
        best = guesses[0]
        if best.prob < self.min_confidence:
            logger.debug("Language guess %s below confidence (%.2f)", best.lang, best.prob)
            return DEFAULT_LANGUAGE
        return LANGUAGE_TAGS.get(best.lang, DEFAULT_LANGUAGE)
