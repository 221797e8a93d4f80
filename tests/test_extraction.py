"""Tests for readability-based article extraction and language tagging."""

import pytest

from webcollate.dom import create_document
from webcollate.errors import ExtractionError
from webcollate.extraction import ReadabilityExtractor
from webcollate.language import DEFAULT_LANGUAGE, NgramLanguageClassifier

PARAGRAPH = (
    "The committee met on Tuesday to review the proposal for the new library, "
    "which would replace the old building on the corner of Main Street and Elm. "
    "Members discussed the budget, the timeline, and the plans for public input, "
    "and agreed to publish a detailed report before the end of the month."
)

ARTICLE_PAGE = f"""
<html>
<head>
  <title>New Library Plans | Town News</title>
  <meta name="author" content="Jo Reporter">
  <meta name="description" content="The committee reviewed the library proposal.">
</head>
<body>
  <nav><a href="/">Home</a> <a href="/news">News</a></nav>
  <article class="story main-story">
    <h1>New Library Plans</h1>
    <p class="lead intro">{PARAGRAPH}</p>
    <p>{PARAGRAPH} <a class="no-href external" href="https://town.test/">https://town.test/</a></p>
    <p>{PARAGRAPH}</p>
  </article>
  <footer>Copyright Town News</footer>
</body>
</html>
"""


class TestReadabilityExtractor:
    def test_extracts_article_fields(self):
        article = ReadabilityExtractor().extract(create_document(ARTICLE_PAGE, "https://town.test/a"))

        assert "New Library Plans" in article.title
        assert article.byline == "Jo Reporter"
        assert article.excerpt == "The committee reviewed the library proposal."
        assert "committee met on Tuesday" in article.text_content
        assert article.length == len(article.text_content)
        assert "Copyright Town News" not in article.text_content
        assert article.id is None
        assert article.source_url is None
        assert article.language is None

    def test_only_preserved_classes_survive(self):
        article = ReadabilityExtractor().extract(create_document(ARTICLE_PAGE))

        assert 'class="no-href"' in article.content
        assert "external" not in article.content
        assert "lead" not in article.content
        assert "main-story" not in article.content

    def test_empty_document_fails(self):
        document = create_document("<html><head><title>Empty</title></head><body></body></html>")
        with pytest.raises(ExtractionError):
            ReadabilityExtractor().extract(document)


class TestLanguageClassifier:
    def test_detects_german(self):
        text = (
            "Die Stadtverwaltung hat am Dienstag beschlossen, die alte Bibliothek "
            "abzureissen und an derselben Stelle ein neues Gebäude zu errichten. "
            "Die Bürger sollen in den kommenden Wochen ihre Meinung äußern können."
        )
        assert NgramLanguageClassifier().classify(text) == "de"

    def test_detects_english(self):
        assert NgramLanguageClassifier().classify(PARAGRAPH) == "en"

    @pytest.mark.parametrize("text", ["", "   ", "1234 5678 !!!"])
    def test_no_signal_defaults_to_english(self, text):
        assert NgramLanguageClassifier().classify(text) == DEFAULT_LANGUAGE

    def test_low_confidence_defaults_to_english(self):
        classifier = NgramLanguageClassifier(min_confidence=1.01)
        assert classifier.classify(PARAGRAPH) == DEFAULT_LANGUAGE
