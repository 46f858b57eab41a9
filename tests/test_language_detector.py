# DEPENDENCIES
import pytest
from config.risk_rules import DocumentLanguage
from utils.language_detector import LanguageDetector


DEVANAGARI = "\u0915"


def sample(devanagari: int, latin: int) -> str:
    return DEVANAGARI * devanagari + "a" * latin


@pytest.fixture
def detector():
    return LanguageDetector()


def test_empty_text_is_english(detector):
    assert detector.devanagari_ratio("") == 0.0
    assert detector.detect_language("") == DocumentLanguage.ENGLISH
    assert detector.detect_language("   \n\t ") == DocumentLanguage.ENGLISH


def test_pure_devanagari_is_hindi(detector):
    text = "यह अनुबंध है"

    assert detector.devanagari_ratio(text) == 1.0
    assert detector.detect_language(text) == DocumentLanguage.HINDI


def test_plain_english(detector):
    assert detector.detect_language("This Agreement is made between the parties.") == DocumentLanguage.ENGLISH


@pytest.mark.parametrize("devanagari, latin, expected", [(31, 69, DocumentLanguage.HINDI),
                                                         (30, 70, DocumentLanguage.MIXED),
                                                         (29, 71, DocumentLanguage.MIXED),
                                                         (11, 89, DocumentLanguage.MIXED),
                                                         (10, 90, DocumentLanguage.ENGLISH),
                                                         (0, 100, DocumentLanguage.ENGLISH),
                                                        ])
def test_thresholds_are_strict(detector, devanagari, latin, expected):
    assert detector.detect_language(sample(devanagari, latin)) == expected


def test_whitespace_is_excluded_from_ratio(detector):
    text = DEVANAGARI * 4 + " " * 100 + "a" * 6

    assert detector.devanagari_ratio(text) == pytest.approx(0.4)
    assert detector.detect_language(text) == DocumentLanguage.HINDI
