# DEPENDENCIES
from .text_processor import TextProcessor
from .validators import ContractValidator
from .logger import ContractAnalyzerLogger
from .language_detector import LanguageDetector
from .document_reader import DocumentReader


__all__ = ['DocumentReader',
           'TextProcessor',
           'LanguageDetector',
           'ContractValidator',
           'ContractAnalyzerLogger',
          ]
