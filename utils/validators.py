# DEPENDENCIES
from typing import List
from typing import Tuple
from pathlib import Path
from typing import Optional


PDF_MAGIC  = b"%PDF"
DOCX_MAGIC = b"PK\x03\x04"  # DOCX files are ZIP archives


class ContractValidator:
    """
    Validate uploaded contract files and contract text before analysis
    """
    DEFAULT_ALLOWED_EXTENSIONS = [".pdf", ".docx", ".txt"]
    DEFAULT_MAX_FILE_SIZE      = 50 * 1024 * 1024
    DEFAULT_MIN_FILE_SIZE      = 100
    DEFAULT_MAX_TEXT_LENGTH    = 5_000_000

    def __init__(self, allowed_extensions: Optional[List[str]] = None, max_file_size: Optional[int] = None, min_file_size: Optional[int] = None,
                 max_text_length: Optional[int] = None):
        self.allowed_extensions = [ext.lower() for ext in (allowed_extensions or self.DEFAULT_ALLOWED_EXTENSIONS)]
        self.max_file_size      = max_file_size or self.DEFAULT_MAX_FILE_SIZE
        self.min_file_size      = self.DEFAULT_MIN_FILE_SIZE if min_file_size is None else min_file_size
        self.max_text_length    = max_text_length or self.DEFAULT_MAX_TEXT_LENGTH


    @classmethod
    def from_settings(cls, settings) -> "ContractValidator":
        return cls(allowed_extensions = settings.ALLOWED_EXTENSIONS,
                   max_file_size      = settings.MAX_UPLOAD_SIZE,
                   min_file_size      = settings.MIN_UPLOAD_SIZE,
                   max_text_length    = settings.MAX_CONTRACT_LENGTH,
                  )


    @staticmethod
    def get_extension(filename: Optional[str]) -> str:
        return Path(filename or "").suffix.lower()


    def validate_file(self, filename: Optional[str], size: int) -> Tuple[bool, str]:
        """
        Check an upload's name and size

        Arguments:
        ----------
            filename { str } : Original file name

            size     { int } : File size in bytes

        Returns:
        --------
               { tuple }     : (is_valid, message) tuple
        """
        if not filename:
            return False, "No file selected"

        extension = self.get_extension(filename)

        if extension not in self.allowed_extensions:
            return False, f"Invalid file type. Allowed: {', '.join(self.allowed_extensions)}"

        if (size == 0):
            return False, "File is empty"

        if (size > self.max_file_size):
            return False, f"File too large. Max size: {self.max_file_size / (1024 * 1024):.1f}MB"

        return True, "OK"


    def validate_contract_text(self, text: Optional[str]) -> Tuple[bool, str]:
        if not text or not text.strip():
            return False, "No text could be extracted from the file."

        if (len(text) > self.max_text_length):
            return False, f"Contract text too long. Maximum {self.max_text_length} characters allowed."

        return True, "OK"


    @staticmethod
    def has_pdf_header(data: bytes) -> bool:
        return data[:4] == PDF_MAGIC


    @staticmethod
    def has_docx_header(data: bytes) -> bool:
        return data[:4] == DOCX_MAGIC
