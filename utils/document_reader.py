# DEPENDENCIES
import io
import docx
import PyPDF2
from typing import List
from typing import Optional
from utils.logger import log_info
from utils.logger import log_error
from utils.validators import ContractValidator
from utils.text_processor import TextProcessor
from services.exceptions import ExtractionError


EXTRACTION_PREFIX = "Failed to extract text from file. "


class DocumentReader:
    """
    Extracts plain text from uploaded contract files (PDF, DOCX, TXT)
    """
    def __init__(self, max_file_size: int = ContractValidator.DEFAULT_MAX_FILE_SIZE, min_file_size: int = ContractValidator.DEFAULT_MIN_FILE_SIZE):
        self.max_file_size = max_file_size
        self.min_file_size = min_file_size


    def read_bytes(self, data: bytes, extension: str) -> str:
        """
        Extract text from raw file bytes

        Arguments:
        ----------
            data      { bytes } : File contents

            extension  { str }  : File extension, with or without the leading dot

        Returns:
        --------
                 { str }        : Extracted, whitespace-normalised text

        Raises:
        -------
            ExtractionError     : Unsupported type, bad header, size outside limits, corrupt file or no text
        """
        extension = extension.lower().lstrip(".")

        if not data:
            raise ExtractionError("Empty file buffer provided",
                                  user_message = EXTRACTION_PREFIX + "The file is empty.",
                                 )

        if (len(data) > self.max_file_size):
            raise ExtractionError(f"File is too large ({len(data) / 1024 / 1024:.2f}MB)",
                                  user_message = f"File is too large. Maximum size is {self.max_file_size / 1024 / 1024:.0f}MB.",
                                 )

        if (extension == "pdf"):
            text = self._read_pdf(data)

        elif (extension == "docx"):
            text = self._read_docx(data)

        elif (extension == "txt"):
            text = self._read_txt(data)

        else:
            raise ExtractionError(f"Unsupported file type: {extension!r}",
                                  user_message = "Invalid file type. Please upload a PDF or DOCX file.",
                                 )

        text = TextProcessor.clean_extracted_text(text)

        if not text:
            raise ExtractionError(f"No text content found in {extension} file",
                                  user_message = "No text could be extracted from the file.",
                                 )

        log_info("Text extracted from document", file_type = extension, file_bytes = len(data), text_length = len(text))

        return text


    def _read_pdf(self, data: bytes) -> str:
        if not ContractValidator.has_pdf_header(data):
            raise ExtractionError("File does not appear to be a valid PDF (missing PDF header)",
                                  user_message = EXTRACTION_PREFIX + "The file does not appear to be a valid PDF.",
                                 )

        if (len(data) < self.min_file_size):
            raise ExtractionError("PDF file appears to be too small or corrupted",
                                  user_message = EXTRACTION_PREFIX + "The file may be corrupted or in an unsupported format.",
                                 )

        try:
            reader = PyPDF2.PdfReader(io.BytesIO(data))

            if reader.is_encrypted:
                raise ExtractionError("PDF is password-protected",
                                      user_message = EXTRACTION_PREFIX + "The PDF is password-protected.",
                                     )

            pages  = [page.extract_text() or "" for page in reader.pages]

        except ExtractionError:
            raise

        except Exception as e:
            log_error(e, context = {"component" : "DocumentReader", "operation" : "read_pdf", "file_bytes" : len(data)})

            raise ExtractionError(f"PDF parsing failed: {e!r}",
                                  user_message = EXTRACTION_PREFIX + "The file may be corrupted or in an unsupported format.",
                                 ) from e

        return "\n".join(pages)


    def _read_docx(self, data: bytes) -> str:
        if not ContractValidator.has_docx_header(data):
            raise ExtractionError("File does not appear to be a valid DOCX (missing ZIP header)",
                                  user_message = EXTRACTION_PREFIX + "The file does not appear to be a valid DOCX document.",
                                 )

        try:
            document = docx.Document(io.BytesIO(data))

        except Exception as e:
            log_error(e, context = {"component" : "DocumentReader", "operation" : "read_docx", "file_bytes" : len(data)})

            raise ExtractionError(f"DOCX parsing failed: {e!r}",
                                  user_message = EXTRACTION_PREFIX + "The file may be corrupted or in an unsupported format.",
                                 ) from e

        text_parts : List[str] = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]

        for table in document.tables:
            for row in table.rows:
                row_text = " ".join(cell.text.strip() for cell in row.cells)

                if row_text.strip():
                    text_parts.append(row_text)

        return "\n".join(text_parts)


    @staticmethod
    def _read_txt(data: bytes, encoding: Optional[str] = "utf-8-sig") -> str:
        try:
            return data.decode(encoding)

        except UnicodeDecodeError as e:
            raise ExtractionError(f"Text file is not valid {encoding}: {e}",
                                  user_message = EXTRACTION_PREFIX + "Text files must be UTF-8 encoded.",
                                 ) from e
