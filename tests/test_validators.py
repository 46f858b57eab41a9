# DEPENDENCIES
import pytest
from utils.validators import ContractValidator


@pytest.fixture
def validator():
    return ContractValidator(max_file_size = 1000, max_text_length = 50)


@pytest.mark.parametrize("filename, size, valid", [("contract.pdf", 500, True),
                                                   ("CONTRACT.DOCX", 500, True),
                                                   ("notes.txt", 500, True),
                                                   ("image.png", 500, False),
                                                   ("contract.pdf", 0, False),
                                                   ("contract.pdf", 1001, False),
                                                   ("", 500, False),
                                                   (None, 500, False),
                                                  ])
def test_validate_file(validator, filename, size, valid):
    assert validator.validate_file(filename, size)[0] is valid


def test_validate_contract_text(validator):
    assert validator.validate_contract_text("A short contract.") == (True, "OK")
    assert not validator.validate_contract_text("  ")[0]
    assert not validator.validate_contract_text(None)[0]
    assert not validator.validate_contract_text("x" * 51)[0]


def test_magic_bytes():
    assert ContractValidator.has_pdf_header(b"%PDF-1.7")
    assert not ContractValidator.has_pdf_header(b"PK\x03\x04")
    assert ContractValidator.has_docx_header(b"PK\x03\x04rest")
