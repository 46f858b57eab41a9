# DEPENDENCIES
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings: primary configuration source
    """
    model_config             = SettingsConfigDict(env_file          = ".env",
                                                  env_file_encoding = "utf-8",
                                                  case_sensitive    = True,
                                                  extra             = "ignore",
                                                 )

    # Application Info
    APP_NAME                 : str            = "Contract Risk Analyzer"
    APP_VERSION              : str            = "1.0.0"
    API_PREFIX               : str            = "/api/v1"

    # Server Configuration
    HOST                     : str            = "0.0.0.0"
    PORT                     : int            = 8000
    RELOAD                   : bool           = False
    WORKERS                  : int            = 1

    # CORS Settings
    CORS_ORIGINS             : list           = ["http://localhost:3000", "http://localhost:8000", "http://127.0.0.1:8000"]
    CORS_ALLOW_CREDENTIALS   : bool           = True
    CORS_ALLOW_METHODS       : list           = ["*"]
    CORS_ALLOW_HEADERS       : list           = ["*"]

    # File Upload Settings
    MAX_UPLOAD_SIZE          : int            = 50 * 1024 * 1024  # 50 MB
    MIN_UPLOAD_SIZE          : int            = 100
    ALLOWED_EXTENSIONS       : list           = [".pdf", ".docx", ".txt"]

    # LLM Provider Settings
    LLM_PROVIDER             : str            = "openai"
    OPENAI_API_KEY           : Optional[str]  = None
    OPENAI_MODEL             : str            = "gpt-3.5-turbo"
    OPENAI_TIMEOUT           : float          = 120.0
    OLLAMA_BASE_URL          : str            = "http://localhost:11434"
    OLLAMA_MODEL             : str            = "llama3:8b"
    OLLAMA_TIMEOUT           : int            = 300
    LLM_TEMPERATURE          : float          = 0.3
    LLM_MAX_TOKENS           : int            = 4096

    # Chunking Limits (tokens are estimated as characters / CHARS_PER_TOKEN)
    CHUNK_SIZE_TOKENS        : int            = 3000
    CHUNK_OVERLAP_TOKENS     : int            = 200
    CHUNKING_THRESHOLD       : int            = 8000
    CHARS_PER_TOKEN          : int            = 4

    # Language Detection
    HINDI_RATIO_THRESHOLD    : float          = 0.30
    MIXED_RATIO_THRESHOLD    : float          = 0.10

    # Merge & Bounding Limits
    MAX_MERGE_RESULTS        : int            = 100
    MAX_MERGED_CLAUSES       : int            = 200
    MAX_RESULT_CLAUSES       : int            = 100
    MAX_FIELD_LENGTH         : int            = 10000
    CEILING_FIELD_LENGTH     : int            = 5000
    MAX_RESPONSE_BYTES       : int            = 10 * 1024 * 1024  # 10 MB

    # Analysis Limits
    MAX_CONTRACT_LENGTH      : int            = 5_000_000
    ANALYSIS_TIMEOUT_SECONDS : float          = 300.0  # 5 minutes for long contracts

    # Logging Settings
    LOG_LEVEL                : str            = "INFO"
    LOG_DIR                  : Path           = Path("logs")
    LOG_MAX_BYTES            : int            = 5 * 1024 * 1024
    LOG_BACKUP_COUNT         : int            = 3


    def has_openai_key(self) -> bool:
        return bool(self.OPENAI_API_KEY and self.OPENAI_API_KEY.strip())


# Global settings instance
settings = Settings()
