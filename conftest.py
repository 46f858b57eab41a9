# DEPENDENCIES
import os
import json
import pytest
import tempfile
from typing import Any
from typing import List
from typing import Optional


# Route log files away from the working tree before the settings module is first imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix = "contract_analyzer_logs_"))

from utils.logger import ContractAnalyzerLogger
from services.exceptions import ModelError
from config.pipeline_config import PipelineConfig
from model_manager.llm_manager import LLMResponse


class FakeLLMManager:
    """
    Scripted stand-in for LLMManager: records every prompt and answers from a list or a callable

    A scripted item may be a str (returned as-is), a dict (returned as JSON), an exception (raised),
    or a callable taking (prompt, call_index) and returning one of those.
    """
    def __init__(self, responses: Optional[Any] = None, configured: bool = True):
        self.responses  = responses if callable(responses) else list(responses or [])
        self.configured = configured
        self.prompts    : List[str] = list()


    def is_configured(self, provider = None) -> bool:
        return self.configured


    def complete(self, prompt: str, provider = None, system_prompt = None, json_mode: bool = True) -> LLMResponse:
        call_index = len(self.prompts)
        self.prompts.append(prompt)

        if callable(self.responses):
            item = self.responses(prompt, call_index)

        elif self.responses:
            item = self.responses.pop(0)

        else:
            raise ModelError("No scripted response left", provider = "fake")

        if isinstance(item, Exception):
            raise item

        if isinstance(item, dict):
            item = json.dumps(item, ensure_ascii = False)

        return LLMResponse(text            = item,
                           provider        = "fake",
                           model           = "fake-model",
                           tokens_used     = 0,
                           latency_seconds = 0.0,
                          )


    @property
    def call_count(self) -> int:
        return len(self.prompts)


    def get_provider_info(self, provider = None):
        return {"provider"   : "fake",
                "model"      : "fake-model",
                "configured" : self.configured,
               }


def clause_payload(name: str, risk_level: str = "Low", **fields) -> dict:
    payload = {"name"              : name,
               "risk_level"        : risk_level,
               "summary"           : f"{name} summary",
               "original_text"     : f"{name} original text",
               "suggested_redline" : f"{name} redline",
              }
    payload.update(fields)

    return payload


@pytest.fixture(scope = "session", autouse = True)
def _isolated_logging(tmp_path_factory):
    ContractAnalyzerLogger.setup(log_dir = tmp_path_factory.mktemp("logs"))


@pytest.fixture
def fake_llm():
    return FakeLLMManager


@pytest.fixture
def small_config():
    """
    Tiny limits so chunking and bounding behaviour shows up on short strings
    """
    return PipelineConfig(chunk_size         = 10,
                          chunk_overlap      = 2,
                          chunking_threshold = 20,
                          chars_per_token    = 4,
                         )
