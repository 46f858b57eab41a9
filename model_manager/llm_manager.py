# DEPENDENCIES
import time
import openai
import requests
from enum import Enum
from typing import Any
from typing import Dict
from typing import Optional
from dataclasses import dataclass
from utils.logger import log_info
from utils.logger import log_error
from config.model_config import ModelConfig
from services.exceptions import ModelError
from utils.logger import ContractAnalyzerLogger
from services.exceptions import ConfigurationError
from services.exceptions import MISSING_API_KEY_ERROR


class LLMProvider(Enum):
    """
    Supported LLM providers
    """
    OPENAI = "openai"
    OLLAMA = "ollama"


@dataclass
class LLMResponse:
    """
    Standardized LLM response
    """
    text            : str
    provider        : str
    model           : str
    tokens_used     : int
    latency_seconds : float
    prompt_tokens   : int = 0


class LLMManager:
    """
    Language model access for contract analysis: OpenAI chat completions, or a local Ollama server

    Calls are never retried; any failure surfaces as ModelError (or ConfigurationError when credentials are missing)
    """
    def __init__(self, default_provider: LLMProvider = LLMProvider.OPENAI, openai_api_key: Optional[str] = None, openai_model: Optional[str] = None,
                 ollama_base_url: Optional[str] = None, ollama_model: Optional[str] = None, timeout: float = 120.0, temperature: Optional[float] = None,
                 max_tokens: Optional[int] = None, openai_client: Optional[Any] = None):
        """
        Initialize LLM Manager

        Arguments:
        ----------
            default_provider : Provider used when complete() is not told otherwise

            openai_api_key   : OpenAI API key; without it the OpenAI provider is unconfigured

            openai_model     : OpenAI chat model name

            ollama_base_url  : Ollama server URL

            ollama_model     : Ollama model name

            timeout          : Per-request transport timeout in seconds

            temperature      : Sampling temperature

            max_tokens       : Maximum tokens to generate

            openai_client    : Pre-built OpenAI client (created lazily from the key when omitted)
        """
        generation             = ModelConfig.get_generation_config()

        self.default_provider  = default_provider
        self.openai_api_key    = (openai_api_key or "").strip() or None
        self.openai_model      = openai_model or generation["openai_model"]
        self.ollama_base_url   = (ollama_base_url or "http://localhost:11434").rstrip("/")
        self.ollama_model      = ollama_model or generation["ollama_model"]
        self.timeout           = timeout
        self.temperature       = generation["temperature"] if temperature is None else temperature
        self.max_tokens        = max_tokens or generation["max_tokens"]
        self._openai_client    = openai_client

        log_info("LLMManager initialized",
                 default_provider  = default_provider.value,
                 openai_configured = self.is_configured(LLMProvider.OPENAI),
                 openai_model      = self.openai_model,
                 ollama_base_url   = self.ollama_base_url,
                )


    @classmethod
    def from_settings(cls, settings) -> "LLMManager":
        """
        Build a manager from application settings
        """
        try:
            provider = LLMProvider(settings.LLM_PROVIDER.lower())

        except ValueError:
            raise ConfigurationError(f"Unsupported LLM provider: {settings.LLM_PROVIDER}",
                                     user_message = f"Unsupported LLM provider: {settings.LLM_PROVIDER}",
                                    )

        return cls(default_provider = provider,
                   openai_api_key   = settings.OPENAI_API_KEY,
                   openai_model     = settings.OPENAI_MODEL,
                   ollama_base_url  = settings.OLLAMA_BASE_URL,
                   ollama_model     = settings.OLLAMA_MODEL,
                   timeout          = settings.OPENAI_TIMEOUT if (provider == LLMProvider.OPENAI) else settings.OLLAMA_TIMEOUT,
                   temperature      = settings.LLM_TEMPERATURE,
                   max_tokens       = settings.LLM_MAX_TOKENS,
                  )


    # PROVIDER CONFIGURATION
    def is_configured(self, provider: Optional[LLMProvider] = None) -> bool:
        """
        Whether the provider can be called without a configuration error (no network check)
        """
        provider = provider or self.default_provider

        if (provider == LLMProvider.OPENAI):
            return (self.openai_api_key is not None) or (self._openai_client is not None)

        return True


    def _get_openai_client(self):
        if self._openai_client is None:
            if not self.openai_api_key:
                raise ConfigurationError(MISSING_API_KEY_ERROR)

            self._openai_client = openai.OpenAI(api_key     = self.openai_api_key,
                                                timeout     = self.timeout,
                                                max_retries = 0,
                                               )

        return self._openai_client


    # UNIFIED COMPLETION METHOD
    @ContractAnalyzerLogger.log_execution_time("llm_complete")
    def complete(self, prompt: str, provider: Optional[LLMProvider] = None, system_prompt: Optional[str] = None, json_mode: bool = True) -> LLMResponse:
        """
        Send one prompt to the model and return its raw text

        Arguments:
        ----------
            prompt        : User prompt

            provider      : LLM provider (default: self.default_provider)

            system_prompt : System prompt (default: ModelConfig.SYSTEM_PROMPT)

            json_mode     : Ask the provider for a JSON object

        Returns:
        --------
            { LLMResponse } : Response with non-empty text

        Raises:
        -------
            ConfigurationError : Provider credentials are missing

            ModelError         : Network failure, non-2xx status or empty response
        """
        provider      = provider or self.default_provider
        system_prompt = ModelConfig.SYSTEM_PROMPT if system_prompt is None else system_prompt

        log_info("LLM completion request",
                 provider      = provider.value,
                 prompt_length = len(prompt),
                 json_mode     = json_mode,
                )

        if (provider == LLMProvider.OPENAI):
            return self._complete_openai(prompt, system_prompt, json_mode)

        if (provider == LLMProvider.OLLAMA):
            return self._complete_ollama(prompt, system_prompt, json_mode)

        raise ConfigurationError(f"Unsupported provider: {provider}")


    # OPENAI PROVIDER
    def _complete_openai(self, prompt: str, system_prompt: str, json_mode: bool) -> LLMResponse:
        client     = self._get_openai_client()
        start_time = time.perf_counter()

        messages   = list()

        if system_prompt:
            messages.append({"role"    : "system",
                             "content" : system_prompt,
                           })

        messages.append({"role"    : "user",
                         "content" : prompt,
                       })

        api_params = {"model"       : self.openai_model,
                      "messages"    : messages,
                      "temperature" : self.temperature,
                      "max_tokens"  : self.max_tokens,
                     }

        if json_mode:
            api_params["response_format"] = {"type": "json_object"}

        try:
            response = client.chat.completions.create(**api_params)

        except openai.OpenAIError as e:
            log_error(e, context = {"component" : "LLMManager", "operation" : "complete_openai", "model" : self.openai_model})
            raise ModelError(f"OpenAI request failed: {e!r}", provider = LLMProvider.OPENAI.value) from e

        content = response.choices[0].message.content if response.choices else None

        if not content:
            raise ModelError("No response from OpenAI", provider = LLMProvider.OPENAI.value)

        usage         = getattr(response, "usage", None)
        tokens_used   = getattr(usage, "total_tokens", 0) or 0
        prompt_tokens = getattr(usage, "prompt_tokens", 0) or 0
        latency       = time.perf_counter() - start_time

        log_info("OpenAI completion successful",
                 model              = self.openai_model,
                 tokens_used        = tokens_used,
                 latency_seconds    = round(latency, 3),
                 estimated_cost_usd = ModelConfig.estimate_cost(self.openai_model, prompt_tokens, tokens_used - prompt_tokens),
                )

        return LLMResponse(text            = content,
                           provider        = LLMProvider.OPENAI.value,
                           model           = self.openai_model,
                           tokens_used     = tokens_used,
                           latency_seconds = latency,
                           prompt_tokens   = prompt_tokens,
                          )


    # OLLAMA PROVIDER
    def _complete_ollama(self, prompt: str, system_prompt: str, json_mode: bool) -> LLMResponse:
        start_time = time.perf_counter()

        payload    = {"model"   : self.ollama_model,
                      "prompt"  : prompt,
                      "stream"  : False,
                      "options" : {"temperature": self.temperature, "num_predict": self.max_tokens},
                     }

        if system_prompt:
            payload["system"] = system_prompt

        if json_mode:
            payload["format"] = "json"

        try:
            response = requests.post(f"{self.ollama_base_url}/api/generate", json = payload, timeout = self.timeout)
            response.raise_for_status()
            result   = response.json()

        except (requests.RequestException, ValueError) as e:
            log_error(e, context = {"component" : "LLMManager", "operation" : "complete_ollama", "model" : self.ollama_model})
            raise ModelError(f"Ollama request failed: {e!r}", provider = LLMProvider.OLLAMA.value) from e

        generated_text = result.get("response", "")

        if not generated_text:
            raise ModelError("No response from Ollama", provider = LLMProvider.OLLAMA.value)

        latency        = time.perf_counter() - start_time
        prompt_tokens  = result.get("prompt_eval_count", 0) or 0
        tokens_used    = prompt_tokens + (result.get("eval_count", 0) or 0)

        log_info("Ollama completion successful",
                 model           = self.ollama_model,
                 tokens_used     = tokens_used,
                 latency_seconds = round(latency, 3),
                )

        return LLMResponse(text            = generated_text,
                           provider        = LLMProvider.OLLAMA.value,
                           model           = self.ollama_model,
                           tokens_used     = tokens_used,
                           latency_seconds = latency,
                           prompt_tokens   = prompt_tokens,
                          )


    # UTILITY METHODS
    def get_provider_info(self, provider: Optional[LLMProvider] = None) -> Dict[str, Any]:
        provider = provider or self.default_provider

        info     = {"provider"   : provider.value,
                    "configured" : self.is_configured(provider),
                   }

        if (provider == LLMProvider.OPENAI):
            info["model"]    = self.openai_model

        else:
            info["model"]    = self.ollama_model
            info["base_url"] = self.ollama_base_url

        return info
