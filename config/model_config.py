# DEPENDENCIES
from typing import Any
from typing import Dict


class ModelConfig:
    """
    Model-specific configurations - FOR LLM SETTINGS ONLY
    """
    # Contract analysis generation settings
    LLM_GENERATION = {"openai_model" : "gpt-3.5-turbo",
                      "ollama_model" : "llama3:8b",
                      "temperature"  : 0.3,   # Low temperature for consistent analysis
                      "max_tokens"   : 4096,
                      "json_mode"    : True,
                     }

    SYSTEM_PROMPT  = "You are a legal contract risk analyzer. Always return valid JSON matching the specified format."

    # Rough prices per 1K tokens, used only for log records
    PRICING        = {"gpt-3.5-turbo" : {"prompt": 0.0005, "completion": 0.0015},
                      "gpt-4o-mini"   : {"prompt": 0.00015, "completion": 0.0006},
                      "gpt-4o"        : {"prompt": 0.0025, "completion": 0.01},
                     }


    @classmethod
    def get_generation_config(cls, settings = None) -> Dict[str, Any]:
        """
        Generation parameters, overridden by application settings when given
        """
        config = dict(cls.LLM_GENERATION)

        if settings is not None:
            config.update({"openai_model" : settings.OPENAI_MODEL,
                           "ollama_model" : settings.OLLAMA_MODEL,
                           "temperature"  : settings.LLM_TEMPERATURE,
                           "max_tokens"   : settings.LLM_MAX_TOKENS,
                          })

        return config


    @classmethod
    def estimate_cost(cls, model: str, prompt_tokens: int, completion_tokens: int) -> float:
        pricing = cls.PRICING.get(model)

        if not pricing:
            return 0.0

        cost = ((prompt_tokens / 1000) * pricing["prompt"] + (completion_tokens / 1000) * pricing["completion"])

        return round(cost, 6)
