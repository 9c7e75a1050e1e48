"""
LLM Provider Factory
Provides a unified interface for the LLM providers used by the translation layers.
The active provider is selected with the LLM_PROVIDER environment variable.

Every provider returns the same normalized dicts:
- chat completion: content, model, usage
- structured completion: parsed_object, raw_content, model, usage
"""

import os
import json
import logging
from typing import Dict, List, Optional, Any, Type
from abc import ABC, abstractmethod
from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

load_dotenv()

SUPPORTED_PROVIDERS = ("openai", "mistral")


def _usage(response) -> Dict[str, int]:
    return {
        "prompt_tokens": response.usage.prompt_tokens,
        "completion_tokens": response.usage.completion_tokens,
        "total_tokens": response.usage.total_tokens,
    }


class LLMProvider(ABC):
    """
    Base class for LLM providers.

    Subclasses only talk to their SDK (_complete and _parse); request building,
    response normalization and the JSON-mode fallback for structured output
    live here.
    """

    name = None

    @abstractmethod
    def _complete(self, params: Dict[str, Any], response_format: Optional[Dict]):
        """Run a chat completion with the SDK and return the raw SDK response."""

    @abstractmethod
    def _parse(self, params: Dict[str, Any], response_model: Type[BaseModel]):
        """Run a schema-constrained completion and return the raw SDK response."""

    def get_provider_name(self) -> str:
        return self.name

    def _params(self, messages, model, temperature, max_tokens, timeout, **kwargs) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": timeout,
            **kwargs
        }

    def create_chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 500,
        response_format: Optional[Dict] = None,
        timeout: float = 30.0,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Create a chat completion.

        Returns:
            Dict with content (response text), model and usage (token counts)
        """
        params = self._params(messages, model, temperature, max_tokens, timeout, **kwargs)
        response = self._complete(params, response_format)

        return {
            "content": response.choices[0].message.content,
            "model": response.model,
            "usage": _usage(response),
        }

    def create_structured_completion(
        self,
        messages: List[Dict[str, str]],
        response_model: Type[BaseModel],
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 500,
        timeout: float = 30.0,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Create a completion parsed into a Pydantic model.

        Tries the provider's native structured output first and falls back to
        JSON mode plus Pydantic validation when that fails.

        Returns:
            Dict with parsed_object, raw_content, model and usage

        Raises:
            RuntimeError: If both structured output and the JSON fallback fail
        """
        params = self._params(messages, model, temperature, max_tokens, timeout, **kwargs)

        try:
            logger.debug(f"Attempting structured completion with {self.name} model {model}")
            response = self._parse(params, response_model)
            logger.info(f"Structured completion successful: {response.model}, tokens={response.usage.total_tokens}")
            return {
                "parsed_object": response.choices[0].message.parsed,
                "raw_content": response.choices[0].message.content,
                "model": response.model,
                "usage": _usage(response),
            }
        except Exception as e:
            logger.warning(f"Structured output failed, falling back to manual JSON parsing: {e}")

        try:
            response = self.create_chat_completion(
                messages=messages,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
                timeout=timeout,
                **kwargs
            )
            content = response["content"]
            parsed_object = response_model(**json.loads(content))
        except json.JSONDecodeError as json_err:
            logger.error(f"JSON parsing failed in fallback: {json_err}")
            raise RuntimeError(f"Failed to parse LLM response as JSON: {json_err}")
        except Exception as fallback_err:
            logger.error(f"Fallback completion failed: {fallback_err}")
            raise RuntimeError(f"Structured completion failed and fallback also failed: {fallback_err}")

        logger.info(f"Fallback parsing successful: {response['model']}")
        return {
            "parsed_object": parsed_object,
            "raw_content": content,
            "model": response["model"],
            "usage": response["usage"],
        }


class OpenAIProvider(LLMProvider):
    """OpenAI API provider implementation"""

    name = "openai"

    def __init__(self, api_key: Optional[str] = None):
        from openai import OpenAI

        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not found in environment variables")

        self.client = OpenAI(api_key=self.api_key)
        logger.info("Initialized OpenAI provider")

    def _complete(self, params, response_format):
        if response_format:
            params["response_format"] = response_format
        return self.client.chat.completions.create(**params)

    def _parse(self, params, response_model):
        return self.client.chat.completions.parse(response_format=response_model, **params)


class MistralProvider(LLMProvider):
    """Mistral AI provider implementation"""

    name = "mistral"

    def __init__(self, api_key: Optional[str] = None):
        from mistralai import Mistral

        self.api_key = api_key or os.getenv("MISTRAL_API_KEY")
        if not self.api_key:
            raise ValueError("MISTRAL_API_KEY not found in environment variables")

        self.client = Mistral(api_key=self.api_key)
        logger.info("Initialized Mistral provider")

    def _params(self, messages, model, temperature, max_tokens, timeout, **kwargs):
        # The Mistral SDK takes timeout_ms instead of timeout
        params = super()._params(messages, model, temperature, max_tokens, timeout, **kwargs)
        params["timeout_ms"] = int(params.pop("timeout") * 1000)
        return params

    def _complete(self, params, response_format):
        # Mistral only understands JSON mode, not full JSON schema
        if response_format and response_format.get("type") in ("json_object", "json_schema"):
            params["response_format"] = {"type": "json_object"}
        return self.client.chat.complete(**params)

    def _parse(self, params, response_model):
        return self.client.chat.parse(response_format=response_model, **params)


class LLMProviderFactory:
    """Factory class for creating LLM provider instances"""

    PROVIDERS = {
        "openai": OpenAIProvider,
        "mistral": MistralProvider,
    }

    DEFAULT_MODELS = {
        "openai": "gpt-4o",
        "mistral": "mistral-large-latest",
    }

    @staticmethod
    def _resolve_provider_name(provider_name: Optional[str]) -> str:
        if provider_name is None:
            provider_name = os.getenv("LLM_PROVIDER", "openai")
        return provider_name.lower()

    @staticmethod
    def create_provider(provider_name: Optional[str] = None) -> LLMProvider:
        """
        Create an LLM provider instance based on configuration.

        Raises:
            ValueError: If provider is not supported or API key is missing
        """
        provider_name = LLMProviderFactory._resolve_provider_name(provider_name)
        provider_class = LLMProviderFactory.PROVIDERS.get(provider_name)
        if provider_class is None:
            raise ValueError(
                f"Unsupported LLM provider: {provider_name}. "
                f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
            )

        logger.info(f"Creating LLM provider: {provider_name}")
        return provider_class()

    @staticmethod
    def get_default_model(provider_name: Optional[str] = None) -> str:
        """LLM_MODEL wins over the per-provider default."""
        override = os.getenv("LLM_MODEL")
        if override:
            return override
        provider_name = LLMProviderFactory._resolve_provider_name(provider_name)
        return LLMProviderFactory.DEFAULT_MODELS.get(provider_name, "gpt-4o")


def get_llm_client(provider_name: Optional[str] = None) -> LLMProvider:
    """Shorthand for LLMProviderFactory.create_provider()."""
    return LLMProviderFactory.create_provider(provider_name)
