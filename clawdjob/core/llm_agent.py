"""Base agent for LLM interactions using pydantic-ai.

Each feature that talks to the hosted model builds one ``BaseLLMAgent``
with the output type it expects back. There is no retry loop: a failed
run raises and the caller decides how to degrade.

Example:
    ```python
    from clawdjob.core.llm_agent import BaseLLMAgent
    from clawdjob.core.schemas import JobFitAnalysis

    agent = BaseLLMAgent(
        feature_name='job_fit',
        output_type=JobFitAnalysis,
        api_key=settings.anthropic_api_key,
    )
    analysis = await agent.generate("Analyze this job posting: ...")
    ```
"""
from typing import Any, Optional, Type, Union

from pydantic_ai import Agent
from pydantic_ai.exceptions import UnexpectedModelBehavior
from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.providers.anthropic import AnthropicProvider

from clawdjob.core.logging import setup_logging

logger = setup_logging('llm_agent')

DEFAULT_MODEL = 'anthropic:claude-3-haiku-20240307'


def build_model(model_name: str, api_key: Optional[str] = None) -> Union[Model, str]:
    """Resolve a ``provider:model`` name, binding the API key for Anthropic models.

    Other providers are handed to pydantic-ai as a string and read their
    credentials from the environment.
    """
    provider, _, name = model_name.partition(':')
    if provider == 'anthropic' and api_key:
        return AnthropicModel(name, provider=AnthropicProvider(api_key=api_key))
    return model_name


class BaseLLMAgent:
    """Wrapper around a pydantic-ai ``Agent`` for one feature.

    Attributes:
        feature_name: Name of the feature using this agent
        output_type: Type of the structured output, ``str`` for free text
        model_name: Name of the LLM model to use
        agent: pydantic-ai Agent instance
    """

    def __init__(
        self,
        feature_name: str,
        output_type: Type[Any] = str,
        model_name: str = DEFAULT_MODEL,
        instructions: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        self.feature_name = feature_name
        self.output_type = output_type
        self.model_name = model_name
        self.instructions = instructions

        try:
            self.agent = Agent(
                build_model(model_name, api_key),
                output_type=output_type,
                instructions=instructions,
                retries=0,
            )
            logger.info(f"Agent for {self.feature_name} initialized with {self.model_name}")

        except Exception as e:
            logger.error(f"Error setting up agent for {self.feature_name}: {str(e)}")
            raise

    async def generate(self, prompt: str) -> Any:
        """Run one prompt/response round trip.

        Args:
            prompt: The input prompt for the model

        Returns:
            Output of the configured ``output_type``

        Raises:
            Exception: If the model call or output validation fails
        """
        try:
            logger.info(f"Generating {self.feature_name} response with {self.model_name}")
            result = await self.agent.run(prompt)
            return result.output

        except UnexpectedModelBehavior as e:
            logger.error(f"Model error during {self.feature_name} generation: {str(e)}")
            raise

        except Exception as e:
            logger.error(f"Error during {self.feature_name} generation: {str(e)}")
            raise

