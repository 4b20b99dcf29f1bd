from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from projectcode.ai.llm_client import LLMClient, create_llm_client

InType = TypeVar("InType", bound=BaseModel | None)
OutType = TypeVar("OutType", bound=BaseModel)


class BaseFlow(ABC, Generic[InType, OutType]):
    """
    Abstract base class for all flows: one templated prompt, one model call,
    one schema-validated result.

    The credential is explicit. Constructing a flow without one raises
    CredentialRequiredError, so nothing reaches the network.
    """

    def __init__(self, api_key: str | None, model_name: str | None = None):
        self.llm: LLMClient = create_llm_client(api_key, model_name=model_name)

    @abstractmethod
    async def run(self, input_data: InType) -> OutType:
        """Run the flow on the given input."""
        pass
