"""Framework integrations for shellgate.

The PydanticAI adapter lives in shellgate.integrations.pydantic_ai and is
imported on demand, since it requires pydantic-ai at import time.
"""

from shellgate.integrations.langchain import create_langchain_tools

__all__ = ["create_langchain_tools"]
