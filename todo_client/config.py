"""
Todo Client — Configuration
=============================

What:  Client settings loaded from environment variables with the TODO_ prefix.
How:   Pydantic Settings, same as the server's todo_api.config.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """
    Env vars:
        TODO_API_URL: full URL of the todos collection
    """

    api_url: str = Field(
        default="http://localhost:8000/api/todos",
        description="URL of the /api/todos collection",
    )

    model_config = {
        "env_prefix": "TODO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }
