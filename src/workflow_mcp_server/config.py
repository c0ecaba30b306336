"""Server configuration loaded from ``WORKFLOW_MCP_*`` environment variables."""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class WorkflowServerConfig(BaseSettings):
    """Configuration for the workflow MCP server."""

    dynamic_tools: bool = Field(
        default=True,
        description=(
            "Start with only the seeded workflows and expose discover_tools. "
            "When false every workflow is activated at start."
        ),
    )
    enabled_workflows: str = Field(
        default="",
        description="Comma-separated workflow ids to activate at start",
    )
    sampling_max_tokens: int = Field(
        default=200,
        ge=1,
        le=4096,
        description="Token budget for the workflow classification request",
    )
    sampling_temperature: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Optional temperature for the workflow classification request",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {"env_prefix": "WORKFLOW_MCP_", "case_sensitive": False}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        valid = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if level not in valid:
            raise ValueError(f"log_level must be one of: {valid}")
        return level

    @property
    def enabled_workflow_ids(self) -> List[str]:
        """Seed workflow ids, de-duplicated in the order given."""
        ids: List[str] = []
        for part in self.enabled_workflows.split(","):
            part = part.strip()
            if part and part not in ids:
                ids.append(part)
        return ids
