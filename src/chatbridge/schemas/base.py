from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Request option model: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")
