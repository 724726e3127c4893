"""Instruction unlock models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UnlockCredentials(BaseModel):
    """Purchase details typed in to unlock cutting instructions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    email: str
    confirmation_id: str
