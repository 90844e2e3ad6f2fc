"""Schemas shared by several routers."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. {"message": "Book deleted successfully"}."""

    message: str = Field(..., examples=["Book deleted successfully"])
