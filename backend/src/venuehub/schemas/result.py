from pydantic import BaseModel


class OperationResponse(BaseModel):
    """Body of every write endpoint: {"success": bool, "message": str}."""

    model_config = {"from_attributes": True}

    success: bool
    message: str
