"""Response envelopes shared by the routers."""

from src.storefront.entities._base import ApiModel


class MessageResponse(ApiModel):
    success: bool = True
    message: str


class ErrorResponse(ApiModel):
    success: bool = False
    message: str
    errors: list | None = None
