# This project was developed with assistance from AI tools.
"""RFC 7807 Problem Details error response schema."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """RFC 7807 Problem Details body.

    ``missing_sections`` is an extension member set when a submission is
    rejected because required sections are unsatisfied.
    """

    type: str = Field(default="about:blank")
    title: str
    status: int
    detail: str = ""
    request_id: str = Field(
        default="",
        description="Correlation ID for tracing this request in logs.",
    )
    missing_sections: list[str] | None = None
