"""Request models for API endpoints."""

from typing import Optional
from pydantic import BaseModel, Field
from cvgenius.models.document_models import DocumentModel


class APIRequestModel(BaseModel):
    """Base for request bodies accepting camelCase or snake_case keys."""

    class Config:
        populate_by_name = True


class PreviewRequest(APIRequestModel):
    """Request model for rendering a document preview."""

    template_id: Optional[str] = Field(
        None,
        alias="templateId",
        description="Template to render with. Falls back to the session selection, then the configured default.",
        examples=["dublin-tech"],
    )
    data: Optional[DocumentModel] = Field(
        None,
        description="Document to render. The sample document for the template's kind is used when omitted.",
    )


class ValidateRequest(APIRequestModel):
    """Request model for validating a document against a template."""

    template_id: str = Field(
        ...,
        alias="templateId",
        description="Template whose contract applies",
        examples=["classic"],
    )
    data: DocumentModel = Field(..., description="Document to validate")


class EstimateRequest(APIRequestModel):
    """Request model for page estimation."""

    data: DocumentModel = Field(..., description="Document to measure")
    max_pages: Optional[int] = Field(
        None,
        alias="maxPages",
        ge=1,
        description="Page limit. Defaults to the configured limit",
        examples=[2],
    )


class ExportRequest(APIRequestModel):
    """Request model for PDF export."""

    template_id: Optional[str] = Field(
        None,
        alias="templateId",
        description="Template to render with. Falls back to the session selection, then the configured default.",
        examples=["irish-finance"],
    )
    data: DocumentModel = Field(..., description="Document to export")
