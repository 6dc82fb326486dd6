"""Response models for API endpoints."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from cvgenius.services.pagination import PageEstimate
from cvgenius.services.validator import ValidationError


class APIResponseModel(BaseModel):
    """Base for responses serialised with camelCase keys."""

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        examples=["Template not found: unknown-id"],
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status", examples=["ok"])
    templates: int = Field(..., description="Number of templates in the catalogue", examples=[17])


class RootResponse(BaseModel):
    """Root endpoint response model."""

    message: str = Field(..., description="API name", examples=["CVGenius Template Engine API"])
    version: str = Field(..., description="API version", examples=["1.0.0"])


class TemplateListResponse(BaseModel):
    """Template listing response model."""

    templates: List[dict]
    total: int


class CategoryListResponse(BaseModel):
    """Template categories response model."""

    categories: List[dict]
    total: int


class TemplateDetailResponse(APIResponseModel):
    """Single template response model."""

    template: dict
    css: Optional[str] = None
    preview: Optional[str] = None
    base_chain: List[str] = Field(default_factory=list, alias="baseChain")


class SelectResponse(BaseModel):
    """Template selection response model."""

    success: bool
    template: dict


class PreviewResponse(APIResponseModel):
    """Rendered preview response model."""

    template_id: str = Field(..., alias="templateId")
    html: str
    css: str
    validation_errors: List[ValidationError] = Field(default_factory=list, alias="validationErrors")
    is_valid: bool = Field(..., alias="isValid")
    page_estimate: PageEstimate = Field(..., alias="pageEstimate")


class ValidateResponse(APIResponseModel):
    """Validation summary response model."""

    template_id: str = Field(..., alias="templateId")
    is_valid: bool = Field(..., alias="isValid")
    errors: List[ValidationError] = Field(default_factory=list)
    by_section: Dict[str, List[str]] = Field(default_factory=dict, alias="bySection")
    error_count: int = Field(..., alias="errorCount")
