"""FastAPI application for the CVGenius template engine."""

import re
from io import BytesIO
from pathlib import Path
from typing import Optional
from fastapi import FastAPI, HTTPException, Query, Request, Response, status
from fastapi.responses import StreamingResponse
from cvgenius.config import get_settings
from cvgenius.exceptions import CyclicTemplateError, TemplateNotFound
from cvgenius.logger import _log_error, _log_info, setup_logger
from cvgenius.models.document_models import DocumentKind
from cvgenius.models.request_models import (
    EstimateRequest,
    ExportRequest,
    PreviewRequest,
    ValidateRequest,
)
from cvgenius.models.response_models import (
    CategoryListResponse,
    ErrorResponse,
    HealthResponse,
    PreviewResponse,
    RootResponse,
    SelectResponse,
    TemplateDetailResponse,
    TemplateListResponse,
    ValidateResponse,
)
from cvgenius.models.template_models import TemplateDefinition
from cvgenius.services import pagination, validator
from cvgenius.services.pdf_generator import PDFGenerator
from cvgenius.services.renderer import DocumentRenderer
from cvgenius.services.sample_data import get_sample_loader
from cvgenius.services.template_registry import TemplateSession, get_registry

API_VERSION = "1.0.0"

settings = get_settings()
setup_logger(settings.log_level, Path(settings.log_file) if settings.log_file else None)

app = FastAPI(
    title="CVGenius Template Engine API",
    description="""API for rendering, validating and paginating CVs and cover letters.

## Features

* **Template catalogue**: Irish-market CV and cover-letter templates with categories and search
* **Rendering**: Scoped HTML and CSS for a document and template, with Irish date and phone formatting
* **Validation**: Advisory checks of a document against the selected template
* **Page estimation**: A4 page count with warnings against the recommended page limit
* **PDF export**: Rendered documents as A4 PDF

## Usage

1. Browse templates with `/api/v1/templates`
2. Select one with `POST /api/v1/templates/{id}` (stored in a session cookie)
3. Preview a document with `POST /api/v1/templates/preview`
4. Export it with `POST /api/v1/documents/export/pdf`""",
    version=API_VERSION,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    tags_metadata=[
        {
            "name": "health",
            "description": "Health check and status endpoints"
        },
        {
            "name": "templates",
            "description": "Template catalogue, selection, preview and validation"
        },
        {
            "name": "documents",
            "description": "Page estimation and PDF export"
        }
    ]
)

# Initialize services
registry = get_registry()
renderer = DocumentRenderer(registry)
sample_loader = get_sample_loader()
pdf_generator = PDFGenerator(renderer)


def _session_from(request: Request) -> TemplateSession:
    return TemplateSession(template_id=request.cookies.get(settings.session_cookie))


def _resolve_template(template_id: Optional[str], request: Request) -> TemplateDefinition:
    """Explicit id, else the session selection, else the configured default."""
    if template_id:
        return registry.get_by_id(template_id)
    selected = registry.current(_session_from(request))
    if selected is not None:
        return selected
    return registry.get_by_id(settings.default_template)


def _attachment_name(full_name: str, kind: DocumentKind) -> str:
    prefix = "Cover_Letter" if kind == DocumentKind.COVER_LETTER else "CV"
    name = re.sub(r"[^A-Za-z0-9]+", "_", full_name).strip("_")
    return f"{prefix}_{name}.pdf" if name else f"{prefix}.pdf"


@app.get(
    "/",
    response_model=RootResponse,
    status_code=status.HTTP_200_OK,
    summary="Root endpoint",
    description="Returns API information including name and version",
    tags=["health"],
)
async def root():
    """
    Root endpoint.

    Returns basic API information including name and version.
    """
    return RootResponse(message="CVGenius Template Engine API", version=API_VERSION)


@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Checks if the API service is running and the catalogue is loaded",
    tags=["health"],
)
async def health():
    """
    Health check endpoint.

    Returns the health status of the API service and the catalogue size.
    """
    return HealthResponse(status="ok", templates=len(registry))


@app.get(
    "/api/v1/templates",
    response_model=TemplateListResponse,
    summary="List templates",
    description="Lists templates by popularity, optionally filtered by category and document kind",
    tags=["templates"],
)
async def list_templates(
    category: Optional[str] = Query(None, description="Category slug, e.g. 'tech'"),
    kind: Optional[DocumentKind] = Query(None, description="cv or cover-letter"),
):
    """
    List catalogue templates.

    **Parameters:**
    - `category`: Only templates tagged with this category
    - `kind`: Only CV or only cover-letter templates
    """
    if category is not None:
        templates = registry.list_by_category(category, kind)
    else:
        templates = registry.list_all(kind)
    return TemplateListResponse(templates=[t.summary() for t in templates], total=len(templates))


@app.get(
    "/api/v1/templates/categories",
    response_model=CategoryListResponse,
    summary="List template categories",
    description="Distinct categories with template counts, most populated first",
    tags=["templates"],
)
async def list_categories(kind: Optional[DocumentKind] = Query(None, description="cv or cover-letter")):
    """List template categories with counts."""
    categories = registry.categories(kind)
    return CategoryListResponse(categories=categories, total=len(categories))


@app.get(
    "/api/v1/templates/search",
    response_model=TemplateListResponse,
    summary="Search templates",
    description="Case-insensitive search over template names, categories, descriptions and features",
    tags=["templates"],
)
async def search_templates(
    q: str = Query("", description="Search text"),
    kind: Optional[DocumentKind] = Query(None, description="cv or cover-letter"),
):
    """Search templates."""
    templates = registry.search(q, kind)
    return TemplateListResponse(templates=[t.summary() for t in templates], total=len(templates))


@app.post(
    "/api/v1/templates/preview",
    response_model=PreviewResponse,
    summary="Preview a document",
    description="""
    Renders a document with a template and reports validation warnings and the page estimate.

    The template is taken from `templateId`, then from the session selection,
    then from the configured default. The sample document is used when `data` is omitted.
    """,
    tags=["templates"],
    responses={
        404: {"description": "Template not found", "model": ErrorResponse},
        422: {"description": "Cyclic template chain or invalid document", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
)
async def preview_document(body: PreviewRequest, request: Request):
    """
    Render a preview.

    **Example:**
    ```json
    {
      "templateId": "dublin-tech",
      "data": {"personal": {"fullName": "Aoife Murphy", "email": "aoife@example.ie"}}
    }
    ```
    """
    try:
        template = _resolve_template(body.template_id, request)
        document = body.data if body.data is not None else sample_loader.load(template.kind)

        output = renderer.render(document, template)
        errors = validator.validate(document, template)
        estimate = pagination.estimate(document)

        return PreviewResponse(
            template_id=template.id,
            html=output.html,
            css=output.css,
            validation_errors=errors,
            is_valid=not errors,
            page_estimate=estimate,
        )
    except TemplateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CyclicTemplateError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        _log_error(f"Preview failed: {e}")
        raise HTTPException(status_code=500, detail=f"Error rendering preview: {str(e)}")


@app.post(
    "/api/v1/templates/validate",
    response_model=ValidateResponse,
    summary="Validate a document",
    description="Checks a document against a template and groups the warnings by section",
    tags=["templates"],
    responses={
        404: {"description": "Template not found", "model": ErrorResponse},
    },
)
async def validate_document(body: ValidateRequest):
    """Validate a document against a template."""
    try:
        template = registry.get_by_id(body.template_id)
    except TemplateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    errors = validator.validate(body.data, template)
    return ValidateResponse(
        template_id=template.id,
        is_valid=not errors,
        errors=errors,
        by_section=validator.group_by_section(errors),
        error_count=len(errors),
    )


@app.get(
    "/api/v1/templates/{template_id}",
    response_model=TemplateDetailResponse,
    summary="Get a template",
    description="Returns a template definition, optionally with its CSS and a preview over sample data",
    tags=["templates"],
    responses={
        404: {"description": "Template not found", "model": ErrorResponse},
        422: {"description": "Cyclic template chain", "model": ErrorResponse},
    },
)
async def get_template(
    template_id: str,
    preview: bool = Query(False, description="Include preview HTML rendered over sample data"),
    css: bool = Query(False, description="Include the template stylesheet"),
):
    """
    Get a template.

    **Parameters:**
    - `preview`: Render the sample document with this template
    - `css`: Include the generated CSS
    """
    try:
        template = registry.get_by_id(template_id)
        chain = registry.resolve_base(template)

        response = TemplateDetailResponse(
            template=template.model_dump(mode="json", by_alias=True),
            base_chain=[t.id for t in chain],
        )
        if css:
            response.css = registry.generate_css(template.id)
        if preview:
            response.preview = renderer.render(sample_loader.load(template.kind), template).html
        return response
    except TemplateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CyclicTemplateError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post(
    "/api/v1/templates/{template_id}",
    response_model=SelectResponse,
    summary="Select a template",
    description="Stores the template as the session's current selection in a cookie",
    tags=["templates"],
    responses={
        404: {"description": "Template not found", "model": ErrorResponse},
    },
)
async def select_template(template_id: str, request: Request, response: Response):
    """Select a template for the current session."""
    session = _session_from(request)
    if not registry.select(template_id, session):
        raise HTTPException(status_code=404, detail=f"Template not found: {template_id}")

    response.set_cookie(settings.session_cookie, session.template_id, httponly=True, samesite="lax")
    _log_info(f"Session selected template '{template_id}'")
    return SelectResponse(success=True, template=registry.get_by_id(template_id).summary())


@app.post(
    "/api/v1/documents/estimate",
    response_model=pagination.PageEstimate,
    summary="Estimate pages",
    description="Estimates the A4 page count of a document and compares it with the page limit",
    tags=["documents"],
)
async def estimate_document(body: EstimateRequest):
    """Estimate how many A4 pages a document fills."""
    return pagination.estimate(body.data, body.max_pages)


@app.post(
    "/api/v1/documents/export/pdf",
    response_class=StreamingResponse,
    status_code=status.HTTP_200_OK,
    summary="Export PDF",
    description="Renders a document with a template and returns it as an A4 PDF",
    tags=["documents"],
    responses={
        200: {
            "description": "PDF file",
            "content": {
                "application/pdf": {
                    "schema": {
                        "type": "string",
                        "format": "binary"
                    }
                }
            }
        },
        404: {"description": "Template not found", "model": ErrorResponse},
        422: {"description": "Cyclic template chain", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
)
async def export_pdf(body: ExportRequest, request: Request):
    """
    Export a document as PDF.

    **Returns:**
    - PDF file as binary stream named after the document owner
    """
    try:
        template = _resolve_template(body.template_id, request)
        pdf_bytes = pdf_generator.generate_pdf(body.data, template)
        filename = _attachment_name(body.data.personal.full_name, template.kind)

        return StreamingResponse(
            BytesIO(pdf_bytes),
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"'
            }
        )
    except TemplateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CyclicTemplateError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        _log_error(f"PDF export failed: {e}")
        raise HTTPException(status_code=500, detail=f"Error generating PDF: {str(e)}")


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("cvgenius.main:app", host=settings.host, port=settings.port)
