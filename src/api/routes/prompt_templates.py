"""
Prompt Template Routes

Prompt templates for AI image generation, proxied to the admin API.
"""

import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from loguru import logger as log
from pydantic import BaseModel, ConfigDict, Field

from src.api.dependencies import get_admin_api
from src.api.errors import ApiError, upstream_call
from src.api.multipart import split_form
from src.services.admin_api import AdminApiClient, UpstreamError
from src.utils.logging_config import setup_logging

setup_logging()

router = APIRouter(prefix="/api/prompt-templates", tags=["Prompt Templates"])

PROMPT_TEMPLATE_NOT_FOUND = "Prompt template not found"


class PromptTestRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str | None = None
    image_keys: list[str] | None = Field(None, alias="imageKeys")


@router.get("")
def list_prompt_templates(admin_api: AdminApiClient = Depends(get_admin_api)):
    with upstream_call("Failed to fetch prompt templates"):
        return admin_api.fetch_prompt_templates()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_prompt_template(
    template: dict[str, Any] = Body(...),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call("Failed to create prompt template"):
        return admin_api.create_prompt_template(template)


@router.post("/test")
def test_prompt(
    payload: PromptTestRequest, admin_api: AdminApiClient = Depends(get_admin_api)
):
    """Run a prompt against images already uploaded to object storage."""
    if not payload.prompt or not payload.image_keys:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            "Prompt and at least one image are required",
            success=False,
        )

    try:
        return admin_api.test_prompt(payload.prompt, payload.image_keys)
    except UpstreamError as e:
        log.error(f"Error testing prompt: {e}")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e), success=False)


@router.get("/{prompt_id}")
def get_prompt_template(
    prompt_id: str, admin_api: AdminApiClient = Depends(get_admin_api)
):
    with upstream_call(
        "Failed to fetch prompt template", not_found_message=PROMPT_TEMPLATE_NOT_FOUND
    ):
        return admin_api.fetch_prompt_template(prompt_id)


@router.put("/{prompt_id}")
def update_prompt_template(
    prompt_id: str,
    template: dict[str, Any] = Body(...),
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    with upstream_call(
        "Failed to update prompt template", not_found_message=PROMPT_TEMPLATE_NOT_FOUND
    ):
        return admin_api.update_prompt_template(prompt_id, template)


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_prompt_template(
    prompt_id: str, admin_api: AdminApiClient = Depends(get_admin_api)
):
    with upstream_call(
        "Failed to delete prompt template", not_found_message=PROMPT_TEMPLATE_NOT_FOUND
    ):
        admin_api.delete_prompt_template(prompt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{prompt_id}/save-example")
async def save_prompt_example(
    prompt_id: str,
    request: Request,
    admin_api: AdminApiClient = Depends(get_admin_api),
):
    """
    Forward a multipart form (beforeImage, afterImage and any text fields)
    to the admin API unchanged.
    """
    files, data = await split_form(await request.form())

    with upstream_call(
        "Failed to save prompt example", not_found_message=PROMPT_TEMPLATE_NOT_FOUND
    ):
        return await asyncio.to_thread(
            admin_api.save_prompt_example, prompt_id, files, data
        )
