"""Step catalog endpoints (palette / settings form SoT)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from campaign_builder.domain.exceptions import NotFoundError
from campaign_builder.domain.services.step_catalog import (
    get_step_definition,
    list_by_category,
    list_step_definitions,
    palette_categories,
)
from campaign_builder.domain.services.template_variables import (
    all_template_variables,
    get_template_variables,
)
from campaign_builder.domain.value_objects.condition_type import CONDITION_TYPES_BY_CATEGORY
from campaign_builder.domain.value_objects.step_type import StepCategory
from campaign_builder.interfaces.api.dto.step_catalog_dto import (
    ConditionTypesResponse,
    StepDefinitionDTO,
    StepDefinitionListResponse,
    TemplateVariablesResponse,
)

router = APIRouter(tags=["Step Catalog"])


def _parse_category(category: str) -> StepCategory:
    try:
        return StepCategory(category)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown step category: {category}",
        ) from exc


@router.get("/step-definitions", response_model=StepDefinitionListResponse)
async def list_step_definitions_endpoint(category: str | None = None) -> StepDefinitionListResponse:
    """列出步骤目录（目录声明顺序，不排序）"""

    if category is None:
        definitions = list_step_definitions()
    else:
        definitions = list_by_category(_parse_category(category))

    return StepDefinitionListResponse(
        definitions=[StepDefinitionDTO.from_entity(definition) for definition in definitions],
        categories=[item.value for item in palette_categories()],
    )


@router.get("/step-definitions/{step_type}", response_model=StepDefinitionDTO)
async def get_step_definition_endpoint(step_type: str) -> StepDefinitionDTO:
    try:
        definition = get_step_definition(step_type)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{exc.entity_type} not found: {exc.entity_id}",
        ) from exc
    return StepDefinitionDTO.from_entity(definition)


@router.get("/template-variables", response_model=TemplateVariablesResponse)
async def list_template_variables(category: str | None = None) -> TemplateVariablesResponse:
    if category is not None:
        resolved = _parse_category(category)
        return TemplateVariablesResponse(
            variables={resolved.value: list(get_template_variables(resolved))}
        )

    return TemplateVariablesResponse(
        variables={
            item.value: list(variables)
            for item, variables in all_template_variables().items()
            if variables
        }
    )


@router.get("/condition-types", response_model=ConditionTypesResponse)
async def list_condition_types() -> ConditionTypesResponse:
    return ConditionTypesResponse(
        condition_types={
            category.value: [condition.value for condition in conditions]
            for category, conditions in CONDITION_TYPES_BY_CATEGORY.items()
        }
    )
