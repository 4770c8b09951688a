"""Campaign editor API routes.

Every mutation runs against the in-memory graph owned by one editor session and returns
the full session snapshot, so the canvas can re-render without a follow-up GET.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from campaign_builder.application.services.editor_session import (
    EditorSessionRegistry,
    WorkflowEditorSession,
)
from campaign_builder.application.use_cases.load_campaign import (
    LoadCampaignInput,
    LoadCampaignUseCase,
)
from campaign_builder.application.use_cases.save_campaign import (
    SaveCampaignInput,
    SaveCampaignUseCase,
)
from campaign_builder.domain.entities.workflow import WorkflowGraph
from campaign_builder.domain.exceptions import (
    CampaignServiceError,
    CompileError,
    DomainError,
    DomainValidationError,
    NotFoundError,
)
from campaign_builder.domain.services.step_validator import validate_workflow
from campaign_builder.domain.services.template_variables import insert_variable
from campaign_builder.domain.services.workflow_compiler import compile_workflow
from campaign_builder.interfaces.api.container import ApiContainer
from campaign_builder.interfaces.api.dependencies.container import get_container
from campaign_builder.interfaces.api.dto.editor_dto import (
    AddNodeRequest,
    CompiledStepDTO,
    CompileWorkflowResponse,
    ConnectNodesRequest,
    CreateEditorSessionRequest,
    EditorSessionResponse,
    InsertVariableRequest,
    PositionDTO,
    RenameCampaignRequest,
    SaveCampaignResponse,
    SelectNodeRequest,
    StepValidityDTO,
    UpdateNodeConfigRequest,
    WorkflowValidityResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/editor/sessions", tags=["Campaign Editor"])


def _to_http_exception(exc: DomainError) -> HTTPException:
    """Map domain failures to HTTP errors (the graph is left untouched in every case)."""

    if isinstance(exc, CompileError):
        return HTTPException(
            status_code=422,
            detail={"code": exc.code, "message": str(exc), "errors": exc.errors},
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{exc.entity_type} not found: {exc.entity_id}",
        )
    if isinstance(exc, CampaignServiceError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        )
    if isinstance(exc, DomainValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": exc.code, "message": str(exc), "errors": exc.errors},
        )
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(exc),
    )


def get_session_registry(
    container: ApiContainer = Depends(get_container),
) -> EditorSessionRegistry:
    return container.session_registry


def get_save_campaign_use_case(
    container: ApiContainer = Depends(get_container),
) -> SaveCampaignUseCase:
    return SaveCampaignUseCase(
        session_registry=container.session_registry,
        campaign_service=container.campaign_service,
    )


def get_load_campaign_use_case(
    container: ApiContainer = Depends(get_container),
) -> LoadCampaignUseCase:
    return LoadCampaignUseCase(
        session_registry=container.session_registry,
        campaign_service=container.campaign_service,
    )


async def _get_session(registry: EditorSessionRegistry, session_id: str) -> WorkflowEditorSession:
    try:
        return await registry.get(session_id)
    except NotFoundError as exc:
        raise _to_http_exception(exc) from exc


@router.post("", response_model=EditorSessionResponse, status_code=status.HTTP_201_CREATED)
async def open_editor_session(
    request: CreateEditorSessionRequest,
    registry: EditorSessionRegistry = Depends(get_session_registry),
    load_use_case: LoadCampaignUseCase = Depends(get_load_campaign_use_case),
) -> EditorSessionResponse:
    """打开编辑会话

    - 不带 campaign_id：新建空白 campaign
    - 带 campaign_id：从外部服务加载已有 campaign 的步骤并重建线性图
    """

    try:
        if request.campaign_id:
            session = await load_use_case.execute(LoadCampaignInput(campaign_id=request.campaign_id))
        else:
            session = await registry.open(WorkflowGraph.create(name=request.name))
    except DomainError as exc:
        raise _to_http_exception(exc) from exc

    return EditorSessionResponse.from_session(session)


@router.get("/{session_id}", response_model=EditorSessionResponse)
async def get_editor_session(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    session = await _get_session(registry, session_id)
    return EditorSessionResponse.from_session(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_editor_session(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> None:
    """关闭会话，未保存的修改直接丢弃"""

    try:
        await registry.close(session_id)
    except NotFoundError as exc:
        raise _to_http_exception(exc) from exc


@router.patch("/{session_id}", response_model=EditorSessionResponse)
async def rename_campaign(
    session_id: str,
    request: RenameCampaignRequest,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    session = await _get_session(registry, session_id)
    session.graph.rename(request.name)
    return EditorSessionResponse.from_session(session)


@router.post(
    "/{session_id}/nodes",
    response_model=EditorSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_node(
    session_id: str,
    request: AddNodeRequest,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    """添加步骤（图非空时自动连到上一个节点）"""

    session = await _get_session(registry, session_id)
    try:
        node = session.graph.add_node(
            request.type,
            position=request.position.to_value_object() if request.position else None,
        )
    except DomainError as exc:
        raise _to_http_exception(exc) from exc

    logger.info(
        "editor_node_added",
        extra={"session_id": session_id, "node_id": node.id, "type": node.type.value},
    )
    return EditorSessionResponse.from_session(session)


@router.patch("/{session_id}/nodes/{node_id}/config", response_model=EditorSessionResponse)
async def update_node_config(
    session_id: str,
    node_id: str,
    request: UpdateNodeConfigRequest,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    session = await _get_session(registry, session_id)
    try:
        session.graph.update_node_config(node_id, request.config)
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return EditorSessionResponse.from_session(session)


@router.patch("/{session_id}/nodes/{node_id}/position", response_model=EditorSessionResponse)
async def update_node_position(
    session_id: str,
    node_id: str,
    request: PositionDTO,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    session = await _get_session(registry, session_id)
    try:
        session.graph.update_node_position(node_id, request.to_value_object())
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return EditorSessionResponse.from_session(session)


@router.delete("/{session_id}/nodes/{node_id}", response_model=EditorSessionResponse)
async def delete_node(
    session_id: str,
    node_id: str,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    """删除步骤及其所有连线（不自动重新连线）"""

    session = await _get_session(registry, session_id)
    try:
        session.graph.delete_node(node_id)
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return EditorSessionResponse.from_session(session)


@router.post("/{session_id}/nodes/{node_id}/variables", response_model=EditorSessionResponse)
async def insert_template_variable(
    session_id: str,
    node_id: str,
    request: InsertVariableRequest,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    """在文本字段末尾追加 {{variable}}（变量名不做校验，由执行服务在发送时解析）"""

    session = await _get_session(registry, session_id)
    try:
        node = session.graph.get_node(node_id)
        current = node.config.get(request.field)
        if current is not None and not isinstance(current, str):
            raise DomainError(f"字段不是文本字段: {request.field}")
        session.graph.update_node_config(
            node_id,
            {request.field: insert_variable(current, request.variable)},
        )
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return EditorSessionResponse.from_session(session)


@router.post(
    "/{session_id}/edges",
    response_model=EditorSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def connect_nodes(
    session_id: str,
    request: ConnectNodesRequest,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    """手动连线（重复连线返回已有的边）"""

    session = await _get_session(registry, session_id)
    try:
        session.graph.connect(request.source, request.target)
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return EditorSessionResponse.from_session(session)


@router.delete("/{session_id}/edges/{edge_id}", response_model=EditorSessionResponse)
async def delete_edge(
    session_id: str,
    edge_id: str,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    session = await _get_session(registry, session_id)
    try:
        session.graph.delete_edge(edge_id)
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return EditorSessionResponse.from_session(session)


@router.put("/{session_id}/selection", response_model=EditorSessionResponse)
async def select_node(
    session_id: str,
    request: SelectNodeRequest,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> EditorSessionResponse:
    session = await _get_session(registry, session_id)
    try:
        session.graph.select(request.node_id)
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return EditorSessionResponse.from_session(session)


@router.get("/{session_id}/validity", response_model=WorkflowValidityResponse)
async def get_workflow_validity(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> WorkflowValidityResponse:
    """逐节点校验结果（作为数据返回，从不抛错）"""

    session = await _get_session(registry, session_id)
    results = validate_workflow(session.graph)
    return WorkflowValidityResponse(
        valid=all(validity.valid for validity in results.values()),
        nodes={
            node_id: StepValidityDTO.from_value_object(validity)
            for node_id, validity in results.items()
        },
    )


@router.post("/{session_id}/compile", response_model=CompileWorkflowResponse)
async def compile_preview(
    session_id: str,
    registry: EditorSessionRegistry = Depends(get_session_registry),
) -> CompileWorkflowResponse:
    """编译预览（不触发持久化）"""

    session = await _get_session(registry, session_id)
    try:
        steps = compile_workflow(session.graph)
    except DomainError as exc:
        raise _to_http_exception(exc) from exc
    return CompileWorkflowResponse(steps=[CompiledStepDTO.from_value_object(step) for step in steps])


@router.post("/{session_id}/save", response_model=SaveCampaignResponse)
async def save_campaign(
    session_id: str,
    use_case: SaveCampaignUseCase = Depends(get_save_campaign_use_case),
) -> SaveCampaignResponse:
    """编译并保存（编译失败时不会调用外部服务）"""

    try:
        output = await use_case.execute(SaveCampaignInput(session_id=session_id))
    except DomainError as exc:
        raise _to_http_exception(exc) from exc

    return SaveCampaignResponse(
        campaign_id=output.campaign_id,
        created=output.created,
        steps=[CompiledStepDTO.from_value_object(step) for step in output.steps],
    )
