"""WorkflowCompiler - 把编辑中的工作流图编译为有序步骤列表（Domain Service）

目标：
- 保存前强校验：空 campaign / 节点未通过校验 / 入口不唯一，都在发往网络之前拦截
- 产出外部执行服务接受的线性步骤列表（{type, order, title, description?, config}）
- 错误信息前端友好（结构化 errors 列表，可以直接定位到节点）

线性化规则：
- 从唯一入口节点开始做 Kahn 式广度优先遍历，后继按连线顺序访问
- 一个节点在其所有已发出的前驱之后才发出
- 遍历卡在回边上时，从已发出节点的第一个未访问后继（按连线顺序）继续遍历
- 入口不可达的节点（脱离主链的环）按节点插入顺序追加在最后
- start / end 哨兵参与排序但不作为步骤发出；order 在发出的步骤上连续编号
"""

from __future__ import annotations

import copy
import logging
import time
from collections import deque
from typing import Any

from campaign_builder.domain.entities.node import Node
from campaign_builder.domain.entities.workflow import WorkflowGraph
from campaign_builder.domain.exceptions import CompileError, CompileErrorKind
from campaign_builder.domain.services.step_catalog import get_step_definition
from campaign_builder.domain.services.step_validator import compute_node_validity
from campaign_builder.domain.value_objects.compiled_step import CompiledStep

logger = logging.getLogger(__name__)


def _append_error(
    errors: list[dict[str, Any]],
    *,
    code: str,
    message: str,
    path: str | None = None,
    meta: dict[str, Any] | None = None,
) -> None:
    payload: dict[str, Any] = {"code": code, "message": message}
    if path:
        payload["path"] = path
    if meta:
        payload["meta"] = meta
    errors.append(payload)


def _node_path(node_index: int, relative_path: str) -> str:
    return f"nodes[{node_index}].{relative_path}"


def _check_not_empty(graph: WorkflowGraph) -> None:
    errors: list[dict[str, Any]] = []

    if not graph.name.strip():
        _append_error(
            errors,
            code="missing_name",
            message="Campaign name is required",
            path="name",
        )

    if not any(not node.is_sentinel for node in graph.nodes):
        _append_error(
            errors,
            code="no_steps",
            message="Campaign must contain at least one step",
            path="nodes",
            meta={"node_count": len(graph.nodes)},
        )

    if errors:
        raise CompileError(
            CompileErrorKind.EMPTY,
            "Please add a campaign name and at least one step",
            errors=errors,
        )


def _check_nodes_valid(graph: WorkflowGraph) -> None:
    errors: list[dict[str, Any]] = []

    for index, node in enumerate(graph.nodes):
        validity = compute_node_validity(node)
        if validity.valid:
            continue
        _append_error(
            errors,
            code="invalid_step",
            message=f"Step {node.type.value} is missing required fields",
            path=_node_path(index, "config"),
            meta={
                "node_id": node.id,
                "type": node.type.value,
                "missing_fields": list(validity.missing_fields),
            },
        )

    if errors:
        raise CompileError(
            CompileErrorKind.NOT_VALID,
            "Please fix invalid steps before saving",
            errors=errors,
        )


def find_entry_nodes(graph: WorkflowGraph) -> list[Node]:
    """入度为 0 的节点（按插入顺序）"""

    targets = {edge.target_node_id for edge in graph.edges}
    return [node for node in graph.nodes if node.id not in targets]


def _single_entry_node(graph: WorkflowGraph) -> Node:
    entries = find_entry_nodes(graph)
    if len(entries) == 1:
        return entries[0]

    if entries:
        message = "Campaign has more than one starting step"
        errors = [
            {
                "code": "multiple_entry_points",
                "message": message,
                "path": "edges",
                "meta": {"node_ids": [node.id for node in entries]},
            }
        ]
    else:
        message = "Campaign has no starting step"
        errors = [
            {
                "code": "no_entry_point",
                "message": message,
                "path": "edges",
            }
        ]

    raise CompileError(CompileErrorKind.DISCONNECTED, message, errors=errors)


def linearize(graph: WorkflowGraph, entry: Node) -> list[Node]:
    """以 entry 为起点做 Kahn 遍历，返回包含所有节点的有序列表"""

    node_map = {node.id: node for node in graph.nodes}
    in_degree = {node_id: 0 for node_id in node_map}
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in node_map}

    for edge in graph.edges:
        if edge.source_node_id in adjacency and edge.target_node_id in in_degree:
            adjacency[edge.source_node_id].append(edge.target_node_id)
            in_degree[edge.target_node_id] += 1

    queue: deque[str] = deque([entry.id])
    visited: set[str] = {entry.id}
    ordered: list[Node] = []
    cycle_entry_ids: list[str] = []

    while True:
        while queue:
            node_id = queue.popleft()
            ordered.append(node_map[node_id])

            for neighbor in adjacency[node_id]:
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0 and neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        # Stalled on a back-edge: resume from the first unvisited successor of an emitted node.
        resume_id = next(
            (
                neighbor
                for node in ordered
                for neighbor in adjacency[node.id]
                if neighbor not in visited
            ),
            None,
        )
        if resume_id is None:
            break
        cycle_entry_ids.append(resume_id)
        visited.add(resume_id)
        queue.append(resume_id)

    leftovers = [node for node in graph.nodes if node.id not in visited]
    if cycle_entry_ids or leftovers:
        logger.warning(
            "workflow_compile_cycle_fallback",
            extra={
                "workflow_id": graph.id,
                "cycle_entry_node_ids": cycle_entry_ids,
                "unreachable_node_ids": [node.id for node in leftovers],
            },
        )
    ordered.extend(leftovers)

    return ordered


def _compile_node(node: Node, order: int) -> CompiledStep:
    config = copy.deepcopy(node.config)

    title = config.get("title")
    if not isinstance(title, str) or not title.strip():
        title = get_step_definition(node.type).label

    description = config.get("description")
    if not isinstance(description, str):
        description = ""

    return CompiledStep(
        type=node.type,
        order=order,
        title=title,
        description=description,
        config=config,
    )


def compile_workflow(graph: WorkflowGraph) -> list[CompiledStep]:
    """编译工作流

    检查顺序：EMPTY -> NOT_VALID -> DISCONNECTED

    返回：
        按执行顺序排列的 CompiledStep 列表（order 从 0 开始连续编号）

    抛出：
        CompileError: 任一检查失败时（不会产出部分结果）
    """

    started = time.perf_counter()
    try:
        _check_not_empty(graph)
        _check_nodes_valid(graph)
        entry = _single_entry_node(graph)
    except CompileError as exc:
        logger.info(
            "workflow_compile_rejected",
            extra={
                "workflow_id": graph.id,
                "kind": exc.kind.value,
                "error_count": len(exc.errors),
            },
        )
        raise

    executable = [node for node in linearize(graph, entry) if not node.is_sentinel]
    steps = [_compile_node(node, order) for order, node in enumerate(executable)]

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "workflow_compiled",
        extra={
            "workflow_id": graph.id,
            "compile_ms": elapsed_ms,
            "step_count": len(steps),
        },
    )
    return steps
