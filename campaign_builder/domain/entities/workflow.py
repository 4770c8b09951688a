"""WorkflowGraph 实体 - campaign 工作流聚合根

业务定义：
- WorkflowGraph 是编辑中的 campaign：一组节点 + 一组有向边 + 当前选中节点
- 操作员通过命令方法编辑（添加/连线/更新配置/删除/选中）
- 保存时由编译器展开为有序步骤列表

设计原则：
- 纯 Python 实现，不依赖任何框架（DDD 要求）
- 使用 dataclass 简化样板代码
- 维护聚合根不变式：
  1. 节点 ID 在图内唯一
  2. 每条边的两端都引用存在的节点（删除节点时级联删除边）
- 没有全局单例：每个编辑会话持有自己的实例
"""

from collections.abc import Iterable, Mapping
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from campaign_builder.domain.entities.edge import Edge
from campaign_builder.domain.entities.node import Node
from campaign_builder.domain.exceptions import (
    InvalidEdgeError,
    InvalidReferenceError,
    NotFoundError,
)
from campaign_builder.domain.services.step_catalog import get_step_definition
from campaign_builder.domain.value_objects.position import Position
from campaign_builder.domain.value_objects.step_selection import StepSelection
from campaign_builder.domain.value_objects.step_type import StepType

# 从已保存的步骤列表重建画布时使用的纵向布局
_LOADED_STEP_X = 400.0
_LOADED_STEP_Y_OFFSET = 100.0
_LOADED_STEP_Y_SPACING = 150.0


@dataclass
class WorkflowGraph:
    """WorkflowGraph 实体（聚合根）

    属性说明：
    - id: 唯一标识符（wf_ 前缀）
    - name: campaign 名称（保存时不能为空）
    - nodes: 节点列表（列表顺序即插入顺序）
    - edges: 边列表（列表顺序即连线顺序）
    - selected_node_id: 当前选中的节点
    - campaign_id: 外部 campaign 服务中的 ID（新建 campaign 为 None）

    为什么是聚合根？
    1. WorkflowGraph 管理 Node 和 Edge 的生命周期
    2. 外部只能通过 WorkflowGraph 操作 Node 和 Edge
    3. WorkflowGraph 维护节点和边的一致性
    """

    id: str
    name: str = ""
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    selected_node_id: str | None = None
    campaign_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name: str = "", campaign_id: str | None = None) -> "WorkflowGraph":
        """创建空工作流

        参数：
            name: campaign 名称（编辑过程中允许为空，保存时校验）
            campaign_id: 已存在的 campaign ID（编辑已有 campaign 时）
        """
        now = datetime.now(UTC)
        return cls(
            id=f"wf_{uuid4().hex[:8]}",
            name=(name or "").strip(),
            campaign_id=campaign_id,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_steps(
        cls,
        name: str,
        steps: Iterable[Mapping[str, Any]],
        *,
        campaign_id: str | None = None,
    ) -> "WorkflowGraph":
        """从已保存的步骤列表重建可编辑的工作流

        业务规则：
        - 按 order 排序后依次创建节点
        - 相邻步骤之间自动连线（还原线性序列）
        - 步骤的 title 写回节点 config，保证再次编译时标题不变
        - 不额外包裹 start / end 哨兵节点（编译器从不发出哨兵）

        参数：
            name: campaign 名称
            steps: 外部服务返回的步骤（{type, order, title, config}）

        抛出：
            NotFoundError: 步骤类型未注册时
        """
        graph = cls.create(name=name, campaign_id=campaign_id)
        ordered = sorted(
            enumerate(steps),
            key=lambda item: (item[1].get("order", item[0]), item[0]),
        )

        for index, (_, step) in enumerate(ordered):
            step_type = get_step_definition(step.get("type", "")).type
            config = deepcopy(dict(step.get("config") or {}))
            title = step.get("title")
            if isinstance(title, str) and title.strip() and "title" not in config:
                config["title"] = title

            node = Node.create(
                type=step_type,
                config=config,
                position=Position(
                    x=_LOADED_STEP_X,
                    y=_LOADED_STEP_Y_OFFSET + index * _LOADED_STEP_Y_SPACING,
                ),
            )
            if graph.nodes:
                graph.edges.append(Edge.create(graph.nodes[-1].id, node.id))
            graph.nodes.append(node)

        return graph

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def find_node(self, node_id: str | None) -> Node | None:
        if node_id is None:
            return None
        return next((node for node in self.nodes if node.id == node_id), None)

    def get_node(self, node_id: str) -> Node:
        """根据 ID 获取节点（不存在抛异常）"""
        node = self.find_node(node_id)
        if node is None:
            raise NotFoundError("Node", node_id)
        return node

    def find_edge(self, source_node_id: str, target_node_id: str) -> Edge | None:
        return next(
            (
                edge
                for edge in self.edges
                if edge.source_node_id == source_node_id and edge.target_node_id == target_node_id
            ),
            None,
        )

    @property
    def selected_node(self) -> Node | None:
        return self.find_node(self.selected_node_id)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    # ------------------------------------------------------------------
    # 命令
    # ------------------------------------------------------------------

    def rename(self, name: str) -> None:
        self.name = (name or "").strip()
        self._touch()

    def add_node(self, step_type: StepType | str, position: Position | None = None) -> Node:
        """添加步骤

        业务规则：
        - config 从步骤目录的默认配置深拷贝，节点之间从不共享引用
        - 图非空时，自动从上一个添加的节点连线到新节点（默认线性链）
        - 上一个节点是 end 哨兵时不自动连线（end 没有后继）

        参数：
            step_type: 步骤类型
            position: 画布位置（可选）

        返回：
            新节点

        抛出：
            NotFoundError: 步骤类型未注册时
        """
        definition = get_step_definition(step_type)
        node = Node.create(
            type=definition.type,
            config=definition.new_config(),
            position=position,
        )

        previous = self.nodes[-1] if self.nodes else None
        self.nodes.append(node)

        if previous is not None and previous.type != StepType.END:
            self.edges.append(Edge.create(previous.id, node.id))

        self._touch()
        return node

    def connect(self, source_node_id: str, target_node_id: str) -> Edge:
        """手动连线

        业务规则：
        - 两端节点都必须存在
        - 不允许自环
        - 重复连线去重：同一 source→target 已存在时返回已有的边，图不变

        抛出：
            InvalidReferenceError: 端点节点不存在时
            InvalidEdgeError: 自环时
        """
        for node_id in (source_node_id, target_node_id):
            if self.find_node(node_id) is None:
                raise InvalidReferenceError(node_id)

        if source_node_id == target_node_id:
            raise InvalidEdgeError("不能连接到自己")

        existing = self.find_edge(source_node_id, target_node_id)
        if existing is not None:
            return existing

        edge = Edge.create(source_node_id, target_node_id)
        self.edges.append(edge)
        self._touch()
        return edge

    def update_node_config(self, node_id: str, partial_config: Mapping[str, Any]) -> Node:
        """浅合并更新节点配置

        抛出：
            NotFoundError: 节点不存在时
        """
        node = self.get_node(node_id)
        node.update_config(dict(partial_config))
        self._touch()
        return node

    def update_node_position(self, node_id: str, position: Position) -> Node:
        node = self.get_node(node_id)
        node.update_position(position)
        self._touch()
        return node

    def delete_node(self, node_id: str) -> None:
        """删除节点

        业务规则：
        - 级联删除所有以该节点为 source 或 target 的边（不自动重新连线）
        - 被删除的节点处于选中状态时，清空选中

        抛出：
            NotFoundError: 节点不存在时
        """
        self.get_node(node_id)

        self.nodes = [node for node in self.nodes if node.id != node_id]
        self.edges = [edge for edge in self.edges if not edge.touches(node_id)]

        if self.selected_node_id == node_id:
            self.selected_node_id = None

        self._touch()

    def delete_edge(self, edge_id: str) -> None:
        if not any(edge.id == edge_id for edge in self.edges):
            raise NotFoundError("Edge", edge_id)

        self.edges = [edge for edge in self.edges if edge.id != edge_id]
        self._touch()

    def select(self, node_id: str | None) -> StepSelection:
        """选中节点（None 表示取消选中）

        返回：
            StepSelection：start / end 哨兵节点报告为不可配置

        抛出：
            NotFoundError: 节点不存在时
        """
        if node_id is None:
            self.selected_node_id = None
            return StepSelection()

        self.selected_node_id = self.get_node(node_id).id
        return self.selection()

    def selection(self) -> StepSelection:
        node = self.selected_node
        if node is None:
            return StepSelection()
        return StepSelection(node_id=node.id, step_type=node.type, configurable=not node.is_sentinel)

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)
