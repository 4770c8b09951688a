"""测试：WorkflowGraph 聚合根

业务背景：
- 操作员在画布上添加 / 连线 / 配置 / 删除 / 选中步骤
- 聚合根维护引用完整性：任何边都不能引用不存在的节点
"""

import pytest

from campaign_builder.domain.entities.workflow import WorkflowGraph
from campaign_builder.domain.exceptions import (
    InvalidEdgeError,
    InvalidReferenceError,
    NotFoundError,
)
from campaign_builder.domain.services.step_catalog import get_step_definition
from campaign_builder.domain.services.workflow_compiler import compile_workflow
from campaign_builder.domain.value_objects.position import Position
from campaign_builder.domain.value_objects.step_type import StepType


def _edge_pairs(graph: WorkflowGraph) -> list[tuple[str, str]]:
    return [(edge.source_node_id, edge.target_node_id) for edge in graph.edges]


class TestWorkflowGraphCreation:
    def test_create_should_assign_prefixed_id_and_strip_name(self):
        graph = WorkflowGraph.create(name="  Q3 Outreach  ")

        assert graph.id.startswith("wf_")
        assert graph.name == "Q3 Outreach"
        assert graph.nodes == []
        assert graph.edges == []
        assert graph.selected_node_id is None
        assert graph.campaign_id is None


class TestAddNode:
    """测试添加步骤"""

    def test_add_node_should_seed_config_from_catalog_defaults(self):
        graph = WorkflowGraph.create()

        node = graph.add_node(StepType.EMAIL_SEND, position=Position(x=10, y=20))

        assert node.config == dict(get_step_definition(StepType.EMAIL_SEND).default_data)
        assert node.position == Position(x=10, y=20)
        assert graph.nodes == [node]
        assert graph.edges == [], "第一个节点不会产生连线"

    def test_add_node_should_deep_copy_default_config(self):
        """测试：默认配置深拷贝，节点之间以及与目录之间从不共享引用"""
        graph = WorkflowGraph.create()

        first = graph.add_node(StepType.LINKEDIN_SCRAPE_PROFILE)
        second = graph.add_node(StepType.LINKEDIN_SCRAPE_PROFILE)
        first.config["linkedinScrapeFields"].append("email")

        assert second.config["linkedinScrapeFields"] == ["name", "title", "company", "location"]
        assert get_step_definition(StepType.LINKEDIN_SCRAPE_PROFILE).default_data[
            "linkedinScrapeFields"
        ] == ["name", "title", "company", "location"]

    def test_add_node_should_chain_from_previous_node(self):
        graph = WorkflowGraph.create()

        a = graph.add_node(StepType.LINKEDIN_VISIT)
        b = graph.add_node(StepType.LINKEDIN_CONNECT)
        c = graph.add_node(StepType.EMAIL_SEND)

        assert _edge_pairs(graph) == [(a.id, b.id), (b.id, c.id)]

    def test_adding_fifth_step_creates_exactly_one_new_edge(self):
        """测试：向 4 节点线性图添加第 5 个步骤

        验收标准：
        - 只新增一条边：node4 → node5
        - 之前的边保持不变
        """
        graph = WorkflowGraph.create()
        for step_type in (
            StepType.LINKEDIN_VISIT,
            StepType.LINKEDIN_CONNECT,
            StepType.EMAIL_SEND,
            StepType.WHATSAPP_SEND,
        ):
            graph.add_node(step_type)
        edges_before = list(graph.edges)

        fifth = graph.add_node(StepType.DELAY)

        assert len(graph.edges) == len(edges_before) + 1
        assert graph.edges[:-1] == edges_before
        assert (graph.edges[-1].source_node_id, graph.edges[-1].target_node_id) == (
            graph.nodes[3].id,
            fifth.id,
        )

    def test_add_node_after_end_sentinel_does_not_auto_connect(self):
        graph = WorkflowGraph.create()
        graph.add_node(StepType.START)
        graph.add_node(StepType.END)

        graph.add_node(StepType.EMAIL_SEND)

        assert len(graph.edges) == 1

    def test_add_unknown_step_type_should_raise_not_found(self):
        graph = WorkflowGraph.create()

        with pytest.raises(NotFoundError):
            graph.add_node("fax_send")

        assert graph.nodes == []


class TestConnect:
    """测试手动连线"""

    def test_connect_missing_node_should_raise_invalid_reference(self):
        graph = WorkflowGraph.create()
        a = graph.add_node(StepType.LINKEDIN_VISIT)

        with pytest.raises(InvalidReferenceError):
            graph.connect(a.id, "node_missing")
        with pytest.raises(InvalidReferenceError):
            graph.connect("node_missing", a.id)

    def test_connect_self_loop_should_raise_invalid_edge_without_mutation(self):
        graph = WorkflowGraph.create()
        a = graph.add_node(StepType.LINKEDIN_VISIT)

        with pytest.raises(InvalidEdgeError):
            graph.connect(a.id, a.id)

        assert graph.edges == []

    def test_connect_duplicate_pair_should_return_existing_edge(self):
        """测试：重复连线去重，图不变"""
        graph = WorkflowGraph.create()
        a = graph.add_node(StepType.LINKEDIN_VISIT)
        b = graph.add_node(StepType.LINKEDIN_FOLLOW)
        existing = graph.edges[0]

        edge = graph.connect(a.id, b.id)

        assert edge is existing
        assert len(graph.edges) == 1

    def test_connect_reverse_pair_is_a_new_edge(self):
        graph = WorkflowGraph.create()
        a = graph.add_node(StepType.LINKEDIN_VISIT)
        b = graph.add_node(StepType.LINKEDIN_FOLLOW)

        graph.connect(b.id, a.id)

        assert _edge_pairs(graph) == [(a.id, b.id), (b.id, a.id)]


class TestUpdateNode:
    def test_update_node_config_should_shallow_merge(self):
        graph = WorkflowGraph.create()
        node = graph.add_node(StepType.EMAIL_SEND)

        graph.update_node_config(node.id, {"subject": "Quick question"})

        assert node.config["subject"] == "Quick question"
        assert node.config["body"] == "Hi {{first_name}},..."

    def test_update_missing_node_should_raise_not_found(self):
        graph = WorkflowGraph.create()

        with pytest.raises(NotFoundError):
            graph.update_node_config("node_missing", {"subject": "x"})

    def test_update_node_position(self):
        graph = WorkflowGraph.create()
        node = graph.add_node(StepType.EMAIL_SEND)

        graph.update_node_position(node.id, Position(x=5, y=6))

        assert node.position == Position(x=5, y=6)


class TestDeleteNode:
    """测试删除步骤"""

    def test_delete_middle_node_removes_incident_edges_without_relinking(self):
        """测试：A→B→C 删除 B 后边集为空（不会自动连 A→C）"""
        graph = WorkflowGraph.create()
        a = graph.add_node(StepType.LINKEDIN_VISIT)
        b = graph.add_node(StepType.LINKEDIN_FOLLOW)
        c = graph.add_node(StepType.LINKEDIN_CONNECT)

        graph.delete_node(b.id)

        assert [node.id for node in graph.nodes] == [a.id, c.id]
        assert graph.edges == []

    def test_delete_selected_node_clears_selection(self):
        graph = WorkflowGraph.create()
        node = graph.add_node(StepType.EMAIL_SEND)
        graph.select(node.id)

        graph.delete_node(node.id)

        assert graph.selected_node_id is None
        assert graph.selected_node is None

    def test_delete_other_node_keeps_selection(self):
        graph = WorkflowGraph.create()
        keep = graph.add_node(StepType.EMAIL_SEND)
        drop = graph.add_node(StepType.DELAY)
        graph.select(keep.id)

        graph.delete_node(drop.id)

        assert graph.selected_node_id == keep.id

    def test_delete_missing_node_should_raise_not_found(self):
        graph = WorkflowGraph.create()

        with pytest.raises(NotFoundError):
            graph.delete_node("node_missing")

    def test_delete_edge(self):
        graph = WorkflowGraph.create()
        graph.add_node(StepType.LINKEDIN_VISIT)
        graph.add_node(StepType.LINKEDIN_FOLLOW)

        graph.delete_edge(graph.edges[0].id)

        assert graph.edges == []
        with pytest.raises(NotFoundError):
            graph.delete_edge("edge_missing")


class TestSelect:
    """测试选中步骤"""

    def test_select_regular_node_is_configurable(self):
        graph = WorkflowGraph.create()
        node = graph.add_node(StepType.EMAIL_SEND)

        selection = graph.select(node.id)

        assert selection.node_id == node.id
        assert selection.step_type is StepType.EMAIL_SEND
        assert selection.configurable is True
        assert selection.message is None
        assert graph.selected_node is node

    def test_current_selection_matches_last_select(self):
        graph = WorkflowGraph.create()
        start = graph.add_node(StepType.START)
        email = graph.add_node(StepType.EMAIL_SEND)

        graph.select(start.id)
        assert graph.selection().configurable is False

        graph.select(email.id)
        assert graph.selection() == graph.select(email.id)

        graph.delete_node(email.id)
        assert graph.selection().node_id is None

    @pytest.mark.parametrize("step_type", [StepType.START, StepType.END])
    def test_select_sentinel_is_not_configurable(self, step_type):
        graph = WorkflowGraph.create()
        node = graph.add_node(step_type)

        selection = graph.select(node.id)

        assert selection.configurable is False
        assert selection.message == "This step cannot be edited"

    def test_select_none_clears_selection(self):
        graph = WorkflowGraph.create()
        node = graph.add_node(StepType.EMAIL_SEND)
        graph.select(node.id)

        selection = graph.select(None)

        assert selection.node_id is None
        assert selection.message == "Select a step to configure"
        assert graph.selected_node_id is None

    def test_select_unknown_node_should_raise_not_found(self):
        graph = WorkflowGraph.create()

        with pytest.raises(NotFoundError):
            graph.select("node_missing")


class TestFromSteps:
    """测试从已保存的步骤列表重建工作流"""

    def test_from_steps_orders_by_order_and_chains_linearly(self):
        steps = [
            {"type": "email_send", "order": 1, "title": "Intro", "config": {"subject": "s", "body": "b"}},
            {"type": "linkedin_visit", "order": 0, "title": "Visit", "config": {}},
        ]

        graph = WorkflowGraph.from_steps("Loaded", steps, campaign_id="camp_1")

        assert graph.name == "Loaded"
        assert graph.campaign_id == "camp_1"
        assert [node.type for node in graph.nodes] == [StepType.LINKEDIN_VISIT, StepType.EMAIL_SEND]
        assert _edge_pairs(graph) == [(graph.nodes[0].id, graph.nodes[1].id)]
        assert graph.nodes[0].config == {"title": "Visit"}

    def test_from_steps_round_trips_compiled_output(self, linear_graph):
        compiled = compile_workflow(linear_graph)

        rebuilt = WorkflowGraph.from_steps(
            linear_graph.name,
            [step.to_payload() for step in compiled],
        )

        assert compile_workflow(rebuilt) == compiled

    def test_from_steps_with_unknown_type_should_raise_not_found(self):
        with pytest.raises(NotFoundError):
            WorkflowGraph.from_steps("Broken", [{"type": "fax_send", "order": 0}])
