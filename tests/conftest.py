"""Pytest 配置文件 - 全局 fixtures"""

import pytest
from fastapi.testclient import TestClient

from campaign_builder.domain.entities.workflow import WorkflowGraph
from campaign_builder.domain.value_objects.step_type import StepType
from campaign_builder.interfaces.api.main import app


@pytest.fixture
def client():
    """FastAPI 测试客户端（执行 lifespan，每个测试拿到独立的 container）"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def named_graph() -> WorkflowGraph:
    """带名称的空工作流"""
    return WorkflowGraph.create(name="Q3 Outreach")


@pytest.fixture
def linear_graph(named_graph: WorkflowGraph) -> WorkflowGraph:
    """4 个有效步骤组成的线性链（默认配置全部有效）"""
    named_graph.add_node(StepType.LINKEDIN_VISIT)
    named_graph.add_node(StepType.LINKEDIN_CONNECT)
    named_graph.add_node(StepType.EMAIL_SEND)
    named_graph.add_node(StepType.WHATSAPP_SEND)
    return named_graph
