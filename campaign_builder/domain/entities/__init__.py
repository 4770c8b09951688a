from campaign_builder.domain.entities.edge import Edge
from campaign_builder.domain.entities.node import Node
from campaign_builder.domain.entities.workflow import WorkflowGraph

__all__ = ["Edge", "Node", "WorkflowGraph"]
