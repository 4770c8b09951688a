from campaign_builder.application.services.editor_session import (
    EditorSessionRegistry,
    WorkflowEditorSession,
)

__all__ = ["EditorSessionRegistry", "WorkflowEditorSession"]
