"""应用服务"""

from flowcanvas.application.services.workflow_editor_session import WorkflowEditorSession

__all__ = ["WorkflowEditorSession"]
