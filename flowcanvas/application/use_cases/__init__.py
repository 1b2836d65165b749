"""Use Cases"""

from flowcanvas.application.use_cases.execute_workflow import (
    ExecuteWorkflowInput,
    ExecuteWorkflowOutput,
    ExecuteWorkflowUseCase,
)
from flowcanvas.application.use_cases.load_workflow_graph import (
    LoadWorkflowGraphInput,
    LoadWorkflowGraphOutput,
    LoadWorkflowGraphUseCase,
)
from flowcanvas.application.use_cases.save_workflow_graph import (
    SaveWorkflowGraphInput,
    SaveWorkflowGraphOutput,
    SaveWorkflowGraphUseCase,
)

__all__ = [
    "ExecuteWorkflowInput",
    "ExecuteWorkflowOutput",
    "ExecuteWorkflowUseCase",
    "LoadWorkflowGraphInput",
    "LoadWorkflowGraphOutput",
    "LoadWorkflowGraphUseCase",
    "SaveWorkflowGraphInput",
    "SaveWorkflowGraphOutput",
    "SaveWorkflowGraphUseCase",
]
