"""ExecuteWorkflowUseCase - 请求执行工作流

业务场景：
- 用户点击运行
- 只把工作流 ID 交给存储（存储中已有最后一次保存的版本）
- 执行本身、执行记录的状态推进都由后端执行器负责

可选：传入当前编辑中的图时，先做同样的语义校验，避免"必然失败"的执行。
"""

import logging
from dataclasses import dataclass

from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.entities.workflow_run import WorkflowRun
from flowcanvas.domain.ports.workflow_store import WorkflowStore
from flowcanvas.domain.services.graph_validator import GraphValidator
from flowcanvas.domain.value_objects.validation_result import ValidationResult

logger = logging.getLogger(__name__)


@dataclass
class ExecuteWorkflowInput:
    """ExecuteWorkflow 输入参数

    属性说明：
    - workflow_id: 工作流 ID
    - graph: 当前编辑中的图（可选，提供时先校验）
    """

    workflow_id: str
    graph: WorkflowGraph | None = None


@dataclass
class ExecuteWorkflowOutput:
    validation: ValidationResult
    run: WorkflowRun | None = None


class ExecuteWorkflowUseCase:
    def __init__(self, workflow_store: WorkflowStore, validator: GraphValidator | None = None):
        self.workflow_store = workflow_store
        self.validator = validator or GraphValidator()

    async def execute(self, input_data: ExecuteWorkflowInput) -> ExecuteWorkflowOutput:
        if input_data.graph is not None:
            validation = self.validator.check(input_data.graph)
            if not validation.is_valid:
                return ExecuteWorkflowOutput(validation=validation)
        else:
            validation = ValidationResult.ok()

        run = await self.workflow_store.execute(input_data.workflow_id)
        logger.info(
            "workflow_execution_requested",
            extra={"workflow_id": input_data.workflow_id, "run_id": run.id},
        )
        return ExecuteWorkflowOutput(validation=validation, run=run)
