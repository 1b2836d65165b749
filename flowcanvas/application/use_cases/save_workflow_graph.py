"""SaveWorkflowGraphUseCase - 保存编辑中的工作流

业务场景：
- 用户点击保存
- 先做语义校验（触发器、凭证），不通过则不提交，返回第一个违规
- 校验通过后编码为执行规格，连同名称整体替换存储中的文档

设计原则：
- 校验失败不是异常：返回 ValidationResult，调用方直接展示提示
- 存储失败原样抛出：内存中的图不会被修改
"""

import logging
from dataclasses import dataclass

from flowcanvas.domain.entities.workflow_document import WorkflowDocument
from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.ports.workflow_store import WorkflowStore
from flowcanvas.domain.services.graph_serializer import GraphSerializer
from flowcanvas.domain.services.graph_validator import GraphValidator
from flowcanvas.domain.value_objects.execution_spec import ExecutionSpec
from flowcanvas.domain.value_objects.validation_result import ValidationResult

logger = logging.getLogger(__name__)


@dataclass
class SaveWorkflowGraphInput:
    workflow_id: str
    name: str
    graph: WorkflowGraph


@dataclass
class SaveWorkflowGraphOutput:
    """保存结果

    属性说明：
    - validation: 校验结果
    - spec: 提交的执行规格（校验失败时为 None）
    - document: 存储返回的文档（校验失败时为 None）
    """

    validation: ValidationResult
    spec: ExecutionSpec | None = None
    document: WorkflowDocument | None = None

    @property
    def saved(self) -> bool:
        return self.document is not None


class SaveWorkflowGraphUseCase:
    def __init__(
        self,
        workflow_store: WorkflowStore,
        validator: GraphValidator | None = None,
        serializer: GraphSerializer | None = None,
    ):
        self.workflow_store = workflow_store
        self.validator = validator or GraphValidator()
        self.serializer = serializer or GraphSerializer()

    async def execute(self, input_data: SaveWorkflowGraphInput) -> SaveWorkflowGraphOutput:
        validation = self.validator.check(input_data.graph)
        if not validation.is_valid:
            logger.info(
                "workflow_save_rejected",
                extra={
                    "workflow_id": input_data.workflow_id,
                    "violation": validation.violation.code if validation.violation else None,
                },
            )
            return SaveWorkflowGraphOutput(validation=validation)

        spec = self.serializer.encode(input_data.graph)
        document = await self.workflow_store.save_document(
            input_data.workflow_id,
            name=input_data.name,
            content=spec.to_dict(),
        )

        logger.info(
            "workflow_saved",
            extra={"workflow_id": input_data.workflow_id, "start_node_id": spec.start_node_id},
        )
        return SaveWorkflowGraphOutput(validation=validation, spec=spec, document=document)
