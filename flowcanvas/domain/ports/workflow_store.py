"""WorkflowStore Port - 工作流文档的外部存储接口

为什么需要 WorkflowStore Port？
1. 依赖倒置（DIP）：领域层定义接口，基础设施层实现接口（HTTP、内存）
2. 可测试性：Use Case 可以使用 AsyncMock 进行单元测试
3. 网络调用是编辑会话中唯一的挂起点，全部收敛到这里

设计原则：
- 使用 Protocol（结构化子类型，不需要显式继承）
- 存储失败以异常形式传播给调用方，核心模型不做部分修改
"""

from typing import Any, Protocol

from flowcanvas.domain.entities.workflow_document import WorkflowDocument
from flowcanvas.domain.entities.workflow_run import WorkflowRun


class WorkflowStore(Protocol):
    """工作流存储接口"""

    async def list_documents(self) -> list[WorkflowDocument]:
        """当前用户的所有工作流（工作流列表页）"""
        ...

    async def create_document(self, name: str) -> WorkflowDocument:
        """新建工作流

        新建的文档没有 content，编辑器从空图开始。
        """
        ...

    async def delete_document(self, workflow_id: str) -> None:
        """删除工作流

        抛出：
            NotFoundError: 工作流不存在
        """
        ...

    async def get_document(self, workflow_id: str) -> WorkflowDocument:
        """根据 ID 获取工作流文档

        抛出：
            NotFoundError: 工作流不存在
        """
        ...

    async def save_document(
        self, workflow_id: str, *, name: str, content: dict[str, Any]
    ) -> WorkflowDocument:
        """保存工作流文档（名称 + 执行规格，整体替换）"""
        ...

    async def execute(self, workflow_id: str) -> WorkflowRun:
        """请求执行工作流

        只传工作流 ID，存储中已经有最后一次保存的版本。
        """
        ...

    async def list_runs(self, workflow_id: str) -> list[WorkflowRun]:
        ...

    async def get_run(self, run_id: str) -> WorkflowRun:
        ...
