"""WorkflowRun 实体 - 工作流的一次执行记录（只读）

业务定义：
- 请求执行后，后端执行器创建执行记录，并推进状态（pending → success/failed）
- 编辑器只展示执行记录，从不修改
"""

import json
from dataclasses import dataclass
from datetime import datetime

from flowcanvas.domain.value_objects.run_status import RunStatus


@dataclass(frozen=True)
class WorkflowRun:
    """WorkflowRun 实体

    属性说明：
    - id: 执行记录 ID
    - workflow_id: 所属工作流 ID
    - status: 状态
    - started_at / finished_at: 时间戳
    - logs: 执行日志（通常是 JSON 字符串）
    - error: 错误信息（失败时）
    """

    id: str
    workflow_id: str
    status: RunStatus
    started_at: datetime | None = None
    finished_at: datetime | None = None
    logs: str | None = None
    error: str | None = None

    def parsed_logs(self) -> str | None:
        """日志格式化输出：JSON 则美化打印，否则原样返回"""
        if not self.logs:
            return None
        try:
            return json.dumps(json.loads(self.logs), indent=2, ensure_ascii=False)
        except ValueError:
            return self.logs
