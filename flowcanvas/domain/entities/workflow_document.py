"""WorkflowDocument 实体 - 存储中保存的工作流文档

业务定义：
- 文档包含工作流名称和执行规格形状的 content
- 新建的工作流 content 为空，编辑器从空图开始
- 如果入口节点是 Webhook 触发器，存储会提供一个稳定的 webhook_token，
  编辑器只负责展示由它拼出的 URL，从不生成或校验它
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WorkflowDocument:
    id: str
    name: str
    content: dict[str, Any] | None = None
    webhook_token: str | None = None

    @property
    def is_blank(self) -> bool:
        return not self.content
