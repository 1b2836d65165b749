"""Edge 实体 - 工作流中节点之间的连接

业务定义：
- Edge 表示工作流中节点之间的连接（source → target）
- 编辑器不限制自环和重复边，是否无环由执行器决定

设计原则：
- 纯 Python 实现，不依赖任何框架（DDD 要求）
- 使用 dataclass 简化样板代码
- 通过工厂方法 create() 封装创建逻辑
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from flowcanvas.domain.exceptions import DomainError


@dataclass
class Edge:
    """Edge 实体

    属性说明：
    - id: 唯一标识符（edge_ 前缀）
    - source_node_id: 源节点 ID
    - target_node_id: 目标节点 ID
    - metadata: 画布附带的字段（sourceHandle、targetHandle 等），原样透传
    """

    id: str
    source_node_id: str
    target_node_id: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, source_node_id: str, target_node_id: str) -> "Edge":
        """创建 Edge 的工厂方法

        参数：
            source_node_id: 源节点 ID（必需）
            target_node_id: 目标节点 ID（必需）

        返回：
            Edge 实例

        抛出：
            DomainError: 当节点 ID 为空时
        """
        if not source_node_id or not source_node_id.strip():
            raise DomainError("source_node_id 不能为空")

        if not target_node_id or not target_node_id.strip():
            raise DomainError("target_node_id 不能为空")

        return cls(
            id=f"edge_{uuid4().hex[:8]}",
            source_node_id=source_node_id.strip(),
            target_node_id=target_node_id.strip(),
        )

    def touches(self, node_id: str) -> bool:
        """边的任一端点是否为给定节点"""
        return self.source_node_id == node_id or self.target_node_id == node_id
