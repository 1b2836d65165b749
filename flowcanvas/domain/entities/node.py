"""Node 实体 - 工作流画布上的节点实例

业务定义：
- Node 是工作流中的单个步骤（触发器或动作）
- 每个 Node 有类型、显示名称、画布位置和输入（inputs）
- inputs 的结构由节点类型决定，默认值来自 NodeTypeRegistry

设计原则：
- 纯 Python 实现，不依赖任何框架（DDD 要求）
- 使用 dataclass 简化样板代码
- 通过工厂方法 create() 封装 ID 生成逻辑
"""

import time
from collections.abc import Collection
from dataclasses import dataclass, field
from typing import Any

from flowcanvas.domain.exceptions import DomainError
from flowcanvas.domain.value_objects.node_type import NodeType
from flowcanvas.domain.value_objects.position import Position


def current_timestamp_ms() -> int:
    return int(time.time() * 1000)


def _allocate_id(base: str, taken_ids: Collection[str]) -> str:
    candidate = base
    suffix = 2
    while candidate in taken_ids:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


@dataclass
class Node:
    """Node 实体

    属性说明：
    - id: 唯一标识符（格式：{type}-{创建时间戳毫秒}）
    - type: 节点类型
    - label: 显示名称（用户可见，校验错误提示中使用）
    - position: 节点在画布上的位置（仅展示用）
    - inputs: 节点输入（不同类型的节点字段不同，始终包含 type 字段）
    - metadata: 画布附带的 UI 字段（width/height 等），不具有权威性，原样透传
    """

    id: str
    type: NodeType
    label: str
    position: Position
    inputs: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        type: NodeType,
        label: str,
        inputs: dict[str, Any],
        position: Position,
        created_at_ms: int | None = None,
        taken_ids: Collection[str] = (),
    ) -> "Node":
        """创建 Node 的工厂方法

        参数：
            type: 节点类型
            label: 显示名称（必需）
            inputs: 节点输入
            position: 节点位置
            created_at_ms: 创建时间戳（毫秒），默认取当前时间
            taken_ids: 图中已经占用的节点 ID（同一毫秒内重复时追加 -2、-3 序号）

        返回：
            Node 实例

        抛出：
            DomainError: 当 label 为空时
        """
        if not label or not label.strip():
            raise DomainError("label 不能为空")

        timestamp = created_at_ms if created_at_ms is not None else current_timestamp_ms()
        return cls(
            id=_allocate_id(f"{type.value}-{timestamp}", taken_ids),
            type=type,
            label=label.strip(),
            position=position,
            inputs=dict(inputs),
        )

    def update_position(self, position: Position) -> None:
        """更新节点位置（拖拽）"""
        self.position = position

    def replace_inputs(self, inputs: dict[str, Any]) -> None:
        """整体替换节点输入

        注意：这是完整替换，不是浅合并。增量编辑需要调用方自行合并。
        """
        self.inputs = dict(inputs)
