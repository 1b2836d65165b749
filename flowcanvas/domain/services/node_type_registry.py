"""节点类型注册表 (Node Type Registry) - 节点类型的唯一事实来源

业务定义：
- 每种节点类型有：显示名称、类别（触发器/动作）、默认输入、是否需要凭证、可选凭证类型
- 校验器、序列化器、配置面板都从这里读取，禁止在其他地方硬编码类型列表

设计原则：
- 进程启动时定义一次，之后不可变
- default_inputs() 每次返回独立的深拷贝，节点之间不共享可变状态
- 凭证相关性（哪些凭证类型可用于哪种节点）合并为一张表，按节点类型索引
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from flowcanvas.domain.entities.credential import Credential, normalize_credential_type
from flowcanvas.domain.exceptions import UnknownNodeTypeError
from flowcanvas.domain.value_objects.node_type import NodeCategory, NodeType

DEFAULT_LLM_MODEL = "gemini-1.5-flash"
CREDENTIAL_FIELD = "credentialId"

_TELEGRAM_CREDENTIAL_TYPES = ("telegram", "telegram_bot")
_AI_CREDENTIAL_TYPES = ("openai", "google_ai", "gemini")


@dataclass(frozen=True, slots=True)
class NodeTypeDescriptor:
    """节点类型描述

    属性说明：
    - type: 节点类型
    - label: 显示名称（新建节点时作为 label）
    - category: 类别（trigger/action）
    - description: 侧边栏中的简短说明
    - default_inputs: 默认输入（只读映射，始终包含 type 字段）
    - requires_credential: 是否需要凭证
    - credential_types: 可以选用的凭证类型（已规范化拼写）
    """

    type: NodeType
    label: str
    category: NodeCategory
    description: str
    default_inputs: Mapping[str, Any]
    requires_credential: bool = False
    credential_types: tuple[str, ...] = ()

    @property
    def is_trigger(self) -> bool:
        return self.category == NodeCategory.TRIGGER


def _descriptor(
    node_type: NodeType,
    *,
    label: str,
    category: NodeCategory,
    description: str,
    inputs: dict[str, Any] | None = None,
    credential_types: tuple[str, ...] = (),
) -> NodeTypeDescriptor:
    defaults: dict[str, Any] = {"type": node_type.value}
    if credential_types:
        defaults[CREDENTIAL_FIELD] = ""
    defaults.update(inputs or {})
    return NodeTypeDescriptor(
        type=node_type,
        label=label,
        category=category,
        description=description,
        default_inputs=MappingProxyType(defaults),
        requires_credential=bool(credential_types),
        credential_types=credential_types,
    )


# 顺序即侧边栏的展示顺序：先触发器，再动作
_BUILTIN_DESCRIPTORS: tuple[NodeTypeDescriptor, ...] = (
    _descriptor(
        NodeType.MANUAL_TRIGGER,
        label="Manual Trigger",
        category=NodeCategory.TRIGGER,
        description="Start workflow manually",
    ),
    _descriptor(
        NodeType.WEBHOOK_TRIGGER,
        label="Webhook Trigger",
        category=NodeCategory.TRIGGER,
        description="Start workflow via HTTP webhook",
    ),
    _descriptor(
        NodeType.TELEGRAM,
        label="Telegram Message",
        category=NodeCategory.ACTION,
        description="Send message via Telegram bot",
        inputs={"chat_id": "", "message_text": ""},
        credential_types=_TELEGRAM_CREDENTIAL_TYPES,
    ),
    _descriptor(
        NodeType.LLM_PROMPT,
        label="LLM Prompt",
        category=NodeCategory.ACTION,
        description="Process text with AI language model",
        inputs={"model_name": DEFAULT_LLM_MODEL, "prompt": ""},
        credential_types=_AI_CREDENTIAL_TYPES,
    ),
    _descriptor(
        NodeType.AGENT,
        label="LangGraph Agent",
        category=NodeCategory.ACTION,
        description="Execute complex AI agent workflow",
        inputs={"model_name": DEFAULT_LLM_MODEL, "prompt": ""},
        credential_types=_AI_CREDENTIAL_TYPES,
    ),
)


class NodeTypeRegistry:
    """节点类型注册表

    使用示例：
        registry = get_node_type_registry()
        inputs = registry.default_inputs(NodeType.TELEGRAM)
        # {"type": "telegram", "credentialId": "", "chat_id": "", "message_text": ""}
    """

    def __init__(self, descriptors: Iterable[NodeTypeDescriptor] = _BUILTIN_DESCRIPTORS):
        self._descriptors: dict[NodeType, NodeTypeDescriptor] = {}
        for descriptor in descriptors:
            self._descriptors[descriptor.type] = descriptor
        missing = [t.value for t in NodeType if t not in self._descriptors]
        if missing:
            raise ValueError(f"节点类型缺少描述: {', '.join(missing)}")

    def resolve(self, node_type: NodeType | str) -> NodeType:
        """把字符串形式的类型标签解析为 NodeType

        抛出：
            UnknownNodeTypeError: 标签不在固定集合中
        """
        if isinstance(node_type, NodeType):
            return node_type
        try:
            return NodeType(node_type)
        except ValueError as e:
            raise UnknownNodeTypeError(node_type) from e

    def describe(self, node_type: NodeType | str) -> NodeTypeDescriptor:
        return self._descriptors[self.resolve(node_type)]

    def label(self, node_type: NodeType | str) -> str:
        return self.describe(node_type).label

    def default_inputs(self, node_type: NodeType | str) -> dict[str, Any]:
        """返回默认输入的独立深拷贝"""
        return copy.deepcopy(dict(self.describe(node_type).default_inputs))

    def requires_credential(self, node_type: NodeType | str) -> bool:
        return self.describe(node_type).requires_credential

    def is_trigger(self, node_type: NodeType | str) -> bool:
        return self.describe(node_type).is_trigger

    def descriptors(self) -> list[NodeTypeDescriptor]:
        return list(self._descriptors.values())

    def by_category(self, category: NodeCategory) -> list[NodeTypeDescriptor]:
        return [d for d in self._descriptors.values() if d.category == category]

    def trigger_types(self) -> frozenset[NodeType]:
        return frozenset(d.type for d in self.by_category(NodeCategory.TRIGGER))

    def relevant_credentials(
        self, node_type: NodeType | str, credentials: Iterable[Credential]
    ) -> list[Credential]:
        """筛选可用于该节点类型的凭证（保持原有顺序）

        不需要凭证的节点类型返回空列表。
        """
        allowed = self.describe(node_type).credential_types
        if not allowed:
            return []
        return [c for c in credentials if normalize_credential_type(c.type) in allowed]


@lru_cache(maxsize=1)
def get_node_type_registry() -> NodeTypeRegistry:
    """获取进程级的默认注册表（单例）"""
    return NodeTypeRegistry()
