"""NodeType 枚举 - 节点类型

业务定义：
- NodeType 定义工作流画布上支持的节点类型（固定的封闭集合）
- 每种类型的默认输入、类别和凭证要求由 NodeTypeRegistry 统一描述

设计原则：
- 使用枚举确保类型安全
- 继承 str 方便序列化（枚举值即持久化格式中的 type 字段）
"""

from enum import Enum


class NodeCategory(str, Enum):
    """节点类别

    - TRIGGER: 触发器节点，可以作为工作流入口
    - ACTION: 动作节点，执行具体步骤，不能作为入口
    """

    TRIGGER = "trigger"
    ACTION = "action"


class NodeType(str, Enum):
    """节点类型枚举

    为什么继承 str？
    1. 序列化友好：可以直接转换为 JSON
    2. 兼容性好：可以和持久化数据中的字符串直接比较

    支持的节点类型：
    - MANUAL_TRIGGER: 手动触发
    - WEBHOOK_TRIGGER: Webhook 触发
    - TELEGRAM: 发送 Telegram 消息
    - LLM_PROMPT: LLM 提示词调用
    - AGENT: LangGraph Agent
    """

    # 触发器节点
    MANUAL_TRIGGER = "manual_trigger"
    WEBHOOK_TRIGGER = "webhook_trigger"

    # 动作节点
    TELEGRAM = "telegram"
    LLM_PROMPT = "llm"  # 历史数据中一直使用 "llm"
    AGENT = "langgraph"
