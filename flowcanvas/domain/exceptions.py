"""领域层异常定义

为什么需要领域异常？
1. 业务语义清晰：DomainError 表示业务规则违反，不是技术错误
2. 异常分层：Domain 异常 vs Infrastructure 异常 vs API 异常
3. 统一处理：上层可以统一捕获 DomainError 并转换为用户提示

注意：
- 保存/执行前的校验失败（缺少触发器、缺少凭证）不是异常，
  而是 GraphValidator 返回的 ValidationResult（见 value_objects.validation_result）
- 这里的异常大多表示"编程错误"（UI 约束下不应出现的输入）
"""


class DomainError(Exception):
    """领域层异常基类

    用途：
    - 表示业务规则违反
    - 表示领域不变式违反（如：节点 ID 重复）

    示例：
        if node_id in seen:
            raise DuplicateNodeError(node_id)
    """

    pass


class NotFoundError(DomainError):
    """实体不存在异常

    参数：
        entity_type: 实体类型（如："Node"、"Edge"、"Workflow"）
        entity_id: 实体 ID
    """

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} 不存在: {entity_id}")


class UnknownNodeTypeError(DomainError):
    """节点类型不在注册表中（UI 约束下不应出现）"""

    def __init__(self, node_type: object):
        self.node_type = node_type
        super().__init__(f"未知的节点类型: {node_type}")


class UnknownNodeError(NotFoundError):
    """节点 ID 不在当前图中（如：边的端点引用了不存在的节点）"""

    def __init__(self, node_id: str):
        super().__init__("Node", node_id)
        self.node_id = node_id


class UnknownEdgeError(NotFoundError):
    def __init__(self, edge_id: str):
        super().__init__("Edge", edge_id)
        self.edge_id = edge_id


class DuplicateNodeError(DomainError):
    """同一个图中出现重复的节点 ID"""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"节点 ID 重复: {node_id}")


class InvalidExecutionSpecError(DomainError):
    """持久化的执行规格（execution spec）结构不合法"""

    pass


class GraphNotEncodableError(DomainError):
    """图无法编码为执行规格（没有唯一的触发器节点）

    调用方应该先执行 GraphValidator.check()，校验通过后再编码。
    """

    pass


class OperationInProgressError(DomainError):
    """同一个编辑会话中已有保存/执行请求在进行中"""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} 正在进行中，请稍后再试")
