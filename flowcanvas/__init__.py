"""FlowCanvas - 可视化工作流编辑器的图模型核心

分层：
- domain: 节点类型注册表、工作流图、校验、序列化、选中状态
- application: 编辑会话与用例编排（加载 / 保存 / 执行）
- infrastructure: 外部存储适配器（HTTP、内存）
- interfaces: 接口层 DTO（与后端 REST API 的数据契约）
"""

__version__ = "0.1.0"
