"""应用层 - 用例编排

Application 层职责：
1. 用例编排：协调 Domain 实体、Store Port、Domain Service
2. 输入输出转换：接收 Input 对象，返回 Output 对象
3. 编辑会话：把画布上的离散操作映射为领域操作

已实现的用例：
- LoadWorkflowGraphUseCase: 加载工作流到编辑器
- SaveWorkflowGraphUseCase: 校验并保存
- ExecuteWorkflowUseCase: 请求执行

设计原则：
- 单一职责：每个 Use Case 只做一件事
- 依赖倒置：依赖 Port 接口，不依赖具体实现
- 可测试性：使用 AsyncMock Store 进行单元测试
"""
