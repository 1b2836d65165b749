"""领域层 - 工作流图模型（纯 Python，不依赖任何框架）"""
