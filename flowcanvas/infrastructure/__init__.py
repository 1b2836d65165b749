"""基础设施层 - 外部存储适配器"""
