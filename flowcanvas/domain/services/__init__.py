"""Domain 服务 - 注册表、迁移、校验、序列化、选中状态

请直接从具体模块导入（避免与 entities 之间的循环导入）。
"""
