"""Domain 实体

注意：这里不做聚合导入。WorkflowGraph 依赖 services.node_type_registry，
而注册表又依赖 entities.credential，在包初始化时导入会形成循环。
请直接从具体模块导入，例如：

    from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
"""
