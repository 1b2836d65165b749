"""CredentialStore Port - 凭证参考数据的外部来源

编辑器只读取 {id, name, type} 列表，用于填充节点的凭证选择框；
凭证的创建、加密都不属于编辑器核心。
"""

from typing import Protocol

from flowcanvas.domain.entities.credential import Credential


class CredentialStore(Protocol):
    async def list_credentials(self) -> list[Credential]:
        """列出当前用户可用的凭证"""
        ...
