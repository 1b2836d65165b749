"""Credential 实体 - 外部存储的凭证引用

业务定义：
- Credential 是外部存储的密钥的引用（只有 id/name/type，没有密钥本身）
- 编辑器只读取凭证列表，用于填充节点配置面板中的凭证选择框
- 凭证列表每个编辑会话只拉取一次，核心模型不拥有它
"""

from dataclasses import dataclass


def normalize_credential_type(value: str | None) -> str:
    """统一凭证类型的拼写

    历史数据中同一类型存在不同拼写（google-ai / google_ai、telegram-bot / telegram_bot），
    统一为小写 + 下划线后再比较。
    """
    if not value:
        return ""
    return value.strip().lower().replace("-", "_")


@dataclass(frozen=True)
class Credential:
    """Credential 实体（只读参考数据）

    属性说明：
    - id: 凭证 ID（节点 inputs.credentialId 引用它）
    - name: 凭证名称（选择框中展示）
    - type: 凭证类型（telegram / openai / gemini ...）
    """

    id: str
    name: str
    type: str

    @property
    def normalized_type(self) -> str:
        return normalize_credential_type(self.type)
