"""RunStatus 枚举 - 工作流执行记录的状态

业务定义：
- 执行记录由后端执行器创建和推进，编辑器只读取展示
- 状态流转：PENDING → (SUCCESS | FAILED)

设计原则：
- 继承 str：序列化友好
- 大小写不敏感地解析（接口返回 "PENDING"/"pending" 两种写法）
- 兼容旧接口的 running/completed
"""

from __future__ import annotations

from enum import Enum

_LEGACY_ALIASES = {
    "running": "pending",
    "completed": "success",
    "succeeded": "success",
}


class RunStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"

    @classmethod
    def _missing_(cls, value: object) -> RunStatus | None:
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        normalized = _LEGACY_ALIASES.get(normalized, normalized)
        for member in cls:
            if member.value == normalized:
                return member
        return None

    def is_terminal(self) -> bool:
        return self in {RunStatus.SUCCESS, RunStatus.FAILED}
