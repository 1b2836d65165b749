"""ValidationResult 值对象 - 保存/执行前校验的结果

业务定义：
- 校验失败是用户可以修正的问题（缺少触发器、缺少凭证），不抛异常
- 只报告第一个违规（fail-fast），给用户一个明确可操作的提示
- 提示信息用节点的显示名称（label）指代节点，而不是内部 ID
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Violation:
    """违规基类"""

    code: ClassVar[str] = "invalid"
    title: ClassVar[str] = "Cannot save workflow"

    @property
    def message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class MissingTrigger(Violation):
    """图中没有触发器节点"""

    code: ClassVar[str] = "missing_trigger"

    @property
    def message(self) -> str:
        return "A workflow must have a trigger node (Manual or Webhook)."


@dataclass(frozen=True)
class AmbiguousTrigger(Violation):
    """图中有多个触发器节点，无法确定唯一入口"""

    code: ClassVar[str] = "ambiguous_trigger"

    node_ids: tuple[str, ...] = ()
    node_labels: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        labels = ", ".join(f'"{label}"' for label in self.node_labels)
        count = len(self.node_ids)
        return f"A workflow must have exactly one trigger node, found {count}: {labels}."


@dataclass(frozen=True)
class MissingCredential(Violation):
    """需要凭证的节点没有选择凭证"""

    code: ClassVar[str] = "missing_credential"
    title: ClassVar[str] = "Incomplete Configuration"

    node_id: str = ""
    node_label: str = ""

    @property
    def message(self) -> str:
        return f'The node "{self.node_label}" requires a credential to be selected.'


@dataclass(frozen=True)
class ValidationResult:
    """校验结果

    - violation 为 None 表示校验通过
    - 否则为第一个违规
    """

    violation: Violation | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls()

    @classmethod
    def fail(cls, violation: Violation) -> ValidationResult:
        return cls(violation=violation)

    @property
    def is_valid(self) -> bool:
        return self.violation is None

    def __bool__(self) -> bool:
        return self.is_valid

    @property
    def message(self) -> str | None:
        return self.violation.message if self.violation else None
