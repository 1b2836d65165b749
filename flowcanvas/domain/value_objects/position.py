"""Position 值对象 - 节点在画布上的位置

业务定义：
- Position 表示节点在工作流画布上的坐标
- 仅用于展示，不参与校验

设计原则：
- 值对象：不可变，通过值比较相等性
- 纯 Python 实现，不依赖任何框架
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Position:
    """Position 值对象

    属性说明：
    - x: 横坐标（像素，可以为负数）
    - y: 纵坐标（像素，可以为负数）

    示例：
    >>> Position(x=100, y=200) == Position(x=100, y=200)
    True
    """

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Any) -> "Position":
        """从持久化的 {"x": .., "y": ..} 构造，缺失的坐标按 0 处理"""
        if not isinstance(data, dict):
            return cls(x=0, y=0)
        return cls(x=data.get("x", 0), y=data.get("y", 0))
