"""Pytest 配置文件 - 全局 fixtures"""

import itertools

import pytest

from flowcanvas.domain.entities.credential import Credential
from flowcanvas.domain.entities.workflow_graph import WorkflowGraph
from flowcanvas.domain.services.node_type_registry import NodeTypeRegistry


@pytest.fixture
def registry() -> NodeTypeRegistry:
    return NodeTypeRegistry()


@pytest.fixture
def clock():
    """递增的毫秒时间戳（保证节点 ID 可预测）"""
    counter = itertools.count(1_700_000_000_000)
    return lambda: next(counter)


@pytest.fixture
def graph(registry: NodeTypeRegistry, clock) -> WorkflowGraph:
    """空的工作流图"""
    return WorkflowGraph(registry=registry, clock=clock)


@pytest.fixture
def sample_credentials() -> list[Credential]:
    """示例凭证列表（包含不同拼写的类型）"""
    return [
        Credential(id="cred_tg", name="My Bot", type="telegram"),
        Credential(id="cred_tg_bot", name="Ops Bot", type="telegram-bot"),
        Credential(id="cred_openai", name="OpenAI", type="openai"),
        Credential(id="cred_google", name="Google AI", type="google-ai"),
        Credential(id="cred_gemini", name="Gemini", type="GEMINI"),
        Credential(id="cred_hook", name="Webhook URL", type="webhook"),
    ]
