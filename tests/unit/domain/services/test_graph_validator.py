"""测试：GraphValidator（保存/执行前的语义校验）

校验顺序：
1. 触发器（缺少 / 多个）
2. 凭证（按插入顺序第一个缺少凭证的节点）
"""

import pytest

from flowcanvas.domain.services.graph_validator import GraphValidator
from flowcanvas.domain.value_objects.node_type import NodeType
from flowcanvas.domain.value_objects.position import Position
from flowcanvas.domain.value_objects.validation_result import (
    AmbiguousTrigger,
    MissingCredential,
    MissingTrigger,
)

ORIGIN = Position(x=0, y=0)


@pytest.fixture
def validator(registry) -> GraphValidator:
    return GraphValidator(registry=registry)


class TestTriggerRule:
    def test_empty_graph_is_missing_trigger(self, validator, graph):
        result = validator.check(graph)

        assert not result.is_valid
        assert isinstance(result.violation, MissingTrigger)
        assert result.message == "A workflow must have a trigger node (Manual or Webhook)."

    def test_missing_trigger_is_reported_before_missing_credentials(self, validator, graph):
        """场景：只有一个未配置凭证的 Telegram 节点，先报缺少触发器"""
        graph.add_node(NodeType.TELEGRAM, ORIGIN)

        result = validator.check(graph)

        assert isinstance(result.violation, MissingTrigger)

    def test_two_triggers_are_ambiguous(self, validator, graph):
        manual = graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        webhook = graph.add_node(NodeType.WEBHOOK_TRIGGER, ORIGIN)

        result = validator.check(graph)

        assert isinstance(result.violation, AmbiguousTrigger)
        assert result.violation.node_ids == (manual.id, webhook.id)
        assert '"Manual Trigger"' in result.message
        assert '"Webhook Trigger"' in result.message

    def test_single_trigger_is_valid(self, validator, graph):
        graph.add_node(NodeType.WEBHOOK_TRIGGER, ORIGIN)

        result = validator.check(graph)

        assert result.is_valid
        assert bool(result) is True
        assert result.message is None


class TestCredentialRule:
    def test_node_without_credential_is_reported_by_label(self, validator, graph):
        """场景：触发器 + 未选择凭证的 Telegram 节点"""
        # Arrange
        trigger = graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        telegram = graph.add_node(NodeType.TELEGRAM, ORIGIN)
        graph.connect(trigger.id, telegram.id)

        # Act
        result = validator.check(graph)

        # Assert
        assert isinstance(result.violation, MissingCredential)
        assert result.violation.node_id == telegram.id
        assert result.violation.title == "Incomplete Configuration"
        assert result.message == 'The node "Telegram Message" requires a credential to be selected.'

    def test_selecting_credential_makes_graph_valid(self, validator, graph):
        graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        telegram = graph.add_node(NodeType.TELEGRAM, ORIGIN)
        graph.update_node_inputs(telegram.id, {**telegram.inputs, "credentialId": "cred_1"})

        assert validator.check(graph).is_valid

    def test_first_offending_node_in_insertion_order(self, validator, graph):
        graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        llm = graph.add_node(NodeType.LLM_PROMPT, ORIGIN)
        graph.add_node(NodeType.TELEGRAM, ORIGIN)

        result = validator.check(graph)

        assert result.violation.node_id == llm.id

    @pytest.mark.parametrize("value", ["", "   ", None, 7, 123])
    def test_blank_or_non_string_credential_is_missing(self, validator, graph, value):
        graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        agent = graph.add_node(NodeType.AGENT, ORIGIN)
        graph.update_node_inputs(agent.id, {**agent.inputs, "credentialId": value})

        result = validator.check(graph)

        assert isinstance(result.violation, MissingCredential)

    def test_absent_credential_field_is_missing(self, validator, graph):
        graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        telegram = graph.add_node(NodeType.TELEGRAM, ORIGIN)
        graph.update_node_inputs(telegram.id, {"type": "telegram"})

        assert isinstance(validator.check(graph).violation, MissingCredential)

    def test_unconnected_nodes_are_still_checked(self, validator, graph):
        """校验不关心连通性：孤立的动作节点同样需要凭证"""
        graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        graph.add_node(NodeType.LLM_PROMPT, ORIGIN)

        assert not validator.check(graph).is_valid

    def test_check_does_not_modify_graph(self, validator, graph):
        graph.add_node(NodeType.MANUAL_TRIGGER, ORIGIN)
        telegram = graph.add_node(NodeType.TELEGRAM, ORIGIN)
        before = dict(telegram.inputs)

        validator.check(graph)

        assert telegram.inputs == before
