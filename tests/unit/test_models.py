"""Test core input records."""

import pytest
from pydantic import ValidationError

from trade_analytics.core.enums import ClosureType, Direction, ToolZone
from trade_analytics.core.models import Model, ToolConfig, ToolProperties, Trade


class TestToolProperties:
    def test_parse_object(self):
        props = ToolProperties.parse('{"direction": "bullish", "length": 20}')
        assert props.get("length") == 20
        assert props.get_str("direction") == "bullish"
        assert "direction" in props
        assert len(props) == 2

    def test_missing_key(self):
        props = ToolProperties.parse("{}")
        assert props.get("direction") is None
        assert props.get("direction", "x") == "x"
        assert not props

    @pytest.mark.parametrize("raw", ["", None, "{bad json", "[1, 2]", '"text"', "42"])
    def test_malformed_degrades_to_empty(self, raw):
        props = ToolProperties.parse(raw)
        assert props.to_dict() == {}

    def test_load_distinguishes_malformed_from_empty(self):
        assert ToolProperties.load("{bad json") is None
        assert ToolProperties.load("[1]") is None
        assert ToolProperties.load("{}").to_dict() == {}

    def test_get_str_ignores_non_strings(self):
        assert ToolProperties({"direction": 5}).get_str("direction") is None


class TestToolConfig:
    def test_display_name_from_property(self):
        tool = ToolConfig(type="fvg", properties='{"name": "Fair Value Gap"}')
        assert tool.display_name == "Fair Value Gap"

    def test_display_name_falls_back_to_type(self):
        assert ToolConfig(type="fvg").display_name == "fvg"

    def test_display_name_unknown(self):
        assert ToolConfig(type="").display_name == "Unknown Tool"


class TestModel:
    def test_tools_in_zone_order(self):
        model = Model(
            id="m1",
            execution=[ToolConfig(type="fvg")],
            narrative=[ToolConfig(type="trend")],
            framework=[ToolConfig(type="ob")],
        )
        assert [(zone, tool.type) for zone, tool in model.tools()] == [
            (ToolZone.NARRATIVE, "trend"),
            (ToolZone.FRAMEWORK, "ob"),
            (ToolZone.EXECUTION, "fvg"),
        ]


class TestTrade:
    def test_from_record(self, sample_trade_record):
        trade = Trade.model_validate(sample_trade_record)
        assert trade.direction == Direction.LONG
        assert trade.is_long
        assert trade.bracket_order.bracket_groups[0].take_profit_price == 110.0
        assert trade.bracket_order.stop_distance == 5.0
        assert trade.bracket_order_outcomes[0].closure_type == ClosureType.TAKE_PROFIT
        assert trade.bracket_order_outcomes[0].execution_price is None

    def test_close_timestamp_fallback(self, sample_trade_record):
        trade = Trade.model_validate(sample_trade_record)
        assert trade.close_timestamp == trade.created_at
        closed = trade.model_copy(update={"closed_at": trade.created_at + 1})
        assert closed.close_timestamp == trade.created_at + 1

    def test_adherence_out_of_range(self, sample_trade_record):
        sample_trade_record["adherence_score"] = 1.5
        with pytest.raises(ValidationError):
            Trade.model_validate(sample_trade_record)

    def test_frozen(self, sample_trade_record):
        trade = Trade.model_validate(sample_trade_record)
        with pytest.raises(ValidationError):
            trade.is_completed = False
