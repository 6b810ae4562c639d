"""Tests for providers/cost.py - static cost data."""

import json

import pytest

from crabscore.exceptions import CostDataError, FileAccessError
from crabscore.metrics import CostMetrics
from crabscore.providers import CostProvider, StaticCostProvider
from crabscore.providers.cost import parse_cost_document


class TestParseCostDocument:
    """Test lenient decoding of cost documents."""

    def test_full_document(self):
        cost = parse_cost_document(
            {
                "infrastructure": {"cloud_compute_usd": 120.0, "storage_usd": 8},
                "operations": {"overhead_percentage": 0.15, "mttr_minutes": 45},
                "development": {"loc": 4200, "onboarding_days": 3.5},
                "business_impact": {"csat_score": 85.0},
            }
        )
        assert cost.infrastructure.cloud_compute_usd == 120.0
        assert cost.infrastructure.storage_usd == 8.0
        assert isinstance(cost.infrastructure.storage_usd, float)
        assert cost.operations.overhead_percentage == 0.15
        assert cost.operations.mttr_minutes == 45.0
        assert cost.development.loc == 4200
        assert cost.development.onboarding_days == 3.5
        assert cost.business_impact.csat_score == 85.0

    def test_missing_groups_and_leaves_are_zero(self):
        cost = parse_cost_document({"infrastructure": {"storage_usd": 2.0}})
        assert cost.infrastructure.cloud_compute_usd == 0.0
        assert cost.operations == CostMetrics().operations
        assert cost.development.loc == 0

    def test_wrongly_typed_leaves_are_zero(self):
        cost = parse_cost_document(
            {
                "infrastructure": {"cloud_compute_usd": "lots", "storage_usd": True},
                "development": {"loc": -10, "code_churn": None},
            }
        )
        assert cost.infrastructure.cloud_compute_usd == 0.0
        assert cost.infrastructure.storage_usd == 0.0
        assert cost.development.loc == 0
        assert cost.development.code_churn == 0.0

    def test_non_finite_numbers_are_zero(self):
        cost = parse_cost_document(
            json.loads('{"infrastructure": {"cloud_compute_usd": NaN, "storage_usd": Infinity}}')
        )
        assert cost.infrastructure.cloud_compute_usd == 0.0
        assert cost.infrastructure.storage_usd == 0.0

    def test_negative_numbers_pass_through(self):
        cost = parse_cost_document({"operations": {"overhead_percentage": -1}})
        assert cost.operations.overhead_percentage == -1.0

    def test_fractional_loc_is_zero(self):
        assert parse_cost_document({"development": {"loc": 12.5}}).development.loc == 0

    def test_group_not_an_object(self):
        cost = parse_cost_document({"infrastructure": [1, 2, 3]})
        assert cost.infrastructure == CostMetrics().infrastructure

    @pytest.mark.parametrize("document", [None, [], "text", 42])
    def test_non_object_document(self, document):
        assert parse_cost_document(document) == CostMetrics()

    def test_unknown_keys_ignored(self):
        cost = parse_cost_document({"infrastructure": {"gpu_usd": 900.0}, "extra": {}})
        assert cost == CostMetrics()


class TestStaticCostProvider:
    """Test reading cost files from disk."""

    def test_is_a_cost_provider(self):
        assert isinstance(StaticCostProvider("cost.json"), CostProvider)

    def test_relative_path_resolves_against_project(self, tmp_path):
        (tmp_path / "cost.json").write_text(
            json.dumps({"infrastructure": {"cloud_compute_usd": 250.0}})
        )
        cost = StaticCostProvider("cost.json").collect(tmp_path)
        assert cost.infrastructure.cloud_compute_usd == 250.0

    def test_absolute_path_used_as_is(self, tmp_path):
        path = tmp_path / "elsewhere.json"
        path.write_text(json.dumps({"operations": {"overhead_percentage": 0.2}}))
        provider = StaticCostProvider(path)
        assert provider.resolve(tmp_path / "project") == path
        assert provider.collect(tmp_path / "project").operations.overhead_percentage == 0.2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError) as exc_info:
            StaticCostProvider("cost.json").collect(tmp_path)
        assert exc_info.value.filepath == tmp_path / "cost.json"

    def test_malformed_json(self, tmp_path):
        (tmp_path / "cost.json").write_text("{not json")
        with pytest.raises(CostDataError):
            StaticCostProvider("cost.json").collect(tmp_path)

    def test_non_object_json_reads_as_zero(self, tmp_path):
        (tmp_path / "cost.json").write_text("[1, 2]")
        assert StaticCostProvider("cost.json").collect(tmp_path) == CostMetrics()
