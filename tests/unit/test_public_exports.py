from __future__ import annotations

import athena_result_collector


def test_package_exports_collectors_configs_and_models():
    expected = {
        "ResultCollector",
        "AsyncResultCollector",
        "CollectorConfig",
        "PagerConfig",
        "Page",
        "CollectResult",
        "BatchResult",
        "AthenaFetchError",
    }
    assert expected.issubset(set(athena_result_collector.__all__))
    for name in athena_result_collector.__all__:
        assert hasattr(athena_result_collector, name)


def test_package_does_not_export_shared_helpers():
    assert "take_within_limit" not in athena_result_collector.__all__
    assert "PagerState" not in athena_result_collector.__all__
    assert not hasattr(athena_result_collector, "validate_collector_config")
