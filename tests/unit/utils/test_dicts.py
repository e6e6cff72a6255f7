from __future__ import annotations

from collections.abc import Mapping

from buildinette.utils.dicts import deep_merge


def test_deep_merge_merges_nested_mappings() -> None:
    base: Mapping[str, object] = {
        "logging": {"enabled": True, "log_level": "INFO"},
        "libft_default": None,
    }
    override: Mapping[str, object] = {
        "logging": {"log_level": "DEBUG"},
        "graphics_url": "https://example.com/mlx.git",
    }

    merged = deep_merge(base, override)

    assert merged == {
        "logging": {"enabled": True, "log_level": "DEBUG"},
        "libft_default": None,
        "graphics_url": "https://example.com/mlx.git",
    }
    # Ensure originals are untouched
    assert base["logging"] == {"enabled": True, "log_level": "INFO"}


def test_deep_merge_replaces_lists() -> None:
    merged = deep_merge({"items": [1, 2]}, {"items": [3, 4]})
    assert merged["items"] == [3, 4]


def test_deep_merge_skips_none_values() -> None:
    merged = deep_merge({"logging": {"enabled": True}}, {"logging": None, "libft_default": None})
    assert merged == {"logging": {"enabled": True}}
