"""Tests for package exports."""


def test_exports_available() -> None:
    """Test that the public API is importable from the package root."""
    from tagmemo import (
        KEY_SEPARATOR,
        CacheStore,
        MemoizeOptions,
        TagVersionRegistry,
        default_registry,
        derive_key,
        invalidate,
        memoize,
        memoize_expiring,
        parse_duration,
    )

    assert KEY_SEPARATOR == "!"
    assert CacheStore is not None
    assert MemoizeOptions is not None
    assert isinstance(default_registry, TagVersionRegistry)
    assert derive_key is not None
    assert invalidate is not None
    assert memoize is not None
    assert memoize_expiring is not None
    assert parse_duration is not None


def test_all_matches_exports() -> None:
    import tagmemo

    for name in tagmemo.__all__:
        assert hasattr(tagmemo, name)
    assert tagmemo.__version__ == "0.1.0"
