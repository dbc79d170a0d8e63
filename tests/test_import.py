import importlib


def test_package_imports_without_optional_extras():
    try:
        import transync
        importlib.reload(transync)
        from transync import cli
    except ModuleNotFoundError as e:
        assert False, f"Import failed with missing module: {e}"
    assert "align" in transync.__all__
    assert cli.app is not None
