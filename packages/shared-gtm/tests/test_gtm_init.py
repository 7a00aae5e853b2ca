"""Tests for growthnav.gtm public API."""


def test_import_pipeline_functions():
    """Test that pipeline functions are importable from top level."""
    from growthnav.gtm import (
        compile_container,
        extract_macro_definitions,
        extract_variables,
        generate_config,
        variable_to_datalayer_path,
    )

    assert callable(compile_container)
    assert callable(extract_macro_definitions)
    assert callable(extract_variables)
    assert callable(generate_config)
    assert callable(variable_to_datalayer_path)


def test_import_schema_types():
    """Test that export schema types are importable."""
    from growthnav.gtm import ContainerExport, ExportFormat

    assert ExportFormat.MACRO_V1.value == "macro"
    assert hasattr(ContainerExport, "from_json")


def test_all_exports_resolve():
    """Test every name in __all__ exists."""
    import growthnav.gtm as gtm

    for name in gtm.__all__:
        assert hasattr(gtm, name), name
