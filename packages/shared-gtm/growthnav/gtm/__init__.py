"""
GrowthNav GTM - compile Google Tag Manager exports into tracking configs.

Provides:
- Export ingestion (GTM v1 "macro" and v2 "variable" shapes, with or
  without the "containerVersion" wrapper)
- {{variable}} reference and macro definition extraction
- Heuristic variable name -> dataLayer path mapping
- Commerce event pattern detection and config generation
- Container analysis (GA4 / Google Ads tags, cleanup recommendations)

Usage:
    from pathlib import Path

    from growthnav.gtm import compile_container, write_config_to_file

    result = compile_container(Path("GTM-ABC123_workspace.json"), customer_id="acme")
    write_config_to_file(result.config, "config.json")
"""

from growthnav.gtm.compiler import (
    CompileResult,
    ContainerAnalysis,
    PathSource,
    VariablePath,
    analyze_container,
    compile_container,
)
from growthnav.gtm.extractor import (
    extract_all_variables,
    extract_macro_definitions,
    extract_variables,
)
from growthnav.gtm.generator import (
    detect_event_patterns,
    extract_container_id,
    find_datalayer_path,
    generate_config,
    write_config_to_file,
)
from growthnav.gtm.path_mapper import (
    map_variables_to_datalayer,
    variable_to_datalayer_path,
)
from growthnav.gtm.schema import (
    VARIABLE_PATTERN,
    ContainerExport,
    ExportFormat,
    load_container_export,
)

__all__ = [
    # Schema
    "VARIABLE_PATTERN",
    "ContainerExport",
    "ExportFormat",
    "load_container_export",
    # Extractor
    "extract_variables",
    "extract_all_variables",
    "extract_macro_definitions",
    # Path mapper
    "variable_to_datalayer_path",
    "map_variables_to_datalayer",
    # Generator
    "find_datalayer_path",
    "detect_event_patterns",
    "extract_container_id",
    "generate_config",
    "write_config_to_file",
    # Compiler
    "compile_container",
    "analyze_container",
    "CompileResult",
    "ContainerAnalysis",
    "PathSource",
    "VariablePath",
]
