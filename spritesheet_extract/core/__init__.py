"""spritesheet_extract.core — Foundation layer.

Contains the data model, format detection, pixel assembly, the palette,
configuration and the report builder.
This module has NO dependencies on spritesheet_extract.formats, the registry
or the pipeline. Only stdlib, numpy, and PIL are allowed here.
"""
