"""Folio static blog content pipeline.

This package turns a directory of date-stamped Markdown posts into a validated,
deterministically ordered collection that an external renderer can consume.

The pipeline runs in three stages, leaves first:
- Loader: discovers source files and splits front matter from body.
- Validator: enforces required fields and normalizes tags, categories and flags.
- Assembler: orders documents, builds tag/category indexes and a rendering plan.

The main entry point is the CLI module, which provides commands for checking
content, printing the rendering plan and creating new posts.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
