"""Storefront Factory package.

Generates many small static e-commerce sites from a single CSV (one row per
site) and publishes each one to its own git branch.

Package Structure
-----------------
- ``pipeline/site_generator``: CSV parsing, templating, structured data and
  the per-site assembler plus batch runner.
- ``pipeline/image_generator``: asynchronous client for the image generation
  API that fills ``<site>/images``.
- ``pipeline/publisher``: branch-per-site publishing through ``git``.
- ``config.py``: configuration constants, UPPER_SNAKE_CASE.
- ``exceptions.py``: application exception taxonomy.
- ``program*.py``: command-line entrypoints for the three stages.
"""
