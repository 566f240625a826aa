"""Normalization and validation of LLM-generated plan sections.

Submodules:
  patterns   -- compiled regexes and token tables
  issues     -- Coerced / Issue / ValidationResult
  coercion   -- scalar coercion (text, option lists, numbers)
  rows       -- table row normalization per row kind
  enums      -- option value resolution for choice fields
  sections   -- per-section, per-field orchestration
  pipeline   -- the ``run`` entry point and the ``hzz-validate`` CLI
"""
