"""Field catalog for the HZZ application form.

Submodules:
  models    -- Pydantic models for sections, fields, and options
  tables    -- table row kinds: columns, aliases, string layouts
  registry  -- cached, read-only SchemaRegistry over the catalog
  columns   -- display ordering and labels for table columns
"""
