"""HZZ self-employment business-plan drafting.

Subpackages:
  schema      -- field/section catalog, table row kinds, column helpers
  validation  -- normalization and validation of LLM output
  generation  -- intake model, prompts, and the OpenAI call
  web         -- FastAPI handlers
"""
