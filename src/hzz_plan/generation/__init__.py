"""Draft generation: intake questionnaire -> prompt -> OpenAI -> raw sections.

Submodules:
  intake   -- IntakeData model; prefilled personal section and final merge
  prompts  -- system prompt, intake prompt, and the empty section template
  client   -- lazily-initialised OpenAI client and ``generate_sections``
"""
