"""Compiled regex patterns and token tuples used by the validation pipeline."""

import re

# ─── List Splitting ───────────────────────────────────────────────────────────

# A checkbox answer given as one string: "posjetnice, letci; web_stranica"
LIST_SEPARATOR_RE = re.compile(r"[,;\n]")


# ─── Numbers ─────────────────────────────────────────────────────────────────

# First number-looking token, with optional thousands/decimal separators
NUMBER_TOKEN_RE = re.compile(r"-?\d[\d.,]*")

# "24.000" or "1.250.000": dot-grouped thousands (Croatian notation)
DOT_THOUSANDS_RE = re.compile(r"^-?\d{1,3}(?:\.\d{3})+$")

# "24,000" or "1,250,000": comma-grouped thousands
COMMA_THOUSANDS_RE = re.compile(r"^-?\d{1,3}(?:,\d{3})+$")


# ─── Yes / No Answers ────────────────────────────────────────────────────────

# Canonical option values of a yes/no field and its optional third answer
YES_VALUE = "da"
NO_VALUE = "ne"
CANNOT_ESTIMATE_VALUE = "ne_mogu_procijeniti"

YES_TOKENS = ("da", "yes", "y", "1", "true", "potvrdan")
NO_TOKENS = ("ne", "no", "n", "0", "false", "negativan")

# Hints that the model could not evaluate the question
CANNOT_ESTIMATE_TOKENS = ("ne_mogu_procijeniti", "ne mogu procijeniti", "nije moguće procijeniti", "nije poznato", "unclear", "unknown")

# A free-text answer consisting only of one of these is a yes/no reply to the wrong question
BARE_ANSWER_TOKENS = ("da", "ne", "yes", "no", "y", "n", "1", "0", "true", "false")

# Widgets whose content is prose (number/date inputs are exempt from the bare-answer check)
FREE_TEXT_WIDGETS = ("text", "textarea")
