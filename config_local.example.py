# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for secrets. This file should contain only safe overrides.
Only CONSOLE_ENABLED and TIMER_ENABLED are read from here.
"""

# Example: run headless with only the focus ticker
# CONSOLE_ENABLED = False

# Example: disable the background focus ticker
# TIMER_ENABLED = False
