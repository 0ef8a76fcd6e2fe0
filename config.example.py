# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file lists every variable read by priority_planner/config.py.
"""

ENV_VARS = {
    # App / logging
    "PRIORITY_APP_NAME": "App display name (default: priority).",
    "PRIORITY_LOG_LEVEL": "Console logging level (default: INFO).",
    # Switches
    "PRIORITY_CONSOLE_ENABLED": "Enable the console REPL (true/false).",
    "PRIORITY_TIMER_ENABLED": "Run the focus timer ticker in the background (true/false).",
    "PRIORITY_FOCUS_TICK_SECONDS": "Seconds between focus timer ticks (default: 1.0).",
    # LLM / OpenRouter (only needed for /breakdown, /suggest, /review)
    "PRIORITY_OPENROUTER_API_KEY": "OpenRouter API key. Without it the app runs an offline demo client.",
    "PRIORITY_OPENROUTER_BASE_URL": "OpenRouter base URL (default: https://openrouter.ai/api/v1).",
    "PRIORITY_LLM_MODELS": "Comma/space separated list of models to try in order.",
    "PRIORITY_HTTP_REFERER": "Optional OpenRouter metadata header.",
    "PRIORITY_APP_TITLE": "Optional OpenRouter metadata header title.",
    "PRIORITY_LLM_FIRST_TOKEN_TIMEOUT_SECONDS": "Max wait for the first streamed token (default: 20).",
    "PRIORITY_LLM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 25).",
    "PRIORITY_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    # Paths (gitignored)
    "PRIORITY_DATA_DIR": "Local data directory, also holds planner.log (default: .local/priority).",
    "PRIORITY_SNAPSHOT_DB_PATH": "Planner SQLite path (default: <data_dir>/planner.sqlite3).",
    "PRIORITY_DOCUMENT_ID": "Document key inside the SQLite store (default: appData).",
}
