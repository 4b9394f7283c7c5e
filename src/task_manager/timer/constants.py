from __future__ import annotations

INITIALIZING_TEXT = "Initializing timer..."
STOP_HINT = "(press ctrl+c to stop)"

HOURS_WRAP = 24
TICK_MILLIS = 1000
