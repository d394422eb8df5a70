"""eventrelay core — the event dispatcher and its lifecycle state machine."""
