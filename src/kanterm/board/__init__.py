"""Pure board state machine: columns, overlays, and the effects they request."""
