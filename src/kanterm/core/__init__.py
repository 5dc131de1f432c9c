"""Core ticket models, ranking, and the ranked ticket store."""
