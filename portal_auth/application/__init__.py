"""Application layer: commands, outcomes and the session facade."""
