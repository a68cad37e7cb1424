"""Game rules: entities, combat, AI, turn engine and level progression."""
