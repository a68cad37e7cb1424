"""Core engine types: data structures, events, game state and adapters."""
