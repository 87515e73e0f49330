"""Domain layer: pure task, actor and dashboard logic."""
