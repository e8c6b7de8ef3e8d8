"""Field registration, prompt building, generation and parsing services."""
