"""Core of Stick Mystify: motion engine, stick workers and the shared scene."""
