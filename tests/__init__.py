"""Test suite for arenaodds."""
