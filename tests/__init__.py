"""Tests for PokeBattle."""
