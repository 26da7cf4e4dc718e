"""Tests for the Mi Air Purifier integration."""
