"""Tests for the weather virtual sensor."""
