"""Tests for autocheck."""
