"""Tests for URL shortener."""
