"""Test helpers for rainbowcat."""
