"""Test suite for the mkpractice package."""
