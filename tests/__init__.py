"""Tests for the rationalize package. Test modules follow the *_tests.py naming scheme."""
